# SPDX-License-Identifier: MIT
"""Artifact materializer: fetch a remote result URL into local storage."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from .config import PathType
from .storage import StorageBackend

logger = logging.getLogger("remotion_media")

DOWNLOAD_TIMEOUT = 300.0


@dataclass(frozen=True)
class Artifact:
    """A materialized file."""

    path: str
    size_bytes: int


async def download_artifact(
    url: str,
    storage: StorageBackend,
    path_type: PathType,
    filename: str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    timeout: float = DOWNLOAD_TIMEOUT,
) -> Artifact:
    """Download *url* and write the full body to ``<path_type dir>/<filename>``.

    Parent directories are created if absent. A failed download may leave a
    partial file behind; callers must not report it as a success.

    Raises:
        httpx.HTTPError: If the fetch fails or returns a non-2xx status
        OSError: If the directory cannot be created or the write fails
        ValueError: If *filename* escapes the target directory
    """
    size = 0

    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True, transport=transport) as client:
        async with client.stream("GET", url) as response:
            response.raise_for_status()

            async def _counted():
                nonlocal size
                async for chunk in response.aiter_bytes():
                    size += len(chunk)
                    yield chunk

            path = await storage.write_stream(path_type, filename, _counted())

    logger.info("Wrote %s (%d bytes)", path, size)
    return Artifact(path=path, size_bytes=size)
