# SPDX-License-Identifier: MIT
"""Storage interface shared by the materializer and the file-based tools.

Files are addressed by a project directory (:data:`~remotion_media.config.PathType`)
and a name relative to it, which may include subdirectories.
"""

from __future__ import annotations

import pathlib
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from ..config import PathType


@dataclass(frozen=True)
class FileInfo:
    """A file found by :meth:`StorageBackend.list_files`; ``name`` is relative and posix-style."""

    name: str
    size_bytes: int
    modified_timestamp: float


@runtime_checkable
class StorageBackend(Protocol):
    """Project file access with traversal and symlink checks built in."""

    async def read(self, path_type: PathType, filename: str) -> bytes:
        """Return the whole file.

        Raises:
            ValueError: If the file is missing, a symlink, or outside the directory
        """
        ...

    async def write_stream(self, path_type: PathType, filename: str, chunks: AsyncIterator[bytes]) -> str:
        """Write *chunks* to the file, creating missing directories; returns the absolute path."""
        ...

    async def list_files(
        self,
        path_type: PathType,
        pattern: str = "*",
        extensions: set[str] | None = None,
    ) -> list[FileInfo]:
        """Files in the directory matching *pattern*, optionally restricted to *extensions*."""
        ...

    def local_path(self, path_type: PathType, filename: str) -> AbstractAsyncContextManager[pathlib.Path]:
        """Filesystem path of an existing file, for handing to a subprocess."""
        ...

    def local_tempfile(self, path_type: PathType, filename: str) -> AbstractAsyncContextManager[pathlib.Path]:
        """Filesystem path a subprocess may write to; its directory exists on entry."""
        ...

    def resolve_display_path(self, path_type: PathType, filename: str) -> str:
        """Absolute path for tool results; validates *filename* without touching disk."""
        ...
