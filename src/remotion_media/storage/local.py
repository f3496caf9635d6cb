# SPDX-License-Identifier: MIT
"""Project-directory storage on the local disk.

``public/``, ``subtitles/`` and ``backups/`` live under the configured project
root and are created lazily, the first time something is written into them.
"""

from __future__ import annotations

import logging
import pathlib
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiofiles

from ..config import PathType, Settings
from ..security import check_not_symlink, validate_safe_path
from .protocol import FileInfo

logger = logging.getLogger("remotion_media")


class LocalStorageBackend:
    """Storage rooted at ``settings.project_root``.

    Args:
        settings: Resolved settings providing the per-type directories
        path_overrides: path_type → directory, backing the tools' explicit
            ``input_dir`` / ``output_dir`` / ``source_dir`` parameters
    """

    def __init__(self, settings: Settings, path_overrides: dict[str, pathlib.Path] | None = None) -> None:
        self._settings = settings
        self._overrides = {k: pathlib.Path(v).expanduser().resolve() for k, v in (path_overrides or {}).items()}

    def directory(self, path_type: PathType) -> pathlib.Path:
        """Directory backing *path_type* (may not exist yet)."""
        return self._overrides.get(path_type) or self._settings.path_for(path_type)

    def _existing(self, path_type: PathType, filename: str) -> pathlib.Path:
        # Symlinks are checked before resolving, which would follow them
        check_not_symlink(self.directory(path_type) / filename, f"{path_type} file")
        return validate_safe_path(self.directory(path_type), filename)

    def _writable(self, path_type: PathType, filename: str) -> pathlib.Path:
        target = validate_safe_path(self.directory(path_type), filename, allow_create=True)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OSError(f"Cannot create directory {target.parent}: {e}") from e
        return target

    async def read(self, path_type: PathType, filename: str) -> bytes:
        async with aiofiles.open(self._existing(path_type, filename), "rb") as f:
            return await f.read()

    async def write_stream(self, path_type: PathType, filename: str, chunks: AsyncIterator[bytes]) -> str:
        target = self._writable(path_type, filename)
        async with aiofiles.open(target, "wb") as f:
            async for chunk in chunks:
                await f.write(chunk)
        return str(target)

    async def list_files(
        self,
        path_type: PathType,
        pattern: str = "*",
        extensions: set[str] | None = None,
    ) -> list[FileInfo]:
        base = self.directory(path_type)
        if not base.is_dir():
            return []

        found: list[FileInfo] = []
        for candidate in base.glob(pattern):
            if not candidate.is_file() or (extensions and candidate.suffix.lower() not in extensions):
                continue
            if not candidate.resolve().is_relative_to(base):
                logger.debug("Skipping %s: resolves outside %s", candidate, base)
                continue
            st = candidate.stat()
            found.append(FileInfo(candidate.relative_to(base).as_posix(), st.st_size, st.st_mtime))
        return found

    @asynccontextmanager
    async def local_path(self, path_type: PathType, filename: str):
        yield self._existing(path_type, filename)

    @asynccontextmanager
    async def local_tempfile(self, path_type: PathType, filename: str):
        # The subprocess writes straight to the destination
        yield self._writable(path_type, filename)

    def resolve_display_path(self, path_type: PathType, filename: str) -> str:
        return str(validate_safe_path(self.directory(path_type), filename, allow_create=True))
