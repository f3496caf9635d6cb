# SPDX-License-Identifier: MIT
"""Storage backend factory."""

from __future__ import annotations

import pathlib

from ..config import Settings
from .local import LocalStorageBackend
from .protocol import StorageBackend


def get_storage(settings: Settings, path_overrides: dict[str, pathlib.Path] | None = None) -> StorageBackend:
    """Return a :class:`StorageBackend` for *settings*.

    ``path_overrides`` maps a path type to an explicit directory and backs the
    tools' ``output_dir`` / ``source_dir`` parameters.
    """
    return LocalStorageBackend(settings, path_overrides=path_overrides)
