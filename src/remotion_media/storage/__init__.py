# SPDX-License-Identifier: MIT
"""Storage backend for generated artifacts.

The storage layer abstracts all file I/O behind a small protocol so the
materializer, transcription and catalog tools share one implementation of
path validation and directory creation.

Usage::

    from remotion_media.storage import get_storage

    storage = get_storage(settings)
    await storage.write_stream("media", "intro.png", response.aiter_bytes())
    data = await storage.read("media", "intro.png")
"""

from .factory import get_storage
from .protocol import FileInfo, StorageBackend

__all__ = ["FileInfo", "StorageBackend", "get_storage"]
