# SPDX-License-Identifier: MIT
"""Naming and media-type helpers shared by the tools and the catalog."""

import mimetypes
import pathlib
import time
from typing import Literal

FileType = Literal["image", "video", "audio", "subtitle", "other"]

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".webp", ".gif", ".bmp", ".svg", ".tiff"}
VIDEO_EXTENSIONS = {".mp4", ".webm", ".mov", ".avi", ".mkv"}
AUDIO_EXTENSIONS = {".mp3", ".wav", ".ogg", ".m4a", ".flac", ".aac"}
SUBTITLE_EXTENSIONS = {".srt", ".vtt", ".ass", ".ssa"}

_MIME_TYPES: dict[str, str] = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".mov": "video/quicktime",
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".ogg": "audio/ogg",
    ".m4a": "audio/mp4",
    ".flac": "audio/flac",
    ".aac": "audio/aac",
    ".srt": "text/srt",
    ".vtt": "text/vtt",
}


def _suffix(filename: str) -> str:
    return pathlib.PurePosixPath(filename).suffix.lower()


def detect_file_type(filename: str) -> FileType:
    """Classify a filename by extension."""
    ext = _suffix(filename)
    if ext in IMAGE_EXTENSIONS:
        return "image"
    if ext in VIDEO_EXTENSIONS:
        return "video"
    if ext in AUDIO_EXTENSIONS:
        return "audio"
    if ext in SUBTITLE_EXTENSIONS:
        return "subtitle"
    return "other"


def get_mime_type(filename: str) -> str:
    """MIME type for *filename*, falling back to the platform table, then octet-stream."""
    ext = _suffix(filename)
    if ext in _MIME_TYPES:
        return _MIME_TYPES[ext]
    mime, _ = mimetypes.guess_type(filename)
    return mime or "application/octet-stream"


def output_filename(output_name: str | None, extension: str, fallback_prefix: str = "generated") -> str:
    """Build the artifact filename from an explicit name or a timestamp fallback.

    Args:
        output_name: Name without extension, may contain subdirectories
        extension: Extension without the dot (``png``, ``mp4``, ``mp3``)
        fallback_prefix: Prefix for the ``<prefix>-<epoch ms>`` fallback

    Returns:
        ``<name>.<extension>``
    """
    name = output_name.strip() if output_name else ""
    if name.lower().endswith(f".{extension}"):
        name = name[: -(len(extension) + 1)]
    if not name:
        name = f"{fallback_prefix}-{time.time_ns() // 1_000_000}"
    return f"{name}.{extension}"
