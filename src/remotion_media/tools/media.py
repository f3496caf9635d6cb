# SPDX-License-Identifier: MIT
"""Listing of generated media in the project."""

from ..config import Settings, logger
from ..storage import get_storage
from ..types import ErrorResult, MediaListing
from ..utils import detect_file_type
from .orchestrator import resolve_settings, tool_boundary

_GROUPS = {"image": "images", "video": "videos", "audio": "audio", "subtitle": "subtitles"}


@tool_boundary("listing media")
async def list_generated_media(*, settings: Settings | None = None) -> MediaListing | ErrorResult:
    """Group the files in ``public/`` and ``subtitles/`` by media type.

    Entries are project-relative (``public/intro.png``) and sorted by name.
    Files with unrecognised extensions are left out.
    """
    settings = resolve_settings(settings)
    storage = get_storage(settings)
    listing: MediaListing = {"images": [], "videos": [], "audio": [], "subtitles": []}

    for path_type in ("media", "subtitles"):
        for info in sorted(await storage.list_files(path_type), key=lambda f: f.name):
            group = _GROUPS.get(detect_file_type(info.name))
            if group is not None:
                listing[group].append(settings.relative_name(path_type, info.name))  # type: ignore[literal-required]

    logger.info(
        "Listed %d images, %d videos, %d audio, %d subtitles",
        *(len(listing[k]) for k in ("images", "videos", "audio", "subtitles")),  # type: ignore[literal-required]
    )
    return listing
