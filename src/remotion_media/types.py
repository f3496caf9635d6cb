# SPDX-License-Identifier: MIT
"""TypedDict payloads returned by the MCP tools."""

from typing import Literal, TypedDict


class _ErrorFields(TypedDict):
    success: Literal[False]
    error: str


class ErrorResult(_ErrorFields, total=False):
    """Failure payload; ``task_id`` is present once a job was submitted."""

    task_id: str


class CatalogFields(TypedDict, total=False):
    aid: str
    catalog_record_id: str
    catalog_warning: str


class GenerationResult(CatalogFields):
    """Success payload of a generation tool.

    Besides these keys it carries ``<kind>_url`` (``image_url``,
    ``video_url`` or ``audio_url``) and tool-specific extras.
    """

    success: Literal[True]
    path: str
    relative_path: str
    task_id: str


class SubtitleResult(CatalogFields):
    success: Literal[True]
    path: str
    relative_path: str
    input_file: str
    model_size: str
    language: str | None


class MediaListing(TypedDict):
    images: list[str]
    videos: list[str]
    audio: list[str]
    subtitles: list[str]


class NotConfigured(TypedDict):
    configured: Literal[False]
    message: str


class AssetSummary(TypedDict):
    aid: str
    record_id: str
    filename: str
    description: str
    mime_type: str
    file_type: str
    file_url: str | None


class AssetList(TypedDict):
    configured: Literal[True]
    assets: list[AssetSummary]
    offset: str | None


class AssetBackup(TypedDict):
    configured: Literal[True]
    success: bool
    aid: str
    record_id: str
    filename: str
    uploaded: bool


class AssetDownload(TypedDict):
    configured: Literal[True]
    success: Literal[True]
    aid: str
    path: str
    size_bytes: int
