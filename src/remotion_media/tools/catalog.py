# SPDX-License-Identifier: MIT
"""Asset catalog tools backed by Airtable.

Every tool short-circuits to a "not configured" payload without touching the
network when AIRTABLE_API_KEY or AIRTABLE_BASE_ID is missing.
"""

import pathlib
from typing import Literal

from ..artifacts import download_artifact
from ..catalog import AirtableClient, CatalogRecord
from ..config import Settings, logger
from ..storage import get_storage
from ..types import AssetBackup, AssetDownload, AssetList, AssetSummary, ErrorResult, NotConfigured
from ..utils import detect_file_type, get_mime_type
from .orchestrator import resolve_settings, tool_boundary

CatalogFileType = Literal["image", "video", "audio", "subtitle"]

NOT_CONFIGURED_MESSAGE = "Airtable catalog is not configured. Set AIRTABLE_API_KEY and AIRTABLE_BASE_ID to enable it."
MAX_PAGE_SIZE = 100

# Subtitles are stored as text/srt, text/vtt, ...
_MIME_PREFIXES: dict[str, str] = {
    "image": "image/",
    "video": "video/",
    "audio": "audio/",
    "subtitle": "text/",
}


def _not_configured() -> NotConfigured:
    return {"configured": False, "message": NOT_CONFIGURED_MESSAGE}


def _summarize(record: CatalogRecord) -> AssetSummary:
    return {
        "aid": record.aid,
        "record_id": record.id,
        "filename": record.filename,
        "description": record.description,
        "mime_type": record.mime_type,
        "file_type": detect_file_type(record.filename),
        "file_url": record.attachment_url,
    }


def mime_filter(file_type: CatalogFileType) -> str:
    """Airtable formula matching records whose MIME type starts with the type's prefix."""
    prefix = _MIME_PREFIXES[file_type]
    return f'LEFT({{MIME Type}}, {len(prefix)})="{prefix}"'


@tool_boundary("backing up asset")
async def catalog_backup_asset(
    filename: str,
    description: str,
    source_dir: str | None = None,
    *,
    settings: Settings | None = None,
) -> AssetBackup | NotConfigured | ErrorResult:
    """Register a local file in the catalog and upload its bytes.

    Args:
        filename: File relative to ``public/`` (or *source_dir*)
        description: Free-text description stored with the record
        source_dir: Directory override for the file
    """
    settings = resolve_settings(settings)
    if not settings.catalog_configured:
        return _not_configured()

    overrides = {"media": pathlib.Path(source_dir)} if source_dir else None
    storage = get_storage(settings, overrides)
    data = await storage.read("media", filename)
    name = pathlib.PurePosixPath(filename).name

    async with AirtableClient.from_settings(settings) as client:
        created = await client.create_record(name, description, get_mime_type(name))
        uploaded = await client.upload_attachment(created.record_id, data, name)

    if not uploaded:
        logger.warning("Record %s created but the attachment upload failed", created.aid or created.record_id)
    return {
        "configured": True,
        "success": True,
        "aid": created.aid,
        "record_id": created.record_id,
        "filename": name,
        "uploaded": uploaded,
    }


@tool_boundary("listing assets")
async def catalog_list_assets(
    file_type: CatalogFileType | None = None,
    limit: int = 20,
    offset: str | None = None,
    *,
    settings: Settings | None = None,
) -> AssetList | NotConfigured | ErrorResult:
    """List catalog assets newest first.

    Args:
        file_type: Restrict to images, videos, audio or subtitles
        limit: Page size (1-100)
        offset: Cursor returned by a previous call
    """
    settings = resolve_settings(settings)
    if not settings.catalog_configured:
        return _not_configured()
    if not 1 <= limit <= MAX_PAGE_SIZE:
        raise ValueError(f"limit must be between 1 and {MAX_PAGE_SIZE}, got {limit}")

    async with AirtableClient.from_settings(settings) as client:
        page = await client.list_records(
            filter_formula=mime_filter(file_type) if file_type else None,
            offset=offset,
            page_size=limit,
        )

    return {
        "configured": True,
        "assets": [_summarize(r) for r in page.records],
        "offset": page.offset,
    }


@tool_boundary("getting asset")
async def catalog_get_asset(
    aid: str,
    *,
    settings: Settings | None = None,
) -> AssetSummary | NotConfigured | ErrorResult:
    """Look up one asset by its short code (e.g. ``A42``)."""
    settings = resolve_settings(settings)
    if not settings.catalog_configured:
        return _not_configured()

    async with AirtableClient.from_settings(settings) as client:
        record = await client.get_record_by_aid(aid)

    if record is None:
        raise LookupError(f"No asset found with AID {aid}")
    return _summarize(record)


@tool_boundary("downloading asset")
async def catalog_download_asset(
    aid: str,
    output_name: str | None = None,
    output_dir: str | None = None,
    *,
    settings: Settings | None = None,
) -> AssetDownload | NotConfigured | ErrorResult:
    """Download an asset's attachment into ``backups/`` (or *output_dir*).

    Args:
        aid: Asset short code
        output_name: Filename without extension; the record's filename if omitted
        output_dir: Directory override for the download
    """
    settings = resolve_settings(settings)
    if not settings.catalog_configured:
        return _not_configured()

    async with AirtableClient.from_settings(settings) as client:
        record = await client.get_record_by_aid(aid)

    if record is None:
        raise LookupError(f"No asset found with AID {aid}")
    url = record.attachment_url
    if not url:
        raise LookupError(f"Asset {record.aid or aid} has no attachment")

    original = pathlib.PurePosixPath(record.filename or f"{record.aid or aid}.bin")
    filename = f"{output_name}{original.suffix}" if output_name else original.name

    overrides = {"backups": pathlib.Path(output_dir)} if output_dir else None
    storage = get_storage(settings, overrides)
    artifact = await download_artifact(url, storage, "backups", filename, transport=settings.transport)

    return {
        "configured": True,
        "success": True,
        "aid": record.aid or aid,
        "path": artifact.path,
        "size_bytes": artifact.size_bytes,
    }
