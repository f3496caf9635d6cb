# SPDX-License-Identifier: MIT
"""Post-generation catalog notification.

Registering a freshly generated artifact in the catalog is an enrichment:
the file is already on disk, so nothing here may fail the tool call.
"""

from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass

import aiofiles

from ..config import Settings
from ..utils import get_mime_type
from .airtable import AirtableClient

logger = logging.getLogger("remotion_media")


@dataclass(frozen=True)
class CatalogEnrichment:
    """Result of a catalog notification; ``error`` is set instead of raising."""

    aid: str | None = None
    record_id: str | None = None
    error: str | None = None
    attempted: bool = True

    def apply_to(self, payload: dict) -> dict:
        """Merge catalog identifiers (or the diagnostic) into a tool payload."""
        if self.aid:
            payload["aid"] = self.aid
        if self.record_id:
            payload["catalog_record_id"] = self.record_id
        if self.error:
            payload["catalog_warning"] = self.error
        return payload


NOT_ATTEMPTED = CatalogEnrichment(attempted=False)


async def notify_catalog(
    settings: Settings,
    filename: str,
    description: str,
    *,
    file_url: str | None = None,
    local_file: pathlib.Path | None = None,
) -> CatalogEnrichment:
    """Register an artifact in the catalog if one is configured.

    With *file_url* Airtable fetches the attachment itself; with *local_file*
    the file is read and its bytes uploaded after the record is created.
    """
    if not settings.catalog_configured:
        return NOT_ATTEMPTED

    try:
        data = None
        if local_file is not None:
            async with aiofiles.open(local_file, "rb") as f:
                data = await f.read()

        async with AirtableClient.from_settings(settings) as client:
            created = await client.create_record(filename, description, get_mime_type(filename), file_url=file_url)
            if data is not None and not await client.upload_attachment(created.record_id, data, filename):
                return CatalogEnrichment(
                    aid=created.aid, record_id=created.record_id, error="Attachment upload to catalog failed"
                )
    except Exception as e:
        logger.warning("Catalog notification for %s failed: %s", filename, e)
        return CatalogEnrichment(error=f"Catalog notification failed: {e}")

    return CatalogEnrichment(aid=created.aid, record_id=created.record_id)
