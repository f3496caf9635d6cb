# SPDX-License-Identifier: MIT
"""Airtable asset catalog client.

The catalog table is expected to have these fields::

    AID          formula, e.g. "A" & {ID}  (short code shown to users)
    ID           autonumber
    Filename     single line text
    Description  long text
    MIME Type    single line text
    File         attachment
    Record ID    formula, RECORD_ID()

AIDs are computed by Airtable; the client only reads them back.
"""

from __future__ import annotations

import base64
import logging
import re
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, Field

from ..config import Settings
from ..exceptions import CatalogError, ConfigurationError
from ..utils import get_mime_type

logger = logging.getLogger("remotion_media")

API_URL = "https://api.airtable.com/v0"
CONTENT_URL = "https://content.airtable.com/v0"
ATTACHMENT_FIELD = "File"
LIST_FIELDS = ["AID", "ID", "Filename", "Description", "MIME Type", "File", "Record ID"]

_AID_PATTERN = re.compile(r"^A(\d+)$", re.IGNORECASE)


class CatalogRecord(BaseModel):
    """One row of the asset table."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    fields: dict[str, Any] = Field(default_factory=dict)
    created_time: str | None = Field(default=None, alias="createdTime")

    @property
    def aid(self) -> str:
        return str(self.fields.get("AID") or "")

    @property
    def filename(self) -> str:
        return str(self.fields.get("Filename") or "")

    @property
    def description(self) -> str:
        return str(self.fields.get("Description") or "")

    @property
    def mime_type(self) -> str:
        return str(self.fields.get("MIME Type") or "")

    @property
    def attachments(self) -> list[dict[str, Any]]:
        files = self.fields.get(ATTACHMENT_FIELD) or []
        return [f for f in files if isinstance(f, dict)]

    @property
    def attachment_url(self) -> str | None:
        for attachment in self.attachments:
            if attachment.get("url"):
                return attachment["url"]
        return None


@dataclass(frozen=True)
class CreatedRecord:
    aid: str
    record_id: str


@dataclass(frozen=True)
class RecordPage:
    records: list[CatalogRecord]
    offset: str | None = None


def parse_aid(aid: str) -> int:
    """Extract the numeric ID from an AID (``"A42"`` → ``42``).

    Raises:
        ValueError: If the AID is malformed
    """
    match = _AID_PATTERN.match(aid.strip())
    if not match:
        raise ValueError(f'Invalid AID format: "{aid}". Expected format like "A42".')
    return int(match.group(1))


class AirtableClient:
    """Async client for the asset table.

    Args:
        api_key: Personal access token
        base_id: Airtable base ID (``app...``)
        table_name: Table holding the assets
        transport: Optional httpx transport (tests)
    """

    def __init__(
        self,
        api_key: str,
        base_id: str,
        table_name: str = "Assets",
        *,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_id = base_id
        self._table_url = f"{API_URL}/{base_id}/{quote(table_name, safe='')}"
        self._client = httpx.AsyncClient(
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> AirtableClient:
        if not settings.airtable_api_key:
            raise ConfigurationError("Airtable catalog is not configured")
        return cls(
            settings.airtable_api_key,
            settings.airtable_base_id,
            settings.airtable_table_name,
            timeout=settings.request_timeout,
            transport=settings.transport,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> AirtableClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        resp = await self._client.request(method, url, **kwargs)
        if not resp.is_success:
            raise CatalogError(resp.status_code, resp.text)
        return resp.json()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def create_record(
        self,
        filename: str,
        description: str,
        mime_type: str,
        file_url: str | None = None,
    ) -> CreatedRecord:
        """Create a record; Airtable fetches *file_url* into the attachment field.

        Returns:
            CreatedRecord with the server-computed AID and the record id

        Raises:
            CatalogError: On a non-2xx response
        """
        fields: dict[str, Any] = {
            "Filename": filename,
            "Description": description,
            "MIME Type": mime_type,
        }
        if file_url:
            fields[ATTACHMENT_FIELD] = [{"url": file_url}]

        result = await self._request("POST", self._table_url, json={"fields": fields})
        record = CatalogRecord.model_validate(result)
        logger.info("Created catalog record %s (%s)", record.aid or record.id, filename)
        return CreatedRecord(aid=record.aid, record_id=record.id)

    async def list_records(
        self,
        filter_formula: str | None = None,
        max_records: int | None = None,
        offset: str | None = None,
        page_size: int | None = None,
    ) -> RecordPage:
        """List records newest first.

        Raises:
            CatalogError: On a non-2xx response
        """
        params: list[tuple[str, str]] = []
        if filter_formula:
            params.append(("filterByFormula", filter_formula))
        if max_records:
            params.append(("maxRecords", str(max_records)))
        if page_size:
            params.append(("pageSize", str(page_size)))
        if offset:
            params.append(("offset", offset))

        # Sort by ID descending (newest first)
        params.append(("sort[0][field]", "ID"))
        params.append(("sort[0][direction]", "desc"))
        for i, name in enumerate(LIST_FIELDS):
            params.append((f"fields[{i}]", name))

        result = await self._request("GET", self._table_url, params=params)
        records = [CatalogRecord.model_validate(r) for r in result.get("records", [])]
        return RecordPage(records=records, offset=result.get("offset"))

    async def get_record_by_aid(self, aid: str) -> CatalogRecord | None:
        """Look up a record by its short code.

        Raises:
            ValueError: If the AID is malformed
            CatalogError: On a non-2xx response
        """
        id_number = parse_aid(aid)
        page = await self.list_records(filter_formula=f"{{ID}}={id_number}", max_records=1)
        return page.records[0] if page.records else None

    async def upload_attachment(self, record_id: str, data: bytes, filename: str) -> bool:
        """Upload local bytes into the record's attachment field.

        Failures are logged and reported as ``False``.
        """
        url = f"{CONTENT_URL}/{self._base_id}/{record_id}/{ATTACHMENT_FIELD}/uploadAttachment"
        body = {
            "contentType": get_mime_type(filename),
            "filename": filename,
            "file": base64.b64encode(data).decode("ascii"),
        }
        try:
            resp = await self._client.post(url, json=body)
        except httpx.HTTPError as e:
            logger.warning("Airtable attachment upload error: %s", e)
            return False

        if not resp.is_success:
            logger.warning("Airtable attachment upload failed (%d): %s", resp.status_code, resp.text)
            return False
        return True
