# SPDX-License-Identifier: MIT
"""Unit tests for post-generation catalog notification."""

import pytest
from conftest import AIRTABLE_TABLE_URL, request_json

from remotion_media.catalog import CatalogEnrichment, notify_catalog

UPLOAD_URL = "https://content.airtable.com/v0/appTEST/rec9/File/uploadAttachment"


@pytest.fixture
def subtitle(tmp_path):
    path = tmp_path / "intro.srt"
    path.write_bytes(b"1\n")
    return path


@pytest.mark.unit
async def test_not_configured_is_skipped(settings, upstream):
    enrichment = await notify_catalog(settings, "a.png", "desc", file_url="https://cdn.test/a.png")

    assert enrichment.attempted is False
    assert enrichment.apply_to({"success": True}) == {"success": True}
    assert upstream.requests == []


@pytest.mark.unit
async def test_records_remote_url(catalog_settings, upstream):
    upstream.add("POST", AIRTABLE_TABLE_URL, {"id": "rec9", "fields": {"AID": "A9"}})

    enrichment = await notify_catalog(catalog_settings, "hero.png", "a hero", file_url="https://cdn.test/hero.png")

    assert enrichment == CatalogEnrichment(aid="A9", record_id="rec9")
    fields = request_json(upstream.requests[0])["fields"]
    assert fields["MIME Type"] == "image/png"
    assert fields["File"] == [{"url": "https://cdn.test/hero.png"}]


@pytest.mark.unit
async def test_uploads_local_bytes(catalog_settings, upstream, subtitle):
    upstream.add("POST", AIRTABLE_TABLE_URL, {"id": "rec9", "fields": {"AID": "A9"}})
    upstream.add("POST", UPLOAD_URL, {"id": "rec9"})

    enrichment = await notify_catalog(catalog_settings, "intro.srt", "subs", local_file=subtitle)

    assert enrichment.error is None
    (upload,) = upstream.calls("POST", UPLOAD_URL)
    assert request_json(upload)["file"] == "MQo="


@pytest.mark.unit
async def test_upload_failure_becomes_warning(catalog_settings, upstream, subtitle):
    upstream.add("POST", AIRTABLE_TABLE_URL, {"id": "rec9", "fields": {"AID": "A9"}})
    upstream.add("POST", UPLOAD_URL, (500, {"error": "boom"}))

    enrichment = await notify_catalog(catalog_settings, "intro.srt", "subs", local_file=subtitle)

    assert enrichment.aid == "A9"
    assert enrichment.error == "Attachment upload to catalog failed"


@pytest.mark.unit
async def test_catalog_error_never_raises(catalog_settings, upstream):
    upstream.add("POST", AIRTABLE_TABLE_URL, (401, {"error": "AUTHENTICATION_REQUIRED"}))

    enrichment = await notify_catalog(catalog_settings, "a.png", "desc")

    assert enrichment.aid is None
    assert enrichment.error.startswith("Catalog notification failed: Airtable API error (401)")


@pytest.mark.unit
def test_apply_to_merges_identifiers():
    payload = CatalogEnrichment(aid="A1", record_id="rec1").apply_to({"success": True})
    assert payload == {"success": True, "aid": "A1", "catalog_record_id": "rec1"}


@pytest.mark.unit
def test_apply_to_adds_warning():
    payload = CatalogEnrichment(error="nope").apply_to({"success": True})
    assert payload == {"success": True, "catalog_warning": "nope"}


@pytest.mark.unit
async def test_unreadable_local_file_becomes_warning(catalog_settings, upstream, tmp_path):
    enrichment = await notify_catalog(catalog_settings, "gone.srt", "subs", local_file=tmp_path / "gone.srt")

    assert enrichment.aid is None
    assert enrichment.error.startswith("Catalog notification failed:")
    assert upstream.requests == []
