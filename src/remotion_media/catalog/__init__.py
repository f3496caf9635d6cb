# SPDX-License-Identifier: MIT
"""Optional Airtable asset catalog."""

from .airtable import AirtableClient, CatalogRecord, CreatedRecord, RecordPage, parse_aid
from .enrichment import CatalogEnrichment, notify_catalog

__all__ = [
    "AirtableClient",
    "CatalogEnrichment",
    "CatalogRecord",
    "CreatedRecord",
    "RecordPage",
    "notify_catalog",
    "parse_aid",
]
