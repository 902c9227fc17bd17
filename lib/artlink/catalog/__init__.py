"""
Artwork catalog: fetching, extraction and in-memory storage.

Architecture:
- Fetcher: one async HTTP request per listing/detail page
- Extractor: preview cards -> Artwork records, detail page -> certificate URL
- Store: ordered in-memory catalog with a single verification mutation
"""

from artlink.catalog.models import (
    Artwork,
    ArtworkStatus,
    CertificateLink,
    TagDiscovered,
    TagWriteRecord,
    make_artwork_id,
)
from artlink.catalog.store import CatalogStore

__all__ = [
    "Artwork",
    "ArtworkStatus",
    "CatalogStore",
    "CertificateLink",
    "TagDiscovered",
    "TagWriteRecord",
    "make_artwork_id",
]
