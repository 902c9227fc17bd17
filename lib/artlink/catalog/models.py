"""
Data models for the artwork catalog and tag pairing.

Artwork records are created in bulk by listing extraction. CertificateLink,
TagWriteRecord and TagDiscovered are transient values scoped to one pairing
attempt.
"""

import re
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from artlink.constants import CERTIFICATE_URL_PREFIXES, URL_RECORD_TYPE
from artlink.exceptions import ExtractionError

_DISALLOWED_ID_CHARS_RE = re.compile(r"[^\w\s-]")
_SEPARATOR_RUN_RE = re.compile(r"[\s_-]+")


class ArtworkStatus(str, Enum):
    """Verification status for an artwork record."""

    UNVERIFIED = "Unverified"
    VERIFIED = "Verified"


def make_artwork_id(title: str | None, year: str | None) -> str:
    """
    Derive a deterministic artwork id from title and year.

    Lowercases, drops punctuation and collapses whitespace runs into a single
    "-". Different (title, year) pairs that normalize identically collide.

    Args:
        title: Artwork title (None treated as empty)
        year: Artwork year (None treated as empty)

    Returns:
        Normalized id, e.g. ("Study No. 4", "2019") -> "study-no-4-2019"
    """
    raw = f"{title or ''}-{year or ''}".lower()
    raw = _DISALLOWED_ID_CHARS_RE.sub("", raw)
    return _SEPARATOR_RUN_RE.sub("-", raw).strip("-")


@dataclass(frozen=True)
class Artwork:
    """
    One normalized catalog entry.

    Attributes:
        id: Deterministic id from title and year
        title: Artwork title ("" if absent in markup)
        artist: Artist name ("" if absent)
        year: Year text with trailing separators stripped ("" if absent)
        image_url: Preview image URL ("" if absent)
        status: Verification status
    """

    id: str
    title: str = ""
    artist: str = ""
    year: str = ""
    image_url: str = ""
    status: ArtworkStatus = ArtworkStatus.UNVERIFIED

    @classmethod
    def create(
        cls,
        title: str | None,
        artist: str | None,
        year: str | None,
        image_url: str | None,
    ) -> "Artwork":
        """Build an unverified record, deriving its id."""
        return cls(
            id=make_artwork_id(title, year),
            title=title or "",
            artist=artist or "",
            year=year or "",
            image_url=image_url or "",
        )

    @property
    def is_verified(self) -> bool:
        return self.status is ArtworkStatus.VERIFIED

    def verified(self) -> "Artwork":
        """Return a copy with status Verified; every other field is unchanged."""
        return replace(self, status=ArtworkStatus.VERIFIED)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (upstream record shape)."""
        return {
            "id": self.id,
            "title": self.title,
            "artist": self.artist,
            "year": self.year,
            "imageUrl": self.image_url,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Artwork":
        """Create Artwork from dictionary."""
        title = data.get("title") or ""
        year = data.get("year") or ""
        return cls(
            id=data.get("id") or make_artwork_id(title, year),
            title=title,
            artist=data.get("artist") or "",
            year=year,
            image_url=data.get("imageUrl") or data.get("image_url") or "",
            status=ArtworkStatus(data.get("status", ArtworkStatus.UNVERIFIED.value)),
        )


def is_certificate_url(url: str | None, prefixes: tuple[str, ...] = CERTIFICATE_URL_PREFIXES) -> bool:
    """Check whether a URL starts with a known certificate-domain prefix."""
    return bool(url) and url.startswith(prefixes)


@dataclass(frozen=True)
class CertificateLink:
    """Certificate URL resolved for one artwork."""

    artwork_id: str
    url: str

    def __post_init__(self) -> None:
        if not is_certificate_url(self.url):
            raise ExtractionError(f"not a certificate URL: {self.url!r}")


@dataclass(frozen=True)
class TagWriteRecord:
    """Payload handed to the device adapter. Only URL records are supported."""

    data: str
    record_type: str = URL_RECORD_TYPE

    def __post_init__(self) -> None:
        if self.record_type != URL_RECORD_TYPE:
            raise ValueError(f"Unsupported tag record type: {self.record_type}")
        if not self.data:
            raise ValueError("Tag record data must not be empty")

    @classmethod
    def for_url(cls, url: str) -> "TagWriteRecord":
        return cls(data=url)


@dataclass(frozen=True)
class TagDiscovered:
    """One physical tag coming into range."""

    serial_id: str
    discovered_at: datetime = field(default_factory=lambda: datetime.now(UTC))
