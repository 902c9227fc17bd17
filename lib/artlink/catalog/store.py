"""In-memory artwork catalog for one session."""

import logging
from collections.abc import Iterable

from artlink.catalog.models import Artwork, ArtworkStatus

logger = logging.getLogger(__name__)


class CatalogStore:
    """
    Ordered mapping from artwork id to record.

    replace_all() populates the catalog wholesale; mark_verified() is the only
    mutation afterwards.
    """

    def __init__(self, records: Iterable[Artwork] | None = None) -> None:
        self._records: dict[str, Artwork] = {}
        if records is not None:
            self.replace_all(records)

    def replace_all(self, records: Iterable[Artwork]) -> None:
        """Replace every record. Duplicate ids keep the last record seen."""
        fresh: dict[str, Artwork] = {}
        for record in records:
            fresh[record.id] = record
        self._records = fresh
        logger.info(f"Catalog replaced with {len(fresh)} records")

    def get(self, artwork_id: str) -> Artwork | None:
        """Return record by id or None."""
        return self._records.get(artwork_id)

    def all(self) -> list[Artwork]:
        """Return records in catalog order."""
        return list(self._records.values())

    def mark_verified(self, artwork_id: str) -> Artwork | None:
        """
        Set one record's status to Verified.

        Only the status changes; other fields and record order are untouched.
        Status never reverts, so an already verified record is returned as is.

        Returns:
            The updated record, or None if the id is unknown
        """
        current = self._records.get(artwork_id)
        if current is None:
            logger.warning(f"Cannot verify unknown artwork: {artwork_id}")
            return None
        if current.is_verified:
            return current

        updated = current.verified()
        # Assigning an existing key keeps its position
        self._records[artwork_id] = updated
        logger.info(f"Artwork marked verified: {artwork_id}")
        return updated

    def counts(self) -> dict[str, int]:
        """Number of records per status."""
        counts = {status.value: 0 for status in ArtworkStatus}
        for record in self._records.values():
            counts[record.status.value] += 1
        return counts

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, artwork_id: object) -> bool:
        return artwork_id in self._records
