"""Abstract base classes for canonical-set persistence.

The snapshot is the only source of truth.  The record index is a secondary
store keyed the same way for query convenience and can always be rebuilt
from the snapshot.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from radio_venus.models.artist import ArtistRecord


class ISnapshotStore(ABC):
    """Contract for whole-set load/save of the canonical records."""

    @abstractmethod
    async def load(self) -> list[ArtistRecord]:
        """Return every record in the snapshot; an absent snapshot is empty.

        Raises
        ------
        radio_venus.utils.errors.SnapshotError
            If the snapshot exists but cannot be parsed.
        """

    @abstractmethod
    async def save(self, records: Sequence[ArtistRecord]) -> None:
        """Replace the snapshot with *records* in a single atomic overwrite.

        A failure part-way through must leave the previous snapshot intact.
        """


class IRecordIndex(ABC):
    """Contract for the secondary, queryable record index."""

    @abstractmethod
    async def initialize(self) -> None:
        """Create tables and indexes if they do not exist."""

    @abstractmethod
    async def upsert_many(
        self, records: Sequence[ArtistRecord], seed_keys: set[str] | None = None
    ) -> int:
        """Insert or update *records* keyed by lowercase name.

        Parameters
        ----------
        records:
            Canonical records to write.
        seed_keys:
            Name keys of records that came from the curated seed; stored as
            the ``is_seed`` flag.

        Returns
        -------
        int
            Number of rows written.
        """

    @abstractmethod
    async def get(self, name: str) -> ArtistRecord | None:
        """Return the indexed record for *name* (case-insensitive)."""

    @abstractmethod
    async def count_by_sign(self) -> dict[str, int]:
        """Return the number of indexed records per Venus sign."""
