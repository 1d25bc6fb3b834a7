"""Curated inputs: the seed list, the override patches and the exclusion list.

All three are hand-edited JSON files.  The seed is the only one the
pipeline writes to: discovery appends accepted candidates and tag
harvesting rewrites it with the authority tags attached.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path

from radio_venus.models.artist import ArtistOverride, ArtistRecord
from radio_venus.models.merge import ExclusionList
from radio_venus.providers.store.json_snapshot_store import read_json, write_json_atomic
from radio_venus.providers.store.record_codec import decode_overrides, decode_records
from radio_venus.utils.errors import SnapshotError
from radio_venus.utils.logging import get_logger

logger = get_logger(__name__)


class JsonSeedStore:
    """Reads and appends to the curated files.

    Parameters
    ----------
    seed_path:
        JSON array of seed artist records.
    overrides_path:
        Override patches, as a list of objects or a ``{name: fields}`` map.
    exclusions_path:
        Names or ``{"name", "stable_id"}`` objects never to admit.
    """

    def __init__(
        self,
        seed_path: str | Path,
        overrides_path: str | Path | None = None,
        exclusions_path: str | Path | None = None,
    ) -> None:
        self._seed_path = Path(seed_path)
        self._overrides_path = Path(overrides_path) if overrides_path else None
        self._exclusions_path = Path(exclusions_path) if exclusions_path else None

    async def load_seed(self) -> list[ArtistRecord]:
        data = await asyncio.to_thread(read_json, self._seed_path, [])
        if not isinstance(data, list):
            raise SnapshotError(f"Seed file {self._seed_path} must hold a JSON array")
        return decode_records(data, source=str(self._seed_path))

    async def load_overrides(self) -> list[ArtistOverride]:
        if self._overrides_path is None:
            return []
        data = await asyncio.to_thread(read_json, self._overrides_path, [])
        return decode_overrides(data, source=str(self._overrides_path))

    async def load_exclusions(self) -> ExclusionList:
        if self._exclusions_path is None:
            return ExclusionList()
        data = await asyncio.to_thread(read_json, self._exclusions_path, [])
        if isinstance(data, dict):
            data = data.get("exclusions", [])
        return ExclusionList.from_entries(list(data))

    async def append_seed(self, records: Sequence[ArtistRecord]) -> int:
        """Append records whose name is not yet in the seed; return how many were added."""
        raw = await asyncio.to_thread(read_json, self._seed_path, [])
        if not isinstance(raw, list):
            raise SnapshotError(f"Seed file {self._seed_path} must hold a JSON array")
        existing = {r.key for r in decode_records(raw, source=str(self._seed_path))}
        added = [r for r in records if r.key not in existing]
        if not added:
            return 0
        payload = raw + [
            r.model_dump(mode="json", exclude_none=True, exclude={"venus"}) for r in added
        ]
        await asyncio.to_thread(write_json_atomic, self._seed_path, payload)
        logger.info("seed_appended", path=str(self._seed_path), added=len(added))
        return len(added)

    async def save_seed(self, records: Sequence[ArtistRecord]) -> None:
        """Rewrite the seed file with *records*, keeping their order."""
        payload = [
            r.model_dump(mode="json", exclude_none=True, exclude={"venus"}) for r in records
        ]
        await asyncio.to_thread(write_json_atomic, self._seed_path, payload)
        logger.info("seed_saved", path=str(self._seed_path), records=len(payload))
