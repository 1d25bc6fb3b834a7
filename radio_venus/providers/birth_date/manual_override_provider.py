"""Tier 1 of the birth-date chain: the curated manual override map.

Curators keep a small JSON file of dates that every automated source gets
wrong (same-named historical figures, stage-name collisions).  Two shapes
are accepted per entry::

    {"Aphex Twin": "1971-08-18"}
    {"Burial": {"birth_date": "1979-00-00", "stable_id": "Q..."}}

Lookup is by exact name first, then by the case-insensitive name key.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from radio_venus.interfaces.birth_date_provider import IBirthDateProvider
from radio_venus.models.resolution import BirthDateCandidate, ProviderResult
from radio_venus.utils.errors import SnapshotError
from radio_venus.utils.logging import get_logger
from radio_venus.utils.text_normalizer import name_key


class ManualOverrideProvider(IBirthDateProvider):
    """In-memory override map; never touches the network."""

    authoritative = True

    def __init__(self, overrides: Mapping[str, Any] | None = None) -> None:
        self._logger = get_logger(__name__)
        self._exact: dict[str, BirthDateCandidate] = {}
        self._by_key: dict[str, BirthDateCandidate] = {}
        for name, entry in (overrides or {}).items():
            candidate = self._parse_entry(entry)
            if candidate is None:
                self._logger.warning("override_entry_skipped", name=name)
                continue
            self._exact[name] = candidate
            self._by_key[name_key(name)] = candidate

    @classmethod
    def from_file(cls, path: str | Path) -> ManualOverrideProvider:
        """Load overrides from *path*; a missing file yields an empty map."""
        file_path = Path(path)
        if not file_path.exists():
            return cls({})
        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise SnapshotError(f"Cannot read overrides file {file_path}: {exc}") from exc
        if isinstance(data, list):
            data = {
                item["name"]: item
                for item in data
                if isinstance(item, dict) and "name" in item
            }
        if not isinstance(data, dict):
            raise SnapshotError(f"Overrides file {file_path} must hold an object or a list")
        return cls(data)

    @staticmethod
    def _parse_entry(entry: Any) -> BirthDateCandidate | None:
        if isinstance(entry, str) and entry.strip():
            return BirthDateCandidate(raw=entry.strip())
        if isinstance(entry, dict):
            raw = entry.get("birth_date") or entry.get("birthDate")
            if isinstance(raw, str) and raw.strip():
                stable_id = entry.get("stable_id") or entry.get("mbid") or None
                return BirthDateCandidate(raw=raw.strip(), stable_id=stable_id)
        return None

    def __len__(self) -> int:
        return len(self._exact)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and (name in self._exact or name_key(name) in self._by_key)

    async def query(
        self, name: str, hint: str | None = None
    ) -> ProviderResult[BirthDateCandidate]:
        candidate = self._exact.get(name) or self._by_key.get(name_key(name))
        if candidate is None:
            return ProviderResult.no_result(self.get_provider_name(), "no override")
        return ProviderResult.found(candidate, self.get_provider_name())

    def get_provider_name(self) -> str:
        return "manual_override"

    def is_available(self) -> bool:
        return True
