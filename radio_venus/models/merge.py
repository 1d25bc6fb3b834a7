"""Outcome models for the identity merge engine."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from radio_venus.models.artist import ArtistRecord, ProvenanceTier
from radio_venus.utils.text_normalizer import name_key


class IdentityCollision(BaseModel):
    """Two different name keys that claim the same stable identifier.

    The incoming record is discarded; this event goes to manual review.
    """

    model_config = ConfigDict(frozen=True)

    stable_id: str
    kept_name: str
    discarded_name: str
    discarded_tier: ProvenanceTier


class RejectedRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    reason: str


class MergeResult(BaseModel):
    """Canonical set plus everything that did not make it in."""

    model_config = ConfigDict(frozen=True)

    records: list[ArtistRecord] = Field(default_factory=list)
    collisions: list[IdentityCollision] = Field(default_factory=list)
    excluded: list[str] = Field(default_factory=list)
    rejected: list[RejectedRecord] = Field(default_factory=list)

    def by_key(self) -> dict[str, ArtistRecord]:
        return {r.key: r for r in self.records}


class ExclusionList(BaseModel):
    """Curated "never auto-include" list of known bad identity matches.

    Entries are matched by name key or by stable identifier.
    """

    model_config = ConfigDict(frozen=True)

    name_keys: frozenset[str] = frozenset()
    stable_ids: frozenset[str] = frozenset()

    @classmethod
    def from_entries(cls, entries: list) -> ExclusionList:
        """Build from a list of names or ``{"name": ..., "stable_id": ...}`` objects."""
        names: set[str] = set()
        ids: set[str] = set()
        for entry in entries:
            if isinstance(entry, str):
                names.add(name_key(entry))
            elif isinstance(entry, dict):
                if entry.get("name"):
                    names.add(name_key(entry["name"]))
                stable_id = entry.get("stable_id") or entry.get("mbid")
                if stable_id:
                    ids.add(stable_id)
        return cls(name_keys=frozenset(names), stable_ids=frozenset(ids))

    def matches(self, record: ArtistRecord) -> bool:
        if record.key in self.name_keys:
            return True
        return bool(record.stable_id and record.stable_id in self.stable_ids)

    def __len__(self) -> int:
        return len(self.name_keys) + len(self.stable_ids)
