"""Playlist import models.

A playlist import never writes the seed directly from the network pass:
it produces an :class:`ImportBatch` (new seed entries plus handpick
patches for artists the seed already has), which is either applied to the
seed at once or saved to a file and merged later with ``merge-import``.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from radio_venus.models.artist import ArtistRecord
from radio_venus.utils.text_normalizer import name_key


class PlaylistTrack(BaseModel):
    """One playlist entry reduced to its first credited artist."""

    model_config = ConfigDict(frozen=True)

    artist_name: str
    track_name: str
    artist_id: str | None = None

    @property
    def key(self) -> str:
        return name_key(self.artist_name)


class HandpickPatch(BaseModel):
    """Mark an existing seed artist as handpicked, with the track that put it there."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    handpicked: bool = True
    handpicked_track: str | None = Field(
        default=None, validation_alias=AliasChoices("handpicked_track", "handpickedTrack")
    )

    @property
    def key(self) -> str:
        return name_key(self.name)


class ImportBatch(BaseModel):
    """Result of importing one playlist.

    ``skipped`` maps artist names to the reason they produced neither an
    addition nor a patch.
    """

    model_config = ConfigDict(frozen=True)

    playlist: str = ""
    additions: list[ArtistRecord] = Field(default_factory=list)
    patches: list[HandpickPatch] = Field(default_factory=list)
    skipped: dict[str, str] = Field(default_factory=dict)

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize in the seed's on-disk record form (no derived venus)."""
        return {
            "playlist": self.playlist,
            "additions": [
                r.model_dump(mode="json", exclude_none=True, exclude={"venus"})
                for r in self.additions
            ],
            "patches": [p.model_dump(mode="json", exclude_none=True) for p in self.patches],
            "skipped": dict(self.skipped),
        }


class MergeImportSummary(BaseModel):
    """Counts reported by applying import batches to the seed."""

    added: list[str] = Field(default_factory=list)
    patched: list[str] = Field(default_factory=list)
    duplicates: list[str] = Field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.patched)
