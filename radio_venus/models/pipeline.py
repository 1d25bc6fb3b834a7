"""Run-level models for the catalog build."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from radio_venus.models.merge import IdentityCollision, RejectedRecord


class RunPhase(str, Enum):  # noqa: UP042 - StrEnum requires Python 3.11+
    """Phases of a catalog build, in execution order."""

    LOAD = "load"
    FETCH_FRESH = "fetch_fresh"
    RESOLVE_DATES = "resolve_dates"
    MERGE = "merge"
    MEDIA = "media"
    WRITE_SNAPSHOT = "write_snapshot"
    INDEX = "index"
    DONE = "done"


class BuildSummary(BaseModel):
    """Outcome of one :meth:`CatalogPipeline.build` call."""

    model_config = ConfigDict(frozen=True)

    total: int = 0
    seed: int = 0
    cached: int = 0
    fresh: int = 0
    with_media: int = 0
    indexed: int = 0
    snapshot_path: str = ""
    collisions: list[IdentityCollision] = Field(default_factory=list)
    excluded: list[str] = Field(default_factory=list)
    rejected: list[RejectedRecord] = Field(default_factory=list)
