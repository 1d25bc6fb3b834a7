"""Radio Venus domain models - re-exports all public model classes.

Submodules by concern:
    - artist.py     - ArtistRecord, VenusPosition, signs, elements, provenance
    - taxonomy.py   - closed GenreCategory / Subgenre enumerations
    - resolution.py - ProviderResult sum type and birth-date value objects
    - merge.py      - merge outcome (collisions, exclusions, rejections)
    - pipeline.py   - build phases and the build summary
    - report.py     - verification report buckets and proposed patches
    - playlist.py   - playlist tracks, import batches and handpick patches
"""

from __future__ import annotations

from radio_venus.models.artist import (
    SIGN_ELEMENTS,
    ArtistOverride,
    ArtistRecord,
    Element,
    ProvenanceTier,
    VenusPosition,
    VenusSign,
)
from radio_venus.models.merge import ExclusionList, IdentityCollision, MergeResult, RejectedRecord
from radio_venus.models.pipeline import BuildSummary, RunPhase
from radio_venus.models.playlist import (
    HandpickPatch,
    ImportBatch,
    MergeImportSummary,
    PlaylistTrack,
)
from radio_venus.models.report import (
    GenrePatch,
    ReportEntry,
    ReportMeta,
    VerificationReport,
    VerificationStatus,
)
from radio_venus.models.resolution import (
    BirthDateCandidate,
    DatePrecision,
    NormalizedDate,
    ProviderResult,
    ProviderStatus,
    ResolvedBirthDate,
)
from radio_venus.models.taxonomy import GenreCategory, Subgenre

__all__ = [
    "SIGN_ELEMENTS",
    "ArtistOverride",
    "ArtistRecord",
    "BirthDateCandidate",
    "BuildSummary",
    "DatePrecision",
    "Element",
    "ExclusionList",
    "GenreCategory",
    "GenrePatch",
    "HandpickPatch",
    "IdentityCollision",
    "ImportBatch",
    "MergeImportSummary",
    "MergeResult",
    "NormalizedDate",
    "PlaylistTrack",
    "ProvenanceTier",
    "ProviderResult",
    "ProviderStatus",
    "RejectedRecord",
    "ReportEntry",
    "ReportMeta",
    "ResolvedBirthDate",
    "RunPhase",
    "Subgenre",
    "VenusPosition",
    "VenusSign",
    "VerificationReport",
    "VerificationStatus",
]
