"""Verification report models.

The report is the only channel through which genre corrections are
proposed: four buckets, each entry carrying the stored categories, the raw
authority evidence and a reason string for human review.  The JSON file
uses the bucket names ``ok``, ``missing``, ``extra`` and ``notFound``.
"""

from __future__ import annotations

import datetime
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from radio_venus.models.taxonomy import GenreCategory
from radio_venus.utils.text_normalizer import name_key


class VerificationStatus(str, Enum):  # noqa: UP042 - StrEnum requires Python 3.11+
    """Terminal states of a record in one verification pass."""

    PENDING = "pending"
    OK = "ok"
    MISSING = "missing"
    EXTRA = "extra"
    NOT_FOUND = "notFound"


class ReportEntry(BaseModel):
    """Evidence for one verified record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    stored: list[GenreCategory] = Field(default_factory=list)
    authority_raw: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("authority_raw", "enRaw")
    )
    authority_categories: list[GenreCategory] = Field(
        default_factory=list,
        validation_alias=AliasChoices("authority_categories", "enCategories"),
    )
    missing_from_stored: list[GenreCategory] = Field(
        default_factory=list,
        validation_alias=AliasChoices("missing_from_stored", "missingFromStored"),
    )
    extra_in_stored: list[GenreCategory] = Field(
        default_factory=list,
        validation_alias=AliasChoices("extra_in_stored", "notSupportedByEN"),
    )
    reason: str = ""

    @property
    def is_geo_wrong_match(self) -> bool:
        return self.reason.startswith("wrong match (geo")


class ReportMeta(BaseModel):
    started_at: datetime.datetime = Field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc)
    )
    authority: str = ""
    filter_genre: GenreCategory | None = None
    total: int = 0
    completed: bool = False


class VerificationReport(BaseModel):
    """Buckets produced by one verification pass.

    ``missing`` and ``extra`` may both hold the same record; every other
    pairing of buckets is exclusive.
    """

    model_config = ConfigDict(populate_by_name=True)

    meta: ReportMeta = Field(default_factory=ReportMeta)
    ok: list[ReportEntry] = Field(default_factory=list)
    missing: list[ReportEntry] = Field(default_factory=list)
    extra: list[ReportEntry] = Field(default_factory=list)
    not_found: list[ReportEntry] = Field(
        default_factory=list,
        validation_alias=AliasChoices("not_found", "notFound"),
        serialization_alias="notFound",
    )

    def processed_keys(self) -> set[str]:
        """Name keys of every record that already reached a terminal state."""
        keys: set[str] = set()
        for bucket in (self.ok, self.missing, self.extra, self.not_found):
            keys.update(name_key(entry.name) for entry in bucket)
        return keys

    def statuses_for(self, name: str) -> set[VerificationStatus]:
        key = name_key(name)
        found: set[VerificationStatus] = set()
        for status, bucket in (
            (VerificationStatus.OK, self.ok),
            (VerificationStatus.MISSING, self.missing),
            (VerificationStatus.EXTRA, self.extra),
            (VerificationStatus.NOT_FOUND, self.not_found),
        ):
            if any(name_key(e.name) == key for e in bucket):
                found.add(status)
        return found

    def to_json(self) -> str:
        return self.model_dump_json(indent=2, by_alias=True)

    def summary(self) -> dict[str, int]:
        wrong = sum(1 for e in self.not_found if e.reason.startswith(("wrong match", "no genre")))
        return {
            "ok": len(self.ok),
            "missing": len(self.missing),
            "extra": len(self.extra),
            "not_found": len(self.not_found) - wrong,
            "wrong_match": wrong,
        }


class GenrePatch(BaseModel):
    """A proposed genre correction for one record, awaiting human review."""

    model_config = ConfigDict(frozen=True)

    name: str
    stored: list[GenreCategory] = Field(default_factory=list)
    proposed: list[GenreCategory] = Field(default_factory=list)
    added: list[GenreCategory] = Field(default_factory=list)
    removed: list[GenreCategory] = Field(default_factory=list)
    authority_raw: list[str] = Field(default_factory=list)
