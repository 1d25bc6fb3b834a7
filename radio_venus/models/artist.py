"""Artist records and the derived Venus position.

``ArtistRecord`` is the unit of the canonical set.  All models are frozen;
the merge engine and enrichment produce new records with ``model_copy``
instead of mutating.

Legacy snapshot and seed files used camelCase and provider-specific field
names (``youtubeVideoId``, ``enTags``, ``mbid``).  Each field accepts those
spellings through ``AliasChoices`` so old files load without a migration
step; records are always written back with the snake_case names.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Any

import structlog
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from radio_venus.models.taxonomy import GenreCategory, Subgenre
from radio_venus.utils.text_normalizer import name_key

logger = structlog.get_logger(logger_name=__name__)


# ---------------------------------------------------------------------------
# Venus position
# ---------------------------------------------------------------------------

class VenusSign(str, Enum):  # noqa: UP042 - StrEnum requires Python 3.11+
    """The twelve zodiac signs in ecliptic order (index 0 starts at 0°)."""

    ARIES = "Aries"
    TAURUS = "Taurus"
    GEMINI = "Gemini"
    CANCER = "Cancer"
    LEO = "Leo"
    VIRGO = "Virgo"
    LIBRA = "Libra"
    SCORPIO = "Scorpio"
    SAGITTARIUS = "Sagittarius"
    CAPRICORN = "Capricorn"
    AQUARIUS = "Aquarius"
    PISCES = "Pisces"

    @property
    def ordinal(self) -> int:
        return list(VenusSign).index(self)

    @property
    def glyph(self) -> str:
        # U+2648 (Aries) .. U+2653 (Pisces)
        return chr(0x2648 + self.ordinal)

    @property
    def element(self) -> Element:
        return SIGN_ELEMENTS[self]

    @property
    def opposite(self) -> VenusSign:
        return list(VenusSign)[(self.ordinal + 6) % 12]


class Element(str, Enum):  # noqa: UP042
    FIRE = "fire"
    EARTH = "earth"
    AIR = "air"
    WATER = "water"


SIGN_ELEMENTS: dict[VenusSign, Element] = {
    VenusSign.ARIES: Element.FIRE,
    VenusSign.LEO: Element.FIRE,
    VenusSign.SAGITTARIUS: Element.FIRE,
    VenusSign.TAURUS: Element.EARTH,
    VenusSign.VIRGO: Element.EARTH,
    VenusSign.CAPRICORN: Element.EARTH,
    VenusSign.GEMINI: Element.AIR,
    VenusSign.LIBRA: Element.AIR,
    VenusSign.AQUARIUS: Element.AIR,
    VenusSign.CANCER: Element.WATER,
    VenusSign.SCORPIO: Element.WATER,
    VenusSign.PISCES: Element.WATER,
}


class VenusPosition(BaseModel):
    """Position of Venus within its sign.

    Always derived from a birth date by the calculator, never edited.
    """

    model_config = ConfigDict(frozen=True)

    sign: VenusSign
    degree: float = Field(ge=0.0, lt=30.0)
    decan: int = Field(ge=1, le=3)
    element: Element

    @property
    def glyph(self) -> str:
        return self.sign.glyph


# ---------------------------------------------------------------------------
# Provenance
# ---------------------------------------------------------------------------

class ProvenanceTier(str, Enum):  # noqa: UP042
    """Which source last set a field, ordered by merge precedence.

    CURATED_OVERRIDE > CURATED_SEED > CACHE > FRESH.
    """

    CURATED_OVERRIDE = "curated_override"
    CURATED_SEED = "curated_seed"
    CACHE = "cache"
    FRESH = "fresh"

    @property
    def rank(self) -> int:
        return _TIER_RANKS[self]

    def outranks(self, other: ProvenanceTier) -> bool:
        return self.rank > other.rank


_TIER_RANKS: dict[ProvenanceTier, int] = {
    ProvenanceTier.CURATED_OVERRIDE: 4,
    ProvenanceTier.CURATED_SEED: 3,
    ProvenanceTier.CACHE: 2,
    ProvenanceTier.FRESH: 1,
}


# ---------------------------------------------------------------------------
# Helpers shared by the validators below
# ---------------------------------------------------------------------------

def _coerce_enum_tuple(value: Any, enum_cls: type[Enum], field: str) -> tuple:
    """Turn a list of ids into a de-duplicated tuple in enum declaration order.

    Unknown ids are dropped with a warning so one stale label in a seed
    file does not reject the whole record.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    members: set = set()
    for item in value:
        try:
            members.add(enum_cls(item))
        except ValueError:
            logger.warning("unknown_taxonomy_id_dropped", field=field, value=item)
    return tuple(m for m in enum_cls if m in members)


def _coerce_str_tuple(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    seen: list[str] = []
    for item in value:
        text = str(item).strip()
        if text and text not in seen:
            seen.append(text)
    return tuple(seen)


# ---------------------------------------------------------------------------
# ArtistRecord
# ---------------------------------------------------------------------------

class ArtistRecord(BaseModel):
    """One musician in the canonical set.

    ``name`` (case-insensitively) and, when present, ``stable_id`` are unique
    across the set.  ``venus`` is recomputed from ``birth_date`` whenever a
    record passes through the merge engine.  ``field_sources`` remembers
    which provenance tier supplied each field; it only steers merges and is
    never serialized.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    birth_date: datetime.date | None = Field(
        default=None, validation_alias=AliasChoices("birth_date", "birthDate")
    )
    date_approx: bool = Field(
        default=False, validation_alias=AliasChoices("date_approx", "dateApprox")
    )
    venus: VenusPosition | None = None
    genres: tuple[GenreCategory, ...] = ()
    subgenres: tuple[Subgenre, ...] = ()
    raw_provider_tags: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("raw_provider_tags", "rawProviderTags", "enTags"),
    )
    stable_id: str | None = Field(
        default=None, validation_alias=AliasChoices("stable_id", "stableId", "mbid")
    )
    media_id: str | None = Field(
        default=None, validation_alias=AliasChoices("media_id", "mediaId", "youtubeVideoId")
    )
    backup_media_ids: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("backup_media_ids", "backupMediaIds", "backupVideoIds"),
    )
    handpicked: bool = False
    handpicked_track: str | None = Field(
        default=None, validation_alias=AliasChoices("handpicked_track", "handpickedTrack")
    )
    field_sources: dict[str, ProvenanceTier] = Field(default_factory=dict, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _normalize_birth_date_text(cls, data: Any) -> Any:
        """Resolve partial date text (``1979-00-00``, ``1991-03``, ``1984``) on ingest.

        The approximation flag is OR-ed with whatever the input already
        says.  Text the normalizer rejects drops the date, not the record,
        so enrichment can resolve it again.
        """
        if not isinstance(data, dict):
            return data
        raw = data.get("birth_date", data.get("birthDate"))
        if not isinstance(raw, str):
            return data

        # Local import: the services package depends on the models.
        from radio_venus.services.date_normalizer import normalize_birth_date
        from radio_venus.utils.errors import InvalidDateError

        cleaned = {k: v for k, v in data.items() if k not in ("birthDate", "dateApprox")}
        approx = bool(data.get("date_approx", data.get("dateApprox", False)))
        try:
            normalized = normalize_birth_date(raw)
        except InvalidDateError as exc:
            logger.warning("birth_date_dropped", name=data.get("name"), error=exc.message)
            cleaned["birth_date"] = None
            cleaned["date_approx"] = False
            return cleaned
        cleaned["birth_date"] = normalized.date
        cleaned["date_approx"] = approx or normalized.approx
        return cleaned

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        return value.strip()

    @field_validator("genres", mode="before")
    @classmethod
    def _coerce_genres(cls, value: Any) -> tuple:
        return _coerce_enum_tuple(value, GenreCategory, "genres")

    @field_validator("subgenres", mode="before")
    @classmethod
    def _coerce_subgenres(cls, value: Any) -> tuple:
        return _coerce_enum_tuple(value, Subgenre, "subgenres")

    @field_validator("raw_provider_tags", "backup_media_ids", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> tuple[str, ...]:
        return _coerce_str_tuple(value)

    @field_validator("stable_id", "media_id", "handpicked_track", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("venus", mode="before")
    @classmethod
    def _drop_malformed_venus(cls, value: Any) -> Any:
        # Older snapshots stored the bare sign string; venus is rederived anyway.
        return value if isinstance(value, (dict, VenusPosition)) else None

    @property
    def key(self) -> str:
        """Primary dedup key (case-insensitive name)."""
        return name_key(self.name)

    def to_snapshot_dict(self) -> dict[str, Any]:
        """Serialize for the JSON snapshot (snake_case, no empty optionals)."""
        return self.model_dump(mode="json", exclude_none=True)


class ArtistOverride(BaseModel):
    """A curated field patch that outranks every other source.

    Only fields that are set are applied.  ``birth_date`` is kept as raw text
    so partial curated dates (``1968-00-00``) go through the date normalizer.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    birth_date: str | None = Field(
        default=None, validation_alias=AliasChoices("birth_date", "birthDate")
    )
    genres: tuple[GenreCategory, ...] = ()
    subgenres: tuple[Subgenre, ...] = ()
    stable_id: str | None = Field(
        default=None, validation_alias=AliasChoices("stable_id", "stableId", "mbid")
    )
    media_id: str | None = Field(
        default=None, validation_alias=AliasChoices("media_id", "mediaId", "youtubeVideoId")
    )

    @field_validator("genres", mode="before")
    @classmethod
    def _coerce_genres(cls, value: Any) -> tuple:
        return _coerce_enum_tuple(value, GenreCategory, "genres")

    @field_validator("subgenres", mode="before")
    @classmethod
    def _coerce_subgenres(cls, value: Any) -> tuple:
        return _coerce_enum_tuple(value, Subgenre, "subgenres")

    @property
    def key(self) -> str:
        return name_key(self.name)
