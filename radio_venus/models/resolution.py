"""Provider result types threaded through the resolution pipeline.

Every adapter returns a :class:`ProviderResult` instead of raising: the
orchestration code only ever asks ``result.ok`` and never relies on
exception propagation to move to the next tier.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ProviderStatus(str, Enum):  # noqa: UP042 - StrEnum requires Python 3.11+
    """Closed set of adapter outcomes.

    NO_RESULT and TRANSPORT_FAILURE are equivalent for control flow;
    they are kept apart so logs can separate "nothing there" from
    "could not ask".  WRONG_MATCH means the source found an entity that
    evidence says is a different real-world artist.
    """

    FOUND = "found"
    NO_RESULT = "no_result"
    WRONG_MATCH = "wrong_match"
    TRANSPORT_FAILURE = "transport_failure"


@dataclass(frozen=True)
class ProviderResult(Generic[T]):
    """Outcome of a single ``query`` against one provider.

    Attributes
    ----------
    status:
        Which branch of the sum type this is.
    value:
        The payload; only set when ``status`` is FOUND.
    provider:
        Name of the provider that produced the result.
    reason:
        One-line human-readable explanation for non-FOUND outcomes.
    """

    status: ProviderStatus
    value: T | None = None
    provider: str = ""
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status is ProviderStatus.FOUND

    @classmethod
    def found(cls, value: T, provider: str = "") -> ProviderResult[T]:
        return cls(status=ProviderStatus.FOUND, value=value, provider=provider)

    @classmethod
    def no_result(cls, provider: str = "", reason: str = "not found") -> ProviderResult[T]:
        return cls(status=ProviderStatus.NO_RESULT, provider=provider, reason=reason)

    @classmethod
    def wrong_match(cls, provider: str = "", reason: str = "wrong match") -> ProviderResult[T]:
        return cls(status=ProviderStatus.WRONG_MATCH, provider=provider, reason=reason)

    @classmethod
    def transport_failure(cls, provider: str = "", reason: str = "") -> ProviderResult[T]:
        return cls(status=ProviderStatus.TRANSPORT_FAILURE, provider=provider, reason=reason)


class DatePrecision(str, Enum):  # noqa: UP042
    YEAR = "year"
    MONTH = "month"
    DAY = "day"


@dataclass(frozen=True)
class BirthDateCandidate:
    """A raw date as reported by one birth-date provider.

    Attributes
    ----------
    raw:
        Date text exactly as the provider returned it after light cleanup,
        e.g. ``"1971-08-18"``, ``"1991-03"``, ``"+1968-00-00T00:00:00Z"``.
    precision:
        Precision the provider declares for the date, when it declares one
        (Wikidata does).  ``None`` means "infer from the text".
    stable_id:
        Provider-issued identifier (Wikidata QID, MusicBrainz MBID) when
        available.
    label:
        Name of the matched entity as the provider lists it.
    """

    raw: str
    precision: DatePrecision | None = None
    stable_id: str | None = None
    label: str | None = None


@dataclass(frozen=True)
class NormalizedDate:
    """A calendar date ready for the position calculator."""

    date: datetime.date
    approx: bool = False
    precision: DatePrecision = DatePrecision.DAY


@dataclass(frozen=True)
class ResolvedBirthDate:
    """Final output of the resolution chain for one artist."""

    date: datetime.date
    approx: bool
    source: str
    stable_id: str | None = None
