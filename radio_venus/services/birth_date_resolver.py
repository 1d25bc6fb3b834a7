"""Birth-date resolution chain.

Runs the birth-date tiers in fixed priority order and stops at the first
tier whose date survives normalization and the year bounds:

    manual override -> Wikidata -> MusicBrainz -> Wikipedia -> community DB

Every tier outcome is an explicit :class:`ProviderResult`; a tier that
finds nothing, hits a network error, or returns an implausible year simply
hands over to the next one.  Only exhaustion of all tiers is a failure for
the artist, and even that is a result value, not an exception.

The manual override tier is the exception to the fallback: an override
entry ends the chain whatever it holds.  Its date is returned even when it
lies below the caller's year floor, and an unparseable override ends the
chain as a wrong match.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from radio_venus.interfaces.birth_date_provider import IBirthDateProvider
from radio_venus.interfaces.cache_provider import ICacheProvider
from radio_venus.models.resolution import (
    BirthDateCandidate,
    ProviderResult,
    ProviderStatus,
    ResolvedBirthDate,
)
from radio_venus.services.date_normalizer import (
    MIN_YEAR,
    is_plausible_year,
    normalize_birth_date,
)
from radio_venus.utils.errors import InvalidDateError
from radio_venus.utils.logging import get_logger
from radio_venus.utils.text_normalizer import name_key

_PROVIDER = "birth_date_chain"


class BirthDateResolver:
    """Ordered fallback over :class:`IBirthDateProvider` tiers.

    Parameters
    ----------
    tiers:
        Providers in priority order.  Unavailable providers are skipped.
    cache:
        Optional per-run memo keyed by name key and minimum year.
    min_year:
        Default lower year bound; discovery passes a stricter one per call.
    """

    def __init__(
        self,
        tiers: Sequence[IBirthDateProvider],
        cache: ICacheProvider | None = None,
        min_year: int = MIN_YEAR,
    ) -> None:
        self._tiers = list(tiers)
        self._cache = cache
        self._min_year = min_year
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def tier_names(self) -> list[str]:
        return [t.get_provider_name() for t in self._tiers]

    # -- Public API -----------------------------------------------------------

    async def resolve(
        self, name: str, hint: str | None = None, min_year: int | None = None
    ) -> ProviderResult[ResolvedBirthDate]:
        """Resolve a birth (or formation) date for *name*.

        Parameters
        ----------
        name:
            Artist name.
        hint:
            Known stable identifier, passed to every tier.
        min_year:
            Lower year bound for this call; years below it are rejected and
            the chain moves on.

        Returns
        -------
        ProviderResult[ResolvedBirthDate]
            FOUND with the normalized date and the tier that supplied it, or
            NO_RESULT once every tier is exhausted.
        """
        floor = self._min_year if min_year is None else min_year
        cache_key = f"birth_date:{name_key(name)}:{floor}"
        if self._cache is not None:
            cached = await self._cache.get(cache_key)
            if cached is not None:
                return cached

        result = await self._run_chain(name, hint, floor)
        if self._cache is not None:
            await self._cache.set(cache_key, result)
        return result

    # -- Internal helpers -----------------------------------------------------

    async def _run_chain(
        self, name: str, hint: str | None, floor: int
    ) -> ProviderResult[ResolvedBirthDate]:
        attempted: list[str] = []
        for tier in self._tiers:
            provider = tier.get_provider_name()
            if not tier.is_available():
                continue
            attempted.append(provider)

            outcome = await self._query_tier(tier, name, hint)
            if not outcome.ok or outcome.value is None:
                self._log_tier(name, provider, outcome.status, outcome.reason)
                continue

            resolved = self._accept(
                outcome.value, provider, None if tier.authoritative else floor, hint
            )
            if isinstance(resolved, str):
                self._log_tier(name, provider, ProviderStatus.WRONG_MATCH, resolved)
                if tier.authoritative:
                    return ProviderResult.wrong_match(provider, resolved)
                continue

            self._log_tier(name, provider, ProviderStatus.FOUND, resolved.date.isoformat())
            return ProviderResult.found(resolved, provider)

        self._logger.info("birth_date_unresolved", artist=name, tiers=attempted)
        return ProviderResult.no_result(_PROVIDER, f"all tiers exhausted ({', '.join(attempted)})")

    async def _query_tier(
        self, tier: IBirthDateProvider, name: str, hint: str | None
    ) -> ProviderResult[BirthDateCandidate]:
        try:
            return await tier.query(name, hint)
        except Exception as exc:  # noqa: BLE001
            return ProviderResult.transport_failure(tier.get_provider_name(), str(exc))

    @staticmethod
    def _accept(
        candidate: BirthDateCandidate, provider: str, floor: int | None, hint: str | None
    ) -> ResolvedBirthDate | str:
        """Normalize a candidate; return a rejection reason string on failure.

        ``floor=None`` skips the year floor (authoritative tiers); the
        normalizer's own plausibility bounds still apply.
        """
        try:
            normalized = normalize_birth_date(candidate.raw, precision=candidate.precision)
        except InvalidDateError as exc:
            return exc.message
        if floor is not None and not is_plausible_year(normalized.date.year, min_year=floor):
            return f"year {normalized.date.year} below {floor}"
        return ResolvedBirthDate(
            date=normalized.date,
            approx=normalized.approx,
            source=provider,
            stable_id=candidate.stable_id or hint,
        )

    def _log_tier(self, name: str, provider: str, status: ProviderStatus, detail: str) -> None:
        level = "warning" if status is ProviderStatus.TRANSPORT_FAILURE else "debug"
        if status is ProviderStatus.WRONG_MATCH:
            level = "info"
        getattr(self._logger, level)(
            "birth_date_tier_result",
            artist=name,
            tier=provider,
            status=status.value,
            detail=detail,
        )
