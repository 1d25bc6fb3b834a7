"""Breadth-first discovery of new artists over the similarity graph.

Starting from seed names, each depth level asks every similarity provider
for artists similar to the current frontier and unions their answers.
Every name not yet in the catalog is resolved like a curated entry would
be, but with a stricter year floor since nothing about it is verified:

1. birth date through the resolution chain (years before 1940 discarded);
2. genres through the tag resolver (override, authority, secondary);
3. zero classified genres discards the candidate.

Accepted candidates form the next frontier.  After the traversal an
optional aesthetic judge filters the accepted set, and unless this is a
dry run the survivors are appended to the curated seed.

The traversal is sequential with politeness delays between requests.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import structlog

from radio_venus.config.curation import DISCOVERY_MIN_YEAR
from radio_venus.interfaces.tag_provider import ISimilarityProvider
from radio_venus.models.artist import ArtistRecord, ProvenanceTier
from radio_venus.providers.store.json_seed_store import JsonSeedStore
from radio_venus.services.aesthetic_judge import AestheticJudge
from radio_venus.services.birth_date_resolver import BirthDateResolver
from radio_venus.services.tag_resolver import TagResolver
from radio_venus.services.venus_calculator import calculate_venus
from radio_venus.utils.concurrency import polite_pause
from radio_venus.utils.logging import get_logger
from radio_venus.utils.text_normalizer import name_key


@dataclass
class DiscoveryResult:
    """What one discovery run produced."""

    accepted: list[ArtistRecord] = field(default_factory=list)
    judged_out: list[ArtistRecord] = field(default_factory=list)
    skipped: dict[str, str] = field(default_factory=dict)
    appended: int = 0

    def sign_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for record in self.accepted:
            if record.venus is not None:
                sign = record.venus.sign.value
                counts[sign] = counts.get(sign, 0) + 1
        return counts


class SimilarityDiscoverer:
    """BFS over one or more similarity providers.

    Parameters
    ----------
    similarity_providers:
        Sources of "similar artist" edges; results are unioned.
    resolver:
        Birth-date chain.
    tag_resolver:
        Genre resolution for candidates.
    judge:
        Optional aesthetic post-filter.
    seed_store:
        Where accepted candidates are appended.
    min_year:
        Earliest acceptable birth year for a candidate.
    """

    def __init__(
        self,
        similarity_providers: Sequence[ISimilarityProvider],
        resolver: BirthDateResolver,
        tag_resolver: TagResolver,
        judge: AestheticJudge | None = None,
        seed_store: JsonSeedStore | None = None,
        min_year: int = DISCOVERY_MIN_YEAR,
        similarity_delay: float = 0.5,
        candidate_delay: float = 0.3,
    ) -> None:
        self._similarity = list(similarity_providers)
        self._resolver = resolver
        self._tags = tag_resolver
        self._judge = judge
        self._seed_store = seed_store
        self._min_year = min_year
        self._similarity_delay = similarity_delay
        self._candidate_delay = candidate_delay
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # -- Public API -----------------------------------------------------------

    async def similar_names(self, name: str) -> list[str]:
        """Union of every available provider's similar names, first spelling wins."""
        names: dict[str, str] = {}
        for provider in self._similarity:
            if not provider.is_available():
                continue
            try:
                result = await provider.query(name)
            except Exception as exc:  # noqa: BLE001
                self._logger.warning(
                    "similarity_lookup_failed",
                    artist=name,
                    provider=provider.get_provider_name(),
                    error=str(exc),
                )
                continue
            if not result.ok:
                self._logger.debug(
                    "similarity_empty",
                    artist=name,
                    provider=provider.get_provider_name(),
                    status=result.status.value,
                )
                continue
            for similar in result.value or []:
                cleaned = similar.strip()
                if cleaned:
                    names.setdefault(name_key(cleaned), cleaned)
        return list(names.values())

    async def discover(
        self,
        seeds: Sequence[str],
        known: Iterable[ArtistRecord] = (),
        depth: int = 1,
        dry_run: bool = False,
    ) -> DiscoveryResult:
        """Run the traversal from *seeds* down to *depth* levels.

        Parameters
        ----------
        seeds:
            Artist names to start from.
        known:
            Records already in the catalog; their names and stable ids are
            never proposed again.
        depth:
            Number of BFS levels.
        dry_run:
            Skip appending the result to the seed file.
        """
        result = DiscoveryResult()
        known_keys: set[str] = set()
        known_ids: set[str] = set()
        for record in known:
            known_keys.add(record.key)
            if record.stable_id:
                known_ids.add(record.stable_id)

        processed: set[str] = set()
        evaluated: set[str] = set()
        frontier = list(seeds)

        for level in range(1, max(depth, 0) + 1):
            self._logger.info("discovery_depth_started", depth=level, frontier=len(frontier))
            next_frontier: list[str] = []

            for artist in frontier:
                artist_key = name_key(artist)
                if artist_key in processed:
                    continue
                processed.add(artist_key)

                similar = await self.similar_names(artist)
                self._logger.info("similar_artists_found", artist=artist, count=len(similar))
                await polite_pause(self._similarity_delay)

                for name in similar:
                    key = name_key(name)
                    if key in known_keys or key in processed or key in evaluated:
                        continue
                    evaluated.add(key)

                    candidate = await self._evaluate(name, known_ids, result)
                    if candidate is None:
                        continue
                    result.accepted.append(candidate)
                    known_keys.add(key)
                    if candidate.stable_id:
                        known_ids.add(candidate.stable_id)
                    next_frontier.append(name)

            frontier = next_frontier

        if self._judge is not None and result.accepted:
            kept, rejected = await self._judge.filter(result.accepted)
            result.accepted = kept
            result.judged_out = rejected

        if result.accepted and not dry_run and self._seed_store is not None:
            result.appended = await self._seed_store.append_seed(result.accepted)

        self._logger.info(
            "discovery_finished",
            accepted=len(result.accepted),
            judged_out=len(result.judged_out),
            skipped=len(result.skipped),
            appended=result.appended,
            dry_run=dry_run,
        )
        return result

    # -- Internal helpers -----------------------------------------------------

    async def _evaluate(
        self, name: str, known_ids: set[str], result: DiscoveryResult
    ) -> ArtistRecord | None:
        dated = await self._resolver.resolve(name, min_year=self._min_year)
        await polite_pause(self._candidate_delay)
        if not dated.ok or dated.value is None:
            return self._skip(result, name, "no birth date")

        birth = dated.value
        if birth.stable_id and birth.stable_id in known_ids:
            return self._skip(result, name, f"already known as {birth.stable_id}")

        genres = await self._tags.resolve(name)
        await polite_pause(self._candidate_delay)
        if not genres.ok or genres.value is None or not genres.value.categories:
            return self._skip(result, name, "no matching genres")

        resolution = genres.value
        venus = calculate_venus(birth.date)
        self._logger.info(
            "discovery_candidate_accepted",
            artist=name,
            birth_date=birth.date.isoformat(),
            venus=venus.sign.value,
            genres=[g.value for g in resolution.categories],
        )
        return ArtistRecord(
            name=name,
            birth_date=birth.date,
            date_approx=birth.approx,
            venus=venus,
            genres=resolution.categories,
            subgenres=resolution.subgenres,
            raw_provider_tags=resolution.raw_tags,
            stable_id=birth.stable_id,
            field_sources={"birth_date": ProvenanceTier.FRESH, "genres": ProvenanceTier.FRESH},
        )

    def _skip(self, result: DiscoveryResult, name: str, reason: str) -> None:
        result.skipped[name] = reason
        self._logger.info("discovery_candidate_skipped", artist=name, reason=reason)
        return None
