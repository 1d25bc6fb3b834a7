"""Catalog build: from curated inputs and the previous snapshot to a new one.

Phases, in order:

1. **load** -- previous snapshot (cache tier), seed, overrides, exclusions
2. **fetch_fresh** -- optional Wikidata candidates (fresh tier)
3. **resolve_dates** -- birth-date chain for seed and fresh records that
   still lack a date and are not already dated in the snapshot
4. **merge** -- field-level precedence merge, identity dedup, overrides
5. **media** -- primary (and optionally backup) media ids for records
   that have none
6. **write_snapshot** -- atomic overwrite of the snapshot file
7. **index** -- upsert into the secondary SQLite index

Anything that fails before phase 6 aborts the run and leaves the previous
snapshot untouched.  Re-running is always safe: the merge is keyed and
field-level and the index write is an upsert.
"""

from __future__ import annotations

import uuid

import structlog

from radio_venus.interfaces.record_store import IRecordIndex, ISnapshotStore
from radio_venus.models.artist import ArtistRecord
from radio_venus.models.pipeline import BuildSummary, RunPhase
from radio_venus.pipeline.progress_tracker import ProgressTracker
from radio_venus.providers.catalog.wikidata_catalog_provider import WikidataCatalogProvider
from radio_venus.providers.store.json_seed_store import JsonSeedStore
from radio_venus.services.enrichment_service import EnrichmentService
from radio_venus.services.genre_classifier import GenreClassifier
from radio_venus.services.merge_engine import MergeEngine
from radio_venus.utils.errors import PipelineError, RadioVenusError
from radio_venus.utils.logging import bind_run_context, get_logger


class CatalogPipeline:
    """Orchestrates one catalog build.

    All collaborators are injected; the pipeline never creates providers.

    Parameters
    ----------
    snapshot_store:
        Canonical snapshot (read as the cache tier, written at the end).
    seed_store:
        Curated seed, overrides and exclusions.
    enrichment:
        Birth-date and media enrichment.
    classifier:
        Shared genre classifier for the merge engine.
    catalog_provider:
        Optional source of fresh candidates.
    record_index:
        Optional secondary index.
    progress_tracker:
        Optional progress broadcaster.
    fresh_limit:
        Maximum number of fresh candidates requested.
    """

    def __init__(
        self,
        snapshot_store: ISnapshotStore,
        seed_store: JsonSeedStore,
        enrichment: EnrichmentService,
        classifier: GenreClassifier | None = None,
        catalog_provider: WikidataCatalogProvider | None = None,
        record_index: IRecordIndex | None = None,
        progress_tracker: ProgressTracker | None = None,
        fresh_limit: int = 100,
    ) -> None:
        self._snapshot = snapshot_store
        self._seed_store = seed_store
        self._enrichment = enrichment
        self._classifier = classifier or GenreClassifier()
        self._catalog = catalog_provider
        self._index = record_index
        self._progress = progress_tracker or ProgressTracker()
        self._fresh_limit = fresh_limit
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def build(
        self,
        run_id: str | None = None,
        fetch_fresh: bool = True,
        with_backups: bool = False,
        dry_run: bool = False,
    ) -> BuildSummary:
        """Run every phase and return a summary.

        Parameters
        ----------
        run_id:
            Identifier for progress and log context; generated if omitted.
        fetch_fresh:
            Ask the catalog provider for new candidates.
        with_backups:
            Also look for backup media ids.
        dry_run:
            Do everything except writing the snapshot and the index.

        Raises
        ------
        PipelineError
            If any phase before the snapshot write fails.
        """
        run_id = run_id or uuid.uuid4().hex[:12]
        bind_run_context(run_id=run_id, command="build")

        try:
            await self._report(run_id, RunPhase.LOAD, 0, "loading inputs")
            cache = await self._snapshot.load()
            seed = await self._seed_store.load_seed()
            overrides = await self._seed_store.load_overrides()
            exclusions = await self._seed_store.load_exclusions()
            self._logger.info(
                "build_inputs_loaded",
                cached=len(cache),
                seed=len(seed),
                overrides=len(overrides),
                exclusions=len(exclusions),
            )

            fresh: list[ArtistRecord] = []
            if fetch_fresh and self._catalog is not None:
                await self._report(run_id, RunPhase.FETCH_FRESH, 10, "querying catalog")
                fresh = await self._catalog.fetch_candidates(limit=self._fresh_limit)

            await self._report(run_id, RunPhase.RESOLVE_DATES, 20, "resolving birth dates")
            dated_in_cache = {r.key for r in cache if r.birth_date is not None}
            dated_by_override = {o.key for o in overrides if o.birth_date}
            skip = dated_in_cache | dated_by_override
            seed = await self._resolve_missing(seed, skip, exclusions.matches)
            fresh = await self._resolve_missing(fresh, skip, exclusions.matches)

            await self._report(run_id, RunPhase.MERGE, 50, "merging")
            engine = MergeEngine(exclusions=exclusions, classifier=self._classifier)
            merged = engine.merge(cache, seed, fresh, overrides)

            await self._report(run_id, RunPhase.MEDIA, 60, "looking up media")
            records = await self._enrichment.attach_media(merged.records, with_backups=with_backups)
        except PipelineError:
            raise
        except RadioVenusError as exc:
            self._logger.error("build_aborted", error=str(exc))
            raise PipelineError(f"Catalog build aborted: {exc}") from exc

        indexed = 0
        if not dry_run:
            await self._report(run_id, RunPhase.WRITE_SNAPSHOT, 85, "writing snapshot")
            await self._snapshot.save(records)
            if self._index is not None:
                await self._report(run_id, RunPhase.INDEX, 95, "updating index")
                await self._index.initialize()
                indexed = await self._index.upsert_many(records, seed_keys={r.key for r in seed})
        else:
            self._logger.info("build_dry_run", records=len(records))

        summary = BuildSummary(
            total=len(records),
            seed=len(seed),
            cached=len(cache),
            fresh=len(fresh),
            with_media=sum(1 for r in records if r.media_id),
            indexed=indexed,
            snapshot_path=str(getattr(self._snapshot, "path", "")),
            collisions=merged.collisions,
            excluded=merged.excluded,
            rejected=merged.rejected,
        )
        await self._report(run_id, RunPhase.DONE, 100, f"{summary.total} records")
        self._logger.info(
            "build_complete",
            total=summary.total,
            with_media=summary.with_media,
            collisions=len(summary.collisions),
            rejected=len(summary.rejected),
        )
        return summary

    @property
    def progress(self) -> ProgressTracker:
        return self._progress

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _resolve_missing(
        self, records: list[ArtistRecord], skip: set[str], is_excluded
    ) -> list[ArtistRecord]:
        """Resolve dates for undated records only; others pass through unchanged."""
        todo = [
            r for r in records
            if r.birth_date is None and r.key not in skip and not is_excluded(r)
        ]
        if not todo:
            return records
        resolved = {r.key: r for r in await self._enrichment.resolve_dates(todo)}
        return [resolved.get(r.key, r) if r.birth_date is None else r for r in records]

    async def _report(self, run_id: str, phase: RunPhase, progress: float, message: str) -> None:
        await self._progress.update(run_id, phase, progress, message)
