"""Batch enrichment of artist records.

Fills in what a record is missing, never what it already has:

- a birth date, through the :class:`BirthDateResolver` chain;
- a primary media id, through the media provider;
- up to ``backup_count`` backup media ids (``find_backups``).

Records are processed in fixed-size batches with ``gather_in_batches``:
every lookup in a batch runs concurrently and the batch is awaited as a
whole before the next one starts.  Each record is enriched independently
and the caller's list is only replaced once all batches have finished.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog

from radio_venus.interfaces.media_provider import IMediaProvider
from radio_venus.models.artist import ArtistRecord
from radio_venus.providers.media.youtube_provider import BACKUP_DURATION
from radio_venus.services.birth_date_resolver import BirthDateResolver
from radio_venus.services.venus_calculator import calculate_venus
from radio_venus.utils.concurrency import gather_in_batches
from radio_venus.utils.errors import RadioVenusError
from radio_venus.utils.logging import get_logger

BACKUP_QUERIES: tuple[str, ...] = (
    "{artist} {genre} full track",
    "{artist} topic",
    "{artist} live",
)


class EnrichmentService:
    """Resolve missing birth dates and media ids in concurrent batches.

    Parameters
    ----------
    resolver:
        Birth-date resolution chain.
    media_provider:
        Optional media lookup.  ``None`` or an unavailable provider turns
        media enrichment into a no-op.
    batch_size:
        Records in flight at once.
    backup_count:
        Target number of backup media ids per record.
    """

    def __init__(
        self,
        resolver: BirthDateResolver,
        media_provider: IMediaProvider | None = None,
        batch_size: int = 5,
        backup_count: int = 2,
    ) -> None:
        self._resolver = resolver
        self._media = media_provider
        self._batch_size = batch_size
        self._backup_count = backup_count
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def media_enabled(self) -> bool:
        return self._media is not None and self._media.is_available()

    # -- Public API -----------------------------------------------------------

    async def resolve_dates(self, records: Sequence[ArtistRecord]) -> list[ArtistRecord]:
        """Return *records* with birth dates filled in where resolvable."""
        return await self._run(records, self._with_birth_date, "dates")

    async def attach_media(
        self, records: Sequence[ArtistRecord], with_backups: bool = False
    ) -> list[ArtistRecord]:
        """Return *records* with a primary media id (and optionally backups)."""
        if not self.media_enabled:
            self._logger.info("media_enrichment_skipped", reason="media provider unavailable")
            return list(records)

        async def _worker(record: ArtistRecord) -> ArtistRecord:
            record = await self._with_media(record)
            if with_backups:
                record = await self._with_backups(record)
            return record

        return await self._run(records, _worker, "media")

    async def enrich(
        self, records: Sequence[ArtistRecord], with_backups: bool = False
    ) -> list[ArtistRecord]:
        """Resolve dates, then media, for every record."""
        dated = await self.resolve_dates(records)
        return await self.attach_media(dated, with_backups=with_backups)

    async def find_backups(self, record: ArtistRecord) -> tuple[str, ...]:
        """Search for enough extra media ids to reach ``backup_count`` for *record*.

        Ids already on the record are excluded.  A failing search is logged
        and the next query is tried.
        """
        if not self.media_enabled or self._media is None:
            return ()
        genre = record.genres[0].value if record.genres else ""
        known = {i for i in (record.media_id, *record.backup_media_ids) if i}
        wanted = self._backup_count - len(record.backup_media_ids)
        found: list[str] = []
        for template in BACKUP_QUERIES:
            if len(found) >= wanted:
                break
            search_query = " ".join(template.format(artist=record.name, genre=genre).split())
            try:
                ids = await self._media.search(
                    search_query, duration_range=BACKUP_DURATION, exclude=known | set(found)
                )
            except RadioVenusError as exc:
                self._logger.warning(
                    "backup_search_failed", artist=record.name, query=search_query, error=str(exc)
                )
                continue
            for media_id in ids:
                if media_id not in known and media_id not in found:
                    found.append(media_id)
                if len(found) >= wanted:
                    break
        return tuple(found)

    # -- Internal helpers -----------------------------------------------------

    async def _run(
        self, records: Sequence[ArtistRecord], worker: Any, phase: str
    ) -> list[ArtistRecord]:
        items = list(records)

        def _progress(done: int, total: int) -> None:
            self._logger.info("enrichment_batch_done", phase=phase, done=done, total=total)

        results = await gather_in_batches(
            items, worker, batch_size=self._batch_size, on_batch_done=_progress
        )
        return [
            original if isinstance(result, BaseException) else result
            for original, result in zip(items, results)
        ]

    async def _with_birth_date(self, record: ArtistRecord) -> ArtistRecord:
        if record.birth_date is not None:
            return record
        result = await self._resolver.resolve(record.name, hint=record.stable_id)
        if not result.ok or result.value is None:
            self._logger.info("birth_date_missing", artist=record.name, reason=result.reason)
            return record
        resolved = result.value
        update: dict[str, Any] = {
            "birth_date": resolved.date,
            "date_approx": resolved.approx,
            "venus": calculate_venus(resolved.date),
        }
        if not record.stable_id and resolved.stable_id:
            update["stable_id"] = resolved.stable_id
        return record.model_copy(update=update)

    async def _with_media(self, record: ArtistRecord) -> ArtistRecord:
        if record.media_id or self._media is None:
            return record
        hint = record.genres[0].value if record.genres else None
        result = await self._media.query(record.name, hint=hint)
        if not result.ok or not result.value:
            self._logger.info("media_missing", artist=record.name, reason=result.reason)
            return record
        return record.model_copy(update={"media_id": result.value[0]})

    async def _with_backups(self, record: ArtistRecord) -> ArtistRecord:
        if not record.media_id or len(record.backup_media_ids) >= self._backup_count:
            return record
        extra = await self.find_backups(record)
        if not extra:
            return record
        backups = (*record.backup_media_ids, *extra)[: self._backup_count]
        return record.model_copy(update={"backup_media_ids": backups})
