"""Discrepancy verification of stored genres against the authority.

Each record is re-checked against one authoritative tag provider and lands
in one of the report buckets:

- ``ok``        -- the authority's categories equal the stored ones
- ``missing``   -- the authority implies categories the record lacks
- ``extra``     -- the record carries categories the authority does not
- ``notFound``  -- no result, or evidence of a different real-world artist

``missing`` and ``extra`` can both hold the same record.  The verifier only
writes a report; corrections are proposed from it in a separate reviewed
step and the canonical set is never touched here.

Records are processed strictly one at a time with a politeness delay
between them, and the partial report is checkpointed every few records so
an interrupted run can resume from the file.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

import structlog

from radio_venus.config.curation import GEO_NOISE_PATTERN
from radio_venus.interfaces.tag_provider import ITagProvider
from radio_venus.models.artist import ArtistRecord
from radio_venus.models.report import (
    ReportEntry,
    ReportMeta,
    VerificationReport,
    VerificationStatus,
)
from radio_venus.models.resolution import ProviderResult
from radio_venus.models.taxonomy import GenreCategory
from radio_venus.providers.store.json_report_store import JsonReportStore
from radio_venus.services.genre_classifier import GenreClassifier, sort_categories
from radio_venus.utils.concurrency import polite_pause
from radio_venus.utils.logging import get_logger
from radio_venus.utils.text_normalizer import name_key


def geo_noise_tags(tags: Iterable[str]) -> list[str]:
    """Return the tags that mention a place or language from the noise list."""
    return [t for t in tags if GEO_NOISE_PATTERN.search(t)]


class DiscrepancyVerifier:
    """Sequential re-check of stored genres against an authority provider.

    Parameters
    ----------
    authority:
        Tag provider treated as ground truth.
    classifier:
        Classifier used for the authority's raw tags.
    report_store:
        Where checkpoints go.  Without one, nothing is persisted.
    checkpoint_interval:
        Save the partial report after every N processed records.
    delay_found / delay_not_found:
        Politeness delays after a resolved and an unresolved record.
    """

    def __init__(
        self,
        authority: ITagProvider,
        classifier: GenreClassifier | None = None,
        report_store: JsonReportStore | None = None,
        checkpoint_interval: int = 10,
        delay_found: float = 1.0,
        delay_not_found: float = 0.5,
    ) -> None:
        self._authority = authority
        self._classifier = classifier or GenreClassifier()
        self._store = report_store
        self._checkpoint_interval = max(1, checkpoint_interval)
        self._delay_found = delay_found
        self._delay_not_found = delay_not_found
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # -- Record selection -----------------------------------------------------

    @staticmethod
    def select_records(
        records: Sequence[ArtistRecord],
        filter_genre: GenreCategory | None = None,
        skip: int = 0,
        limit: int = 0,
    ) -> list[ArtistRecord]:
        """Records with stored genres, optionally filtered by genre, then sliced."""
        selected = [r for r in records if r.genres]
        if filter_genre is not None:
            selected = [r for r in selected if filter_genre in r.genres]
        if skip:
            selected = selected[skip:]
        if limit:
            selected = selected[:limit]
        return selected

    @staticmethod
    def retry_records(
        records: Sequence[ArtistRecord], previous: VerificationReport
    ) -> list[ArtistRecord]:
        """Records listed under ``notFound`` in *previous*.

        Names that are no longer in *records* (collaborations, renamed
        entries) are re-checked from the stored genres in the report.
        """
        by_key = {r.key: r for r in records}
        selected: list[ArtistRecord] = []
        seen: set[str] = set()
        for entry in previous.not_found:
            key = name_key(entry.name)
            if key in seen:
                continue
            seen.add(key)
            record = by_key.get(key)
            if record is None:
                record = ArtistRecord(name=entry.name, genres=tuple(entry.stored))
            selected.append(record)
        return selected

    # -- Classification -------------------------------------------------------

    def evaluate(
        self, record: ArtistRecord, result: ProviderResult[list[str]]
    ) -> tuple[set[VerificationStatus], ReportEntry]:
        """Classify one record from the authority's answer.

        Returns
        -------
        tuple
            The buckets the record belongs in and the entry to put there.
        """
        stored = list(record.genres)
        raw = list(result.value or []) if result.ok else []

        if not raw:
            return {VerificationStatus.NOT_FOUND}, ReportEntry(
                name=record.name, stored=stored, reason="not found"
            )

        geo_tags = geo_noise_tags(raw)
        if geo_tags and not self._geo_evidence(raw) & set(stored):
            return {VerificationStatus.NOT_FOUND}, ReportEntry(
                name=record.name,
                stored=stored,
                authority_raw=raw,
                reason=f"wrong match (geo tags: {', '.join(geo_tags)})",
            )

        categories = sort_categories(self._classifier.categories_for(raw))
        if not categories and stored:
            return {VerificationStatus.NOT_FOUND}, ReportEntry(
                name=record.name, stored=stored, authority_raw=raw, reason="no genre overlap"
            )

        missing = [c for c in categories if c not in stored]
        extra = [c for c in stored if c not in categories]
        entry = ReportEntry(
            name=record.name,
            stored=stored,
            authority_raw=raw,
            authority_categories=list(categories),
            missing_from_stored=missing,
            extra_in_stored=extra,
        )
        statuses: set[VerificationStatus] = set()
        if missing:
            statuses.add(VerificationStatus.MISSING)
        if extra:
            statuses.add(VerificationStatus.EXTRA)
        return statuses or {VerificationStatus.OK}, entry

    def _geo_evidence(self, raw: Sequence[str]) -> set[GenreCategory]:
        """Categories the raw tags support once place and language words are discounted.

        A geo tag that is itself a table key ("polish classical") keeps its
        exact categories; any other geo tag only counts for what is left
        after the place words are removed.
        """
        evidence: set[GenreCategory] = set()
        for tag in raw:
            if not GEO_NOISE_PATTERN.search(tag):
                evidence |= self._classifier.categories_for([tag])
                continue
            exact = self._classifier.exact(tag)
            if exact:
                evidence.update(exact)
                continue
            remainder = " ".join(GEO_NOISE_PATTERN.sub(" ", tag).split())
            if remainder:
                evidence |= self._classifier.categories_for([remainder])
        return evidence

    # -- Public API -----------------------------------------------------------

    async def verify(
        self,
        records: Sequence[ArtistRecord],
        report: VerificationReport | None = None,
        report_path: str | Path | None = None,
        filter_genre: GenreCategory | None = None,
    ) -> VerificationReport:
        """Verify *records* in order and return the report.

        Parameters
        ----------
        records:
            Records to check, already selected and sliced.
        report:
            A partial report to resume.  Records it already holds are
            skipped; new entries are appended to it.
        report_path:
            Checkpoint target; requires a report store.
        filter_genre:
            Recorded in the report metadata only.
        """
        if report is None:
            report = VerificationReport(
                meta=ReportMeta(
                    authority=self._authority.get_provider_name(),
                    filter_genre=filter_genre,
                )
            )
        done = report.processed_keys()
        pending = [r for r in records if r.key not in done]
        report.meta.total = len(done) + len(pending)
        report.meta.completed = False

        self._logger.info(
            "verify_started",
            authority=self._authority.get_provider_name(),
            pending=len(pending),
            resumed=len(done),
        )

        for position, record in enumerate(pending, start=1):
            result = await self._query(record.name)
            statuses, entry = self.evaluate(record, result)
            self._file(report, statuses, entry)
            self._logger.info(
                "verify_record",
                artist=record.name,
                position=position,
                total=len(pending),
                statuses=sorted(s.value for s in statuses),
                reason=entry.reason or None,
            )

            if position % self._checkpoint_interval == 0:
                await self._checkpoint(report, report_path)

            not_found = VerificationStatus.NOT_FOUND in statuses
            await polite_pause(self._delay_not_found if not_found else self._delay_found)

        report.meta.completed = True
        await self._checkpoint(report, report_path)
        self._logger.info("verify_finished", **report.summary())
        return report

    # -- Internal helpers -----------------------------------------------------

    async def _query(self, name: str) -> ProviderResult[list[str]]:
        try:
            return await self._authority.query(name)
        except Exception as exc:  # noqa: BLE001
            return ProviderResult.transport_failure(self._authority.get_provider_name(), str(exc))

    @staticmethod
    def _file(
        report: VerificationReport, statuses: set[VerificationStatus], entry: ReportEntry
    ) -> None:
        buckets = {
            VerificationStatus.OK: report.ok,
            VerificationStatus.MISSING: report.missing,
            VerificationStatus.EXTRA: report.extra,
            VerificationStatus.NOT_FOUND: report.not_found,
        }
        for status in statuses:
            buckets[status].append(entry)

    async def _checkpoint(self, report: VerificationReport, report_path: str | Path | None) -> None:
        if self._store is None or report_path is None:
            return
        await self._store.save(report, report_path)
