"""Post-processing of verification reports.

Three independent steps, all pure functions over report and record values:

``collect_not_found``
    Merge the ``notFound`` entries of several reports into one retry
    report for a second verification pass.  Geo-noise wrong matches are
    left out since they are known to be a different artist.
``harvest_raw_tags``
    Copy the authority's raw tags from confirmed matches back onto the
    records as ``raw_provider_tags``, so the merge engine can derive
    subgenres without querying again.
``propose_patch``
    Turn confirmed matches into a reviewable list of genre corrections.
    Nothing is applied here.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from radio_venus.config.curation import PRESERVED_CATEGORIES
from radio_venus.models.artist import ArtistRecord
from radio_venus.models.report import GenrePatch, ReportEntry, ReportMeta, VerificationReport
from radio_venus.models.taxonomy import GenreCategory
from radio_venus.services.discrepancy_verifier import geo_noise_tags
from radio_venus.services.genre_classifier import sort_categories
from radio_venus.utils.logging import get_logger
from radio_venus.utils.text_normalizer import name_key

logger = get_logger(__name__)


def _confirmed_entries(report: VerificationReport) -> list[ReportEntry]:
    """Entries with an authority match (ok, missing, extra), one per name."""
    seen: set[str] = set()
    entries: list[ReportEntry] = []
    for entry in (*report.ok, *report.missing, *report.extra):
        key = name_key(entry.name)
        if key not in seen:
            seen.add(key)
            entries.append(entry)
    return entries


# ---------------------------------------------------------------------------
# collect_not_found
# ---------------------------------------------------------------------------

def collect_not_found(reports: Iterable[VerificationReport]) -> VerificationReport:
    """Combine ``notFound`` entries across *reports* into a retry report.

    Entries seen in more than one report are merged and their stored
    genres unioned.  The result is sorted by name.
    """
    by_key: dict[str, ReportEntry] = {}
    seen_total = 0
    skipped_geo = 0
    for report in reports:
        for entry in report.not_found:
            seen_total += 1
            if entry.is_geo_wrong_match:
                skipped_geo += 1
                continue
            key = name_key(entry.name)
            existing = by_key.get(key)
            if existing is None:
                by_key[key] = ReportEntry(
                    name=entry.name, stored=list(entry.stored), reason=entry.reason
                )
                continue
            stored = sort_categories([*existing.stored, *entry.stored])
            by_key[key] = existing.model_copy(update={"stored": list(stored)})

    not_found = sorted(by_key.values(), key=lambda e: e.name.lower())
    logger.info(
        "not_found_collected",
        seen=seen_total,
        skipped_geo=skipped_geo,
        retry=len(not_found),
    )
    return VerificationReport(meta=ReportMeta(total=len(not_found)), not_found=not_found)


# ---------------------------------------------------------------------------
# harvest_raw_tags
# ---------------------------------------------------------------------------

@dataclass
class HarvestSummary:
    enriched: int = 0
    already_had: int = 0
    skipped_geo: int = 0
    not_in_records: int = 0


def harvest_raw_tags(
    reports: Iterable[VerificationReport], records: Sequence[ArtistRecord]
) -> tuple[list[ArtistRecord], HarvestSummary]:
    """Write confirmed authority tags back onto *records*.

    Evidence made up only of geo-noise tags is skipped.  Tags already on a
    record are kept and new ones appended after them.

    Returns
    -------
    tuple
        The updated records (same order) and counters for the run.
    """
    summary = HarvestSummary()
    updated = {r.key: r for r in records}

    for report in reports:
        for entry in _confirmed_entries(report):
            raw = entry.authority_raw
            if not raw:
                continue
            if len(geo_noise_tags(raw)) == len(raw):
                summary.skipped_geo += 1
                continue
            key = name_key(entry.name)
            record = updated.get(key)
            if record is None:
                summary.not_in_records += 1
                continue

            existing = list(record.raw_provider_tags)
            merged = existing + [t for t in raw if t not in existing]
            if len(merged) == len(existing):
                summary.already_had += 1
                continue
            updated[key] = record.model_copy(update={"raw_provider_tags": tuple(merged)})
            summary.enriched += 1

    logger.info(
        "raw_tags_harvested",
        enriched=summary.enriched,
        already_had=summary.already_had,
        skipped_geo=summary.skipped_geo,
        not_in_records=summary.not_in_records,
    )
    return [updated[r.key] for r in records], summary


# ---------------------------------------------------------------------------
# propose_patch
# ---------------------------------------------------------------------------

def propose_patch(
    report: VerificationReport,
    preserved: frozenset[GenreCategory] = PRESERVED_CATEGORIES,
) -> list[GenrePatch]:
    """Build genre corrections from the confirmed entries of *report*.

    The proposed genres are the authority's categories plus any preserved
    category the record already had.  Entries whose proposal equals the
    stored set produce no patch.
    """
    patches: list[GenrePatch] = []
    for entry in _confirmed_entries(report):
        if not entry.authority_categories:
            continue
        kept = [c for c in entry.stored if c in preserved]
        proposed = sort_categories([*entry.authority_categories, *kept])
        if set(proposed) == set(entry.stored):
            continue
        patches.append(
            GenrePatch(
                name=entry.name,
                stored=list(entry.stored),
                proposed=list(proposed),
                added=[c for c in proposed if c not in entry.stored],
                removed=[c for c in entry.stored if c not in proposed],
                authority_raw=list(entry.authority_raw),
            )
        )
    logger.info("genre_patch_proposed", patches=len(patches))
    return patches
