"""Identity merge engine.

Combines the persisted snapshot (cache tier), the curated seed and freshly
queried candidates into one canonical set, then applies curated overrides
on top.

Precedence is field-level: a source only contributes a field the record
does not have yet, and sources are visited highest tier first, so a seed
entry that predates a media lookup never blanks the cached media id.
Overrides are the exception: a non-empty override field always wins.

Identity is keyed primarily by lowercase name.  A secondary index by
``stable_id`` catches the same artist arriving under a different name; in
that case the incoming record is discarded and the collision is reported
for manual review instead of being merged.  When the incoming name already
belongs to an admitted record, only the contested ``stable_id`` is dropped:
the record still fills the gaps of its namesake like any other lower tier.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import structlog

from radio_venus.models.artist import ArtistOverride, ArtistRecord, ProvenanceTier
from radio_venus.models.merge import (
    ExclusionList,
    IdentityCollision,
    MergeResult,
    RejectedRecord,
)
from radio_venus.services.date_normalizer import normalize_birth_date
from radio_venus.services.genre_classifier import GenreClassifier, sort_subgenres
from radio_venus.services.venus_calculator import calculate_venus
from radio_venus.utils.errors import InvalidDateError
from radio_venus.utils.logging import get_logger
from radio_venus.utils.text_normalizer import name_key

# Mutable fields that take part in field-level precedence.  ``birth_date``
# carries ``date_approx`` with it.
MERGED_FIELDS: tuple[str, ...] = (
    "birth_date",
    "genres",
    "subgenres",
    "raw_provider_tags",
    "stable_id",
    "media_id",
    "backup_media_ids",
    "handpicked_track",
)


def _is_empty(value: Any) -> bool:
    return value is None or value == () or value == ""


class MergeEngine:
    """Field-level, precedence-ordered merge of artist records.

    Parameters
    ----------
    exclusions:
        Curated "never auto-include" list, checked before admission.
    classifier:
        Used to derive subgenres from retained raw tags when a record has
        none.  Defaults to a classifier over the built-in tables.
    """

    def __init__(
        self,
        exclusions: ExclusionList | None = None,
        classifier: GenreClassifier | None = None,
    ) -> None:
        self._exclusions = exclusions or ExclusionList()
        self._classifier = classifier or GenreClassifier()
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # -- Public API -----------------------------------------------------------

    def merge(
        self,
        cache: Iterable[ArtistRecord],
        curated_seed: Iterable[ArtistRecord],
        freshly_queried: Iterable[ArtistRecord] = (),
        overrides: Iterable[ArtistOverride] | None = None,
    ) -> MergeResult:
        """Merge the three record sources and apply overrides.

        Parameters
        ----------
        cache:
            Records from the previous snapshot.
        curated_seed:
            Hand-curated seed records.
        freshly_queried:
            Candidates produced by providers during this run.
        overrides:
            Curated field patches; applied last, to records already present.

        Returns
        -------
        MergeResult
            Admitted records sorted by name key, plus the collisions,
            exclusions and rejections encountered on the way.
        """
        merged: dict[str, ArtistRecord] = {}
        id_owner: dict[str, str] = {}
        collisions: list[IdentityCollision] = []
        excluded: list[str] = []

        for tier, records in (
            (ProvenanceTier.CURATED_SEED, curated_seed),
            (ProvenanceTier.CACHE, cache),
            (ProvenanceTier.FRESH, freshly_queried),
        ):
            for record in records:
                if self._exclusions.matches(record):
                    excluded.append(record.name)
                    self._logger.info("merge_record_excluded", artist=record.name, tier=tier.value)
                    continue

                existing = merged.get(record.key)
                collision = self._check_identity(record, id_owner, merged, tier)
                if collision is not None:
                    collisions.append(collision)
                    if existing is None:
                        continue
                    record = record.model_copy(update={"stable_id": None})

                combined = (
                    self._stamp(record, tier)
                    if existing is None
                    else self._fill(existing, record, tier)
                )
                merged[record.key] = combined
                if combined.stable_id:
                    id_owner.setdefault(combined.stable_id, combined.key)

        for override in overrides or ():
            patched = self._apply_override(merged, id_owner, override, collisions)
            if patched is not None:
                merged[patched.key] = patched

        admitted: list[ArtistRecord] = []
        rejected: list[RejectedRecord] = []
        for key in sorted(merged):
            final = self._finalize(merged[key])
            if isinstance(final, RejectedRecord):
                rejected.append(final)
                self._logger.info("merge_record_rejected", artist=final.name, reason=final.reason)
            else:
                admitted.append(final)

        self._logger.info(
            "merge_complete",
            admitted=len(admitted),
            collisions=len(collisions),
            excluded=len(excluded),
            rejected=len(rejected),
        )
        return MergeResult(
            records=admitted,
            collisions=collisions,
            excluded=excluded,
            rejected=rejected,
        )

    # -- Internal helpers -----------------------------------------------------

    def _check_identity(
        self,
        record: ArtistRecord,
        id_owner: dict[str, str],
        merged: dict[str, ArtistRecord],
        tier: ProvenanceTier,
    ) -> IdentityCollision | None:
        if not record.stable_id:
            return None
        owner = id_owner.get(record.stable_id)
        if owner is None or owner == record.key:
            return None
        kept = merged[owner]
        self._logger.warning(
            "merge_identity_collision",
            stable_id=record.stable_id,
            kept=kept.name,
            discarded=record.name,
            tier=tier.value,
        )
        return IdentityCollision(
            stable_id=record.stable_id,
            kept_name=kept.name,
            discarded_name=record.name,
            discarded_tier=tier,
        )

    @staticmethod
    def _stamp(record: ArtistRecord, tier: ProvenanceTier) -> ArtistRecord:
        sources = {f: tier for f in MERGED_FIELDS if not _is_empty(getattr(record, f))}
        return record.model_copy(update={"field_sources": sources})

    @staticmethod
    def _fill(existing: ArtistRecord, incoming: ArtistRecord, tier: ProvenanceTier) -> ArtistRecord:
        """Copy fields from a lower-tier *incoming* record into empty slots."""
        update: dict[str, Any] = {}
        sources = dict(existing.field_sources)
        for field in MERGED_FIELDS:
            if not _is_empty(getattr(existing, field)):
                continue
            value = getattr(incoming, field)
            if _is_empty(value):
                continue
            update[field] = value
            sources[field] = tier
            if field == "birth_date":
                update["date_approx"] = incoming.date_approx
        if incoming.handpicked and not existing.handpicked:
            update["handpicked"] = True
        if not update:
            return existing
        update["field_sources"] = sources
        return existing.model_copy(update=update)

    def _apply_override(
        self,
        merged: dict[str, ArtistRecord],
        id_owner: dict[str, str],
        override: ArtistOverride,
        collisions: list[IdentityCollision],
    ) -> ArtistRecord | None:
        record = merged.get(name_key(override.name))
        if record is None:
            self._logger.debug("merge_override_unmatched", artist=override.name)
            return None

        update: dict[str, Any] = {}
        if override.birth_date:
            try:
                normalized = normalize_birth_date(override.birth_date)
            except InvalidDateError as exc:
                self._logger.warning(
                    "merge_override_bad_date", artist=override.name, error=exc.message
                )
            else:
                update["birth_date"] = normalized.date
                update["date_approx"] = normalized.approx
        if override.genres:
            update["genres"] = override.genres
        if override.subgenres:
            update["subgenres"] = override.subgenres
        if override.media_id:
            update["media_id"] = override.media_id
        if override.stable_id:
            owner = id_owner.get(override.stable_id)
            if owner is not None and owner != record.key:
                collisions.append(
                    IdentityCollision(
                        stable_id=override.stable_id,
                        kept_name=merged[owner].name,
                        discarded_name=record.name,
                        discarded_tier=ProvenanceTier.CURATED_OVERRIDE,
                    )
                )
                self._logger.warning(
                    "merge_identity_collision",
                    stable_id=override.stable_id,
                    kept=merged[owner].name,
                    discarded=record.name,
                    tier=ProvenanceTier.CURATED_OVERRIDE.value,
                )
            else:
                update["stable_id"] = override.stable_id
                id_owner[override.stable_id] = record.key

        if not update:
            return None
        sources = dict(record.field_sources)
        for field in update:
            if field in MERGED_FIELDS:
                sources[field] = ProvenanceTier.CURATED_OVERRIDE
        update["field_sources"] = sources
        return record.model_copy(update=update)

    def _finalize(self, record: ArtistRecord) -> ArtistRecord | RejectedRecord:
        """Recompute derived fields and enforce admission rules."""
        if record.birth_date is None:
            return RejectedRecord(name=record.name, reason="no birth date")

        update: dict[str, Any] = {"venus": calculate_venus(record.birth_date)}
        if not record.subgenres and record.raw_provider_tags:
            subgenres = self._classifier.subgenres_for(record.raw_provider_tags)
            if subgenres:
                update["subgenres"] = sort_subgenres(subgenres)

        if not record.genres:
            return RejectedRecord(name=record.name, reason="no genres")
        return record.model_copy(update=update)
