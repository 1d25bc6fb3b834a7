"""Import handpicked artists from a streaming playlist into the curated seed.

Every playlist track names an artist and the track that got them picked.
Tracks are reduced to one entry per artist (first occurrence wins), then:

- an artist already in the seed gets a :class:`HandpickPatch` setting
  ``handpicked`` and, when missing, ``handpicked_track``;
- a new artist goes through the same resolution as discovery (birth date
  chain, then tag resolver) with a floor of 1901, and gets a media id
  searched for the handpicked track itself.  Unlike discovery, a new
  artist without classifiable genres is still added: a curator picked
  them, so the genres are left for the verifier to fill in.

The network pass produces an :class:`ImportBatch`.  :func:`apply_import`
merges one or more batches into the seed; it is also what the
``merge-import`` command runs over batches saved to files.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import structlog

from radio_venus.interfaces.media_provider import IMediaProvider
from radio_venus.interfaces.playlist_provider import IPlaylistProvider
from radio_venus.models.artist import ArtistRecord, ProvenanceTier
from radio_venus.models.playlist import (
    HandpickPatch,
    ImportBatch,
    MergeImportSummary,
    PlaylistTrack,
)
from radio_venus.services.birth_date_resolver import BirthDateResolver
from radio_venus.services.tag_resolver import TagResolver
from radio_venus.services.venus_calculator import calculate_venus
from radio_venus.utils.concurrency import polite_pause
from radio_venus.utils.errors import RadioVenusError
from radio_venus.utils.logging import get_logger

IMPORT_MIN_YEAR = 1901

# Full albums and long live sets are acceptable for a handpicked track.
TRACK_DURATION = (60, 10800)


def unique_artists(tracks: Iterable[PlaylistTrack]) -> list[PlaylistTrack]:
    """Keep the first track of every artist, in playlist order."""
    seen: dict[str, PlaylistTrack] = {}
    for track in tracks:
        seen.setdefault(track.key, track)
    return list(seen.values())


def track_queries(artist: str, track: str) -> list[str]:
    """Media search queries for one handpicked track, most literal first."""
    return [f"{artist} {track}", f'{artist} "{track}" audio', f"{artist} {track} official audio"]


def apply_import(
    seed: Sequence[ArtistRecord], batches: Iterable[ImportBatch]
) -> tuple[list[ArtistRecord], MergeImportSummary]:
    """Merge import batches into *seed*; the input list is not modified.

    Additions whose name is already present (in the seed or an earlier
    batch) are reported as duplicates.  Patches only fill what is unset:
    they never clear ``handpicked`` or replace an existing track.
    """
    records = list(seed)
    index = {r.key: i for i, r in enumerate(records)}
    summary = MergeImportSummary()

    for batch in batches:
        for addition in batch.additions:
            if addition.key in index:
                summary.duplicates.append(addition.name)
                continue
            index[addition.key] = len(records)
            records.append(addition)
            summary.added.append(addition.name)

        for patch in batch.patches:
            position = index.get(patch.key)
            if position is None:
                continue
            entry = records[position]
            update: dict = {}
            if patch.handpicked and not entry.handpicked:
                update["handpicked"] = True
            if patch.handpicked_track and not entry.handpicked_track:
                update["handpicked_track"] = patch.handpicked_track
            if update:
                records[position] = entry.model_copy(update=update)
                summary.patched.append(entry.name)

    return records, summary


class PlaylistImporter:
    """Builds an :class:`ImportBatch` from one playlist.

    Parameters
    ----------
    playlist_provider:
        Source of the playlist tracks.
    resolver:
        Birth-date chain for artists not yet in the seed.
    tag_resolver:
        Genre resolution for those artists.
    media_provider:
        Optional media search for the handpicked track; without one (or
        without credentials) new artists are added with no media id.
    min_year:
        Birth years below this are skipped.
    candidate_delay:
        Politeness delay after each new artist.
    search_delay:
        Politeness delay between media search queries.
    """

    def __init__(
        self,
        playlist_provider: IPlaylistProvider,
        resolver: BirthDateResolver,
        tag_resolver: TagResolver,
        media_provider: IMediaProvider | None = None,
        min_year: int = IMPORT_MIN_YEAR,
        candidate_delay: float = 0.5,
        search_delay: float = 0.3,
    ) -> None:
        self._playlists = playlist_provider
        self._resolver = resolver
        self._tags = tag_resolver
        self._media = media_provider
        self._min_year = min_year
        self._candidate_delay = candidate_delay
        self._search_delay = search_delay
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def build_batch(
        self, playlist_ref: str, seed: Sequence[ArtistRecord]
    ) -> ImportBatch:
        """Fetch the playlist and turn its artists into additions and patches.

        Raises
        ------
        radio_venus.utils.errors.RadioVenusError
            When the playlist cannot be read.  Per-artist lookups never
            raise; their failures end up in ``skipped``.
        """
        tracks = await self._playlists.tracks(playlist_ref)
        artists = unique_artists(tracks)
        self._logger.info("playlist_import_started", tracks=len(tracks), artists=len(artists))

        by_key = {r.key: r for r in seed}
        additions: list[ArtistRecord] = []
        patches: list[HandpickPatch] = []
        skipped: dict[str, str] = {}

        for track in artists:
            existing = by_key.get(track.key)
            if existing is not None:
                if existing.handpicked and existing.handpicked_track:
                    skipped[track.artist_name] = "already handpicked"
                else:
                    patches.append(
                        HandpickPatch(name=existing.name, handpicked_track=track.track_name)
                    )
                continue

            record, reason = await self._new_artist(track)
            if record is None:
                skipped[track.artist_name] = reason
                self._logger.info(
                    "playlist_artist_skipped", artist=track.artist_name, reason=reason
                )
            else:
                additions.append(record)
            await polite_pause(self._candidate_delay)

        self._logger.info(
            "playlist_import_finished",
            additions=len(additions),
            patches=len(patches),
            skipped=len(skipped),
        )
        return ImportBatch(
            playlist=playlist_ref, additions=additions, patches=patches, skipped=skipped
        )

    # -- Internal helpers -----------------------------------------------------

    async def _new_artist(self, track: PlaylistTrack) -> tuple[ArtistRecord | None, str]:
        name = track.artist_name
        dated = await self._resolver.resolve(name, min_year=self._min_year)
        if not dated.ok or dated.value is None:
            return None, f"no birth date ({dated.reason or dated.status.value})"
        birth = dated.value

        genres = await self._tags.resolve(name)
        resolution = genres.value if genres.ok else None
        media_id = await self._find_track_media(name, track.track_name)

        sources = {"birth_date": ProvenanceTier.FRESH}
        if resolution is not None:
            sources["genres"] = ProvenanceTier.FRESH
        if media_id:
            sources["media_id"] = ProvenanceTier.FRESH
        record = ArtistRecord(
            name=name,
            birth_date=birth.date,
            date_approx=birth.approx,
            venus=calculate_venus(birth.date),
            genres=resolution.categories if resolution else (),
            subgenres=resolution.subgenres if resolution else (),
            raw_provider_tags=resolution.raw_tags if resolution else (),
            stable_id=birth.stable_id,
            media_id=media_id,
            handpicked=True,
            handpicked_track=track.track_name,
            field_sources=sources,
        )
        self._logger.info(
            "playlist_artist_added",
            artist=name,
            birth_date=birth.date.isoformat(),
            genres=[g.value for g in record.genres],
            media_id=media_id,
        )
        return record, ""

    async def _find_track_media(self, artist: str, track: str) -> str | None:
        if self._media is None or not self._media.is_available() or not track:
            return None
        for search_query in track_queries(artist, track):
            try:
                ids = await self._media.search(search_query, duration_range=TRACK_DURATION)
            except RadioVenusError as exc:
                self._logger.warning("track_media_search_failed", artist=artist, error=str(exc))
                ids = []
            if ids:
                return ids[0]
            await polite_pause(self._search_delay)
        return None
