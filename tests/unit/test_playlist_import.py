"""Unit tests for the Spotify playlist reader and the handpicked-artist import."""

from __future__ import annotations

import datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from radio_venus.models.artist import ArtistRecord, ProvenanceTier
from radio_venus.models.playlist import HandpickPatch, ImportBatch, PlaylistTrack
from radio_venus.models.taxonomy import GenreCategory
from radio_venus.providers.playlist.spotify_provider import (
    SpotifyPlaylistProvider,
    parse_playlist_id,
)
from radio_venus.services.birth_date_resolver import BirthDateResolver
from radio_venus.services.genre_classifier import GenreClassifier
from radio_venus.services.playlist_importer import (
    TRACK_DURATION,
    PlaylistImporter,
    apply_import,
    unique_artists,
)
from radio_venus.services.tag_resolver import TagResolver
from radio_venus.utils.errors import ConfigurationError, ProviderError, TransportError

PLAYLIST_ID = "37i9dQZF1DX4sWSpwq3LiO"


def _response(payload: Any, status_code: int = 200) -> MagicMock:
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.json.return_value = payload
    return response


def _client(*responses: Any, posts: list[Any] | None = None) -> MagicMock:
    client = MagicMock(spec=httpx.AsyncClient)
    client.get = AsyncMock(side_effect=list(responses))
    client.post = AsyncMock(side_effect=list(posts or []))
    return client


def _item(artist: str | None, track: str, artist_id: str = "sp1") -> dict:
    artists = [{"name": artist, "id": artist_id}] if artist else []
    return {"track": {"name": track, "artists": artists}}


def _page(*items: dict, next_url: str | None = None) -> dict:
    return {"items": list(items), "next": next_url}


# ======================================================================
# Spotify
# ======================================================================


class TestParsePlaylistId:
    @pytest.mark.parametrize(
        "ref",
        [
            f"https://open.spotify.com/playlist/{PLAYLIST_ID}?si=abc123",
            f"spotify:playlist:{PLAYLIST_ID}",
            PLAYLIST_ID,
            f"  {PLAYLIST_ID}  ",
        ],
    )
    def test_accepted_forms(self, ref: str) -> None:
        assert parse_playlist_id(ref) == PLAYLIST_ID

    @pytest.mark.parametrize("ref", ["", "short", "https://open.spotify.com/album/x", "a b c"])
    def test_rejected_forms(self, ref: str) -> None:
        assert parse_playlist_id(ref) is None


class TestSpotifyPlaylistProvider:
    @pytest.mark.asyncio
    async def test_follows_next_pages(self) -> None:
        next_url = f"https://api.spotify.com/v1/playlists/{PLAYLIST_ID}/tracks?offset=100"
        client = _client(
            _response(_page(_item("Aphex Twin", "Xtal"), next_url=next_url)),
            _response(_page(_item("Bjork", "Joga", artist_id="sp2"))),
        )
        provider = SpotifyPlaylistProvider(client, access_token="tok", page_delay=0)

        tracks = await provider.tracks(PLAYLIST_ID)

        assert tracks == [
            PlaylistTrack(artist_name="Aphex Twin", track_name="Xtal", artist_id="sp1"),
            PlaylistTrack(artist_name="Bjork", track_name="Joga", artist_id="sp2"),
        ]
        first, second = client.get.await_args_list
        assert first.args[0].endswith(f"/playlists/{PLAYLIST_ID}/tracks")
        assert first.kwargs["params"] == {"limit": 100}
        assert first.kwargs["headers"]["Authorization"] == "Bearer tok"
        assert second.args[0] == next_url
        assert second.kwargs["params"] is None

    @pytest.mark.asyncio
    async def test_items_without_artists_are_skipped(self) -> None:
        client = _client(
            _response(_page(_item(None, "local file"), {"track": None}, _item("Arca", "Nonbinary")))
        )
        provider = SpotifyPlaylistProvider(client, access_token="tok", page_delay=0)
        tracks = await provider.tracks(PLAYLIST_ID)
        assert [t.artist_name for t in tracks] == ["Arca"]

    @pytest.mark.asyncio
    async def test_client_credentials_grant(self) -> None:
        client = _client(
            _response(_page(_item("Arca", "Nonbinary"))),
            _response(_page()),
            posts=[_response({"access_token": "granted", "expires_in": 3600})],
        )
        provider = SpotifyPlaylistProvider(client, client_id="id", client_secret="secret")

        await provider.tracks(PLAYLIST_ID)
        await provider.tracks(PLAYLIST_ID)

        client.post.assert_awaited_once()
        post = client.post.await_args
        assert post.kwargs["data"] == {"grant_type": "client_credentials"}
        assert post.kwargs["auth"] == ("id", "secret")
        headers = client.get.await_args_list[1].kwargs["headers"]
        assert headers["Authorization"] == "Bearer granted"

    @pytest.mark.asyncio
    async def test_missing_credentials(self) -> None:
        provider = SpotifyPlaylistProvider(_client())
        assert provider.is_available() is False
        with pytest.raises(ConfigurationError):
            await provider.tracks(PLAYLIST_ID)

    @pytest.mark.asyncio
    async def test_token_answer_without_token(self) -> None:
        client = _client(posts=[_response({"error": "invalid_client"})])
        provider = SpotifyPlaylistProvider(client, client_id="id", client_secret="secret")
        with pytest.raises(ProviderError):
            await provider.tracks(PLAYLIST_ID)

    @pytest.mark.asyncio
    async def test_rejected_credentials_raise_transport_error(self) -> None:
        client = _client(posts=[_response({"error": "invalid_client"}, status_code=400)])
        provider = SpotifyPlaylistProvider(client, client_id="id", client_secret="bad")
        with pytest.raises(TransportError):
            await provider.tracks(PLAYLIST_ID)

    @pytest.mark.asyncio
    async def test_unknown_playlist(self) -> None:
        client = _client(_response({}, status_code=404))
        provider = SpotifyPlaylistProvider(client, access_token="tok")
        with pytest.raises(ProviderError, match="not found"):
            await provider.tracks(PLAYLIST_ID)

    @pytest.mark.asyncio
    async def test_bad_reference_makes_no_request(self) -> None:
        client = _client()
        provider = SpotifyPlaylistProvider(client, access_token="tok")
        with pytest.raises(ConfigurationError):
            await provider.tracks("https://open.spotify.com/album/x")
        client.get.assert_not_awaited()


# ======================================================================
# Importer
# ======================================================================


class FakePlaylistProvider:
    def __init__(self, tracks: list[PlaylistTrack]) -> None:
        self._tracks = tracks

    async def tracks(self, playlist_ref: str) -> list[PlaylistTrack]:
        return list(self._tracks)

    def get_provider_name(self) -> str:
        return "fake_playlist"

    def is_available(self) -> bool:
        return True


def _track(artist: str, track: str) -> PlaylistTrack:
    return PlaylistTrack(artist_name=artist, track_name=track)


DATES = {
    "Arca": "1989-10-14",
    "Sophie": "1986-09",
    "Old Composer": "1890-03-03",
    "Tagless": "1980-05-05",
}

TAGS = {"Arca": ["electronica", "deconstructed club"], "Sophie": ["electronica"]}


@pytest.fixture()
def importer(date_provider_factory, tag_provider_factory, media_provider_factory):
    def _build(tracks: list[PlaylistTrack], media=None) -> PlaylistImporter:
        return PlaylistImporter(
            playlist_provider=FakePlaylistProvider(tracks),
            resolver=BirthDateResolver([date_provider_factory(DATES)]),
            tag_resolver=TagResolver(
                GenreClassifier(), authority=tag_provider_factory(TAGS, name="everynoise")
            ),
            media_provider=media,
            candidate_delay=0,
            search_delay=0,
        )

    return _build


class TestUniqueArtists:
    def test_first_track_per_artist_wins(self) -> None:
        tracks = [_track("Arca", "Nonbinary"), _track("ARCA", "Piel"), _track("Sophie", "Bipp")]
        assert [t.track_name for t in unique_artists(tracks)] == ["Nonbinary", "Bipp"]


class TestPlaylistImporter:
    @pytest.mark.asyncio
    async def test_new_artist_is_added_as_handpicked(self, importer, media_provider_factory):
        media = media_provider_factory(pool=["yt-nonbinary"])
        batch = await importer([_track("Arca", "Nonbinary")], media=media).build_batch(
            PLAYLIST_ID, seed=[]
        )

        (record,) = batch.additions
        assert record.name == "Arca"
        assert record.birth_date == datetime.date(1989, 10, 14)
        assert record.handpicked is True
        assert record.handpicked_track == "Nonbinary"
        assert record.media_id == "yt-nonbinary"
        assert GenreCategory.ELECTRONICA in record.genres
        assert record.venus is not None
        assert record.field_sources["birth_date"] is ProvenanceTier.FRESH
        assert batch.playlist == PLAYLIST_ID

    @pytest.mark.asyncio
    async def test_media_search_uses_the_track(self, importer, media_provider_factory):
        media = media_provider_factory(pool=["yt-x"])
        await importer([_track("Arca", "Nonbinary")], media=media).build_batch("x" * 22, [])
        assert media.searches == ["Arca Nonbinary"]
        assert media.queries == []

    @pytest.mark.asyncio
    async def test_all_queries_tried_before_giving_up(self, importer, media_provider_factory):
        media = media_provider_factory(pool=[])
        batch = await importer([_track("Arca", "Nonbinary")], media=media).build_batch(
            PLAYLIST_ID, []
        )
        assert len(media.searches) == 3
        assert batch.additions[0].media_id is None

    @pytest.mark.asyncio
    async def test_partial_date_is_approximate(self, importer) -> None:
        batch = await importer([_track("Sophie", "Bipp")]).build_batch(PLAYLIST_ID, [])
        (record,) = batch.additions
        assert record.birth_date == datetime.date(1986, 9, 15)
        assert record.date_approx is True

    @pytest.mark.asyncio
    async def test_no_genres_still_added(self, importer) -> None:
        batch = await importer([_track("Tagless", "Song")]).build_batch(PLAYLIST_ID, [])
        (record,) = batch.additions
        assert record.genres == ()
        assert "genres" not in record.field_sources

    @pytest.mark.asyncio
    async def test_undated_and_too_old_are_skipped(self, importer) -> None:
        tracks = [_track("Nobody Knows", "Hum"), _track("Old Composer", "Etude")]
        batch = await importer(tracks).build_batch(PLAYLIST_ID, [])
        assert batch.additions == []
        assert set(batch.skipped) == {"Nobody Knows", "Old Composer"}
        assert batch.skipped["Nobody Knows"].startswith("no birth date")

    @pytest.mark.asyncio
    async def test_existing_artist_becomes_patch(self, importer, seed_records) -> None:
        batch = await importer([_track("bjork", "Joga")]).build_batch(PLAYLIST_ID, seed_records)
        assert batch.additions == []
        assert batch.patches == [HandpickPatch(name="Bjork", handpicked_track="Joga")]

    @pytest.mark.asyncio
    async def test_fully_handpicked_artist_is_skipped(self, importer) -> None:
        seed = [ArtistRecord(name="Bjork", handpicked=True, handpicked_track="Hyperballad")]
        batch = await importer([_track("Bjork", "Joga")]).build_batch(PLAYLIST_ID, seed)
        assert batch.patches == []
        assert batch.skipped == {"Bjork": "already handpicked"}


# ======================================================================
# apply_import / ImportBatch
# ======================================================================


class TestApplyImport:
    def test_additions_and_duplicates(self, seed_records) -> None:
        batches = [
            ImportBatch(additions=[ArtistRecord(name="Arca"), ArtistRecord(name="BJORK")]),
            ImportBatch(additions=[ArtistRecord(name="arca")]),
        ]
        records, summary = apply_import(seed_records, batches)

        assert [r.name for r in records][-1] == "Arca"
        assert len(records) == len(seed_records) + 1
        assert summary.added == ["Arca"]
        assert summary.duplicates == ["BJORK", "arca"]
        assert summary.changed is True

    def test_patch_fills_only_missing_fields(self) -> None:
        seed = [
            ArtistRecord(name="Bjork", media_id="yt-bjork"),
            ArtistRecord(name="Arca", handpicked=True, handpicked_track="Piel"),
        ]
        batch = ImportBatch(
            patches=[
                HandpickPatch(name="bjork", handpicked_track="Joga"),
                HandpickPatch(name="Arca", handpicked_track="Nonbinary"),
                HandpickPatch(name="Not In Seed", handpicked_track="x"),
            ]
        )
        records, summary = apply_import(seed, [batch])

        assert records[0].handpicked is True
        assert records[0].handpicked_track == "Joga"
        assert records[0].media_id == "yt-bjork"
        assert records[1].handpicked_track == "Piel"
        assert summary.patched == ["Bjork"]

    def test_seed_list_is_not_modified(self, seed_records) -> None:
        before = list(seed_records)
        apply_import(seed_records, [ImportBatch(additions=[ArtistRecord(name="Arca")])])
        assert seed_records == before

    def test_batch_json_loads_back(self) -> None:
        batch = ImportBatch(
            playlist=PLAYLIST_ID,
            additions=[
                ArtistRecord(
                    name="Arca",
                    birth_date=datetime.date(1989, 10, 14),
                    handpicked=True,
                    handpicked_track="Nonbinary",
                )
            ],
            patches=[HandpickPatch(name="Bjork", handpicked_track="Joga")],
            skipped={"Nobody": "no birth date (no_result)"},
        )
        data = batch.to_json_dict()

        assert "venus" not in data["additions"][0]
        loaded = ImportBatch.model_validate(data)
        assert loaded.additions[0].handpicked_track == "Nonbinary"
        assert loaded.patches == batch.patches


class TestTrackDuration:
    def test_allows_long_recordings(self) -> None:
        low, high = TRACK_DURATION
        assert low == 60
        assert high >= 3600
