"""Unit tests for the birth-date provider adapters.

All HTTP traffic goes through a mocked ``httpx.AsyncClient``; MusicBrainz
calls are patched on the ``musicbrainzngs`` module.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import musicbrainzngs
import pytest

from radio_venus.models.resolution import DatePrecision, ProviderStatus
from radio_venus.providers.birth_date.community_db_provider import (
    CommunityDbBirthDateProvider,
    extract_info_date,
    is_challenge_page,
    parse_info_date,
)
from radio_venus.providers.birth_date.manual_override_provider import ManualOverrideProvider
from radio_venus.providers.birth_date.musicbrainz_provider import (
    MusicBrainzBirthDateProvider,
    pick_dated_artist,
)
from radio_venus.providers.birth_date.wikidata_provider import (
    WikidataBirthDateProvider,
    is_music_entity,
)
from radio_venus.providers.birth_date.wikipedia_provider import (
    WikipediaBirthDateProvider,
    extract_birth_date,
)
from radio_venus.utils.errors import SnapshotError


# ======================================================================
# Shared helpers
# ======================================================================


def _response(status_code: int = 200, payload: Any = None, text: str = "") -> MagicMock:
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.json.return_value = payload
    response.text = text if text else json.dumps(payload or {})
    return response


def _client(*responses: Any) -> MagicMock:
    client = MagicMock(spec=httpx.AsyncClient)
    client.get = AsyncMock(side_effect=list(responses))
    return client


def _item(value_id: str) -> dict:
    return {"mainsnak": {"datavalue": {"value": {"id": value_id}}}}


def _time(value: str, precision: int = 11) -> dict:
    return {"mainsnak": {"datavalue": {"value": {"time": value, "precision": precision}}}}


def _entity(qid: str, claims: dict) -> dict:
    return {"entities": {qid: {"claims": claims}}}


MUSICIAN_CLAIMS = {
    "P31": [_item("Q5")],
    "P106": [_item("Q639669")],
    "P569": [_time("+1958-06-07T00:00:00Z")],
}


# ======================================================================
# Manual overrides
# ======================================================================


class TestManualOverrideProvider:
    @pytest.mark.asyncio
    async def test_both_entry_shapes_and_key_lookup(self) -> None:
        provider = ManualOverrideProvider(
            {
                "Aphex Twin": "1971-08-18",
                "Burial": {"birth_date": "1979-00-00", "stable_id": "Q1"},
                "Broken": {"genres": ["jazz"]},
            }
        )
        assert len(provider) == 2
        assert "aphex twin" in provider

        result = await provider.query("BURIAL")
        assert result.ok
        assert result.value.raw == "1979-00-00"
        assert result.value.stable_id == "Q1"

        missing = await provider.query("Nobody")
        assert missing.status is ProviderStatus.NO_RESULT

    def test_from_file_list_shape(self, tmp_path: Path) -> None:
        path = tmp_path / "overrides.json"
        path.write_text(json.dumps([{"name": "Prince", "birthDate": "1958-06-07"}]))
        assert "Prince" in ManualOverrideProvider.from_file(path)

    def test_from_file_missing_and_malformed(self, tmp_path: Path) -> None:
        assert len(ManualOverrideProvider.from_file(tmp_path / "none.json")) == 0
        bad = tmp_path / "bad.json"
        bad.write_text('"just a string"')
        with pytest.raises(SnapshotError):
            ManualOverrideProvider.from_file(bad)


# ======================================================================
# Wikidata
# ======================================================================


class TestWikidataProvider:
    def test_music_entity_filter(self) -> None:
        assert is_music_entity(MUSICIAN_CLAIMS)
        assert is_music_entity({"P31": [_item("Q215380")]})
        assert not is_music_entity({"P31": [_item("Q5")], "P106": [_item("Q116")]})

    @pytest.mark.asyncio
    async def test_skips_non_musician_homonym(self) -> None:
        royal = {
            "P31": [_item("Q5")],
            "P106": [_item("Q116")],
            "P569": [_time("+1948-11-14T00:00:00Z")],
        }
        client = _client(
            _response(payload={"search": [{"id": "Q100"}, {"id": "Q7542", "label": "Prince"}]}),
            _response(payload=_entity("Q100", royal)),
            _response(payload=_entity("Q7542", MUSICIAN_CLAIMS)),
        )
        provider = WikidataBirthDateProvider(http_client=client, min_interval=0)

        result = await provider.query("Prince")

        assert result.ok
        assert result.value.raw == "+1958-06-07T00:00:00Z"
        assert result.value.precision is DatePrecision.DAY
        assert result.value.stable_id == "Q7542"
        first_params = client.get.await_args_list[0].kwargs["params"]
        assert first_params["action"] == "wbsearchentities"
        assert first_params["search"] == "Prince"

    @pytest.mark.asyncio
    async def test_group_inception_with_year_precision(self) -> None:
        group = {"P31": [_item("Q215380")], "P571": [_time("+1985-00-00T00:00:00Z", 9)]}
        client = _client(
            _response(payload={"search": [{"id": "Q1"}]}),
            _response(payload=_entity("Q1", group)),
        )
        result = await WikidataBirthDateProvider(client, min_interval=0).query("Band")
        assert result.value.precision is DatePrecision.YEAR

    @pytest.mark.asyncio
    async def test_only_non_musicians_is_wrong_match(self) -> None:
        client = _client(
            _response(payload={"search": [{"id": "Q100"}]}),
            _response(payload=_entity("Q100", {"P31": [_item("Q5")]})),
        )
        result = await WikidataBirthDateProvider(client, min_interval=0).query("Prince")
        assert result.status is ProviderStatus.WRONG_MATCH
        assert "Q100" in result.reason

    @pytest.mark.asyncio
    async def test_differently_labelled_hit_is_not_fetched(self) -> None:
        client = _client(
            _response(
                payload={
                    "search": [
                        {"id": "Q9", "label": "Prince Albert"},
                        {"id": "Q7542", "label": "Prince"},
                    ]
                }
            ),
            _response(payload=_entity("Q7542", MUSICIAN_CLAIMS)),
        )
        result = await WikidataBirthDateProvider(client, min_interval=0).query("Prince")

        assert result.value.stable_id == "Q7542"
        assert client.get.await_count == 2

    @pytest.mark.asyncio
    async def test_matched_alias_is_accepted(self) -> None:
        hit = {"id": "Q1", "label": "Richard D. James", "match": {"text": "Aphex Twin"}}
        client = _client(
            _response(payload={"search": [hit]}),
            _response(payload=_entity("Q1", MUSICIAN_CLAIMS)),
        )
        result = await WikidataBirthDateProvider(client, min_interval=0).query("Aphex Twin")
        assert result.ok

    @pytest.mark.asyncio
    async def test_only_other_names_is_wrong_match(self) -> None:
        client = _client(_response(payload={"search": [{"id": "Q9", "label": "Burial Hex"}]}))
        result = await WikidataBirthDateProvider(client, min_interval=0).query("Burial")
        assert result.status is ProviderStatus.WRONG_MATCH
        assert client.get.await_count == 1

    @pytest.mark.asyncio
    async def test_no_hits(self) -> None:
        client = _client(_response(payload={"search": []}))
        result = await WikidataBirthDateProvider(client, min_interval=0).query("Nobody")
        assert result.status is ProviderStatus.NO_RESULT

    @pytest.mark.asyncio
    async def test_hint_is_tried_first(self) -> None:
        client = _client(
            _response(payload={"search": [{"id": "Q100"}]}),
            _response(payload=_entity("Q42", MUSICIAN_CLAIMS)),
        )
        result = await WikidataBirthDateProvider(client, min_interval=0).query("X", hint="Q42")
        assert result.value.stable_id == "Q42"

    @pytest.mark.asyncio
    async def test_server_error_is_transport_failure(self) -> None:
        client = _client(_response(status_code=503))
        result = await WikidataBirthDateProvider(client, min_interval=0).query("X")
        assert result.status is ProviderStatus.TRANSPORT_FAILURE

    @pytest.mark.asyncio
    async def test_network_error_is_transport_failure(self) -> None:
        client = _client(httpx.ConnectError("refused"))
        result = await WikidataBirthDateProvider(client, min_interval=0).query("X")
        assert result.status is ProviderStatus.TRANSPORT_FAILURE


# ======================================================================
# MusicBrainz
# ======================================================================


class TestMusicBrainzProvider:
    def test_person_preferred_over_group(self) -> None:
        artists = [
            {"id": "g", "type": "Group", "life-span": {"begin": "1990"}},
            {"id": "p0", "type": "Person", "life-span": {}},
            {"id": "p", "type": "Person", "life-span": {"begin": "1971-08-18"}},
        ]
        assert pick_dated_artist(artists)["id"] == "p"
        assert pick_dated_artist(artists[:2])["id"] == "g"
        assert pick_dated_artist([]) is None

    @pytest.mark.asyncio
    async def test_found(self, test_settings) -> None:
        artists = {
            "artist-list": [
                {"id": "f22942a1-6f70-4f48-866e-238cb2308fbd", "name": "Aphex Twin",
                 "type": "Person", "life-span": {"begin": "1971-08-18"}}
            ]
        }
        provider = MusicBrainzBirthDateProvider(test_settings, min_interval=0)
        with patch.object(musicbrainzngs, "search_artists", return_value=artists) as search:
            result = await provider.query("Aphex Twin")

        assert result.ok
        assert result.value.raw == "1971-08-18"
        assert result.value.stable_id == "f22942a1-6f70-4f48-866e-238cb2308fbd"
        search.assert_called_once_with(artist="Aphex Twin", limit=10)

    @pytest.mark.asyncio
    async def test_mbid_hint_uses_lookup(self, test_settings) -> None:
        mbid = "f22942a1-6f70-4f48-866e-238cb2308fbd"
        artist = {"artist": {"id": mbid, "type": "Person", "life-span": {"begin": "1971"}}}
        provider = MusicBrainzBirthDateProvider(test_settings, min_interval=0)
        with patch.object(musicbrainzngs, "get_artist_by_id", return_value=artist) as lookup, \
                patch.object(musicbrainzngs, "search_artists") as search:
            result = await provider.query("Aphex Twin", hint=mbid)

        assert result.value.raw == "1971"
        lookup.assert_called_once_with(mbid)
        search.assert_not_called()

    @pytest.mark.asyncio
    async def test_web_service_error(self, test_settings) -> None:
        provider = MusicBrainzBirthDateProvider(test_settings, min_interval=0)
        with patch.object(
            musicbrainzngs, "search_artists", side_effect=musicbrainzngs.WebServiceError("503")
        ):
            result = await provider.query("X")
        assert result.status is ProviderStatus.TRANSPORT_FAILURE

    @pytest.mark.asyncio
    async def test_no_dated_artist(self, test_settings) -> None:
        provider = MusicBrainzBirthDateProvider(test_settings, min_interval=0)
        payload = {"artist-list": [{"id": "x", "name": "X", "type": "Person", "life-span": {}}]}
        with patch.object(musicbrainzngs, "search_artists", return_value=payload):
            result = await provider.query("X")
        assert result.status is ProviderStatus.NO_RESULT

    @pytest.mark.asyncio
    async def test_differently_named_hits_are_wrong_match(self, test_settings) -> None:
        payload = {
            "artist-list": [
                {"id": "b", "name": "Burial Hex", "type": "Person",
                 "life-span": {"begin": "1980"}},
                {"id": "c", "name": "Burial Chamber Trio", "type": "Group",
                 "life-span": {"begin": "2001"}},
            ]
        }
        provider = MusicBrainzBirthDateProvider(test_settings, min_interval=0)
        with patch.object(musicbrainzngs, "search_artists", return_value=payload):
            result = await provider.query("Burial")
        assert result.status is ProviderStatus.WRONG_MATCH

    @pytest.mark.asyncio
    async def test_only_the_matching_hit_is_considered(self, test_settings) -> None:
        payload = {
            "artist-list": [
                {"id": "other", "name": "Arcade Fire", "type": "Person",
                 "life-span": {"begin": "1960"}},
                {"id": "arca", "name": "Arca", "type": "Person",
                 "life-span": {"begin": "1989-10-14"}},
            ]
        }
        provider = MusicBrainzBirthDateProvider(test_settings, min_interval=0)
        with patch.object(musicbrainzngs, "search_artists", return_value=payload):
            result = await provider.query("arca")
        assert result.value.stable_id == "arca"


# ======================================================================
# Wikipedia
# ======================================================================


def _page(wikitext: str) -> dict:
    return {"query": {"pages": {"123": {"revisions": [{"*": wikitext}]}}}}


MISSING_PAGE = {"query": {"pages": {"-1": {"missing": ""}}}}


class TestWikipediaProvider:
    @pytest.mark.parametrize(
        ("wikitext", "expected"),
        [
            ("{{Birth date and age|1971|8|18}}", "1971-08-18"),
            ("{{birth date|mf=yes|August 18, 1971}}", "1971-08-18"),
            ("| birth_date = June 7, 1958", "1958-06-07"),
            ("| birth_date = Aug. 18, 1971", "1971-08-18"),
            ("Burial (born Sept 1979) is", None),
            ("Prince (born June 7, 1958) was", "1958-06-07"),
            ("| birth_date = 1987-10-28 |", "1987-10-28"),
            ("no dates here", None),
        ],
    )
    def test_extract_birth_date(self, wikitext: str, expected: str | None) -> None:
        assert extract_birth_date(wikitext) == expected

    def test_candidate_titles(self) -> None:
        assert WikipediaBirthDateProvider.candidate_titles("Burial") == [
            "Burial",
            "Burial (musician)",
            "Burial (band)",
        ]

    @pytest.mark.asyncio
    async def test_falls_back_to_disambiguated_title(self) -> None:
        client = _client(
            _response(payload=_page("Burial is a funeral rite.")),
            _response(payload=_page("{{birth date and age|1979|1|1}}")),
        )
        result = await WikipediaBirthDateProvider(client, min_interval=0).query("Burial")

        assert result.ok
        assert result.value.raw == "1979-01-01"
        assert result.value.label == "Burial (musician)"

    @pytest.mark.asyncio
    async def test_all_missing_is_no_result(self) -> None:
        client = _client(*[_response(payload=MISSING_PAGE)] * 3)
        result = await WikipediaBirthDateProvider(client, min_interval=0).query("X")
        assert result.status is ProviderStatus.NO_RESULT

    @pytest.mark.asyncio
    async def test_all_failed_is_transport_failure(self) -> None:
        client = _client(*[_response(status_code=500)] * 3)
        result = await WikipediaBirthDateProvider(client, min_interval=0).query("X")
        assert result.status is ProviderStatus.TRANSPORT_FAILURE


# ======================================================================
# Community database
# ======================================================================

ARTIST_HTML = """
<div class="artist_info">
  <div class="info_hdr">Born</div>
  <div class="info_content">18 August 1971, Limerick, Ireland</div>
</div>
"""


class TestCommunityDbProvider:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("18 August 1971, Limerick", "1971-08-18"),
            ("March 1991, London", "1991-03"),
            ("Sept 1991, Leeds", "1991-09"),
            ("18 Aug. 1971, Limerick", "1971-08-18"),
            ("Limerick 1971", "1971"),
            ("1994, Oslo", "1994"),
            ("unknown", None),
        ],
    )
    def test_parse_info_date(self, text: str, expected: str | None) -> None:
        assert parse_info_date(text) == expected

    def test_extract_and_challenge_detection(self) -> None:
        assert extract_info_date(ARTIST_HTML) == "1971-08-18"
        assert extract_info_date("<html></html>") is None
        assert is_challenge_page(403, "")
        assert is_challenge_page(200, "<title>Just a moment...</title>")
        assert not is_challenge_page(200, ARTIST_HTML)

    @pytest.mark.asyncio
    async def test_found(self) -> None:
        client = _client(_response(text=ARTIST_HTML))
        provider = CommunityDbBirthDateProvider(client, min_interval=0)

        result = await provider.query("Aphex Twin")

        assert result.value.raw == "1971-08-18"
        assert client.get.await_args.args[0] == "https://rateyourmusic.com/artist/aphex-twin"

    @pytest.mark.asyncio
    async def test_bot_challenge_is_no_result(self) -> None:
        client = _client(_response(status_code=503, text="challenge"))
        result = await CommunityDbBirthDateProvider(client, min_interval=0).query("X")
        assert result.status is ProviderStatus.NO_RESULT
        assert result.reason == "bot challenge"

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        client = _client(httpx.ReadTimeout("slow"))
        result = await CommunityDbBirthDateProvider(client, min_interval=0).query("X")
        assert result.status is ProviderStatus.TRANSPORT_FAILURE
