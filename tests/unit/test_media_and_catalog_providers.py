"""Unit tests for the YouTube media provider and the Wikidata candidate feed."""

from __future__ import annotations

import datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from radio_venus.models.resolution import ProviderStatus
from radio_venus.models.taxonomy import GenreCategory
from radio_venus.providers.catalog.wikidata_catalog_provider import WikidataCatalogProvider
from radio_venus.providers.media.youtube_provider import (
    BACKUP_DURATION,
    YouTubeMediaProvider,
    parse_iso_duration,
)
from radio_venus.services.genre_classifier import GenreClassifier
from radio_venus.utils.errors import ConfigurationError


def _response(payload: Any, status_code: int = 200) -> MagicMock:
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.json.return_value = payload
    return response


def _client(*responses: Any) -> MagicMock:
    client = MagicMock(spec=httpx.AsyncClient)
    client.get = AsyncMock(side_effect=list(responses))
    return client


def _search(*ids: str) -> dict:
    return {"items": [{"id": {"kind": "youtube#video", "videoId": i}} for i in ids]}


def _details(durations: dict[str, str]) -> dict:
    return {
        "items": [{"id": i, "contentDetails": {"duration": d}} for i, d in durations.items()]
    }


# ======================================================================
# YouTube
# ======================================================================


class TestParseIsoDuration:
    @pytest.mark.parametrize(
        ("value", "seconds"),
        [("PT4M13S", 253), ("PT1H", 3600), ("PT45S", 45), ("P1DT2H", 93600), ("bogus", 0)],
    )
    def test_values(self, value: str, seconds: int) -> None:
        assert parse_iso_duration(value) == seconds


class TestYouTubeMediaProvider:
    @pytest.mark.asyncio
    async def test_query_filters_by_duration(self) -> None:
        client = _client(
            _response(_search("short", "song", "mix")),
            _response(_details({"short": "PT30S", "song": "PT4M13S", "mix": "PT1H2M"})),
        )
        provider = YouTubeMediaProvider(client, api_key="key")

        result = await provider.query("Aphex Twin", hint="idm")

        assert result.ok
        assert result.value == ["song"]
        search_params = client.get.await_args_list[0].kwargs["params"]
        assert search_params["q"] == "Aphex Twin idm audio"
        detail_params = client.get.await_args_list[1].kwargs["params"]
        assert detail_params["id"] == "short,song,mix"

    @pytest.mark.asyncio
    async def test_search_excludes_known_ids_and_accepts_backup_range(self) -> None:
        client = _client(
            _response(_search("known", "mix")),
            _response(_details({"mix": "PT40M"})),
        )
        provider = YouTubeMediaProvider(client, api_key="key")

        ids = await provider.search("X jazz full track", BACKUP_DURATION, exclude={"known"})

        assert ids == ["mix"]

    @pytest.mark.asyncio
    async def test_no_candidates_skips_details_call(self) -> None:
        client = _client(_response({"items": []}))
        result = await YouTubeMediaProvider(client, api_key="key").query("X")
        assert result.status is ProviderStatus.NO_RESULT
        assert client.get.await_count == 1

    @pytest.mark.asyncio
    async def test_quota_error_is_transport_failure(self) -> None:
        client = _client(_response({}, status_code=403))
        result = await YouTubeMediaProvider(client, api_key="key").query("X")
        assert result.status is ProviderStatus.TRANSPORT_FAILURE

    @pytest.mark.asyncio
    async def test_unavailable_without_key(self) -> None:
        client = _client()
        provider = YouTubeMediaProvider(client, api_key="")
        result = await provider.query("X")
        assert provider.is_available() is False
        assert result.status is ProviderStatus.NO_RESULT
        client.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_search_without_key_raises(self) -> None:
        client = _client()
        with pytest.raises(ConfigurationError):
            await YouTubeMediaProvider(client, api_key="").search("X audio")
        client.get.assert_not_awaited()


# ======================================================================
# Wikidata candidate feed
# ======================================================================


def _row(name: str, birth: str, genres: str, qid: str = "Q1") -> dict:
    return {
        "artist": {"value": f"http://www.wikidata.org/entity/{qid}"},
        "artistLabel": {"value": name},
        "birthDate": {"value": f"{birth}T00:00:00Z"},
        "genres": {"value": genres},
    }


class TestWikidataCatalogProvider:
    @pytest.mark.asyncio
    async def test_rows_become_classified_records(self) -> None:
        payload = {
            "results": {
                "bindings": [
                    _row("Richie Hawtin", "1970-06-04", "minimal techno|techno", "Q455"),
                    _row("Q999", "1980-01-01", "techno"),
                    _row("Nobody Classified", "1980-01-01", "polka"),
                    _row("Too Old", "1500-01-01", "techno"),
                ]
            }
        }
        client = _client(_response(payload))
        provider = WikidataCatalogProvider(client, classifier=GenreClassifier())

        records = await provider.fetch_candidates(limit=25)

        assert [r.name for r in records] == ["Richie Hawtin"]
        hawtin = records[0]
        assert hawtin.birth_date == datetime.date(1970, 6, 4)
        assert hawtin.genres == (GenreCategory.TECHNO,)
        assert hawtin.stable_id == "Q455"
        assert hawtin.raw_provider_tags == ("minimal techno", "techno")
        assert "LIMIT 25" in client.get.await_args.kwargs["params"]["query"]

    @pytest.mark.asyncio
    async def test_transport_failure_yields_empty_list(self) -> None:
        client = _client(httpx.ConnectError("down"))
        provider = WikidataCatalogProvider(client, classifier=GenreClassifier())
        assert await provider.fetch_candidates() == []
