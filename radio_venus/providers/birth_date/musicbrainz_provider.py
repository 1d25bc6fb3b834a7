"""Tier 3 of the birth-date chain: the MusicBrainz artist registry.

Uses the musicbrainzngs library.  Its calls are blocking, so each one runs
in a worker thread via ``asyncio.to_thread``; the MusicBrainz rate limit of
1 request per second is enforced with a :class:`RequestThrottle`.

Among the search hits a ``Person`` with a life-span begin date is
preferred, then a ``Group`` with one.  Search hits must carry a name that
fuzzy-matches the query; a search that only finds other names is a wrong
match.  A stable-id lookup is trusted as is.  Partial dates (``YYYY``,
``YYYY-MM``) are passed through as-is for the normalizer.  The MBID is
returned as the stable identifier.
"""

from __future__ import annotations

import asyncio
import re
from typing import Any

import musicbrainzngs

from radio_venus.config.settings import Settings
from radio_venus.interfaces.birth_date_provider import IBirthDateProvider
from radio_venus.models.resolution import BirthDateCandidate, ProviderResult
from radio_venus.utils.concurrency import RequestThrottle
from radio_venus.utils.logging import get_logger
from radio_venus.utils.text_normalizer import names_match

_MBID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")
_BEGIN_RE = re.compile(r"^\d{4}(?:-\d{2}(?:-\d{2})?)?$")
_SEARCH_LIMIT = 10


def pick_dated_artist(artists: list[dict[str, Any]]) -> dict[str, Any] | None:
    """Return the first Person with a begin date, else the first such Group."""

    def _begin(artist: dict[str, Any]) -> str:
        return (artist.get("life-span") or {}).get("begin") or ""

    for wanted in ("Person", "Group"):
        for artist in artists:
            if artist.get("type") == wanted and _BEGIN_RE.match(_begin(artist)):
                return artist
    return None


class MusicBrainzBirthDateProvider(IBirthDateProvider):
    """MusicBrainz life-span lookup with built-in rate limiting.

    No API key is required, but clients must identify themselves with a
    user-agent string; it is registered once at construction.
    """

    _MIN_REQUEST_INTERVAL: float = 1.0

    def __init__(self, settings: Settings, min_interval: float | None = None) -> None:
        self._throttle = RequestThrottle(
            self._MIN_REQUEST_INTERVAL if min_interval is None else min_interval
        )
        self._logger = get_logger(__name__)
        musicbrainzngs.set_useragent(
            settings.musicbrainz_app_name,
            settings.musicbrainz_app_version,
            settings.musicbrainz_contact or None,
        )

    async def _search(self, name: str) -> list[dict[str, Any]]:
        await self._throttle.wait()
        response = await asyncio.to_thread(
            musicbrainzngs.search_artists, artist=name, limit=_SEARCH_LIMIT
        )
        return response.get("artist-list", [])

    async def _by_id(self, mbid: str) -> list[dict[str, Any]]:
        await self._throttle.wait()
        response = await asyncio.to_thread(musicbrainzngs.get_artist_by_id, mbid)
        artist = response.get("artist")
        return [artist] if artist else []

    async def query(
        self, name: str, hint: str | None = None
    ) -> ProviderResult[BirthDateCandidate]:
        provider = self.get_provider_name()
        try:
            artists: list[dict[str, Any]] = []
            if hint and _MBID_RE.match(hint):
                artists = await self._by_id(hint)
            if not artists:
                artists = await self._search(name)
                if artists:
                    named = [a for a in artists if names_match(name, a.get("name", ""))]
                    if not named:
                        return ProviderResult.wrong_match(
                            provider, f"no hit named like {name!r}"
                        )
                    artists = named
        except musicbrainzngs.WebServiceError as exc:
            self._logger.warning("musicbrainz_search_failed", artist=name, error=str(exc))
            return ProviderResult.transport_failure(provider, str(exc))

        if not artists:
            return ProviderResult.no_result(provider)

        match = pick_dated_artist(artists)
        if match is None:
            return ProviderResult.no_result(provider, "no artist with a life-span")

        begin = match["life-span"]["begin"]
        self._logger.debug(
            "musicbrainz_artist_matched",
            artist=name,
            mbid=match.get("id"),
            type=match.get("type"),
            begin=begin,
        )
        return ProviderResult.found(
            BirthDateCandidate(raw=begin, stable_id=match.get("id"), label=match.get("name")),
            provider,
        )

    def get_provider_name(self) -> str:
        return "musicbrainz"

    def is_available(self) -> bool:
        return True
