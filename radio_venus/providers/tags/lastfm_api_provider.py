"""Last.fm web-service similarity (``artist.getSimilar``).

A second similarity source whose results are unioned with the page scrape
during discovery.  Requires ``LASTFM_API_KEY``; without it the provider
reports itself unavailable and is skipped.
"""

from __future__ import annotations

import httpx

from radio_venus.interfaces.tag_provider import ISimilarityProvider
from radio_venus.models.resolution import ProviderResult
from radio_venus.providers.http_support import get_json
from radio_venus.utils.concurrency import RequestThrottle
from radio_venus.utils.errors import RadioVenusError
from radio_venus.utils.logging import get_logger

_API_URL = "https://ws.audioscrobbler.com/2.0/"


class LastfmApiSimilarityProvider(ISimilarityProvider):
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        limit: int = 30,
        min_interval: float = 0.25,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self._limit = limit
        self._throttle = RequestThrottle(min_interval)
        self._logger = get_logger(__name__)

    async def query(self, name: str, hint: str | None = None) -> ProviderResult[list[str]]:
        provider = self.get_provider_name()
        if not self.is_available():
            return ProviderResult.no_result(provider, "no api key")

        params = {
            "method": "artist.getsimilar",
            "artist": name,
            "api_key": self._api_key,
            "limit": self._limit,
            "autocorrect": 1,
            "format": "json",
        }
        if hint:
            params["mbid"] = hint
        await self._throttle.wait()
        try:
            data = await get_json(self._http, _API_URL, provider, params=params)
        except RadioVenusError as exc:
            self._logger.warning("lastfm_api_failed", artist=name, error=str(exc))
            return ProviderResult.transport_failure(provider, str(exc))

        if not data or "error" in data:
            reason = (data or {}).get("message", "not found")
            return ProviderResult.no_result(provider, reason)

        artists = (data.get("similarartists") or {}).get("artist") or []
        names = [a.get("name", "").strip() for a in artists if a.get("name")]
        if not names:
            return ProviderResult.no_result(provider, "no similar artists")
        return ProviderResult.found(names, provider)

    def get_provider_name(self) -> str:
        return "lastfm_api"

    def is_available(self) -> bool:
        return bool(self._api_key)
