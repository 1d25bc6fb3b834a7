"""YouTube Data API v3 media lookup.

``search`` finds video ids for a free-text query, then one ``videos``
call with ``part=contentDetails`` fetches their durations so shorts and
long mixes can be filtered out.  The primary lookup keeps videos strictly
between one and ten minutes; backup lookups accept up to an hour.
"""

from __future__ import annotations

import re

import httpx

from radio_venus.interfaces.media_provider import IMediaProvider
from radio_venus.models.resolution import ProviderResult
from radio_venus.providers.http_support import get_json
from radio_venus.utils.errors import ConfigurationError, RadioVenusError
from radio_venus.utils.logging import get_logger

_BASE_URL = "https://www.googleapis.com/youtube/v3"
_ISO_DURATION = re.compile(r"^P(?:(\d+)D)?T?(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?$")

PRIMARY_DURATION = (60, 600)
BACKUP_DURATION = (60, 3600)


def parse_iso_duration(value: str) -> int:
    """Return the number of seconds in an ISO 8601 duration like ``PT4M13S``."""
    match = _ISO_DURATION.match(value or "")
    if not match:
        return 0
    days, hours, minutes, seconds = (int(g or 0) for g in match.groups())
    return days * 86400 + hours * 3600 + minutes * 60 + seconds


class YouTubeMediaProvider(IMediaProvider):
    """Media ids from YouTube; unavailable without ``YOUTUBE_API_KEY``."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        max_results: int = 10,
        base_url: str = _BASE_URL,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self._max_results = max_results
        self._base_url = base_url.rstrip("/")
        self._logger = get_logger(__name__)

    async def search(
        self,
        search_query: str,
        duration_range: tuple[int, int] = PRIMARY_DURATION,
        exclude: set[str] | None = None,
    ) -> list[str]:
        """Return ids for *search_query* whose duration lies strictly inside the range.

        Raises
        ------
        radio_venus.utils.errors.RadioVenusError
            On transport failure or quota exhaustion.
        radio_venus.utils.errors.ConfigurationError
            If no API key is configured.
        """
        provider = self.get_provider_name()
        if not self.is_available():
            raise ConfigurationError(message="YOUTUBE_API_KEY is not set", provider_name=provider)
        data = await get_json(
            self._http,
            f"{self._base_url}/search",
            provider,
            params={
                "part": "snippet",
                "q": search_query,
                "type": "video",
                "maxResults": min(self._max_results, 50),
                "key": self._api_key,
            },
        )
        ids = [
            item["id"]["videoId"]
            for item in (data or {}).get("items", [])
            if isinstance(item.get("id"), dict) and item["id"].get("videoId")
        ]
        ids = [i for i in ids if i not in (exclude or set())]
        if not ids:
            return []

        details = await get_json(
            self._http,
            f"{self._base_url}/videos",
            provider,
            params={"part": "contentDetails", "id": ",".join(ids), "key": self._api_key},
        )
        durations = {
            item.get("id"): parse_iso_duration(item.get("contentDetails", {}).get("duration", ""))
            for item in (details or {}).get("items", [])
        }
        low, high = duration_range
        return [i for i in ids if low < durations.get(i, 0) < high]

    async def query(self, name: str, hint: str | None = None) -> ProviderResult[list[str]]:
        provider = self.get_provider_name()
        if not self.is_available():
            return ProviderResult.no_result(provider, "no api key")

        search_query = " ".join(part for part in (name, hint, "audio") if part)
        try:
            ids = await self.search(search_query)
        except RadioVenusError as exc:
            self._logger.warning("youtube_search_failed", artist=name, error=str(exc))
            return ProviderResult.transport_failure(provider, str(exc))

        if not ids:
            return ProviderResult.no_result(provider, "no video in duration range")
        return ProviderResult.found(ids, provider)

    def get_provider_name(self) -> str:
        return "youtube"

    def is_available(self) -> bool:
        return bool(self._api_key)
