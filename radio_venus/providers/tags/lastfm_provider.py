"""Last.fm web scrapes: artist tags and similar artists.

Both pages are plain server-rendered HTML, parsed with BeautifulSoup.
Tags serve as the secondary genre signal during discovery; the similar
artists page supplies the edges of the similarity graph.
"""

from __future__ import annotations

import httpx
from bs4 import BeautifulSoup

from radio_venus.config.curation import LASTFM_NOISE_TAGS
from radio_venus.interfaces.tag_provider import ISimilarityProvider, ITagProvider
from radio_venus.models.resolution import ProviderResult
from radio_venus.providers.http_support import get_response
from radio_venus.utils.concurrency import RequestThrottle
from radio_venus.utils.errors import RadioVenusError
from radio_venus.utils.logging import get_logger
from radio_venus.utils.text_normalizer import lastfm_slug, name_key

_BASE_URL = "https://www.last.fm/music"
_MAX_TAGS = 10


def parse_tags(html: str, limit: int = _MAX_TAGS) -> list[str]:
    """Return lower-cased tag names from a ``/+tags`` page, minus user noise."""
    soup = BeautifulSoup(html, "html.parser")
    tags: list[str] = []
    for link in soup.select('a[href^="/tag/"]'):
        tag = link.get_text(strip=True).lower()
        if not tag or tag in tags:
            continue
        if any(noise in tag for noise in LASTFM_NOISE_TAGS):
            continue
        tags.append(tag)
    return tags[:limit]


def parse_similar(html: str, seed: str) -> list[str]:
    """Return artist names from a ``/+similar`` page."""
    soup = BeautifulSoup(html, "html.parser")
    names = [
        a.get_text(strip=True)
        for a in soup.select(".similar-artists-item-name a")
        if a.get_text(strip=True)
    ]
    if not names:
        seed_key = name_key(seed)
        names = [
            a.get_text(strip=True)
            for a in soup.select('h3 a[href^="/music/"]')
            if a.get_text(strip=True) and name_key(a.get_text(strip=True)) != seed_key
        ]
    unique: dict[str, str] = {}
    for name in names:
        unique.setdefault(name_key(name), name)
    return list(unique.values())


class _LastfmPage:
    """Shared fetch logic for the Last.fm artist sub-pages."""

    _SUFFIX = ""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        min_interval: float = 0.5,
        base_url: str = _BASE_URL,
    ) -> None:
        self._http = http_client
        self._throttle = RequestThrottle(min_interval)
        self._base_url = base_url.rstrip("/")
        self._logger = get_logger(__name__)

    def page_url(self, name: str) -> str:
        return f"{self._base_url}/{lastfm_slug(name)}/{self._SUFFIX}"

    async def _fetch(self, name: str, provider: str) -> tuple[str | None, ProviderResult | None]:
        await self._throttle.wait()
        try:
            response = await get_response(self._http, self.page_url(name), provider)
        except RadioVenusError as exc:
            self._logger.warning(
                "lastfm_request_failed", artist=name, page=self._SUFFIX, error=str(exc)
            )
            return None, ProviderResult.transport_failure(provider, str(exc))
        if response.status_code == 404:
            return None, ProviderResult.no_result(provider)
        return response.text, None


class LastfmTagProvider(_LastfmPage, ITagProvider):
    """Top user tags from ``/music/<name>/+tags``."""

    _SUFFIX = "+tags"

    async def query(self, name: str, hint: str | None = None) -> ProviderResult[list[str]]:
        provider = self.get_provider_name()
        html, failure = await self._fetch(name, provider)
        if failure is not None:
            return failure
        tags = parse_tags(html or "")
        if not tags:
            return ProviderResult.no_result(provider, "no tags")
        return ProviderResult.found(tags, provider)

    def get_provider_name(self) -> str:
        return "lastfm"

    def is_available(self) -> bool:
        return True


class LastfmSimilarityProvider(_LastfmPage, ISimilarityProvider):
    """Similar artists from ``/music/<name>/+similar``."""

    _SUFFIX = "+similar"

    async def query(self, name: str, hint: str | None = None) -> ProviderResult[list[str]]:
        provider = self.get_provider_name()
        html, failure = await self._fetch(name, provider)
        if failure is not None:
            return failure
        similar = parse_similar(html or "", name)
        if not similar:
            return ProviderResult.no_result(provider, "no similar artists")
        return ProviderResult.found(similar, provider)

    def get_provider_name(self) -> str:
        return "lastfm_similar"

    def is_available(self) -> bool:
        return True
