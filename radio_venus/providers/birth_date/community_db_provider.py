"""Tier 5 of the birth-date chain: RateYourMusic artist pages.

Last resort for artists no structured source knows.  The artist page at
``/artist/<slug>`` carries an info table whose "Born" (people) or "Formed"
(groups) row holds a date such as ``18 August 1971, Limerick``,
``March 1991`` or ``1994``.

The site fronts a bot challenge.  A challenge page (HTTP 403/503, or a
body carrying the challenge markers) is not an error: it simply means this
tier has nothing to offer for the current run.
"""

from __future__ import annotations

import re

import httpx
from bs4 import BeautifulSoup

from radio_venus.interfaces.birth_date_provider import IBirthDateProvider
from radio_venus.models.resolution import BirthDateCandidate, ProviderResult
from radio_venus.providers.http_support import DEFAULT_HEADERS
from radio_venus.services.date_normalizer import parse_free_text_date
from radio_venus.utils.concurrency import RequestThrottle
from radio_venus.utils.logging import get_logger
from radio_venus.utils.text_normalizer import rym_slug

_BASE_URL = "https://rateyourmusic.com"
_BROWSER_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
_CHALLENGE_MARKERS = ("just a moment", "cf-challenge", "challenge-platform", "captcha")
_DATE_ROWS = ("born", "formed")

_DAY_MONTH_YEAR = re.compile(r"\b\d{1,2} [A-Z][a-z]+\.? \d{4}\b")
_MONTH_YEAR = re.compile(r"\b[A-Z][a-z]+\.? \d{4}\b")
_YEAR = re.compile(r"\b(\d{4})\b")


def is_challenge_page(status_code: int, body: str) -> bool:
    if status_code in (403, 503):
        return True
    head = body[:4000].lower()
    return any(marker in head for marker in _CHALLENGE_MARKERS)


def parse_info_date(text: str) -> str | None:
    """Turn an info-row value into ``YYYY-MM-DD``, ``YYYY-MM`` or ``YYYY``.

    The most precise date phrase wins; a phrase whose month word is not a
    month (``Limerick 1971``) is passed over for the next pattern.
    """
    for pattern, parts in ((_DAY_MONTH_YEAR, 2), (_MONTH_YEAR, 1)):
        match = pattern.search(text)
        if match:
            parsed = parse_free_text_date(match.group(0))
            if parsed and parsed.count("-") == parts:
                return parsed
    match = _YEAR.search(text)
    return match.group(1) if match else None


def extract_info_date(html: str) -> str | None:
    """Return the raw date text of the Born/Formed row, parsed."""
    soup = BeautifulSoup(html, "html.parser")
    for header in soup.select(".info_hdr"):
        if header.get_text(strip=True).lower() not in _DATE_ROWS:
            continue
        content = header.find_next_sibling(class_="info_content")
        if content is not None:
            parsed = parse_info_date(content.get_text(" ", strip=True))
            if parsed:
                return parsed
    return None


class CommunityDbBirthDateProvider(IBirthDateProvider):
    """Scrape of the community music database, tolerant of bot challenges."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        min_interval: float = 2.0,
        base_url: str = _BASE_URL,
    ) -> None:
        self._http = http_client
        self._throttle = RequestThrottle(min_interval)
        self._base_url = base_url.rstrip("/")
        self._logger = get_logger(__name__)

    async def query(
        self, name: str, hint: str | None = None
    ) -> ProviderResult[BirthDateCandidate]:
        provider = self.get_provider_name()
        slug = rym_slug(name)
        if not slug:
            return ProviderResult.no_result(provider, "empty slug")

        url = f"{self._base_url}/artist/{slug}"
        await self._throttle.wait()
        try:
            response = await self._http.get(
                url,
                headers={**DEFAULT_HEADERS, "User-Agent": _BROWSER_UA},
                follow_redirects=True,
            )
        except httpx.HTTPError as exc:
            self._logger.warning("community_db_request_failed", artist=name, error=str(exc))
            return ProviderResult.transport_failure(provider, str(exc))

        if is_challenge_page(response.status_code, response.text):
            self._logger.info(
                "community_db_bot_challenge", artist=name, status=response.status_code
            )
            return ProviderResult.no_result(provider, "bot challenge")
        if response.status_code == 404:
            return ProviderResult.no_result(provider)
        if response.status_code >= 400:
            return ProviderResult.transport_failure(provider, f"HTTP {response.status_code}")

        found = extract_info_date(response.text)
        if found is None:
            return ProviderResult.no_result(provider, "no born/formed row")
        candidate = BirthDateCandidate(raw=found, stable_id=None, label=slug)
        return ProviderResult.found(candidate, provider)

    def get_provider_name(self) -> str:
        return "community_db"

    def is_available(self) -> bool:
        return True
