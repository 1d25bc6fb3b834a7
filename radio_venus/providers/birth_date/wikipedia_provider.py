"""Tier 4 of the birth-date chain: English Wikipedia infobox scrape.

The lead section wikitext of the page is fetched through the MediaWiki
API (``prop=revisions&rvsection=0``) for the bare name and then for the
``(musician)`` and ``(band)`` disambiguations.  The first page that yields
a date through one of the patterns below wins; patterns are tried in
order, most structured first.  Prose dates, abbreviated month names
included, are read with python-dateutil and must name a full day.
"""

from __future__ import annotations

import re
from typing import Any

import httpx

from radio_venus.interfaces.birth_date_provider import IBirthDateProvider
from radio_venus.models.resolution import BirthDateCandidate, ProviderResult
from radio_venus.providers.http_support import get_json
from radio_venus.services.date_normalizer import parse_free_text_date
from radio_venus.utils.concurrency import RequestThrottle
from radio_venus.utils.errors import RadioVenusError
from radio_venus.utils.logging import get_logger

_API_URL = "https://en.wikipedia.org/w/api.php"

_MONTH_DAY_YEAR = r"([A-Z][a-z]+\.? \d{1,2},?\s*\d{4})"

# {{Birth date and age|1971|8|18}} / {{birth date|1971|8|18}}
_TEMPLATE_YMD = re.compile(r"\{\{[Bb]irth date(?:\s+and\s+age)?\|(\d{4})\|(\d{1,2})\|(\d{1,2})")
# {{birth date|mf=yes|August 18, 1971}}
_TEMPLATE_TEXT = re.compile(r"\{\{[Bb]irth[- ]date\|(?:[^|}]*\|)*" + _MONTH_DAY_YEAR)
# | birth_date = August 18, 1971
_INFOBOX_TEXT = re.compile(r"birth_date\s*=\s*(?:\{\{[^}]*\}\}\s*)?" + _MONTH_DAY_YEAR)
# (born August 18, 1971)
_BORN_TEXT = re.compile(r"born[^)]*?" + _MONTH_DAY_YEAR)
# born ... 1971-08-18
_BORN_ISO = re.compile(r"(?:born|birth_date)[^}]*?(\d{4}-\d{2}-\d{2})")


def extract_birth_date(wikitext: str) -> str | None:
    """Return an ISO date found in *wikitext*, or ``None``."""
    match = _TEMPLATE_YMD.search(wikitext)
    if match:
        year, month, day = match.groups()
        return f"{year}-{int(month):02d}-{int(day):02d}"

    for pattern in (_TEMPLATE_TEXT, _INFOBOX_TEXT, _BORN_TEXT):
        match = pattern.search(wikitext)
        if match:
            parsed = parse_free_text_date(match.group(1))
            if parsed and parsed.count("-") == 2:
                return parsed

    match = _BORN_ISO.search(wikitext)
    return match.group(1) if match else None


def _lead_wikitext(data: Any) -> str | None:
    pages = ((data or {}).get("query") or {}).get("pages") or {}
    for page_id, page in pages.items():
        if page_id == "-1" or "missing" in page:
            continue
        revisions = page.get("revisions") or []
        if revisions:
            rev = revisions[0]
            return rev.get("*") or (rev.get("slots", {}).get("main", {}).get("*"))
    return None


class WikipediaBirthDateProvider(IBirthDateProvider):
    """Infobox scrape through the MediaWiki API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        min_interval: float = 0.2,
        api_url: str = _API_URL,
    ) -> None:
        self._http = http_client
        self._throttle = RequestThrottle(min_interval)
        self._api_url = api_url
        self._logger = get_logger(__name__)

    @staticmethod
    def candidate_titles(name: str) -> list[str]:
        return [name, f"{name} (musician)", f"{name} (band)"]

    async def query(
        self, name: str, hint: str | None = None
    ) -> ProviderResult[BirthDateCandidate]:
        provider = self.get_provider_name()
        failures: list[str] = []
        for title in self.candidate_titles(name):
            await self._throttle.wait()
            try:
                data = await get_json(
                    self._http,
                    self._api_url,
                    provider,
                    params={
                        "action": "query",
                        "prop": "revisions",
                        "rvprop": "content",
                        "rvsection": 0,
                        "titles": title,
                        "format": "json",
                        "redirects": 1,
                    },
                )
            except RadioVenusError as exc:
                failures.append(str(exc))
                continue

            wikitext = _lead_wikitext(data)
            if not wikitext:
                continue
            found = extract_birth_date(wikitext)
            if found:
                self._logger.debug("wikipedia_date_extracted", artist=name, title=title)
                return ProviderResult.found(BirthDateCandidate(raw=found, label=title), provider)

        if failures and len(failures) == len(self.candidate_titles(name)):
            return ProviderResult.transport_failure(provider, failures[-1])
        return ProviderResult.no_result(provider)

    def get_provider_name(self) -> str:
        return "wikipedia"

    def is_available(self) -> bool:
        return True
