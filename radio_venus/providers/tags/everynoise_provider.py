"""Authority tag provider: Every Noise at Once artist research page.

The page is rendered client-side and can take many seconds to settle for
obscure artists, so it is driven through the shared
:class:`~radio_venus.providers.browser.BrowserSession` rather than fetched
with httpx.  Genre links of the exact-name match are read first; if the
site found no exact match, the first result set is used instead.
"""

from __future__ import annotations

import asyncio
from urllib.parse import quote

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from radio_venus.interfaces.tag_provider import ITagProvider
from radio_venus.models.resolution import ProviderResult
from radio_venus.providers.browser.playwright_session import BrowserSession
from radio_venus.utils.logging import get_logger

_RESEARCH_URL = "https://everynoise.com/research.cgi"
EXACT_SELECTOR = '#exact + div .note a[href*="mode=genre"]'
FALLBACK_SELECTOR = '.setname + div .note a[href*="mode=genre"]'
_ANY_GENRE_SELECTOR = f"{EXACT_SELECTOR}, {FALLBACK_SELECTOR}"
_LINK_TEXTS_JS = "els => els.map(el => el.textContent.trim()).filter(Boolean)"


class EverynoiseTagProvider(ITagProvider):
    """Genre tags as the authority lists them.

    Parameters
    ----------
    browser:
        Session owned by the run context.
    selector_timeout:
        Seconds to wait for genre links to appear.
    artist_timeout:
        Hard limit in seconds for the whole lookup of one artist.
    """

    def __init__(
        self,
        browser: BrowserSession,
        selector_timeout: float = 20.0,
        artist_timeout: float = 60.0,
        base_url: str = _RESEARCH_URL,
    ) -> None:
        self._browser = browser
        self._selector_timeout_ms = int(selector_timeout * 1000)
        self._artist_timeout = artist_timeout
        self._base_url = base_url
        self._logger = get_logger(__name__)

    def research_url(self, name: str) -> str:
        return f"{self._base_url}?name={quote(name, safe='')}&mode=artist"

    async def _read_links(self, page: Page, selector: str) -> list[str]:
        try:
            return await page.eval_on_selector_all(selector, _LINK_TEXTS_JS)
        except PlaywrightError:
            return []

    async def _scrape(self, name: str) -> list[str]:
        async with self._browser.page() as page:
            await page.goto(self.research_url(name), wait_until="domcontentloaded", timeout=30000)
            try:
                await page.wait_for_selector(_ANY_GENRE_SELECTOR, timeout=self._selector_timeout_ms)
            except PlaywrightTimeoutError:
                # Absent links mean "no result"; handled by the caller.
                pass
            genres = await self._read_links(page, EXACT_SELECTOR)
            if not genres:
                genres = await self._read_links(page, FALLBACK_SELECTOR)
            return genres

    async def query(self, name: str, hint: str | None = None) -> ProviderResult[list[str]]:
        provider = self.get_provider_name()
        try:
            genres = await asyncio.wait_for(self._scrape(name), timeout=self._artist_timeout)
        except asyncio.TimeoutError:
            self._logger.warning("everynoise_artist_timeout", artist=name)
            return ProviderResult.transport_failure(provider, "artist timeout")
        except PlaywrightError as exc:
            self._logger.warning("everynoise_page_failed", artist=name, error=str(exc)[:200])
            return ProviderResult.transport_failure(provider, str(exc)[:200])

        if not genres:
            return ProviderResult.no_result(provider)
        return ProviderResult.found(genres, provider)

    def get_provider_name(self) -> str:
        return "everynoise"

    def is_available(self) -> bool:
        return True
