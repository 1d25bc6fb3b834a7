"""Headless Chromium session for the JavaScript-rendered authority pages.

One :class:`BrowserSession` is owned by the run context: it is launched
lazily on the first page request and closed when the context exits.  Long
verification runs leak memory in Chromium and occasionally leave it hung,
so the browser is relaunched after every ``restart_every`` pages.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from radio_venus.utils.errors import ProviderUnavailableError
from radio_venus.utils.logging import get_logger

_DESKTOP_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class BrowserSession:
    """Lazily launched, periodically restarted Chromium.

    Parameters
    ----------
    restart_every:
        Number of pages served before the browser is relaunched.
    headless:
        Passed to ``chromium.launch``.
    """

    def __init__(self, restart_every: int = 50, headless: bool = True) -> None:
        self._restart_every = max(1, restart_every)
        self._headless = headless
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._pages_served = 0
        self._lock = asyncio.Lock()
        self._logger = get_logger(__name__)

    @property
    def pages_served(self) -> int:
        return self._pages_served

    @property
    def is_open(self) -> bool:
        return self._browser is not None

    async def _launch(self) -> None:
        if self._playwright is None:
            self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self._headless,
            args=["--no-sandbox", "--disable-setuid-sandbox"],
        )
        self._context = await self._browser.new_context(
            user_agent=_DESKTOP_UA,
            viewport={"width": 1280, "height": 900},
        )
        self._logger.info("browser_launched", pages_served=self._pages_served)

    async def _close_browser(self) -> None:
        if self._context is not None:
            try:
                await self._context.close()
            except Exception as exc:  # noqa: BLE001
                self._logger.debug("browser_context_close_failed", error=str(exc))
        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception as exc:  # noqa: BLE001
                self._logger.debug("browser_close_failed", error=str(exc))
        self._context = None
        self._browser = None

    async def _ensure_browser(self) -> BrowserContext:
        async with self._lock:
            due = self._pages_served > 0 and self._pages_served % self._restart_every == 0
            if self._browser is not None and due:
                self._logger.info("browser_restart", pages_served=self._pages_served)
                await self._close_browser()
            if self._browser is None:
                await self._launch()
            self._pages_served += 1
            if self._context is None:
                raise ProviderUnavailableError("Browser context failed to start", "playwright")
            return self._context

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Page]:
        """Yield a fresh page, closing it afterwards whatever happens."""
        context = await self._ensure_browser()
        page = await context.new_page()
        try:
            yield page
        finally:
            try:
                await page.close()
            except Exception as exc:  # noqa: BLE001
                self._logger.debug("page_close_failed", error=str(exc))

    async def close(self) -> None:
        """Close the browser and stop the Playwright driver."""
        await self._close_browser()
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None

    async def __aenter__(self) -> BrowserSession:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
