"""Per-run resource ownership.

A :class:`RunContext` is opened once per command and handed to every
factory that needs a shared resource.  It owns:

- the ``httpx.AsyncClient`` used by every HTTP adapter;
- the headless browser session, launched only if something asks for it;
- the in-memory cache for resolution results.

All of them are closed when the context exits, including on error.
"""

from __future__ import annotations

from types import TracebackType

import httpx

from radio_venus.config.settings import Settings
from radio_venus.interfaces.cache_provider import ICacheProvider
from radio_venus.providers.browser.playwright_session import BrowserSession
from radio_venus.providers.cache.memory_cache import MemoryCacheProvider
from radio_venus.providers.http_support import DEFAULT_HEADERS
from radio_venus.utils.logging import get_logger


class RunContext:
    """Async context manager owning the shared resources of one run.

    Parameters
    ----------
    settings:
        Application settings.
    http_client:
        Injected client (tests).  When given, the context does not close it.
    cache:
        Injected cache; a fresh :class:`MemoryCacheProvider` otherwise.
    browser:
        Injected browser session (tests); otherwise created on first use.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
        cache: ICacheProvider | None = None,
        browser: BrowserSession | None = None,
    ) -> None:
        self.settings = settings
        self._http = http_client
        self._owns_http = http_client is None
        self.cache: ICacheProvider = cache or MemoryCacheProvider()
        self._browser = browser
        self._owns_browser = browser is None
        self._logger = get_logger(__name__)

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                timeout=self.settings.http_timeout,
                headers={**DEFAULT_HEADERS, "User-Agent": self.settings.http_user_agent},
            )
        return self._http

    @property
    def browser(self) -> BrowserSession:
        if self._browser is None:
            self._browser = BrowserSession(restart_every=self.settings.browser_restart_interval)
        return self._browser

    async def close(self) -> None:
        if self._browser is not None and self._owns_browser:
            await self._browser.close()
            self._browser = None
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None
        self._logger.debug("run_context_closed")

    async def __aenter__(self) -> RunContext:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
