from radio_venus.providers.browser.playwright_session import BrowserSession

__all__ = ["BrowserSession"]
