"""
SessionManager
==============
Guarantees a live browser + page pair before any tool runs.

``acquire()`` launches the browser lazily, relaunches it when the driver
reports it disconnected, reopens the page when it has been closed, and
attaches the ``NetworkRecorder`` to every new page exactly once.

The session is never torn down implicitly: only a relaunch (or an explicit
``invalidate()``) closes the previous browser, and process exit reclaims the
last one. Calls are not synchronized; callers must serialize them.
"""

import logging
from dataclasses import dataclass

from playwright.async_api import Page

from .browser import Browser
from .browser_config import BrowserConfig
from .network import NetworkRecorder


@dataclass(frozen=True)
class Session:
    browser: Browser
    page: Page


class SessionManager:
    def __init__(self, config: BrowserConfig | None = None, recorder: NetworkRecorder | None = None):
        self.config = config or BrowserConfig()
        self.recorder = recorder or NetworkRecorder()
        self._browser: Browser | None = None
        self._page: Page | None = None
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def session(self) -> Session | None:
        if self._browser is None or self._page is None:
            return None
        return Session(self._browser, self._page)

    async def acquire(self) -> Page:
        """Return a live page, (re)launching the browser and reopening the page as needed."""
        try:
            browser = self._browser
            if browser is None or not browser.is_connected():
                browser = await self._relaunch()
            page = self._page
            if page is None or page.is_closed():
                self.logger.info("Opening new page")
                page = await browser.new_page()
                self.recorder.attach(page)
                self._page = page
            return page
        except Exception:
            self.logger.exception("Failed to acquire browser session")
            await self.invalidate()
            raise

    async def invalidate(self) -> None:
        """Drop the current session; the next ``acquire()`` performs a full relaunch."""
        stale = self._browser
        self._browser = None
        self._page = None
        if stale is not None:
            await self._close_quietly(stale)

    async def _relaunch(self) -> Browser:
        if self._browser is not None:
            self.logger.warning("Browser disconnected; relaunching")
            await self.invalidate()
        self._page = None
        browser = Browser(self.config)
        await browser.start()
        self._browser = browser
        return browser

    async def _close_quietly(self, browser: Browser) -> None:
        try:
            await browser.stop()
        except Exception as exc:  # pylint: disable=broad-exception-caught
            self.logger.debug("Ignoring error while closing stale browser: %s", exc)
