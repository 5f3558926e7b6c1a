"""
Browser
=======
One Playwright driver, one Chromium process and one browser context, owned
together and released together. ``SessionManager`` builds a new ``Browser``
for every (re)launch.

    DEFAULT  — plain Playwright Chromium.
    STEALTH  — the driver is wrapped by playwright-stealth.

Usage::

    async with Browser(BrowserConfig(headless=True)) as browser:
        page = await browser.new_page()
        assert browser.is_connected()
"""

import logging
from contextlib import AsyncExitStack
from types import TracebackType
from typing import Any, Self

from playwright.async_api import Browser as PWBrowser
from playwright.async_api import BrowserContext, Page, async_playwright
from playwright_stealth import Stealth

from .browser_config import BrowserConfig
from .browser_type import BrowserType


class Browser:
    def __init__(self, config: BrowserConfig | None = None):
        self.config = config or BrowserConfig()
        self._stack: AsyncExitStack | None = None
        self._browser: PWBrowser | None = None
        self.context: BrowserContext | None = None
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def is_connected(self) -> bool:
        """Ask the driver whether the browser process is still reachable. Never cached."""
        return self._browser is not None and self._browser.is_connected()

    async def start(self) -> None:
        if self._stack is not None:
            raise RuntimeError("Browser already started. Call stop() before starting again.")
        cfg = self.config
        self.logger.info("Launching Chromium (%s, headless=%s)", cfg.type.value, cfg.headless)
        self._stack = AsyncExitStack()
        try:
            driver = await self._stack.enter_async_context(self._driver())
            launch_options: dict[str, Any] = {"headless": cfg.headless, "args": cfg.args}
            if cfg.type is BrowserType.STEALTH:
                launch_options["channel"] = cfg.channel
            self._browser = await driver.chromium.launch(**launch_options)
            self.context = await self._browser.new_context(**cfg.context_options())
        except Exception:
            await self.stop()
            raise

    def _driver(self):
        match self.config.type:
            case BrowserType.STEALTH:
                return Stealth().use_async(async_playwright())
            case BrowserType.DEFAULT:
                return async_playwright()
        raise ValueError(f"Unsupported BrowserType: {self.config.type}")

    async def stop(self) -> None:
        """Idempotent; a browser that already died is not closed again, its driver is still shut down."""
        stack, browser, context = self._stack, self._browser, self.context
        self._stack, self._browser, self.context = None, None, None
        if stack is None:
            return
        self.logger.info("Stopping browser")
        async with stack:
            if browser is not None and browser.is_connected():
                if context is not None:
                    await context.close()
                await browser.close()

    async def new_page(self) -> Page:
        """Open a fresh page in the browser context."""
        if self.context is None:
            raise RuntimeError("Browser not started. Call start() or use as async context manager.")
        return await self.context.new_page()

    async def __aenter__(self) -> Self:
        await self.start()
        return self

    async def __aexit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        await self.stop()
