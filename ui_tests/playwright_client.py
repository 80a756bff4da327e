"""
Direct Playwright Client
========================

Launches Playwright in-process and hands out one isolated browser context
per client. The sign-up suite creates a fresh client for every test case.

Usage:
    from ui_tests.playwright_client import PlaywrightClient

    async with PlaywrightClient() as client:
        await client.page.goto("https://auth.votify.app/cs/sign-up")
        await client.page.get_by_label("Heslo").fill("ValidPass123")
"""

import logging
import os
from typing import Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

logger = logging.getLogger(__name__)


class BrowserNotInstalledError(RuntimeError):
    """Raised when Playwright's browser binaries are missing."""


class PlaywrightClient:
    """
    Direct Playwright client owning one browser, one context and one page.

    Example:
        async with PlaywrightClient(headless=True) as client:
            page = client.page
            await page.goto("https://example.com")
    """

    def __init__(
        self,
        browser_type: str = "chromium",
        headless: Optional[bool] = None,
        timeout: int = 30000,
        locale: Optional[str] = None,
    ):
        """
        Initialize Playwright client.

        Args:
            browser_type: Browser to use (chromium, firefox, webkit)
            headless: Run in headless mode (None = read PLAYWRIGHT_HEADLESS)
            timeout: Default timeout in milliseconds for actions and navigation
            locale: Browser locale, e.g. "cs-CZ" (None = browser default)
        """
        self.browser_type = browser_type
        if headless is not None:
            self.headless = headless
        else:
            headless_str = os.getenv('PLAYWRIGHT_HEADLESS')
            if not headless_str:
                headless_str = 'true'
                print("[CONFIG] WARNING: PLAYWRIGHT_HEADLESS not set, using default: true")
            self.headless = headless_str.lower() in {'true', '1'}
        self.timeout = timeout
        self.locale = locale

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def __aenter__(self):
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def connect(self):
        """Launch the browser and open a fresh context + page."""
        self._playwright = await async_playwright().start()

        launcher = getattr(self._playwright, self.browser_type, None)
        if launcher is None:
            await self.close()
            raise ValueError(f"Unknown browser type: {self.browser_type}")

        try:
            self._browser = await launcher.launch(headless=self.headless)
        except Exception as exc:
            await self.close()
            if "Executable doesn't exist" in str(exc):
                raise BrowserNotInstalledError(
                    f"Playwright {self.browser_type} is not installed - run: playwright install {self.browser_type}"
                ) from exc
            raise

        context_options = {}
        if self.locale:
            context_options["locale"] = self.locale
        try:
            self._context = await self._browser.new_context(**context_options)
            self._context.set_default_timeout(self.timeout)
            self._context.set_default_navigation_timeout(self.timeout)

            self._page = await self._context.new_page()
        except Exception:
            await self.close()
            raise
        logger.debug("Launched %s (headless=%s, timeout=%sms)", self.browser_type, self.headless, self.timeout)

    async def close(self):
        """Close all connections and cleanup resources."""
        if self._page:
            await self._page.close()
            self._page = None

        if self._context:
            await self._context.close()
            self._context = None

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    @property
    def context(self) -> BrowserContext:
        """Get the default context."""
        if not self._context:
            raise RuntimeError("Client not connected")
        return self._context

    @property
    def page(self) -> Page:
        """Get the default page."""
        if not self._page:
            raise RuntimeError("Client not connected or page not created")
        return self._page
