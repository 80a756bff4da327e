"""Thin wrapper around direct Playwright for ergonomic assertions."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Dict, Pattern

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page, expect
from playwright.async_api import TimeoutError as PlaywrightTimeout

logger = logging.getLogger(__name__)


@dataclass
class ToolError(Exception):
    """Raised when a browser operation fails."""

    name: str
    payload: Dict[str, Any]
    message: str

    def __str__(self) -> str:
        return f"{self.name} failed ({self.message}) with payload={self.payload}"


def _describe(locator: Locator) -> str:
    # Locator repr is "<Locator frame=... selector='internal:label=\"Heslo\"i'>"
    match = re.search(r"selector='(.*)'", repr(locator))
    return match.group(1) if match else repr(locator)


class Browser:
    """Convenience wrapper over direct Playwright with ergonomic API."""

    def __init__(self, page: Page, expect_timeout_ms: int = 5000) -> None:
        self._page = page
        self.expect_timeout_ms = expect_timeout_ms
        self.current_url: str | None = None
        self.current_title: str | None = None

    async def _update_state(self) -> None:
        """Update internal state from page."""
        self.current_url = self._page.url
        self.current_title = await self._page.title()

    def _fail(self, name: str, payload: Dict[str, Any], exc: Exception) -> ToolError:
        logger.debug("%s failed: %s", name, exc)
        return ToolError(name=name, payload=payload, message=str(exc))

    async def reset(self) -> Dict[str, Any]:
        """Navigate to about:blank (reset state)."""
        await self._page.goto("about:blank")
        await self._update_state()
        return {"url": self.current_url, "title": self.current_title}

    async def goto(self, url: str, wait_until: str = "networkidle", timeout: int | None = None) -> Dict[str, Any]:
        """Navigate to URL and return response with status.

        Args:
            url: URL to navigate to
            wait_until: Wait strategy - "networkidle", "domcontentloaded", or "load"
            timeout: Timeout in milliseconds (None = context default)

        Note: "networkidle" can time out on pages with analytics beacons or
              long-polling; the navigation is retried with "domcontentloaded".
        """
        try:
            response = await self._page.goto(url, wait_until=wait_until, timeout=timeout)
        except PlaywrightTimeout as exc:
            if wait_until != "networkidle":
                raise self._fail("goto", {"url": url, "wait_until": wait_until}, exc)
            try:
                response = await self._page.goto(url, wait_until="domcontentloaded", timeout=timeout)
            except PlaywrightError:
                raise self._fail("goto", {"url": url, "wait_until": wait_until}, exc)
        except PlaywrightError as exc:
            raise self._fail("goto", {"url": url, "wait_until": wait_until}, exc)
        await self._update_state()
        return {"url": self.current_url, "title": self.current_title, "status": response.status if response else None}

    # ---- locators ---------------------------------------------------------------
    def by_placeholder(self, text: str) -> Locator:
        return self._page.get_by_placeholder(text)

    def by_label(self, text: str) -> Locator:
        return self._page.get_by_label(text)

    def by_text(self, text: str) -> Locator:
        return self._page.get_by_text(text)

    def by_role(self, role: str, name: str) -> Locator:
        return self._page.get_by_role(role, name=name)

    # ---- actions ----------------------------------------------------------------
    async def fill(self, locator: Locator, value: str) -> Dict[str, Any]:
        """Fill input field."""
        target = _describe(locator)
        try:
            await locator.fill(value)
        except PlaywrightError as exc:
            raise self._fail("fill", {"locator": target, "value": value}, exc)
        return {"locator": target, "value": value}

    async def click(self, locator: Locator) -> Dict[str, Any]:
        """Click element."""
        target = _describe(locator)
        try:
            await locator.click()
        except PlaywrightError as exc:
            raise self._fail("click", {"locator": target}, exc)
        await self._update_state()
        return {"locator": target, "url": self.current_url}

    async def blur(self, locator: Locator) -> Dict[str, Any]:
        """Remove focus from element, firing its blur handlers."""
        target = _describe(locator)
        try:
            await locator.blur()
        except PlaywrightError as exc:
            raise self._fail("blur", {"locator": target}, exc)
        return {"locator": target}

    async def wait_for_url(self, url: str | Pattern[str], timeout: int | None = None) -> str:
        """Wait until the page URL matches a glob or regex, return the final URL."""
        try:
            await self._page.wait_for_url(url, timeout=timeout)
        except PlaywrightError as exc:
            raise self._fail("wait_for_url", {"url": str(url), "current_url": self._page.url}, exc)
        await self._update_state()
        return self._page.url

    # ---- assertions -------------------------------------------------------------
    async def expect_visible(self, locator: Locator) -> None:
        await expect(locator).to_be_visible(timeout=self.expect_timeout_ms)

    async def expect_hidden(self, locator: Locator) -> None:
        await expect(locator).not_to_be_visible(timeout=self.expect_timeout_ms)

    async def expect_text_visible(self, text: str) -> None:
        await self.expect_visible(self.by_text(text))

    async def expect_text_hidden(self, text: str) -> None:
        await self.expect_hidden(self.by_text(text))

    async def screenshot(self, name: str, directory: str) -> str:
        """Save a full-page PNG screenshot and return its path."""
        os.makedirs(directory, exist_ok=True)
        safe_name = re.sub(r"[^A-Za-z0-9_.-]+", "_", name)
        path = os.path.join(directory, f"{safe_name}.png")
        try:
            await self._page.screenshot(path=path, type="png", full_page=True)
        except PlaywrightError as exc:
            raise self._fail("screenshot", {"name": name}, exc)
        return path
