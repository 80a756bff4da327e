"""Tests for PlaywrightClient resource cleanup, using stand-in Playwright objects.

Run with: pytest ui_tests/tests/test_playwright_client.py -v
"""
import pytest

import ui_tests.playwright_client as playwright_client_module
from ui_tests.playwright_client import BrowserNotInstalledError, PlaywrightClient

pytestmark = pytest.mark.asyncio


class FakeContext:
    def __init__(self, fail_new_page=False):
        self.fail_new_page = fail_new_page
        self.closed = False

    def set_default_timeout(self, timeout):
        self.timeout = timeout

    def set_default_navigation_timeout(self, timeout):
        self.navigation_timeout = timeout

    async def new_page(self):
        if self.fail_new_page:
            raise RuntimeError("page crashed")
        return FakePage()

    async def close(self):
        self.closed = True


class FakePage:
    async def close(self):
        pass


class FakeBrowser:
    def __init__(self, context=None, fail_new_context=False):
        self.context = context or FakeContext()
        self.fail_new_context = fail_new_context
        self.closed = False

    async def new_context(self, **kwargs):
        if self.fail_new_context:
            raise RuntimeError("context refused")
        return self.context

    async def close(self):
        self.closed = True


class FakeLauncher:
    def __init__(self, browser=None, error=None):
        self.browser = browser
        self.error = error

    async def launch(self, headless):
        if self.error:
            raise self.error
        return self.browser


class FakePlaywright:
    def __init__(self, launcher):
        self.chromium = launcher
        self.stopped = False

    async def stop(self):
        self.stopped = True


class FakeStarter:
    def __init__(self, playwright):
        self.playwright = playwright

    async def start(self):
        return self.playwright


@pytest.fixture
def install_fake(monkeypatch):
    def _install(launcher):
        playwright = FakePlaywright(launcher)
        monkeypatch.setattr(playwright_client_module, "async_playwright", lambda: FakeStarter(playwright))
        return playwright
    return _install


class TestConnectCleanup:
    """A failed connect() leaves no browser or driver behind."""

    async def test_new_context_failure_closes_browser(self, install_fake):
        browser = FakeBrowser(fail_new_context=True)
        playwright = install_fake(FakeLauncher(browser=browser))
        client = PlaywrightClient(headless=True)

        with pytest.raises(RuntimeError, match="context refused"):
            await client.connect()

        assert browser.closed
        assert playwright.stopped
        with pytest.raises(RuntimeError, match="not connected"):
            client.context

    async def test_new_page_failure_closes_context_and_browser(self, install_fake):
        context = FakeContext(fail_new_page=True)
        browser = FakeBrowser(context=context)
        playwright = install_fake(FakeLauncher(browser=browser))
        client = PlaywrightClient(headless=True)

        with pytest.raises(RuntimeError, match="page crashed"):
            await client.connect()

        assert context.closed
        assert browser.closed
        assert playwright.stopped

    async def test_missing_executable_reported(self, install_fake):
        playwright = install_fake(FakeLauncher(error=RuntimeError("Executable doesn't exist at /ms-playwright/chromium")))
        client = PlaywrightClient(headless=True)

        with pytest.raises(BrowserNotInstalledError, match="playwright install chromium"):
            await client.connect()

        assert playwright.stopped

    async def test_successful_connect_sets_timeouts(self, install_fake):
        browser = FakeBrowser()
        install_fake(FakeLauncher(browser=browser))

        async with PlaywrightClient(headless=True, timeout=1234) as client:
            assert client.context.timeout == 1234
            assert client.context.navigation_timeout == 1234

        assert browser.closed
