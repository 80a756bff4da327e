import logging
import sys
import threading
from dataclasses import replace
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ui_tests.browser import Browser
from ui_tests.config import UiTargetProfile, settings
from ui_tests.playwright_client import BrowserNotInstalledError, PlaywrightClient

logger = logging.getLogger(__name__)


def pytest_configure(config):
    config.addinivalue_line("markers", "e2e: browser-driven test against the sign-up page")


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item (rep_setup, rep_call, rep_teardown)."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


# ============================================================================
# Target fixtures
# ============================================================================

@pytest.fixture(scope="session")
def mock_signup_server():
    """Run the replica sign-up app on an ephemeral port for the whole session."""
    from werkzeug.serving import make_server
    from ui_tests.mock_signup_app import create_mock_signup_app, reset_mock_state

    reset_mock_state()
    server = make_server("127.0.0.1", 0, create_mock_signup_app(), threaded=True)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    base_url = f"http://127.0.0.1:{server.server_port}"
    logger.info("Mock sign-up server listening on %s", base_url)

    yield base_url

    server.shutdown()
    thread.join(timeout=5)
    reset_mock_state()


@pytest.fixture(scope="session")
def signup_target(request) -> UiTargetProfile:
    """Resolve the profile the suite runs against (live origin or replica)."""
    profile = settings.active
    if profile.is_mock:
        base_url = request.getfixturevalue("mock_signup_server")
        return replace(profile, base_url=base_url)

    try:
        httpx.get(settings.sign_up_url, timeout=10, follow_redirects=True)
    except httpx.HTTPError as exc:
        pytest.skip(f"Sign-up page {settings.sign_up_url} not reachable ({exc}) - run with UI_TARGET=mock")
    return profile


@pytest.fixture()
def active_profile(signup_target):
    """Activate the resolved target profile for one test."""
    with settings.use_profile(signup_target) as profile:
        yield profile


# ============================================================================
# Browser fixtures
# ============================================================================

@pytest_asyncio.fixture()
async def playwright_client(active_profile):
    """Create a Playwright client (own browser + context) for one test."""
    client = PlaywrightClient(
        browser_type=settings.playwright_browser,
        headless=settings.playwright_headless,
        timeout=active_profile.timeout_ms,
        locale=active_profile.locale,
    )
    try:
        await client.connect()
    except BrowserNotInstalledError as exc:
        pytest.skip(str(exc))
    try:
        yield client
    finally:
        await client.close()


@pytest_asyncio.fixture()
async def browser(playwright_client, active_profile, request):
    """Create a Browser instance with the Playwright page."""
    browser = Browser(playwright_client.page, expect_timeout_ms=active_profile.expect_timeout_ms)
    await browser.reset()
    yield browser

    report = getattr(request.node, "rep_call", None)
    if settings.screenshot_dir and report is not None and report.failed:
        path = await browser.screenshot(request.node.name, settings.screenshot_dir)
        logger.info("Saved failure screenshot to %s", path)
