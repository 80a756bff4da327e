import sys
from pathlib import Path

import pytest_asyncio

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ui_tests.workflows import open_sign_up_page


@pytest_asyncio.fixture()
async def sign_up_page(browser):
    """Browser already sitting on a freshly loaded sign-up page."""
    await open_sign_up_page(browser)
    return browser
