"""Shared configuration for the sign-up UI tests.

Configuration is read from the environment:
- UI_TARGET=live (default): tests run against UI_BASE_URL (https://auth.votify.app)
- UI_TARGET=mock: tests run against the bundled replica (ui_tests/mock_signup_app.py)

Set PLAYWRIGHT_HEADLESS=false to watch the browser.
"""
from __future__ import annotations

import os
from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass
from typing import Iterator
from urllib.parse import urljoin

DEFAULT_BASE_URL = "https://auth.votify.app"
DEFAULT_LOCALE = "cs"
SUPPORTED_TARGETS = ("live", "mock")
SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


@dataclass
class UiTargetProfile:
    """Host + locale + timeouts for one UI test target."""

    name: str
    base_url: str
    locale: str = DEFAULT_LOCALE
    timeout_ms: int = 30000
    expect_timeout_ms: int = 5000

    @property
    def sign_up_path(self) -> str:
        return f"/{self.locale}/sign-up"

    @property
    def is_mock(self) -> bool:
        return self.name == "mock"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer (milliseconds), got {raw!r}") from None
    if value <= 0:
        raise RuntimeError(f"{name} must be positive, got {value}")
    return value


class UiTestConfig:
    """Configuration loaded from environment variables.

    UI_TARGET selects which deployment to test:
    - "live" (default): the real sign-up page at UI_BASE_URL
    - "mock": the local replica; its base URL is only known once the
      replica server is running, so conftest swaps it in via use_profile()
    """

    def __init__(self) -> None:
        target = os.getenv("UI_TARGET", "live").strip().lower()
        if target not in SUPPORTED_TARGETS:
            raise RuntimeError(
                f"UI_TARGET must be one of {', '.join(SUPPORTED_TARGETS)}, got {target!r}"
            )
        self._target = target

        headless_str = os.getenv("PLAYWRIGHT_HEADLESS", "true")
        self.playwright_headless: bool = headless_str.lower() in {"true", "1"}

        browser_type = os.getenv("PLAYWRIGHT_BROWSER", "chromium").strip().lower()
        if browser_type not in SUPPORTED_BROWSERS:
            raise RuntimeError(
                f"PLAYWRIGHT_BROWSER must be one of {', '.join(SUPPORTED_BROWSERS)}, got {browser_type!r}"
            )
        self.playwright_browser: str = browser_type

        self.screenshot_dir: str | None = os.getenv("SCREENSHOT_DIR") or None

        base_url = os.getenv("UI_BASE_URL") or DEFAULT_BASE_URL
        if target == "mock":
            # Placeholder until the replica server picks a port
            base_url = "http://127.0.0.1"

        primary = UiTargetProfile(
            name=target,
            base_url=base_url,
            locale=os.getenv("UI_LOCALE", DEFAULT_LOCALE).strip("/") or DEFAULT_LOCALE,
            timeout_ms=_int_env("UI_TIMEOUT_MS", 30000),
            expect_timeout_ms=_int_env("UI_EXPECT_TIMEOUT_MS", 5000),
        )

        print(f"[CONFIG] target={primary.name} base_url={primary.base_url} locale={primary.locale}")

        self._active: UiTargetProfile = primary

    # ---- target info ------------------------------------------------------------
    @property
    def target(self) -> str:
        return self._target

    # ---- active profile helpers -------------------------------------------------
    @property
    def active(self) -> UiTargetProfile:
        return self._active

    @property
    def base_url(self) -> str:
        return self._active.base_url

    @property
    def locale(self) -> str:
        return self._active.locale

    @property
    def timeout_ms(self) -> int:
        return self._active.timeout_ms

    @property
    def expect_timeout_ms(self) -> int:
        return self._active.expect_timeout_ms

    @property
    def sign_up_url(self) -> str:
        return self.url(self._active.sign_up_path)

    # ---- profile orchestration --------------------------------------------------
    @contextmanager
    def use_profile(self, profile: UiTargetProfile) -> Iterator[UiTargetProfile]:
        """Context manager to temporarily switch active profile.

        Activates a COPY of the profile so mutations made during a test do
        not leak into later tests in the same process.
        """
        previous = self._active
        self._active = deepcopy(profile)
        try:
            yield self._active
        finally:
            self._active = previous

    # ---- utility helpers --------------------------------------------------------
    def url(self, path: str) -> str:
        """Return an absolute URL for the provided path."""
        return urljoin(self.base_url.rstrip("/") + "/", path.lstrip("/"))


# Singleton instance - initialized on first import
settings = UiTestConfig()
