"""Reusable workflows for the registration form."""
from __future__ import annotations

import logging
import secrets
import string
from dataclasses import dataclass
from typing import Dict
from urllib.parse import parse_qs, urlparse

from ui_tests.browser import Browser
from ui_tests.config import settings

logger = logging.getLogger(__name__)

SUCCESS_URL_GLOB = "**/successful-sign-up?email=*"
SUCCESS_PATH_SEGMENT = "successful-sign-up"
MIN_PASSWORD_LENGTH = 8
VALID_PASSWORD = "ValidPass123"

_RANDOM_ALPHABET = string.ascii_lowercase + string.digits


@dataclass(frozen=True)
class SignUpMessages:
    """Localized labels and feedback rendered by the sign-up page."""

    email_label: str
    email_placeholder: str
    password_label: str
    confirm_password_label: str
    submit_button: str
    invalid_email: str
    password_mismatch: str
    password_too_short: str


MESSAGES: Dict[str, SignUpMessages] = {
    "cs": SignUpMessages(
        email_label="E-mail",
        email_placeholder="name@gmail.com",
        password_label="Heslo",
        confirm_password_label="Potvrzení hesla",
        submit_button="Registrace",
        invalid_email="Nevalidní e-mail",
        password_mismatch="Kontrola hesla se neshoduje",
        password_too_short=f"Musí obsahovat alespoň {MIN_PASSWORD_LENGTH} znaků",
    ),
}


def messages_for(locale: str | None = None) -> SignUpMessages:
    locale = locale or settings.locale
    try:
        return MESSAGES[locale]
    except KeyError:
        raise KeyError(f"No sign-up messages for locale {locale!r}; known: {', '.join(MESSAGES)}") from None


@dataclass
class SignUpFormData:
    email: str
    password: str
    confirm_password: str


def generate_random_email(prefix: str = "test", domain: str = "example.com") -> str:
    """Return a throwaway address like test.k3j9x0a1b2c3d@example.com."""
    suffix = "".join(secrets.choice(_RANDOM_ALPHABET) for _ in range(13))
    return f"{prefix}.{suffix}@{domain}"


def generate_sign_up_data(password: str = VALID_PASSWORD) -> SignUpFormData:
    return SignUpFormData(
        email=generate_random_email(),
        password=password,
        confirm_password=password,
    )


async def open_sign_up_page(browser: Browser) -> None:
    logger.info("Opening %s", settings.sign_up_url)
    await browser.goto(settings.sign_up_url)


async def fill_registration_form(browser: Browser, email: str, password: str, confirm_password: str) -> None:
    messages = messages_for()
    await browser.fill(browser.by_placeholder(messages.email_placeholder), email)
    await browser.fill(browser.by_label(messages.password_label), password)
    await browser.fill(browser.by_label(messages.confirm_password_label), confirm_password)


async def submit_registration(browser: Browser) -> None:
    await browser.click(browser.by_role("button", messages_for().submit_button))


async def register(browser: Browser, data: SignUpFormData) -> None:
    """Fill the whole form and submit it."""
    await fill_registration_form(browser, data.email, data.password, data.confirm_password)
    await submit_registration(browser)


async def blur_password(browser: Browser) -> None:
    await browser.blur(browser.by_label(messages_for().password_label))


def email_from_url(url: str) -> str | None:
    """Return the ``email`` query parameter of ``url``, if present."""
    values = parse_qs(urlparse(url).query).get("email")
    return values[0] if values else None


async def wait_for_successful_sign_up(browser: Browser, email: str | None = None) -> str:
    """Wait for the post-registration redirect and return the final URL.

    When ``email`` is given the redirect must carry it as the ``email``
    query parameter.
    """
    final_url = await browser.wait_for_url(SUCCESS_URL_GLOB)
    logger.info("Current URL: %s", final_url)

    assert SUCCESS_PATH_SEGMENT in final_url, f"Expected '{SUCCESS_PATH_SEGMENT}' in {final_url}"
    if email is not None:
        actual = email_from_url(final_url)
        assert actual == email, f"Expected email={email!r} in redirect, got {actual!r} ({final_url})"
    return final_url
