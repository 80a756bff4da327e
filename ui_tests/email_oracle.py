"""Email-format oracle used to compute expected outcomes.

The oracle is the single source of truth for whether a fixture email is
valid. Test cases never re-derive validity from the shape of the string.
"""
from __future__ import annotations

from email_validator import EmailNotValidError, validate_email


def explain(candidate: str) -> str | None:
    """Return the reason ``candidate`` is rejected, or None if it is valid."""
    try:
        validate_email(candidate, check_deliverability=False)
    except EmailNotValidError as exc:
        return str(exc)
    return None


def is_email(candidate: str) -> bool:
    return explain(candidate) is None
