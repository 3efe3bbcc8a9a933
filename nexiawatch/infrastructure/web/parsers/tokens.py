"""Token extraction from the login page and the authenticated landing page."""

from __future__ import annotations

import re

from nexiawatch.infrastructure.observability.logging import get_logger

from .utils import markup_changed, soup_from

logger = get_logger(__name__)

LOGIN_TOKEN_MARKER = "authenticity_token"

_HOUSE_ID_RE = re.compile(r"window\.Nexia\.modes\.houseId\s*=\s*([^;\n]+);")


def has_login_marker(html: str) -> bool:
    """Return True when the login page carries the anti-forgery field at all."""

    return bool(html) and LOGIN_TOKEN_MARKER in html


def extract_authenticity_token(html: str) -> str:
    """Return the anti-forgery token from the login form.

    Raises:
        MarkupChangedError: If the hidden ``authenticity_token`` input is absent.
    """

    soup = soup_from(html)
    field = soup.find("input", attrs={"name": LOGIN_TOKEN_MARKER})
    value = field.get("value") if field else None
    if not value:
        raise markup_changed(
            logger, "login-form", html, "Login page no longer carries an authenticity token."
        )
    return value


def extract_csrf_token(html: str) -> str:
    """Return the CSRF token from the ``csrf-token`` meta tag of a portal page.

    Raises:
        MarkupChangedError: If the meta tag is missing or empty.
    """

    soup = soup_from(html)
    meta = soup.find("meta", attrs={"name": "csrf-token"})
    value = meta.get("content") if meta else None
    if not value:
        raise markup_changed(
            logger, "csrf-meta", html, "Landing page no longer carries a csrf-token meta tag."
        )
    return value


def extract_house_id(html: str) -> str:
    """Return the house id the landing page script reports for the account.

    Raises:
        MarkupChangedError: If the ``window.Nexia.modes.houseId`` assignment is absent.
    """

    match = _HOUSE_ID_RE.search(html or "")
    if not match:
        raise markup_changed(
            logger, "house-id", html, "Landing page no longer reports the account house id."
        )
    return match.group(1).strip().strip("'\"")


__all__ = [
    "LOGIN_TOKEN_MARKER",
    "extract_authenticity_token",
    "extract_csrf_token",
    "extract_house_id",
    "has_login_marker",
]
