"""HTTP client with login session handling for Nexiawatch.

This module centralises HTTP access that requires authentication against the
Nexia web portal. It maintains a :class:`requests.Session`, performs the
credential-based login, extracts the anti-forgery and CSRF tokens, persists
cookies through a :class:`SessionStore` and expires the session after a
configurable TTL so repeated runs can reuse one login.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urljoin

import requests
from requests import Response, Session

from nexiawatch.errors import (
    AuthenticationError,
    ConnectivityError,
    HouseMismatchError,
    NexiaError,
)
from nexiawatch.infrastructure.observability.logging import (
    get_logger,
    log_context,
    redact,
)
from nexiawatch.infrastructure.web.parsers.tokens import (
    extract_authenticity_token,
    extract_csrf_token,
    extract_house_id,
    has_login_marker,
)

from .session_store import MemorySessionStore, SessionStore, StoredSession

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://www.mynexia.com"
DEFAULT_SESSION_TTL_SECONDS = 600.0
DEFAULT_CONNECT_TIMEOUT = 5.0

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/63.0.3239.132 Safari/537.36"
)

DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.8",
    "Cache-Control": "max-age=0",
    "Connection": "keep-alive",
    "User-Agent": USER_AGENT,
}

CSRF_HEADER = "X-CSRF-Token"
PERMANENT_REDIRECTS = frozenset({301, 308})


def is_success(response: Response) -> bool:
    return 200 <= response.status_code < 300


@dataclass(frozen=True)
class LoginCredentials:
    """Portal login plus the house id the account is expected to own."""

    login: str
    password: str
    house_id: str

    def __repr__(self) -> str:
        return f"LoginCredentials(login={self.login!r}, password='***', house_id={self.house_id!r})"


class NexiaHttpClient:
    """Authenticated HTTP helper with CSRF and cookie management."""

    def __init__(
        self,
        credentials: LoginCredentials,
        *,
        base_url: str = DEFAULT_BASE_URL,
        store: SessionStore | None = None,
        session_ttl_seconds: float = DEFAULT_SESSION_TTL_SECONDS,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        read_timeout: float | None = None,
        session: Session | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.store: SessionStore = store if store is not None else MemorySessionStore(clock)
        self.session_ttl_seconds = session_ttl_seconds
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.session = session or requests.Session()
        self._clock = clock
        self.portal_session: StoredSession | None = None

    @property
    def house_id(self) -> str:
        return self.credentials.house_id

    def url(self, path: str) -> str:
        return urljoin(self.base_url + "/", path.lstrip("/"))

    # -------------------- transport --------------------
    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> Response:
        """Send a request with the browser headers and connect timeout applied.

        Raises:
            ConnectivityError: If the request fails at the transport level.
        """
        url = self.url(path)
        merged = dict(DEFAULT_HEADERS)
        if headers:
            merged.update(headers)
        kwargs.setdefault("timeout", (self.connect_timeout, self.read_timeout))
        try:
            response = self.session.request(method, url, headers=merged, **kwargs)
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise ConnectivityError(f"Could not contact {url}: {exc}") from exc
        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response

    def get(self, path: str, **kwargs: Any) -> Response:
        return self.request("GET", path, **kwargs)

    def put_json(self, path: str, payload: dict[str, Any]) -> Response:
        """PUT a JSON body with the session's CSRF token attached."""
        portal_session = self.portal_session or self.ensure_session()
        headers = {"Content-Type": "application/json"}
        if portal_session.csrf_token:
            headers[CSRF_HEADER] = portal_session.csrf_token
        logger.debug("PUT %s headers=%s", path, redact(headers))
        return self.request("PUT", path, json=payload, headers=headers, allow_redirects=False)

    # -------------------- auth workflow --------------------
    def session_age(self) -> float | None:
        """Seconds since the stored session blob was last written."""
        written_at = self.store.last_modified()
        if written_at is None:
            return None
        return self._clock() - written_at

    def _discard_session(self) -> None:
        self.store.clear()
        self.session.cookies.clear()
        self.portal_session = None

    def _load_reusable_session(self, force_new: bool) -> StoredSession | None:
        stored = self.store.load()
        if stored is None:
            return None
        age = self.session_age()
        if force_new or age is None or age > self.session_ttl_seconds:
            logger.info(
                "Discarding stored session (forced=%s, age=%s)",
                force_new,
                f"{age:.0f}s" if age is not None else "unknown",
            )
            self._discard_session()
            return None
        return stored

    def _login(self) -> None:
        """Submit the login form and keep the returned session cookies.

        Raises:
            ConnectivityError: If the login page is empty or garbled.
            MarkupChangedError: If the login form lost its anti-forgery token.
        """
        self.session.cookies.clear()
        page = self.get("/login")
        if not has_login_marker(page.text):
            logger.error("Login page returned no usable content (status %s)", page.status_code)
            raise ConnectivityError("Could not contact login page. Check internet connectivity.")
        token = extract_authenticity_token(page.text)

        form = {
            "utf8": "✓",
            "authenticity_token": token,
            "login": self.credentials.login,
            "password": self.credentials.password,
        }
        logger.info("Logging in to %s as %s", self.base_url, self.credentials.login)
        logger.debug("Login form: %s", redact(form))
        response = self.request(
            "POST",
            "/session",
            data=form,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            allow_redirects=False,
        )
        if response.status_code >= 400:
            logger.warning("Login form submission returned status %s", response.status_code)

    def _verify(self) -> str:
        """Check the session against the live portal and return its CSRF token.

        Raises:
            AuthenticationError: If the portal root does not answer with success.
            MarkupChangedError: If the CSRF token or house id marker is missing.
            HouseMismatchError: If the account reports a different house id.
        """
        response = self.get("/", allow_redirects=False)
        if not is_success(response):
            logger.error("Portal rejected the session (status %s)", response.status_code)
            raise AuthenticationError(
                f"Invalid login. Check credentials for Nexia (status {response.status_code})."
            )
        csrf_token = extract_csrf_token(response.text)
        actual_house_id = extract_house_id(response.text)
        if str(actual_house_id) != str(self.house_id):
            logger.error(
                "House id mismatch: configured %s, account reports %s",
                self.house_id,
                actual_house_id,
            )
            raise HouseMismatchError(str(self.house_id), str(actual_house_id))
        return csrf_token

    def _verify_or_discard(self) -> str:
        try:
            return self._verify()
        except NexiaError:
            self._discard_session()
            raise

    def ensure_session(self, force_new: bool = False) -> StoredSession:
        """
        Ensure a verified portal session exists and return it.

        A stored session is reused unless ``force_new`` is set or it is older
        than the TTL. Either way the session is re-validated against the portal
        root before it is returned, and the refreshed blob is saved. A restored
        session the portal no longer accepts is replaced by one fresh login.

        Raises:
            ConnectivityError, MarkupChangedError, AuthenticationError,
            HouseMismatchError: See :meth:`_login` and :meth:`_verify`.
        """
        with log_context(house_id=self.house_id):
            stored = self._load_reusable_session(force_new)
            if stored is None:
                self._login()
            else:
                self.session.cookies.update(stored.cookies)

            try:
                csrf_token = self._verify()
            except AuthenticationError:
                self._discard_session()
                if stored is None:
                    raise
                # the portal dropped a session that was still inside the TTL
                logger.warning("Stored session was rejected by the portal; logging in again")
                stored = None
                self._login()
                csrf_token = self._verify_or_discard()
            except NexiaError:
                self._discard_session()
                raise

            self.portal_session = StoredSession(
                csrf_token=csrf_token,
                cookies=self.session.cookies.get_dict(),
                obtained_at=self._clock(),
            )
            self.store.save(self.portal_session)
            logger.debug("Session verified%s", "" if stored is None else " (reused)")
            return self.portal_session

    # -------------------- lifecycle --------------------
    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "NexiaHttpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = [
    "CSRF_HEADER",
    "DEFAULT_BASE_URL",
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_HEADERS",
    "DEFAULT_SESSION_TTL_SECONDS",
    "LoginCredentials",
    "NexiaHttpClient",
    "PERMANENT_REDIRECTS",
    "is_success",
]
