"""HTTP adapters for Nexiawatch.

This package provides the authenticated HTTP client and the session stores
used to talk to the Nexia web portal.
"""

from .client import (
    DEFAULT_BASE_URL,
    DEFAULT_SESSION_TTL_SECONDS,
    PERMANENT_REDIRECTS,
    LoginCredentials,
    NexiaHttpClient,
    is_success,
)
from .session_store import (
    FileSessionStore,
    MemorySessionStore,
    SessionStore,
    StoredSession,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_SESSION_TTL_SECONDS",
    "FileSessionStore",
    "LoginCredentials",
    "MemorySessionStore",
    "NexiaHttpClient",
    "PERMANENT_REDIRECTS",
    "SessionStore",
    "StoredSession",
    "is_success",
]
