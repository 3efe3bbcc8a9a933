"""CLI helpers for constructing authenticated HTTP clients."""

from __future__ import annotations

from nexiawatch.app.config import NexiaSettings
from nexiawatch.infrastructure.http import (
    FileSessionStore,
    MemorySessionStore,
    NexiaHttpClient,
    SessionStore,
)


def build_session_store(settings: NexiaSettings) -> SessionStore:
    """Persist to ``session_file`` when configured, otherwise keep it in memory."""

    if settings.session_file is None:
        return MemorySessionStore()
    return FileSessionStore(settings.session_file)


def build_http_client(settings: NexiaSettings) -> NexiaHttpClient:
    """Return a configured :class:`NexiaHttpClient`."""

    return NexiaHttpClient(
        settings.credentials,
        base_url=settings.base_url,
        store=build_session_store(settings),
        session_ttl_seconds=settings.session_ttl_seconds,
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
    )
