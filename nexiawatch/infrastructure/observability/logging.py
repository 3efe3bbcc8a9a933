"""Logging utilities for Nexiawatch.

This module provides centralised logging configuration and helpers for
contextual logging, plus redaction of credentials and session secrets so that
login forms and request headers can be logged at debug level.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Mapping


# ---------------------------------------------------------------------------
# Context variables for structured logging
# ---------------------------------------------------------------------------

_log_context: ContextVar[dict[str, Any]] = ContextVar(
    "log_context", default={})


class ContextualFormatter(logging.Formatter):
    """Formatter that appends context fields to log messages."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = _log_context.get()
        if ctx:
            ctx_str = " ".join(f"{k}={v}" for k, v in ctx.items())
            record.msg = f"{record.msg} [{ctx_str}]"
        return super().format(record)


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Temporarily add context fields to all log messages.

    Usage::

        with log_context(house_id="888888", thermostat="Living Room"):
            logger.info("Setting temperature")  # message includes context

    Fields are merged with any existing context and restored on exit.
    """
    current = _log_context.get()
    merged = {**current, **fields}
    token = _log_context.set(merged)
    try:
        yield
    finally:
        _log_context.reset(token)


# ---------------------------------------------------------------------------
# Redaction
# ---------------------------------------------------------------------------

SENSITIVE_KEYS = frozenset(
    {
        "password",
        "authenticity_token",
        "csrf_token",
        "x-csrf-token",
        "cookie",
        "cookies",
        "set-cookie",
    }
)


def redact(values: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return a copy of ``values`` with secrets masked for safe logging."""

    if not values:
        return {}
    return {
        k: "**REDACTED**" if str(k).lower() in SENSITIVE_KEYS else v
        for k, v in values.items()
    }


# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

_configured = False
_fallback_loggers: list[logging.Logger] = []


class _StderrHandler(logging.StreamHandler):
    """Stream handler that resolves ``sys.stderr`` on every write."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


def configure_logging(
    level: int = logging.INFO,
    third_party_level: int = logging.WARNING,
) -> None:
    """Configure application-wide logging.

    Call this once at startup (CLI main or the embedding application) to set
    up consistent logging across the package.

    Args:
        level: Log level for application loggers (default INFO).
        third_party_level: Log level for third-party libraries (default WARNING).
    """
    global _configured
    if _configured:
        return
    _configured = True

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any existing handlers to avoid duplicates
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = _StderrHandler()
    handler.setFormatter(
        ContextualFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    root.addHandler(handler)

    # Loggers created before configuration carry their own fallback handler
    for logger in _fallback_loggers:
        for fallback in logger.handlers[:]:
            logger.removeHandler(fallback)
        logger.setLevel(logging.NOTSET)
    _fallback_loggers.clear()

    # Quieten noisy third-party loggers
    for name in ("urllib3", "requests", "charset_normalizer"):
        logging.getLogger(name).setLevel(third_party_level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given name.

    If configure_logging() has not been called, a basic fallback configuration
    is applied to ensure the logger is usable.

    Args:
        name: Name of the logger (typically __name__).

    Returns:
        A logging.Logger instance.
    """
    logger = logging.getLogger(name)
    # Fallback if configure_logging was not called
    if not _configured and not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        _fallback_loggers.append(logger)
    return logger
