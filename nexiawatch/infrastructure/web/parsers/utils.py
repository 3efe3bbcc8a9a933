"""Reusable parsing helpers for Nexiawatch parsers.

Portal pages are parsed by markers that the portal may change at any time.
The helpers here produce lightweight structure checksums and clipped snippets
so that markup drift can be diagnosed from the logs.
"""

from __future__ import annotations

import hashlib
import logging
import re

from bs4 import BeautifulSoup

from nexiawatch.errors import MarkupChangedError


def soup_from(html: str | BeautifulSoup) -> BeautifulSoup:
    """Return ``html`` as a BeautifulSoup document."""

    return BeautifulSoup(html or "", "html.parser") if isinstance(html, str) else html


def structure_checksum(html_fragment: str) -> str:
    """Return a stable checksum for a markup fragment."""

    normalized = re.sub(r"\s+", " ", html_fragment or "").strip()
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


def clip(text: str, limit: int = 500) -> str:
    snippet = (text or "").strip()
    if len(snippet) > limit:
        snippet = snippet[:limit] + "…"
    return snippet


def record_parsing_error(
    logger: logging.Logger, section: str, html_fragment: str, error: Exception
) -> None:
    """Log a parsing failure with a checksum and a clipped HTML snippet."""

    logger.error(
        "parsing-error section=%s error=%s",
        section,
        error,
        extra={
            "section": section,
            "checksum": structure_checksum(html_fragment),
            "snippet": clip(html_fragment),
        },
    )


def markup_changed(
    logger: logging.Logger, section: str, html_fragment: str, message: str
) -> MarkupChangedError:
    """Log the drift and return the error for the caller to raise."""

    error = MarkupChangedError(message)
    record_parsing_error(logger, section, html_fragment, error)
    return error
