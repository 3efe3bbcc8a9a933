"""Parser for the thermostat state embedded in the climate page.

The portal has no JSON API for thermostat state. The climate page boots its
script with ``Nexia.XXL.run('<house id>', [...]);`` and the array argument
holds every thermostat of the house. :func:`extract_embedded_array` is the
only place that knows this shape.
"""

from __future__ import annotations

import json
import re

from nexiawatch.domain.models import Thermostat
from nexiawatch.infrastructure.observability.logging import get_logger

from .utils import markup_changed

logger = get_logger(__name__)

_DECODER = json.JSONDecoder()


def _anchor_pattern(anchor: str) -> re.Pattern[str]:
    return re.compile(
        r"Nexia\.XXL\.run\(\s*['\"]" + re.escape(str(anchor)) + r"['\"]\s*,\s*(?=\[)"
    )


def extract_embedded_array(markup: str, anchor: str) -> str:
    """Return the raw JSON text of the array passed to ``Nexia.XXL.run``.

    Args:
        markup: Climate page HTML.
        anchor: House id the script invocation is keyed on.

    Raises:
        MarkupChangedError: If the invocation is missing or its array does not
            decode as JSON.
    """

    match = _anchor_pattern(anchor).search(markup or "")
    if not match:
        raise markup_changed(
            logger,
            "climate-script",
            markup,
            f"Climate page no longer contains the Nexia.XXL.run block for house {anchor}.",
        )
    start = match.end()
    try:
        _, end = _DECODER.raw_decode(markup, start)
    except json.JSONDecodeError as exc:
        raise markup_changed(
            logger,
            "climate-script",
            markup[start : start + 2000],
            f"Embedded thermostat data is not valid JSON: {exc}",
        ) from exc
    return markup[start:end]


def parse_thermostats(raw_json: str) -> list[Thermostat]:
    """Decode the embedded array into :class:`Thermostat` objects."""

    try:
        payload = json.loads(raw_json)
    except json.JSONDecodeError as exc:
        raise markup_changed(
            logger, "climate-json", raw_json, f"Embedded thermostat data is not valid JSON: {exc}"
        ) from exc
    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        raise markup_changed(
            logger,
            "climate-json",
            raw_json,
            "Embedded thermostat data is not a list of thermostat objects.",
        )
    return [Thermostat.from_dict(item) for item in payload]


def parse_climate_page(markup: str, house_id: str) -> list[Thermostat]:
    """Extract and decode all thermostats from a climate page."""

    thermostats = parse_thermostats(extract_embedded_array(markup, house_id))
    logger.debug("Decoded %d thermostat(s) for house %s", len(thermostats), house_id)
    return thermostats


__all__ = ["extract_embedded_array", "parse_climate_page", "parse_thermostats"]
