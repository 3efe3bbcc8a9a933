"""Resolve a thermostat selector against a fetched thermostat list."""

from __future__ import annotations

from typing import Iterable

from nexiawatch.domain.models import Thermostat
from nexiawatch.errors import NotFoundError

Selector = int | str


def find_thermostat(thermostats: Iterable[Thermostat], selector: Selector) -> Thermostat:
    """Return the thermostat matching ``selector``.

    An exact identifier match wins over a name match. Identifiers are compared
    as strings so that ``"12"`` typed on a command line matches id ``12``.
    Names are compared case-insensitively. The first match wins.

    Raises:
        NotFoundError: If no thermostat matches.
    """
    candidates = list(thermostats)
    if selector is None or str(selector).strip() == "":
        raise NotFoundError("A thermostat id or name is required.")

    wanted = str(selector).strip()
    for thermostat in candidates:
        if str(thermostat.id) == wanted:
            return thermostat

    target_name = wanted.lower()
    for thermostat in candidates:
        if thermostat.name.strip().lower() == target_name:
            return thermostat

    raise NotFoundError(
        f"Could not find the thermostat with the id or name '{selector}'. "
        f"There are {len(candidates)} devices detected."
    )


__all__ = ["Selector", "find_thermostat"]
