"""Thermostat domain model decoded from the climate page."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class OperatingMode(str, Enum):
    """Enumeration of thermostat operating modes reported by the portal."""

    COOL = "COOL"
    HEAT = "HEAT"
    AUTO = "AUTO"
    OFF = "OFF"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_string(cls, value: str | None) -> "OperatingMode":
        """Convert a string to an OperatingMode, defaulting to UNKNOWN."""
        if not value:
            return cls.UNKNOWN
        normalized = str(value).upper().strip()
        try:
            return cls(normalized)
        except ValueError:
            return cls.UNKNOWN


@dataclass
class Zone:
    """A climate-controlled area governed by one thermostat."""

    id: int | str | None
    temperature: float | None = None
    cooling_setpoint: float | None = None
    heating_setpoint: float | None = None
    name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Zone":
        return cls(
            id=data.get("id"),
            temperature=data.get("temperature"),
            cooling_setpoint=data.get("cooling_setpoint"),
            heating_setpoint=data.get("heating_setpoint"),
            name=data.get("name"),
        )


@dataclass
class Thermostat:
    """Domain model for a thermostat on a Nexia house.

    Every operation works against the first zone only; additional zones are
    decoded but never read or written.
    """

    id: int | str
    name: str
    operating_mode: OperatingMode = OperatingMode.UNKNOWN
    zones: list[Zone] = field(default_factory=list)
    raw_mode: str | None = None

    @property
    def primary_zone(self) -> Zone | None:
        """Return the first zone, or ``None`` when the thermostat has none."""
        return self.zones[0] if self.zones else None

    @property
    def temperature(self) -> float | None:
        """Current temperature reported by the primary zone."""
        zone = self.primary_zone
        return zone.temperature if zone else None

    @property
    def setpoint(self) -> float | None:
        """Return the active setpoint for the current operating mode."""
        zone = self.primary_zone
        if zone is None:
            return None
        if self.operating_mode == OperatingMode.COOL:
            return zone.cooling_setpoint
        if self.operating_mode == OperatingMode.HEAT:
            return zone.heating_setpoint
        return None

    @property
    def mode_label(self) -> str:
        """Mode as reported by the portal, falling back to the enum value."""
        return self.raw_mode or self.operating_mode.value

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Thermostat":
        """Create a Thermostat from one entry of the embedded climate array."""
        raw_mode = data.get("operating_mode")
        zones = data.get("zones") or []
        return cls(
            id=data.get("id"),
            name=data.get("name") or "",
            operating_mode=OperatingMode.from_string(raw_mode),
            zones=[Zone.from_dict(zone) for zone in zones if isinstance(zone, dict)],
            raw_mode=raw_mode,
        )


HistoricalRecord = dict[str, str]
