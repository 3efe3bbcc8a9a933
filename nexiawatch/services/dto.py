"""
Centralized DTOs for Nexiawatch services.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ThermostatSummaryDTO(BaseModel):
    """Condensed view of one thermostat, without the portal's extra fields."""

    model_config = ConfigDict(extra="forbid")

    position: int
    id: int | str
    name: str
    temperature: int | float | None = None
    mode: str
    setpoint: int | float | None = None


class SetpointPayload(BaseModel):
    """Body of the zone setpoints PUT.

    The portal requires both sides on every write. ``*_setpoint`` carries the
    truncated integer and ``*_integer`` the value as requested.
    """

    model_config = ConfigDict(extra="forbid")

    cooling_setpoint: int
    cooling_integer: int | float
    heating_setpoint: int
    heating_integer: int | float


__all__ = ["SetpointPayload", "ThermostatSummaryDTO"]
