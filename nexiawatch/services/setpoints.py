"""Setpoint updates for a thermostat's primary zone."""

from __future__ import annotations

from nexiawatch.domain.lookup import Selector
from nexiawatch.domain.models import OperatingMode, Thermostat
from nexiawatch.errors import MarkupChangedError, NotFoundError, UnsupportedModeError
from nexiawatch.infrastructure.http import NexiaHttpClient, is_success
from nexiawatch.infrastructure.observability import get_logger, log_context
from nexiawatch.services.climate import ClimateService
from nexiawatch.services.dto import SetpointPayload


def _as_int(value: int | float | str) -> int:
    return int(float(value))


def build_setpoint_payload(thermostat: Thermostat, new_temp: int | float) -> SetpointPayload:
    """Build the dual setpoint body for ``thermostat``'s operating mode.

    The side matching the mode gets ``new_temp``; the other side is resent
    unchanged.

    Raises:
        NotFoundError: If the thermostat has no zones.
        MarkupChangedError: If the zone lacks the setpoint that must be resent.
        UnsupportedModeError: If the mode is neither COOL nor HEAT.
    """
    zone = thermostat.primary_zone
    if zone is None:
        raise NotFoundError(f"Thermostat '{thermostat.name}' has no zones.")

    if thermostat.operating_mode == OperatingMode.COOL:
        cooling, heating, kept = new_temp, zone.heating_setpoint, "heating_setpoint"
    elif thermostat.operating_mode == OperatingMode.HEAT:
        cooling, heating, kept = zone.cooling_setpoint, new_temp, "cooling_setpoint"
    else:
        raise UnsupportedModeError(thermostat.name, thermostat.mode_label)

    if cooling is None or heating is None:
        raise MarkupChangedError(
            f"Zone of thermostat '{thermostat.name}' does not report its {kept}."
        )
    return SetpointPayload(
        cooling_setpoint=_as_int(cooling),
        cooling_integer=cooling,
        heating_setpoint=_as_int(heating),
        heating_integer=heating,
    )


class SetpointService:
    """Writes new setpoints to the portal."""

    def __init__(self, client: NexiaHttpClient, climate: ClimateService | None = None) -> None:
        self.client = client
        self.climate = climate or ClimateService(client)
        self._logger = get_logger(__name__)

    def set_temperature(self, selector: Selector, new_temp: int | float) -> bool:
        """Set the active setpoint of the selected thermostat.

        Returns:
            True when the portal accepted the change, False for any other
            status. A rejected write is not an exception.
        """
        thermostat = self.climate.get_thermostat(selector)
        with log_context(house_id=self.client.house_id, thermostat=thermostat.name):
            payload = build_setpoint_payload(thermostat, new_temp)
            zone_id = thermostat.primary_zone.id
            if zone_id is None:
                raise MarkupChangedError(
                    f"Zone of thermostat '{thermostat.name}' has no identifier."
                )
            path = f"/houses/{self.client.house_id}/xxl_zones/{zone_id}/setpoints"
            self._logger.info(
                "Setting %s setpoint to %s", thermostat.operating_mode.value.lower(), new_temp
            )
            response = self.client.put_json(path, payload.model_dump())
            if not is_success(response):
                self._logger.warning(
                    "Set temperature did not succeed [result %s]", response.status_code
                )
                return False
            return True


__all__ = ["SetpointService", "build_setpoint_payload"]
