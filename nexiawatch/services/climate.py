"""Thermostat state retrieval built on top of the authenticated HTTP client."""

from __future__ import annotations

from nexiawatch.domain.lookup import Selector, find_thermostat
from nexiawatch.domain.models import Thermostat
from nexiawatch.errors import EndpointMovedError, RequestError
from nexiawatch.infrastructure.http import (
    PERMANENT_REDIRECTS,
    NexiaHttpClient,
    is_success,
)
from nexiawatch.infrastructure.observability import get_logger, log_context
from nexiawatch.infrastructure.web.parsers import parse_climate_page
from nexiawatch.services.dto import ThermostatSummaryDTO

# A stale session shows up as a non-success status; one forced re-login is
# attempted before giving up.
MAX_REAUTH_RETRIES = 1


class ClimateService:
    """Reads thermostat state from the house climate page."""

    def __init__(self, client: NexiaHttpClient) -> None:
        self.client = client
        self._logger = get_logger(__name__)

    @property
    def climate_path(self) -> str:
        return f"/houses/{self.client.house_id}/climate"

    def _fetch_climate_page(self) -> str:
        path = self.climate_path
        response = None
        for attempt in range(MAX_REAUTH_RETRIES + 1):
            self.client.ensure_session(force_new=attempt > 0)
            response = self.client.get(path, allow_redirects=False)
            if response.status_code in PERMANENT_REDIRECTS:
                location = response.headers.get("Location")
                self._logger.error("Climate page moved permanently to %s", location)
                raise EndpointMovedError(self.client.url(path), location)
            if is_success(response):
                return response.text
            self._logger.warning(
                "Climate page returned status %s (attempt %d); session appears stale",
                response.status_code,
                attempt + 1,
            )
        raise RequestError(
            f"Climate page returned status {response.status_code} after re-authenticating.",
            status_code=response.status_code,
        )

    def list_thermostats(self) -> list[Thermostat]:
        """Fetch every thermostat of the configured house."""
        with log_context(house_id=self.client.house_id):
            markup = self._fetch_climate_page()
            return parse_climate_page(markup, self.client.house_id)

    def get_thermostat(self, selector: Selector) -> Thermostat:
        """Fetch the thermostats and resolve ``selector`` by id or name."""
        return find_thermostat(self.list_thermostats(), selector)

    def fetch_thermostats(self, selector: Selector | None = None) -> Thermostat | list[Thermostat]:
        """Return the matching thermostat, or all of them without a selector."""
        if selector is None:
            return self.list_thermostats()
        return self.get_thermostat(selector)

    def get_temperature(self, selector: Selector) -> int | float | None:
        return self.get_thermostat(selector).temperature

    def get_setpoint(self, selector: Selector) -> int | float | None:
        """Return the setpoint for the thermostat's current mode.

        ``None`` when the thermostat is neither cooling nor heating.
        """
        return self.get_thermostat(selector).setpoint

    def summarize(self, selector: Selector | None = None) -> list[ThermostatSummaryDTO]:
        """Return condensed rows for all thermostats, or only the selected one."""
        thermostats = self.list_thermostats()
        wanted = find_thermostat(thermostats, selector) if selector is not None else None
        return [
            ThermostatSummaryDTO(
                position=position,
                id=thermostat.id,
                name=thermostat.name,
                temperature=thermostat.temperature,
                mode=thermostat.mode_label,
                setpoint=thermostat.setpoint,
            )
            for position, thermostat in enumerate(thermostats)
            if wanted is None or thermostat is wanted
        ]


__all__ = ["ClimateService", "MAX_REAUTH_RETRIES"]
