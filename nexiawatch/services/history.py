"""Historical data exports for a thermostat."""

from __future__ import annotations

from nexiawatch.domain.lookup import Selector
from nexiawatch.domain.models import HistoricalRecord
from nexiawatch.errors import EndpointMovedError, RequestError
from nexiawatch.infrastructure.http import PERMANENT_REDIRECTS, NexiaHttpClient, is_success
from nexiawatch.infrastructure.observability import get_logger, log_context
from nexiawatch.infrastructure.web.parsers import parse_history_csv
from nexiawatch.services.climate import ClimateService


class HistoryService:
    """Downloads the daily or monthly history CSV of a thermostat."""

    def __init__(self, client: NexiaHttpClient, climate: ClimateService | None = None) -> None:
        self.client = client
        self.climate = climate or ClimateService(client)
        self._logger = get_logger(__name__)

    @staticmethod
    def history_path(thermostat_id: int | str, annual: bool = False) -> str:
        name = "monthly_history.csv" if annual else "daily_history.csv"
        return f"/xxl_history/{thermostat_id}/{name}"

    def get_history(self, selector: Selector, annual: bool = False) -> list[HistoricalRecord]:
        """Return the history rows of the selected thermostat.

        Raises:
            EndpointMovedError: On a permanent redirect.
            RequestError: On any other non-success status.
        """
        thermostat = self.climate.get_thermostat(selector)
        path = self.history_path(thermostat.id, annual)
        with log_context(house_id=self.client.house_id, thermostat=thermostat.name):
            response = self.client.get(path, allow_redirects=False)
            if response.status_code in PERMANENT_REDIRECTS:
                location = response.headers.get("Location")
                self._logger.error("History export moved permanently to %s", location)
                raise EndpointMovedError(self.client.url(path), location)
            if not is_success(response):
                self._logger.error("History export returned status %s", response.status_code)
                raise RequestError(
                    f"History request failed with status {response.status_code}.",
                    status_code=response.status_code,
                )
            records = parse_history_csv(response.text)
            self._logger.debug("Read %d history row(s)", len(records))
            return records


__all__ = ["HistoryService"]
