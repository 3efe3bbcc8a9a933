"""Service layer modules for Nexiawatch."""

from .climate import ClimateService, MAX_REAUTH_RETRIES
from .dto import SetpointPayload, ThermostatSummaryDTO
from .history import HistoryService
from .setpoints import SetpointService, build_setpoint_payload

__all__ = [
    "ClimateService",
    "HistoryService",
    "MAX_REAUTH_RETRIES",
    "SetpointPayload",
    "SetpointService",
    "ThermostatSummaryDTO",
    "build_setpoint_payload",
]
