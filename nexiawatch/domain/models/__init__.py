"""Domain models package.

This package contains domain model classes for Nexiawatch.
"""

from .thermostat import HistoricalRecord, OperatingMode, Thermostat, Zone

__all__ = ["HistoricalRecord", "OperatingMode", "Thermostat", "Zone"]
