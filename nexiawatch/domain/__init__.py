"""Domain layer for Nexiawatch.

This package groups the thermostat models and the pure lookup logic that do
not concern HTTP, parsing or interface details.
"""

from . import lookup, models

__all__ = ["lookup", "models"]
