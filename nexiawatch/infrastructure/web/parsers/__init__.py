"""Parsers for Nexia portal content.

This package contains functions for pulling tokens out of the login and
landing pages, decoding the thermostat data embedded in the climate page and
reading the history CSV exports.
"""

from .climate import extract_embedded_array, parse_climate_page, parse_thermostats
from .history import parse_history_csv
from .tokens import (
    LOGIN_TOKEN_MARKER,
    extract_authenticity_token,
    extract_csrf_token,
    extract_house_id,
    has_login_marker,
)
from .utils import record_parsing_error, structure_checksum

__all__ = [
    "LOGIN_TOKEN_MARKER",
    "extract_authenticity_token",
    "extract_csrf_token",
    "extract_embedded_array",
    "extract_house_id",
    "has_login_marker",
    "parse_climate_page",
    "parse_history_csv",
    "parse_thermostats",
    "record_parsing_error",
    "structure_checksum",
]
