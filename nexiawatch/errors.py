"""
Nexiawatch exceptions.

Every failure raised by the client derives from :class:`NexiaError`. The
subclasses are split by the corrective action they call for: retry later,
fix credentials, fix configuration or update the scraping code. Callers can
branch on :attr:`NexiaError.retryable` instead of enumerating classes.
"""

from __future__ import annotations


class NexiaError(Exception):
    """Base exception for Nexiawatch."""

    retryable: bool = False


class ConfigurationError(NexiaError):
    """Client settings are missing or invalid."""


class ConnectivityError(NexiaError):
    """The portal could not be reached or returned an empty/garbled body."""

    retryable = True


class MarkupChangedError(NexiaError):
    """An expected token or marker is missing from a portal page.

    The portal changed its markup; the parsers need an update.
    """


class AuthenticationError(NexiaError):
    """The portal rejected the login or the restored session."""

    retryable = True


class HouseMismatchError(NexiaError):
    """The account's house id does not match the configured house id."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"The house id specified [{expected}] does not match the Nexia account [{actual}]."
        )


class EndpointMovedError(NexiaError):
    """The portal answered with a permanent redirect for a known endpoint."""

    def __init__(self, url: str, location: str | None = None) -> None:
        self.url = url
        self.location = location
        message = f"Endpoint {url} has moved permanently"
        if location:
            message += f" to {location}"
        super().__init__(message)


class NotFoundError(NexiaError):
    """A thermostat selector did not match anything on the account."""


class RequestError(NexiaError):
    """A portal request finished with a non-success status."""

    retryable = True

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class UnsupportedModeError(NexiaError):
    """A setpoint change was requested for a mode with no defined payload."""

    def __init__(self, thermostat_name: str, mode: str) -> None:
        self.thermostat_name = thermostat_name
        self.mode = mode
        super().__init__(
            f"Cannot set temperature on '{thermostat_name}' while operating mode is {mode}; "
            "only COOL and HEAT are supported."
        )


__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "ConnectivityError",
    "EndpointMovedError",
    "HouseMismatchError",
    "MarkupChangedError",
    "NexiaError",
    "NotFoundError",
    "RequestError",
    "UnsupportedModeError",
]
