"""
Nexiawatch package initializer.

This package provides a session-aware client for the Nexia thermostat web
portal: it logs in, keeps the portal session alive between runs, reads the
thermostat state embedded in the climate page and pushes new setpoints.

The package exposes a ``__version__`` attribute indicating the installed
version of Nexiawatch. The version is read from pyproject.toml via
importlib.metadata – this is the single source of truth.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("nexiawatch")
except PackageNotFoundError:
    # Package is not installed (running from source without pip install -e .)
    __version__ = "0.0.0.dev"

__all__: list[str] = ["__version__"]
