"""CLI interface for Nexiawatch.

This package is the home for all Click commands; ``nexiawatch`` on the
command line and ``python -m nexiawatch.interfaces.cli`` both run the
:func:`cli` group.
"""

from .__main__ import cli
from .history import history
from .login import login
from .setpoint import set_temp
from .status import status

__all__ = ["cli", "history", "login", "set_temp", "status"]
