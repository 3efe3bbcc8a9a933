"""Infrastructure layer for Nexiawatch.

Holds adapters for HTTP, session persistence, page parsing and logging.
"""

from . import http, observability, web

__all__ = ["http", "observability", "web"]
