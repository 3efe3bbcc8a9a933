"""Web scraping adapters for the Nexia portal."""

from . import parsers

__all__ = ["parsers"]
