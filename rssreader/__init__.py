"""Concurrent RSS feed reader: fetch, normalize and date-filter feeds."""

__version__ = "0.1.0"
