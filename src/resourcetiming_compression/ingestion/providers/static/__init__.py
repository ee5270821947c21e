"""
In-memory entry provider.

Wraps an already-gathered sequence of records or raw entry dicts.
"""

from .adapter import StaticEntryProvider

__all__ = ["StaticEntryProvider"]
