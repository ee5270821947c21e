"""
JSON file entry provider.

Reads timing entries exported as a JSON array, an object with an
"entries" list, or NDJSON.
"""

from .adapter import JSONFileProvider

__all__ = ["JSONFileProvider"]
