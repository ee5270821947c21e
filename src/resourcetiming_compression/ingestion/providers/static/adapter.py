"""
In-memory entry provider.
"""

import logging
from typing import Iterable, Union

from ...base import EntryProvider, TimingRecord
from ...registry import ProviderRegistry

logger = logging.getLogger(__name__)


@ProviderRegistry.register("static")
class StaticEntryProvider(EntryProvider):
    """
    Provider over a fixed sequence of entries.

    Entries may be TimingRecord instances or dictionaries accepted by
    TimingRecord.from_dict(). Dictionaries are converted eagerly so a
    malformed entry fails at construction rather than mid-compression.

    Example:
        provider = StaticEntryProvider([
            {"name": "https://example.com/app.js", "initiatorType": "script",
             "startTime": 12.5, "responseEnd": 80.1},
        ])
        trie = compress(provider.provide())
    """

    def __init__(self, entries: Iterable[Union[TimingRecord, dict]] = ()):
        self._records = [
            entry if isinstance(entry, TimingRecord) else TimingRecord.from_dict(entry)
            for entry in entries
        ]

    @property
    def provider_name(self) -> str:
        return "static"

    def provide(self) -> list[TimingRecord]:
        logger.debug(f"Static provider returning {len(self._records)} records")
        return list(self._records)
