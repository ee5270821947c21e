"""
ResourceTiming compressor.

Drives the whole compression of one batch:

1. Filter out pseudo-resources (about:, javascript:)
2. Encode each record's timings into a compact string
3. Group the strings by URL, "|"-joining repeated fetches of one URL
4. Build a character trie over the URLs
5. Collapse unbranching chains of the trie

Each call is independent: nothing is kept between batches.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..config.constants import DEFAULT_SKIPPED_SCHEMES, RESERVED_SEPARATOR
from ..config.settings import CompressionSettings, get_settings
from ..ingestion.base import EntryProvider, TimingRecord
from .exceptions import ReservedCharacterError
from .payload import Payload, dumps_payload
from .timing import encode_entry
from .trie import convert_to_trie, optimize_trie

logger = logging.getLogger(__name__)


class ResultsAccumulator:
    """
    Encoded timings grouped by URL.

    A URL seen more than once (the same resource fetched twice) keeps
    all of its encodings, joined with "|" in encounter order.
    """

    def __init__(self):
        self.results: dict[str, str] = {}
        self.duplicate_urls = 0
        self.records_skipped = 0

    def add(self, url: str, data: str) -> None:
        if url in self.results:
            self.results[url] += RESERVED_SEPARATOR + data
            self.duplicate_urls += 1
            logger.debug(f"Appending repeated fetch of {url}")
        else:
            self.results[url] = data

    def __len__(self) -> int:
        return len(self.results)


def is_pseudo_resource(
    url: str, skipped_schemes: Sequence[str] = DEFAULT_SKIPPED_SCHEMES
) -> bool:
    """Check whether a URL is a non-network pseudo-resource."""
    return url.startswith(tuple(skipped_schemes))


def accumulate_results(
    records: Iterable[TimingRecord],
    skipped_schemes: Sequence[str] = DEFAULT_SKIPPED_SCHEMES,
    strict_urls: bool = True,
) -> ResultsAccumulator:
    """
    Filter and encode a batch of records, grouped by URL.

    Args:
        records: Timing records in encounter order
        skipped_schemes: URL prefixes to drop
        strict_urls: Raise on URLs containing "|" instead of skipping them

    Returns:
        Populated ResultsAccumulator

    Raises:
        ReservedCharacterError: If strict_urls and a URL contains "|"
    """
    accumulator = ResultsAccumulator()

    for record in records:
        url = record.url

        if is_pseudo_resource(url, skipped_schemes):
            accumulator.records_skipped += 1
            logger.debug(f"Skipping pseudo-resource {url[:50]!r}")
            continue

        if RESERVED_SEPARATOR in url:
            if strict_urls:
                raise ReservedCharacterError(url, RESERVED_SEPARATOR)
            accumulator.records_skipped += 1
            logger.warning(
                f"Skipping URL containing '{RESERVED_SEPARATOR}': {url[:100]}"
            )
            continue

        accumulator.add(url, encode_entry(record))

    return accumulator


def build_payload(results: dict[str, str]) -> Payload:
    """
    Build the optimized trie for a URL -> encoded-timings map.

    Returns:
        Root Branch, or an empty list when results is empty
    """
    if not results:
        return []
    return optimize_trie(convert_to_trie(results))


def compress(
    records: Iterable[TimingRecord],
    skipped_schemes: Sequence[str] = DEFAULT_SKIPPED_SCHEMES,
    strict_urls: bool = True,
) -> Payload:
    """
    Compress a batch of timing records into an optimized URL trie.

    Args:
        records: Timing records sharing one time origin
        skipped_schemes: URL prefixes to drop before encoding
        strict_urls: Raise on URLs containing "|" instead of skipping them

    Returns:
        Root Branch of the optimized trie, or an empty list when no
        record survives filtering

    Raises:
        ReservedCharacterError: If strict_urls and a URL contains "|"
    """
    accumulator = accumulate_results(records, skipped_schemes, strict_urls)
    return build_payload(accumulator.results)


def get_resource_timing(
    provider: EntryProvider,
    settings: Optional[CompressionSettings] = None,
) -> Payload:
    """
    Gather records from a provider and compress them.

    Args:
        provider: Source of timing records
        settings: Compression settings (defaults to the configured ones)
    """
    settings = settings or get_settings().compression
    return compress(
        provider.provide(),
        skipped_schemes=settings.skipped_schemes,
        strict_urls=settings.strict_urls,
    )


@dataclass
class CompressionResult:
    """Statistics for one compression run."""

    records_in: int = 0
    records_skipped: int = 0
    unique_urls: int = 0
    duplicate_urls: int = 0
    raw_bytes: int = 0
    compressed_bytes: int = 0
    started_at: datetime = field(default_factory=lambda: datetime.now().astimezone())
    completed_at: Optional[datetime] = None

    @property
    def compression_ratio(self) -> Optional[float]:
        """Compressed size as a fraction of the raw JSON size."""
        if self.raw_bytes:
            return self.compressed_bytes / self.raw_bytes
        return None

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/serialization."""
        return {
            "records_in": self.records_in,
            "records_skipped": self.records_skipped,
            "unique_urls": self.unique_urls,
            "duplicate_urls": self.duplicate_urls,
            "raw_bytes": self.raw_bytes,
            "compressed_bytes": self.compressed_bytes,
            "compression_ratio": self.compression_ratio,
            "started_at": self.started_at.isoformat(),
            "completed_at": (
                self.completed_at.isoformat() if self.completed_at else None
            ),
            "duration_seconds": self.duration_seconds,
        }


class ResourceTimingCompressor:
    """
    Configured compressor that records statistics for each run.

    Usage:
        compressor = ResourceTimingCompressor()
        payload = compressor.compress(records)
        print(compressor.last_result.compression_ratio)
    """

    def __init__(self, settings: Optional[CompressionSettings] = None):
        """
        Initialize the compressor.

        Args:
            settings: Compression settings (defaults to the configured ones)
        """
        self.settings = settings or get_settings().compression
        self.last_result: Optional[CompressionResult] = None

    def compress(self, records: Iterable[TimingRecord]) -> Payload:
        """
        Compress a batch and record statistics in last_result.

        Raises:
            ReservedCharacterError: If strict_urls and a URL contains "|"
        """
        records = list(records)
        result = CompressionResult(records_in=len(records))

        accumulator = accumulate_results(
            records,
            skipped_schemes=self.settings.skipped_schemes,
            strict_urls=self.settings.strict_urls,
        )

        payload = build_payload(accumulator.results)

        result.records_skipped = accumulator.records_skipped
        result.unique_urls = len(accumulator)
        result.duplicate_urls = accumulator.duplicate_urls
        result.raw_bytes = len(
            json.dumps(
                [r.to_dict() for r in records], separators=(",", ":"), default=str
            ).encode("utf-8")
        )
        result.compressed_bytes = len(dumps_payload(payload).encode("utf-8"))
        result.completed_at = datetime.now().astimezone()
        self.last_result = result

        logger.info(
            f"Compressed {result.records_in} records "
            f"({result.records_skipped} skipped, {result.unique_urls} URLs): "
            f"{result.raw_bytes} -> {result.compressed_bytes} bytes"
        )
        return payload

    def compress_provider(self, provider: EntryProvider) -> Payload:
        """Gather records from a provider and compress them."""
        logger.info(
            f"Gathering timing records from provider '{provider.provider_name}'"
        )
        return self.compress(provider.provide())
