"""
Decompressor for ResourceTiming tries.

Inverse of the compressor, used by collectors and for analysis. Timings
come back as whole milliseconds on the page's time origin; phases that
were absent (or coincided with startTime) decode as 0.
"""

import logging
import re
from typing import Any, Iterable

import pandas as pd

from ..config.constants import (
    FIELD_SEPARATOR,
    INITIATOR_NAMES,
    RESERVED_SEPARATOR,
    TIMING_FIELDS,
)
from ..ingestion.base import TIMESTAMP_ATTRIBUTES, TimingRecord
from .exceptions import DecodeError
from .payload import trie_from_dict
from .trie import Branch, TrieNode, iter_trie

logger = logging.getLogger(__name__)

_BASE36_RE = re.compile(r"^-?[0-9a-z]+$")


def from_base36(text: str) -> int:
    """
    Parse a base-36 field; an empty field is 0.

    Raises:
        DecodeError: If text holds anything but base-36 digits
    """
    if text == "":
        return 0
    if not _BASE36_RE.match(text):
        raise DecodeError("Invalid base-36 field", content=text)
    return int(text, 36)


def decode_record(url: str, encoded: str) -> TimingRecord:
    """
    Decode a single encoded record (no "|" separators).

    Raises:
        DecodeError: If the initiator code or a field is malformed
    """
    if not encoded or not encoded[0].isdigit():
        raise DecodeError("Missing initiator code", key=url, content=encoded)

    code = int(encoded[0])
    fields = encoded[1:].split(FIELD_SEPARATOR) if len(encoded) > 1 else []
    if len(fields) > len(TIMING_FIELDS):
        raise DecodeError(
            f"Too many timing fields ({len(fields)} > {len(TIMING_FIELDS)})",
            key=url,
            content=encoded,
        )

    try:
        deltas = [from_base36(f) for f in fields]
    except DecodeError as e:
        raise DecodeError(e.message, key=url, content=encoded) from e
    deltas.extend([0] * (len(TIMING_FIELDS) - len(deltas)))

    start_time = deltas[0]
    timings = {"start_time": start_time}
    for name, delta in zip(TIMING_FIELDS[1:], deltas[1:]):
        timings[TIMESTAMP_ATTRIBUTES[name]] = start_time + delta if delta else 0

    return TimingRecord(
        url=url,
        initiator_type=INITIATOR_NAMES.get(code, "other"),
        **timings,
    )


def decode_entry(url: str, encoded: str) -> list[TimingRecord]:
    """
    Decode every record stored for one URL.

    Args:
        url: The URL the value was stored under
        encoded: One or more "|"-joined encoded records

    Returns:
        Records in their original encounter order
    """
    return [decode_record(url, part) for part in encoded.split(RESERVED_SEPARATOR)]


def flatten_trie(node: TrieNode) -> dict[str, str]:
    """
    Recover the URL -> encoded-timings map from a trie.

    Raises:
        DecodeError: If two paths spell the same URL
    """
    results: dict[str, str] = {}
    for url, value in iter_trie(node):
        if url in results:
            raise DecodeError("Duplicate URL in trie", key=url)
        results[url] = value
    return results


def decompress(payload: Any) -> list[TimingRecord]:
    """
    Decompress a payload back into timing records.

    Args:
        payload: Root Branch, its nested-dict wire form, or the empty list

    Returns:
        Records grouped by URL in trie order

    Raises:
        DecodeError: If the payload is not a valid trie
    """
    if isinstance(payload, list):
        if payload:
            raise DecodeError("List payload must be empty")
        return []

    if isinstance(payload, dict):
        payload = trie_from_dict(payload)
    if not isinstance(payload, Branch):
        raise DecodeError(
            f"Payload root must be a trie branch, got {type(payload).__name__}"
        )

    records = []
    for url, encoded in flatten_trie(payload).items():
        records.extend(decode_entry(url, encoded))

    logger.debug(f"Decompressed {len(records)} timing records")
    return records


def records_to_dataframe(records: Iterable[TimingRecord]) -> pd.DataFrame:
    """
    Tabulate timing records for analysis.

    One row per record with the URL, initiator type, every timestamp and
    a derived ``duration`` (responseEnd - startTime, NaN when responseEnd
    is absent).
    """
    columns = ["url", "initiator_type", *TIMESTAMP_ATTRIBUTES.values()]
    rows = [
        {
            "url": record.url,
            "initiator_type": record.initiator_type,
            **{attr: getattr(record, attr) for attr in TIMESTAMP_ATTRIBUTES.values()},
        }
        for record in records
    ]

    df = pd.DataFrame(rows, columns=columns)
    for attr in TIMESTAMP_ATTRIBUTES.values():
        df[attr] = pd.to_numeric(df[attr], errors="coerce")

    response_end = df["response_end"].where(df["response_end"] > 0)
    df["duration"] = response_end - df["start_time"]
    return df
