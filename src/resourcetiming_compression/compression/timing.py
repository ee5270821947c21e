"""
Timing encoder.

Turns one TimingRecord into a compact string:

1. Start with the initiator type, mapped to a single digit.
2. Put the timestamps in a fixed, reverse chronological order, which
   pushes the fields most likely to be absent (redirect*, domainLookup*)
   towards the end.
3. Express each timestamp as whole milliseconds since the record's
   startTime, in base 36; absent or zero values become empty fields.
4. Join on commas and drop the trailing run of empty fields.

For example a script fetched at 0ms that finished at 120ms encodes as
``"3,3c"``.
"""

import math
from typing import Any

from ..config.constants import (
    BASE36_DIGITS,
    DEFAULT_INITIATOR_CODE,
    FIELD_SEPARATOR,
    INITIATOR_TYPES,
    TIMING_FIELDS,
)
from ..ingestion.base import TimingRecord


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return int(math.floor(value + 0.5))


def trim_timing(time: Any, start_time: Any) -> int:
    """
    Trim a timestamp to whole milliseconds from the start time.

    Both operands are rounded independently before subtracting.
    Non-numeric, missing, NaN or infinite values count as 0.

    Args:
        time: Timestamp in ms
        start_time: Record start time in ms

    Returns:
        Milliseconds from start_time, or 0 when time rounds to 0
    """
    time_ms = round_half_up(time) if _is_finite_number(time) else 0
    start_ms = round_half_up(start_time) if _is_finite_number(start_time) else 0

    return 0 if time_ms == 0 else time_ms - start_ms


def to_base36(n: Any) -> str:
    """
    Convert a number to base 36.

    Args:
        n: Number; non-integral values are rounded first

    Returns:
        Base-36 digits (with a leading "-" for negatives), or an empty
        string if n is not a finite number
    """
    if not _is_finite_number(n):
        return ""

    value = n if isinstance(n, int) else round_half_up(n)
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    value = abs(value)

    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(BASE36_DIGITS[remainder])

    return sign + "".join(reversed(digits))


def initiator_code(initiator_type: Any) -> int:
    """Map an initiator type tag to its code; unknown tags are "other"."""
    if not isinstance(initiator_type, str):
        return DEFAULT_INITIATOR_CODE
    return INITIATOR_TYPES.get(initiator_type, DEFAULT_INITIATOR_CODE)


def timing_deltas(record: TimingRecord) -> list[int]:
    """
    Compute the timestamp deltas of a record in wire order.

    The first entry is the start time itself; every other entry is
    relative to it.
    """
    start_time = record.start_time
    deltas = [trim_timing(start_time, 0)]
    for name in TIMING_FIELDS[1:]:
        deltas.append(trim_timing(record.get_timing(name), start_time))
    return deltas


def encode_entry(record: TimingRecord) -> str:
    """
    Encode one timing record.

    Args:
        record: Timing record to encode

    Returns:
        Initiator code followed by comma-separated base-36 deltas, with
        trailing empty fields removed
    """
    fields = [to_base36(delta) if delta else "" for delta in timing_deltas(record)]
    data = FIELD_SEPARATOR.join(fields).rstrip(FIELD_SEPARATOR)

    return f"{initiator_code(record.initiator_type)}{data}"
