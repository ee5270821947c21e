"""
Frame snapshot entry provider.

A frame snapshot is a JSON-serializable dump of what a page's
``window.performance`` exposed at beacon time, for the top window and
every nested frame:

    {
        "url": "https://example.com/",
        "accessible": true,
        "timing": {"navigationStart": 1700000000000, "responseEnd": ...},
        "navigation": [{"redirectStart": 0, "responseEnd": 412.3, ...}],
        "resources": [{"name": "https://example.com/app.js", ...}],
        "frames": [{...child snapshot...}]
    }

Resource timestamps in a child frame are relative to that frame's own
navigation start; they are shifted onto the top window's time origin
using the difference between the frames' navigationStart values.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from ...base import TIMESTAMP_ATTRIBUTES, EntryProvider, TimingRecord
from ...exceptions import ParseError, SourceValidationError
from ...file_utils import load_json_document
from ...registry import ProviderRegistry

logger = logging.getLogger(__name__)

# Fields copied from a navigation or resource entry (startTime handled apart)
_LIFECYCLE_FIELDS = [name for name in TIMESTAMP_ATTRIBUTES if name != "startTime"]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _shift(value: Any, offset: float) -> float:
    """Move a timestamp by offset; absent (0 / missing) stays 0."""
    if _is_number(value) and value:
        return value + offset
    return 0


def _relative_to(value: Any, origin: float) -> float:
    """Make an epoch timestamp relative to origin; absent stays 0."""
    if _is_number(value) and value:
        return value - origin
    return 0


@ProviderRegistry.register("frame_snapshot")
class FrameSnapshotProvider(EntryProvider):
    """
    Provider walking a serialized frame tree.

    Child frames are visited before their parent, so records appear in
    depth-first post-order with the top window's records last. The top
    window also contributes a record for the page navigation itself,
    named after the page URL with startTime 0.

    Usage:
        provider = FrameSnapshotProvider(path="snapshot.json")
        records = provider.provide()
    """

    def __init__(
        self,
        snapshot: Optional[dict] = None,
        path: Optional[Union[str, Path]] = None,
    ):
        """
        Initialize the provider.

        Args:
            snapshot: Already-loaded snapshot of the top window
            path: JSON file holding the snapshot (optionally gzipped)

        Raises:
            SourceValidationError: Unless exactly one of snapshot or path
                is given
        """
        if (snapshot is None) == (path is None):
            raise SourceValidationError(
                "Frame snapshot provider needs exactly one input",
                source="frame_snapshot",
                reason="pass either snapshot or path",
            )
        self._snapshot = snapshot
        self.path = Path(path) if path is not None else None

    @property
    def provider_name(self) -> str:
        return "frame_snapshot"

    def provide(self) -> list[TimingRecord]:
        """
        Gather navigation and resource records from every frame.

        Raises:
            SourceValidationError: If the snapshot file does not exist
            ParseError: If the snapshot is not a frame object, or a frame
                holds non-list resources / frames
        """
        snapshot = self._snapshot
        if snapshot is None:
            snapshot = load_json_document(self.path)

        if not isinstance(snapshot, dict):
            raise ParseError(
                f"Frame snapshot must be an object, got {type(snapshot).__name__}",
                source=self._source_label(),
            )

        records = self.find_entries_for_frame(snapshot, is_top_window=True, offset=0)
        logger.info(f"Collected {len(records)} timing records from frame snapshot")
        return records

    def find_entries_for_frame(
        self, frame: dict, is_top_window: bool, offset: float
    ) -> list[TimingRecord]:
        """
        Collect records for a frame and all of its sub-frames.

        Args:
            frame: Snapshot of one frame
            is_top_window: Whether this is the top-level page
            offset: Milliseconds between the top window's origin and this
                frame's origin

        Returns:
            Records for the sub-frames followed by this frame's own records
        """
        records: list[TimingRecord] = []
        nav_start = self.get_nav_start_time(frame)

        for child in self._list_field(frame, "frames"):
            if not isinstance(child, dict):
                raise ParseError(
                    f"Frame entry must be an object, got {type(child).__name__}",
                    source=self._source_label(),
                )
            child_nav_start = self.get_nav_start_time(child)
            child_offset = 0
            if child_nav_start > nav_start:
                child_offset = offset + (child_nav_start - nav_start)
            records.extend(self.find_entries_for_frame(child, False, child_offset))

        if not self._has_performance_data(frame):
            logger.warning(
                f"No readable timing data for frame {frame.get('url', '<unknown>')!r}"
            )
            return records

        if is_top_window:
            navigation = self._navigation_record(frame)
            if navigation is not None:
                records.append(navigation)

        for entry in self._list_field(frame, "resources"):
            if not isinstance(entry, dict):
                raise ParseError(
                    f"Resource entry must be an object, got {type(entry).__name__}",
                    source=self._source_label(),
                )
            records.append(self._resource_record(entry, offset))

        return records

    @staticmethod
    def get_nav_start_time(frame: dict) -> float:
        """
        Return a frame's navigationStart epoch time, or 0 if not readable.
        """
        if frame.get("accessible", True) is False:
            return 0

        timing = frame.get("timing")
        if isinstance(timing, dict) and _is_number(timing.get("navigationStart")):
            return timing["navigationStart"]

        nav_start = frame.get("navigationStart")
        if _is_number(nav_start):
            return nav_start
        return 0

    @staticmethod
    def _has_performance_data(frame: dict) -> bool:
        if frame.get("accessible", True) is False:
            return False
        return any(key in frame for key in ("navigation", "timing", "resources"))

    def _navigation_record(self, frame: dict) -> Optional[TimingRecord]:
        """
        Build the page navigation record.

        Prefers a single Navigation Timing entry; otherwise derives the
        record from the legacy timing object.
        """
        url = frame.get("url")
        if not isinstance(url, str):
            logger.warning("Top window snapshot has no URL; skipping navigation record")
            return None

        navigation = frame.get("navigation")
        if (
            isinstance(navigation, list)
            and len(navigation) == 1
            and isinstance(navigation[0], dict)
        ):
            entry = navigation[0]
            data = {"name": url, "startTime": 0}
            for name in _LIFECYCLE_FIELDS:
                data[name] = entry.get(name)
            return TimingRecord.from_dict(data)

        timing = frame.get("timing")
        if isinstance(timing, dict):
            origin = timing.get("navigationStart")
            if not _is_number(origin):
                origin = 0
            data = {"name": url, "startTime": 0}
            for name in _LIFECYCLE_FIELDS:
                data[name] = _relative_to(timing.get(name), origin)
            return TimingRecord.from_dict(data)

        return None

    @staticmethod
    def _resource_record(entry: dict, offset: float) -> TimingRecord:
        start_time = entry.get("startTime")
        data = {
            "name": entry.get("name"),
            "initiatorType": entry.get("initiatorType"),
            "startTime": start_time + offset if _is_number(start_time) else start_time,
        }
        for name in _LIFECYCLE_FIELDS:
            data[name] = _shift(entry.get(name), offset)
        return TimingRecord.from_dict(data)

    def _list_field(self, frame: dict, key: str) -> list:
        value = frame.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            raise ParseError(
                f"Frame field '{key}' must be a list, got {type(value).__name__}",
                source=self._source_label(),
            )
        return value

    def _source_label(self) -> str:
        return str(self.path) if self.path is not None else "frame_snapshot"
