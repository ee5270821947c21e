"""
Abstract base class and data models for entry providers.

An entry provider delivers an ordered batch of timing records, already
normalized to one time origin. How it obtains them (a JSON export, a
frame-tree snapshot, an in-memory list) is irrelevant to compression.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

# camelCase (PerformanceResourceTiming) -> dataclass attribute
TIMESTAMP_ATTRIBUTES = {
    "startTime": "start_time",
    "redirectStart": "redirect_start",
    "redirectEnd": "redirect_end",
    "fetchStart": "fetch_start",
    "domainLookupStart": "domain_lookup_start",
    "domainLookupEnd": "domain_lookup_end",
    "connectStart": "connect_start",
    "secureConnectionStart": "secure_connection_start",
    "connectEnd": "connect_end",
    "requestStart": "request_start",
    "responseStart": "response_start",
    "responseEnd": "response_end",
}


@dataclass
class TimingRecord:
    """
    Network timing for one fetched resource (or the page navigation).

    All timestamps are milliseconds relative to one shared time origin.
    A timestamp of None or 0 means the phase did not apply to this
    resource (e.g. no redirect, reused connection).

    Required Fields:
        url: Resource URL; must not contain "|"

    Optional Fields:
        initiator_type: What caused the fetch ("script", "img", ...)
        start_time ... response_end: Lifecycle timestamps
    """

    url: str
    initiator_type: str = "other"
    start_time: Optional[float] = 0.0
    redirect_start: Optional[float] = None
    redirect_end: Optional[float] = None
    fetch_start: Optional[float] = None
    domain_lookup_start: Optional[float] = None
    domain_lookup_end: Optional[float] = None
    connect_start: Optional[float] = None
    secure_connection_start: Optional[float] = None
    connect_end: Optional[float] = None
    request_start: Optional[float] = None
    response_start: Optional[float] = None
    response_end: Optional[float] = None

    def get_timing(self, name: str) -> Any:
        """
        Look up a timestamp by its camelCase name.

        Args:
            name: Timing attribute name as used by the browser API
                  (e.g. "responseEnd")

        Returns:
            The stored value, unvalidated

        Raises:
            KeyError: If name is not a known timing attribute
        """
        return getattr(self, TIMESTAMP_ATTRIBUTES[name])

    def to_dict(self) -> dict:
        """
        Convert to the camelCase form used by the browser API.

        Returns:
            Dictionary with "name", "initiatorType" and every timestamp
        """
        result = {"name": self.url, "initiatorType": self.initiator_type}
        for camel, attr in TIMESTAMP_ATTRIBUTES.items():
            result[camel] = getattr(self, attr)
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "TimingRecord":
        """
        Create a TimingRecord from a dictionary.

        Accepts either browser-style keys ("name", "initiatorType",
        "startTime", ...) or the dataclass attribute names ("url",
        "initiator_type", "start_time", ...). Timestamp values are passed
        through untouched; the encoder coerces anything non-numeric to 0.

        Args:
            data: Dictionary with entry fields

        Returns:
            TimingRecord instance

        Raises:
            ValidationError: If the URL is missing or not a string
        """
        from .exceptions import ValidationError

        url = data.get("name", data.get("url"))
        if url is None:
            raise ValidationError("Missing required field: name", field="name")
        if not isinstance(url, str):
            raise ValidationError("URL must be a string", field="name", value=url)

        initiator_type = data.get("initiatorType", data.get("initiator_type"))

        timings = {}
        for camel, attr in TIMESTAMP_ATTRIBUTES.items():
            if camel in data:
                timings[attr] = data[camel]
            elif attr in data:
                timings[attr] = data[attr]

        return cls(
            url=url,
            initiator_type=initiator_type if initiator_type else "other",
            **timings,
        )


class EntryProvider(ABC):
    """
    Abstract base class for all entry providers.

    Subclasses must implement:
        - provider_name: Property returning the provider identifier
        - provide(): Return the batch of TimingRecord objects

    Example Implementation:
        @ProviderRegistry.register('static')
        class StaticEntryProvider(EntryProvider):
            @property
            def provider_name(self) -> str:
                return 'static'

            def provide(self):
                return list(self._records)
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """
        Return the provider name identifier.

        This is used for registry lookup and logging.
        """
        pass

    @abstractmethod
    def provide(self) -> list[TimingRecord]:
        """
        Gather timing records.

        Returns:
            Ordered list of TimingRecord objects sharing one time origin

        Raises:
            SourceValidationError: If the provider's source is unusable
            ParseError: If the source cannot be parsed
            IngestionError: For other provider failures
        """
        pass
