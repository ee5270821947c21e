"""
Custom exceptions for the ingestion module.

Entry providers raise these while gathering timing records. The
compression core never raises them.
"""


class IngestionError(Exception):
    """
    Base exception for all entry-provider errors.

    Catch this to handle any failure to obtain timing records.
    """

    pass


class ValidationError(IngestionError):
    """
    Raised when a raw timing entry cannot become a TimingRecord.

    Attributes:
        field: The entry key that failed validation (optional)
        value: The offending value (optional)
        message: Detailed error message
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: object | None = None,
    ):
        self.field = field
        self.value = value
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.field and self.value is not None:
            return f"{self.message} (field='{self.field}', value={self.value!r})"
        elif self.field:
            return f"{self.message} (field='{self.field}')"
        return self.message


class ParseError(IngestionError):
    """
    Raised when an entry file or frame snapshot is malformed.

    Attributes:
        source: Path or label of the input being parsed (optional)
        line_number: 1-based line for line-oriented inputs (optional)
        message: Detailed error message
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        line_number: int | None = None,
    ):
        self.source = source
        self.line_number = line_number
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        location = self.source or ""
        if self.line_number is not None:
            location = f"{location}:{self.line_number}" if location else (
                f"line {self.line_number}"
            )
        if location:
            return f"{self.message} ({location})"
        return self.message


class ProviderNotFoundError(IngestionError):
    """
    Raised when no entry provider is registered under a name.

    Attributes:
        provider_name: The requested provider name
        available_providers: Registered provider names at lookup time
    """

    def __init__(
        self,
        provider_name: str,
        available_providers: list[str] | None = None,
    ):
        self.provider_name = provider_name
        self.available_providers = available_providers or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.available_providers:
            available = ", ".join(sorted(self.available_providers))
            return (
                f"Unknown entry provider: '{self.provider_name}'. "
                f"Available providers: {available}"
            )
        return (
            f"Unknown entry provider: '{self.provider_name}'. "
            "No providers registered."
        )


class SourceValidationError(IngestionError):
    """
    Raised when a provider's input source is missing or unusable.

    Attributes:
        source: Path or label of the rejected input
        reason: Why the input was rejected
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        reason: str | None = None,
    ):
        self.source = source
        self.reason = reason
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.source:
            parts.append(f"source='{self.source}'")
        if self.reason:
            parts.append(f"reason: {self.reason}")
        return " - ".join(parts)
