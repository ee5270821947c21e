"""
Entry provider layer.

Supplies batches of TimingRecord objects to the compressor. Providers
are looked up by name through the registry.

Usage:
    from resourcetiming_compression.ingestion import get_provider

    provider = get_provider('json_file', path='page-timings.json')
    for record in provider.provide():
        print(record.url, record.response_end)
"""

from .base import TIMESTAMP_ATTRIBUTES, EntryProvider, TimingRecord
from .exceptions import (
    IngestionError,
    ParseError,
    ProviderNotFoundError,
    SourceValidationError,
    ValidationError,
)
from .file_utils import open_text_auto_decompress
from .registry import ProviderRegistry, get_provider, list_providers, register_provider

# Register the bundled providers
from . import providers  # noqa: F401, E402

__all__ = [
    # Base classes and data models
    "EntryProvider",
    "TimingRecord",
    "TIMESTAMP_ATTRIBUTES",
    # Registry functions
    "ProviderRegistry",
    "get_provider",
    "register_provider",
    "list_providers",
    # Exceptions
    "IngestionError",
    "ValidationError",
    "ParseError",
    "ProviderNotFoundError",
    "SourceValidationError",
    # File utilities
    "open_text_auto_decompress",
]
