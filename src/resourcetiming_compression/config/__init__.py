"""Configuration module."""

from .constants import (
    DEFAULT_INITIATOR_CODE,
    DEFAULT_SKIPPED_SCHEMES,
    FIELD_SEPARATOR,
    INITIATOR_NAMES,
    INITIATOR_TYPES,
    RESERVED_SEPARATOR,
    TIMING_FIELDS,
)
from .settings import (
    CompressionSettings,
    Settings,
    clear_settings_cache,
    get_settings,
    load_config_file,
)

__all__ = [
    # Wire contract
    "INITIATOR_TYPES",
    "INITIATOR_NAMES",
    "DEFAULT_INITIATOR_CODE",
    "TIMING_FIELDS",
    "RESERVED_SEPARATOR",
    "FIELD_SEPARATOR",
    # Filtering
    "DEFAULT_SKIPPED_SCHEMES",
    # Settings
    "Settings",
    "CompressionSettings",
    "get_settings",
    "clear_settings_cache",
    # Config loading
    "load_config_file",
]
