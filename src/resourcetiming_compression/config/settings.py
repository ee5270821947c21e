"""
Application settings and configuration management.

Supports loading from:
1. YAML config files (resourcetiming.yaml)
2. Environment variables (fallback)
"""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml

from .constants import DEFAULT_SKIPPED_SCHEMES, RESERVED_SEPARATOR

logger = logging.getLogger(__name__)


# =============================================================================
# Compression Settings
# =============================================================================


@dataclass
class CompressionSettings:
    """
    Configuration for the compression core.

    Controls which pseudo-resources are filtered out before encoding and
    how URLs containing the reserved separator are treated.
    """

    # URL prefixes that never carry network timing
    skipped_schemes: list[str] = field(
        default_factory=lambda: list(DEFAULT_SKIPPED_SCHEMES)
    )

    # Raise on URLs containing "|" instead of skipping them
    strict_urls: bool = True

    def validate(self) -> list[str]:
        """Validate settings values. Returns list of errors."""
        errors = []

        for scheme in self.skipped_schemes:
            if not scheme:
                errors.append("skipped_schemes must not contain empty entries")
            elif RESERVED_SEPARATOR in scheme:
                errors.append(
                    f"skipped_schemes entry must not contain "
                    f"'{RESERVED_SEPARATOR}', got {scheme!r}"
                )

        return errors

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "skipped_schemes": list(self.skipped_schemes),
            "strict_urls": self.strict_urls,
        }

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "CompressionSettings":
        """Create from configuration dictionary."""
        return cls(
            skipped_schemes=list(
                config.get("skipped_schemes", DEFAULT_SKIPPED_SCHEMES)
            ),
            strict_urls=config.get("strict_urls", True),
        )

    @classmethod
    def from_env(cls) -> "CompressionSettings":
        """Create from environment variables."""

        def safe_bool(key: str, default: bool) -> bool:
            """Safely parse bool from env var."""
            return os.environ.get(key, str(default).lower()).lower() == "true"

        schemes_env = os.environ.get("RT_SKIPPED_SCHEMES")
        if schemes_env is not None:
            skipped_schemes = [s.strip() for s in schemes_env.split(",") if s.strip()]
        else:
            skipped_schemes = list(DEFAULT_SKIPPED_SCHEMES)

        return cls(
            skipped_schemes=skipped_schemes,
            strict_urls=safe_bool("RT_STRICT_URLS", True),
        )


# =============================================================================
# Main Settings
# =============================================================================

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    """Application settings."""

    # Entry provider used when none is named explicitly
    default_provider: str = "json_file"

    log_level: str = "INFO"

    compression: CompressionSettings = field(default_factory=CompressionSettings)

    def validate(self) -> list[str]:
        """Validate settings. Returns list of errors."""
        errors = []

        if not self.default_provider:
            errors.append("default_provider is required")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}, "
                f"got {self.log_level!r}"
            )

        # Validate nested settings
        errors.extend(self.compression.validate())

        return errors

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "default_provider": self.default_provider,
            "log_level": self.log_level,
            "compression": self.compression.to_dict(),
        }

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "Settings":
        """Create Settings from configuration dictionary (e.g., from YAML)."""
        ingestion = config.get("ingestion", {})
        logging_cfg = config.get("logging", {})
        compression = config.get("compression", {})

        return cls(
            default_provider=ingestion.get("default_provider", "json_file"),
            log_level=logging_cfg.get("level", "INFO"),
            compression=CompressionSettings.from_dict(compression),
        )

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""
        return cls(
            default_provider=os.environ.get("RT_DEFAULT_PROVIDER", "json_file"),
            log_level=os.environ.get("RT_LOG_LEVEL", "INFO"),
            compression=CompressionSettings.from_env(),
        )


# Default config file path
DEFAULT_CONFIG_PATH = Path("resourcetiming.yaml")


def load_config_file(file_path: Path) -> dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        file_path: Path to the config file

    Returns:
        Parsed configuration as dictionary (empty for an empty file)

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file does not contain a YAML mapping
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(
            f"Config file must contain a mapping, got {type(config).__name__}"
        )
    return config


@lru_cache
def get_settings(config_path: Optional[str] = None) -> Settings:
    """
    Get cached settings instance.

    Loads from a YAML config file if available, otherwise from env vars.

    Args:
        config_path: Optional path to YAML config file

    Returns:
        Settings instance
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if path.exists():
        try:
            config = load_config_file(path)
            return Settings.from_dict(config)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config from {path}: {e}")
            logger.warning("Falling back to environment variables")

    return Settings.from_env()


def clear_settings_cache() -> None:
    """Clear the cached settings (useful for testing)."""
    get_settings.cache_clear()
