"""
Concrete entry providers.

Each subdirectory contains one provider implementation. Providers are
auto-registered when imported via the ingestion module.
"""

# Import frame snapshot provider (auto-registers via decorator)
from .frame_snapshot import FrameSnapshotProvider  # noqa: F401

# Import JSON file provider (auto-registers via decorator)
from .json_file import JSONFileProvider  # noqa: F401

# Import in-memory provider (auto-registers via decorator)
from .static import StaticEntryProvider  # noqa: F401

__all__: list[str] = [
    "FrameSnapshotProvider",
    "JSONFileProvider",
    "StaticEntryProvider",
]
