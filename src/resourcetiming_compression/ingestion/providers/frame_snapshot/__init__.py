"""
Frame snapshot entry provider.

Walks a serialized frame tree (page plus nested iframes) and yields
navigation and resource timing records on one time origin.
"""

from .adapter import FrameSnapshotProvider

__all__ = ["FrameSnapshotProvider"]
