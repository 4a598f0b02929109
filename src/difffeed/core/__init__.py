"""
Core Layer - Configuration, snapshot diffing, change events, history and rendering.
"""

from difffeed.core.change_event import ChangeEvent, summarize
from difffeed.core.config import (
    DiffFeedConfig,
    FeedConfig,
    LoggingConfig,
    ScanConfig,
    StorageConfig,
    load_config,
)
from difffeed.core.errors import (
    DiffFeedError,
    HistoryFormatError,
    HistoryLoadError,
    HistoryStoreError,
    InvalidPathError,
)
from difffeed.core.feed_history import DEFAULT_MAX_ITEMS, FeedHistory
from difffeed.core.feed_renderer import FeedRenderer, render
from difffeed.core.snapshot import (
    DEFAULT_IGNORE_PREFIXES,
    SnapshotDiff,
    SnapshotDiffer,
    SnapshotDifferInterface,
    diff,
)

__all__ = [
    # Config
    "DiffFeedConfig",
    "FeedConfig",
    "StorageConfig",
    "ScanConfig",
    "LoggingConfig",
    "load_config",
    # Errors
    "DiffFeedError",
    "InvalidPathError",
    "HistoryFormatError",
    "HistoryLoadError",
    "HistoryStoreError",
    # Snapshot
    "SnapshotDiff",
    "SnapshotDiffer",
    "SnapshotDifferInterface",
    "DEFAULT_IGNORE_PREFIXES",
    "diff",
    # History
    "ChangeEvent",
    "FeedHistory",
    "DEFAULT_MAX_ITEMS",
    "summarize",
    # Rendering
    "FeedRenderer",
    "render",
]
