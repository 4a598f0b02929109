"""
Snapshot module for DiffFeed.

Provides recursive directory listing with ignore-prefix pruning and the
presence/absence diff between two snapshots.
"""

from .differ import SnapshotDiffer, diff
from .interfaces import SnapshotDifferInterface
from .models import DEFAULT_IGNORE_PREFIXES, SnapshotDiff

__all__ = [
    # Main classes
    "SnapshotDiffer",
    "SnapshotDifferInterface",
    "SnapshotDiff",
    "diff",
    # Constants
    "DEFAULT_IGNORE_PREFIXES",
]
