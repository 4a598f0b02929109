"""
Data models and constants for the snapshot differ.
"""

from dataclasses import dataclass

# Entries whose final path component starts with one of these prefixes
# (compared case-insensitively) are skipped; directories are pruned.
DEFAULT_IGNORE_PREFIXES: tuple[str, ...] = (".", "cvs", ".svn", "trash")


@dataclass(frozen=True)
class SnapshotDiff:
    """
    Result of comparing a fresh directory snapshot with a previous one.

    Attributes:
        files: Relative POSIX paths of every file found, sorted
        added: Paths present now but not in the previous snapshot
        removed: Paths present in the previous snapshot but not now
    """

    files: tuple[str, ...]
    added: frozenset[str]
    removed: frozenset[str]

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed)
