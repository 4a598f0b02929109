"""
Abstract interfaces for snapshot operations.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from .models import SnapshotDiff


class SnapshotDifferInterface(ABC):
    """
    Abstract interface for taking and comparing directory snapshots.

    Implementations walk a directory tree, skip ignored entries and report
    which relative file paths appeared or disappeared since a previous scan.
    """

    @abstractmethod
    def scan(self, root_path: Path | str) -> list[str]:
        """
        Recursively list the files under a directory.

        Args:
            root_path: Root directory to scan

        Returns:
            Sorted relative POSIX paths of every regular file kept

        Raises:
            InvalidPathError: If root_path is not an existing directory
        """
        pass

    @abstractmethod
    def diff(self, root_path: Path | str, previous_files: Iterable[str]) -> SnapshotDiff:
        """
        Scan a directory and compare it with a previous snapshot.

        Args:
            root_path: Root directory to scan
            previous_files: Relative paths recorded by the previous scan

        Returns:
            SnapshotDiff with the new file list and the added/removed sets

        Raises:
            InvalidPathError: If root_path is not an existing directory
        """
        pass
