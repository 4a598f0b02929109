"""
SnapshotDiffer implementation for presence/absence change detection.
"""

import logging
import os
from collections.abc import Iterable, Sequence
from pathlib import Path

import pathspec

from difffeed.core.errors import InvalidPathError
from difffeed.core.path_utils import to_relative_posix, validate_scan_root

from .interfaces import SnapshotDifferInterface
from .models import DEFAULT_IGNORE_PREFIXES, SnapshotDiff

logger = logging.getLogger(__name__)


class SnapshotDiffer(SnapshotDifferInterface):
    """
    Concrete implementation of SnapshotDifferInterface.

    Walks the tree top-down with os.walk so ignored directories can be
    pruned before they are entered. Symlinked directories are never
    descended; symlinks to regular files are listed like files.
    """

    def __init__(
        self,
        ignore_prefixes: Sequence[str] | None = None,
        extra_ignore_patterns: Sequence[str] | None = None,
    ):
        """
        Initialize the SnapshotDiffer.

        Args:
            ignore_prefixes: Name prefixes to skip, compared case-insensitively.
                            If None, defaults to DEFAULT_IGNORE_PREFIXES.
            extra_ignore_patterns: Additional gitignore-style patterns matched
                                  against paths relative to the scan root.
        """
        prefixes = DEFAULT_IGNORE_PREFIXES if ignore_prefixes is None else ignore_prefixes
        self._ignore_prefixes: tuple[str, ...] = tuple(p.lower() for p in prefixes if p)
        self._extra_spec: pathspec.PathSpec | None = None
        if extra_ignore_patterns:
            self._extra_spec = pathspec.PathSpec.from_lines(
                "gitwildmatch", list(extra_ignore_patterns)
            )

    def _should_ignore(self, name: str, relative_path: str, is_dir: bool) -> bool:
        """Check the final path component, then the extra patterns."""
        if name.lower().startswith(self._ignore_prefixes):
            return True

        if self._extra_spec is None:
            return False

        candidate = relative_path + "/" if is_dir else relative_path
        return self._extra_spec.match_file(candidate)

    def scan(self, root_path: Path | str) -> list[str]:
        """
        Recursively list the files under a directory.

        Args:
            root_path: Root directory to scan

        Returns:
            Sorted relative POSIX paths
        """
        validation = validate_scan_root(root_path)
        if not validation.valid:
            raise InvalidPathError(validation.error_message)

        root = os.fspath(root_path)
        files: list[str] = []

        def _on_walk_error(error: OSError) -> None:
            logger.warning(f"Error accessing directory: {error.filename} - {error.strerror}")

        for current_dir, dirnames, filenames in os.walk(root, onerror=_on_walk_error):
            # Prune in place so os.walk never enters ignored directories
            kept_dirs = []
            for dirname in dirnames:
                relative = to_relative_posix(os.path.join(current_dir, dirname), root)
                if self._should_ignore(dirname, relative, is_dir=True):
                    logger.debug(f"Pruning: {relative}")
                    continue
                kept_dirs.append(dirname)
            dirnames[:] = kept_dirs

            for filename in filenames:
                full_path = os.path.join(current_dir, filename)
                relative = to_relative_posix(full_path, root)
                if self._should_ignore(filename, relative, is_dir=False):
                    logger.debug(f"Ignoring: {relative}")
                    continue
                if os.path.isfile(full_path):
                    files.append(relative)

        files.sort()
        logger.debug(f"Scanned {len(files)} files under {root}")
        return files

    def diff(self, root_path: Path | str, previous_files: Iterable[str]) -> SnapshotDiff:
        """
        Scan a directory and compare it with a previous snapshot.

        Args:
            root_path: Root directory to scan
            previous_files: Relative paths recorded by the previous scan

        Returns:
            SnapshotDiff with the new file list and the added/removed sets
        """
        files = self.scan(root_path)
        current = frozenset(files)
        previous = frozenset(previous_files)

        return SnapshotDiff(
            files=tuple(files),
            added=current - previous,
            removed=previous - current,
        )


def diff(root_path: Path | str, previous_files: Iterable[str]) -> SnapshotDiff:
    """Diff a directory against a previous snapshot using the default ignore rules."""
    return SnapshotDiffer().diff(root_path, previous_files)
