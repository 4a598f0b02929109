"""
Helpers for building small directory trees in tests.
"""

from pathlib import Path


def make_tree(root: Path, relative_paths: list[str]) -> None:
    """Create empty files (and their parent directories) under root."""
    for relative in relative_paths:
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("", encoding="utf-8")


class FixedClock:
    """Clock returning preset timestamps, advancing one step per call."""

    def __init__(self, start, step):
        self._current = start
        self._step = step

    def __call__(self):
        value = self._current
        self._current = self._current + self._step
        return value
