"""
Bounded history of change events for DiffFeed.

FeedHistory keeps the most recent change events (oldest first) together
with the file list of the latest scan, which the next scan diffs against.
"""

import logging
from collections import deque
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from difffeed.core.change_event import ChangeEvent
from difffeed.core.errors import HistoryFormatError
from difffeed.core.snapshot import SnapshotDiffer, SnapshotDifferInterface

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITEMS = 30

# Storage format version written by to_dict
HISTORY_FORMAT_VERSION = 1


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FeedHistory:
    """
    Size-bounded, oldest-first sequence of ChangeEvents plus the last FileSet.

    Pushing past ``max_items`` discards the oldest event. The history is
    mutated through update() or push() only.
    """

    def __init__(
        self,
        max_items: int = DEFAULT_MAX_ITEMS,
        files: Iterable[str] = (),
        events: Iterable[ChangeEvent] = (),
        differ: SnapshotDifferInterface | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """
        Initialize the FeedHistory.

        Args:
            max_items: Maximum number of events retained (at least 1)
            files: File list of the most recent scan
            events: Events to start with, oldest first; only the last
                    max_items are kept
            differ: Snapshot differ used by update(). Defaults to a
                    SnapshotDiffer with the default ignore rules.
            clock: Callable returning the current time, for event timestamps
        """
        if max_items < 1:
            raise ValueError(f"max_items must be at least 1, got {max_items}")

        self._max_items = max_items
        self._files: tuple[str, ...] = tuple(files)
        self._events: deque[ChangeEvent] = deque(events, maxlen=max_items)
        self._differ = differ or SnapshotDiffer()
        self._clock = clock

    @property
    def max_items(self) -> int:
        return self._max_items

    @property
    def files(self) -> tuple[str, ...]:
        return self._files

    @property
    def events(self) -> tuple[ChangeEvent, ...]:
        """Retained events, oldest first."""
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def push(self, event: ChangeEvent) -> None:
        """Append an event, evicting the oldest one when over capacity."""
        if len(self._events) == self._max_items:
            logger.debug(f"Evicting oldest event from {self._events[0].timestamp.isoformat()}")
        self._events.append(event)

    def update(self, root_path: Path | str) -> bool:
        """
        Scan a directory and record what changed since the last scan.

        Args:
            root_path: Directory to scan

        Returns:
            True if files were added or removed and an event was pushed,
            False if nothing changed (the history is left untouched)

        Raises:
            InvalidPathError: If root_path is not an existing directory
        """
        result = self._differ.diff(root_path, self._files)
        if not result.has_changes:
            logger.debug(f"No changes under {root_path}")
            return False

        event = ChangeEvent(timestamp=self._clock(), added=result.added, removed=result.removed)
        self.push(event)
        self._files = result.files
        logger.info(
            f"Recorded change under {root_path}: "
            f"{len(result.added)} added, {len(result.removed)} removed"
        )
        return True

    def last_update_time(self) -> datetime:
        """
        Timestamp of the most recently pushed event.

        Falls back to the current time when no events exist yet.
        """
        if not self._events:
            return self._clock()
        return self._events[-1].timestamp

    def to_dict(self) -> dict[str, Any]:
        """Convert the history to a dictionary suitable for YAML serialization."""
        return {
            "version": HISTORY_FORMAT_VERSION,
            "files": list(self._files),
            "events": [event.to_dict() for event in self._events],
        }

    @classmethod
    def from_dict(
        cls,
        data: Any,
        max_items: int = DEFAULT_MAX_ITEMS,
        differ: SnapshotDifferInterface | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> "FeedHistory":
        """
        Rebuild a FeedHistory from a dictionary produced by to_dict.

        When the stored data holds more than max_items events, the oldest
        ones are dropped.

        Raises:
            HistoryFormatError: If the data is not a valid stored history
        """
        if not isinstance(data, dict):
            raise HistoryFormatError(f"Expected a mapping, got {type(data).__name__}")

        version = data.get("version")
        if version != HISTORY_FORMAT_VERSION:
            raise HistoryFormatError(f"Unsupported history format version: {version!r}")

        files = data.get("files") or []
        if not isinstance(files, list) or not all(isinstance(f, str) for f in files):
            raise HistoryFormatError("'files' must be a list of paths")

        raw_events = data.get("events") or []
        if not isinstance(raw_events, list):
            raise HistoryFormatError("'events' must be a list")

        events = [ChangeEvent.from_dict(item) for item in raw_events]
        if len(events) > max_items:
            logger.info(f"Dropping {len(events) - max_items} stored events beyond max_items={max_items}")

        return cls(
            max_items=max_items,
            files=files,
            events=events,
            differ=differ,
            clock=clock,
        )
