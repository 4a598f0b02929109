"""
Change event model for DiffFeed.

A change event is one scan's worth of added and removed paths with the
time the scan noticed them. Events are immutable and are the unit the
feed history retains and the renderer turns into feed items.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from difffeed.core.errors import HistoryFormatError

# Maximum summary length, ellipsis included
SUMMARY_MAX_LENGTH = 40
ELLIPSIS = "..."


@dataclass(frozen=True)
class ChangeEvent:
    """
    Immutable record of the files that appeared and disappeared in one scan.

    Attributes:
        timestamp: When the change was detected (timezone-aware)
        added: Relative paths that appeared
        removed: Relative paths that disappeared
    """

    timestamp: datetime
    added: frozenset[str]
    removed: frozenset[str]

    def __post_init__(self) -> None:
        # Accept any iterable of paths, store frozensets
        if not isinstance(self.added, frozenset):
            object.__setattr__(self, "added", frozenset(self.added))
        if not isinstance(self.removed, frozenset):
            object.__setattr__(self, "removed", frozenset(self.removed))
        if self.timestamp.tzinfo is None:
            object.__setattr__(self, "timestamp", self.timestamp.replace(tzinfo=timezone.utc))
        if not (self.added or self.removed):
            raise ValueError("A change event needs at least one added or removed path")

    @property
    def epoch_seconds(self) -> int:
        """Integer seconds since the Unix epoch."""
        return int(self.timestamp.timestamp())

    def formatted_files(self) -> list[str]:
        """
        List every changed path with a ``+ `` or ``- `` marker.

        Added paths come first, then removed paths; each group is sorted
        lexicographically on its own.
        """
        return [f"+ {path}" for path in sorted(self.added)] + [
            f"- {path}" for path in sorted(self.removed)
        ]

    def summary(self) -> str:
        """
        Short description of the change, used as the feed item title.

        Longer than SUMMARY_MAX_LENGTH characters: the first 37 characters
        are kept, trailing whitespace is stripped and ``...`` appended.
        """
        return summarize(" ".join(self.formatted_files()))

    def to_dict(self) -> dict[str, Any]:
        """Convert the event to a dictionary suitable for YAML serialization."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "added": sorted(self.added),
            "removed": sorted(self.removed),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ChangeEvent":
        """
        Create a ChangeEvent from a dictionary produced by to_dict.

        Raises:
            HistoryFormatError: If the data does not describe a valid event
        """
        if not isinstance(data, dict):
            raise HistoryFormatError(f"Expected a mapping for an event, got {type(data).__name__}")

        timestamp = _parse_timestamp(data.get("timestamp"))
        added = _parse_paths(data.get("added", []), "added")
        removed = _parse_paths(data.get("removed", []), "removed")

        try:
            return cls(timestamp=timestamp, added=added, removed=removed)
        except ValueError as e:
            raise HistoryFormatError(str(e)) from e


def summarize(text: str) -> str:
    """Truncate ``text`` to SUMMARY_MAX_LENGTH characters with an ellipsis."""
    if len(text) > SUMMARY_MAX_LENGTH:
        return text[: SUMMARY_MAX_LENGTH - len(ELLIPSIS)].rstrip() + ELLIPSIS
    return text


def _parse_timestamp(value: Any) -> datetime:
    # safe_load turns unquoted ISO timestamps into datetime objects
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as e:
            raise HistoryFormatError(f"Invalid event timestamp: {value!r}") from e
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            parsed = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise HistoryFormatError(f"Event timestamp out of range: {value!r}") from e
    else:
        raise HistoryFormatError(f"Invalid event timestamp: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_paths(value: Any, field_name: str) -> frozenset[str]:
    if value is None:
        return frozenset()
    if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
        raise HistoryFormatError(f"Event field '{field_name}' must be a list of paths")
    return frozenset(value)
