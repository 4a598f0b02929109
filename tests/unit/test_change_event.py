"""
Unit tests for ChangeEvent formatting and serialization.
"""

from datetime import datetime, timedelta, timezone

import pytest

from difffeed.core.change_event import ChangeEvent, summarize
from difffeed.core.errors import HistoryFormatError

T0 = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestFormattedFiles:
    """Test the prefixed file list."""

    def test_added_then_removed_each_sorted(self):
        event = ChangeEvent(T0, added={"z.txt", "b.txt"}, removed={"y.txt", "a.txt"})

        assert event.formatted_files() == ["+ b.txt", "+ z.txt", "- a.txt", "- y.txt"]

    def test_only_removed(self):
        event = ChangeEvent(T0, added=set(), removed={"gone.txt"})

        assert event.formatted_files() == ["- gone.txt"]


class TestSummary:
    """Test summary building and the 40 character budget."""

    def test_delete_and_add_summary(self):
        event = ChangeEvent(T0, added={"c.txt"}, removed={"a.txt"})

        assert event.summary() == "+ c.txt - a.txt"

    def test_exactly_40_characters_is_untouched(self):
        text = "x" * 40

        assert summarize(text) == text

    def test_41_characters_is_truncated_to_40(self):
        text = "y" * 41

        result = summarize(text)

        assert result == "y" * 37 + "..."
        assert len(result) == 40

    def test_trailing_whitespace_stripped_before_ellipsis(self):
        text = "a" * 35 + "  " + "b" * 10

        assert summarize(text) == "a" * 35 + "..."

    def test_long_event_summary(self):
        added = {f"directory/file_{i}.txt" for i in range(5)}
        event = ChangeEvent(T0, added=added, removed=set())

        summary = event.summary()

        assert summary.endswith("...")
        assert len(summary) <= 40
        assert summary.startswith("+ directory/file_0.txt + directory/")


class TestConstruction:
    """Test invariants enforced on creation."""

    def test_requires_a_change(self):
        with pytest.raises(ValueError):
            ChangeEvent(T0, added=frozenset(), removed=frozenset())

    def test_sets_are_frozen(self):
        event = ChangeEvent(T0, added=["a.txt", "a.txt"], removed=[])

        assert event.added == frozenset({"a.txt"})
        assert isinstance(event.removed, frozenset)

    def test_event_is_immutable(self):
        event = ChangeEvent(T0, added={"a.txt"}, removed=set())

        with pytest.raises(AttributeError):
            event.added = frozenset({"b.txt"})

    def test_naive_timestamp_treated_as_utc(self):
        event = ChangeEvent(datetime(2024, 3, 1, 12, 0, 0), added={"a.txt"}, removed=set())

        assert event.timestamp == T0

    def test_epoch_seconds(self):
        event = ChangeEvent(T0 + timedelta(microseconds=900), added={"a"}, removed=set())

        assert event.epoch_seconds == int(T0.timestamp())


class TestSerialization:
    """Test to_dict / from_dict."""

    def test_to_dict_is_sorted(self):
        event = ChangeEvent(T0, added={"b", "a"}, removed={"d", "c"})

        assert event.to_dict() == {
            "timestamp": "2024-03-01T12:00:00+00:00",
            "added": ["a", "b"],
            "removed": ["c", "d"],
        }

    def test_from_dict_accepts_datetime_values(self):
        event = ChangeEvent.from_dict({"timestamp": T0, "added": ["a"], "removed": []})

        assert event.timestamp == T0

    def test_from_dict_accepts_missing_removed(self):
        event = ChangeEvent.from_dict({"timestamp": T0.isoformat(), "added": ["a"]})

        assert event.removed == frozenset()

    @pytest.mark.parametrize(
        "data",
        [
            "not a mapping",
            {"timestamp": "yesterday", "added": ["a"]},
            {"timestamp": None, "added": ["a"]},
            {"timestamp": float("inf"), "added": ["a"]},
            {"timestamp": 10**20, "added": ["a"]},
            {"timestamp": T0.isoformat(), "added": "a.txt"},
            {"timestamp": T0.isoformat(), "added": [1, 2]},
            {"timestamp": T0.isoformat(), "added": [], "removed": []},
        ],
    )
    def test_from_dict_rejects_invalid_data(self, data):
        with pytest.raises(HistoryFormatError):
            ChangeEvent.from_dict(data)
