"""
Property-based tests for FeedHistory and summaries.

**Feature: feed-history, Property 1: Bounded FIFO eviction**
**Feature: feed-history, Property 2: Summary length budget**
"""

from datetime import datetime, timedelta, timezone

from hypothesis import given, settings
from hypothesis import strategies as st

from difffeed.core.change_event import SUMMARY_MAX_LENGTH, ChangeEvent, summarize
from difffeed.core.feed_history import FeedHistory

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)

path_text = st.text(
    alphabet=st.characters(categories=("L", "N", "P", "Zs"), exclude_characters="/"),
    min_size=1,
    max_size=30,
)


@given(
    max_items=st.integers(min_value=1, max_value=12),
    pushes=st.integers(min_value=0, max_value=40),
)
@settings(max_examples=100)
def test_bounded_fifo_eviction(max_items: int, pushes: int):
    """
    **Feature: feed-history, Property 1: Bounded FIFO eviction**

    The history never holds more than max_items events, and the retained
    events are the most recently pushed ones in push order.
    """
    history = FeedHistory(max_items=max_items)
    pushed = []

    for index in range(pushes):
        event = ChangeEvent(T0 + timedelta(seconds=index), added={f"f{index}"}, removed=set())
        history.push(event)
        pushed.append(event)
        assert len(history) <= max_items

    assert history.events == tuple(pushed[-max_items:])


@given(text=st.text(max_size=120))
@settings(max_examples=200)
def test_summary_length_budget(text: str):
    """
    **Feature: feed-history, Property 2: Summary length budget**

    Summaries never exceed 40 characters; short text is left untouched and
    long text keeps its first 37 characters (right-stripped) plus "...".
    """
    result = summarize(text)

    assert len(result) <= SUMMARY_MAX_LENGTH
    if len(text) <= SUMMARY_MAX_LENGTH:
        assert result == text
    else:
        assert result == text[:37].rstrip() + "..."


@given(
    added=st.frozensets(path_text, max_size=8),
    removed=st.frozensets(path_text, max_size=8),
)
@settings(max_examples=100)
def test_formatted_files_order(added: frozenset, removed: frozenset):
    """
    **Feature: feed-history, Property 3: Added before removed, each sorted**
    """
    if not (added or removed):
        return

    lines = ChangeEvent(T0, added=added, removed=removed).formatted_files()

    assert lines == [f"+ {p}" for p in sorted(added)] + [f"- {p}" for p in sorted(removed)]
