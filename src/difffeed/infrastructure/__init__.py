"""
Infrastructure Layer - Durable storage for the feed history.
"""

from difffeed.infrastructure.history_store import HistoryStore

__all__ = [
    "HistoryStore",
]
