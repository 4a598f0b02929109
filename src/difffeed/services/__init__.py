"""
Service Layer - FeedService.
"""

from difffeed.services.feed_service import FeedRunResult, FeedService

__all__ = [
    "FeedService",
    "FeedRunResult",
]
