"""
Feed Service for DiffFeed.

Runs one scheduled pass: load the stored history, scan the directory,
record a change event when files were added or removed, render the feed
and persist the history when it changed.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from difffeed.core.config import DiffFeedConfig
from difffeed.core.errors import InvalidPathError
from difffeed.core.feed_history import FeedHistory
from difffeed.core.feed_renderer import FeedRenderer
from difffeed.core.path_utils import validate_scan_root
from difffeed.core.snapshot import SnapshotDiffer
from difffeed.infrastructure.history_store import HistoryStore

logger = logging.getLogger(__name__)


@dataclass
class FeedRunResult:
    """Result of refreshing the history against a directory."""

    history: FeedHistory
    changed: bool
    duration_seconds: float = 0.0


class FeedService:
    """
    Wires the snapshot differ, history store and renderer from one config.
    """

    def __init__(
        self,
        config: DiffFeedConfig,
        store: Optional[HistoryStore] = None,
        renderer: Optional[FeedRenderer] = None,
    ):
        """
        Initialize the FeedService.

        Args:
            config: Feed, storage and scan settings
            store: History store to use. If None, one is built from
                   config.storage.path and config.feed.max_items.
            renderer: Renderer to use. If None, one is built from config.feed.
        """
        self._config = config
        if store is None:
            differ = SnapshotDiffer(
                ignore_prefixes=config.scan.ignore_prefixes,
                extra_ignore_patterns=config.scan.extra_ignore_patterns,
            )
            store = HistoryStore(
                config.storage.path, max_items=config.feed.max_items, differ=differ
            )
        self._store = store
        self._renderer = renderer or FeedRenderer(config.feed)

    @property
    def store(self) -> HistoryStore:
        return self._store

    def refresh(self, root_path: Path | str) -> FeedRunResult:
        """
        Load the stored history and update it from the directory.

        Nothing is written here; see persist().

        Raises:
            InvalidPathError: If root_path is not an existing directory.
                              Raised before storage is read.
        """
        validation = validate_scan_root(root_path)
        if not validation.valid:
            raise InvalidPathError(validation.error_message)

        start_time = time.time()
        history = self._store.load_or_empty()
        changed = history.update(root_path)

        return FeedRunResult(
            history=history,
            changed=changed,
            duration_seconds=time.time() - start_time,
        )

    def render(self, history: FeedHistory) -> str:
        return self._renderer.render(history)

    def persist(self, result: FeedRunResult) -> bool:
        """
        Save the history if the refresh changed it.

        Returns:
            True if the storage file was written

        Raises:
            HistoryStoreError: If writing failed
        """
        if not result.changed:
            logger.debug("History unchanged, not saving")
            return False

        self._store.save(result.history)
        return True

    def run(self, root_path: Path | str, emit: Callable[[str], None]) -> FeedRunResult:
        """
        Refresh, hand the rendered feed to ``emit``, then persist.

        The feed is emitted before saving, so a storage failure still leaves
        the caller with the computed (unsaved) feed.
        """
        result = self.refresh(root_path)
        emit(self.render(result.history))
        self.persist(result)
        logger.info(
            f"Processed {root_path} in {result.duration_seconds:.2f}s "
            f"({'changed' if result.changed else 'unchanged'})"
        )
        return result
