"""
YAML storage for FeedHistory.

The storage file is the only hand-off between runs. Loading is fallible
and reports every failure as HistoryLoadError; load_or_empty() is the one
place that maps such a failure to a blank history. Saving writes a
temporary file next to the target and renames it into place, so readers
never see a partial document.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import yaml

from difffeed.core.errors import HistoryFormatError, HistoryLoadError, HistoryStoreError
from difffeed.core.feed_history import DEFAULT_MAX_ITEMS, FeedHistory
from difffeed.core.snapshot import SnapshotDifferInterface

logger = logging.getLogger(__name__)


class HistoryStore:
    """
    Reads and writes a FeedHistory as a YAML file.

    The differ and clock given here are handed to every FeedHistory the
    store creates, together with max_items.
    """

    def __init__(
        self,
        path: Path | str,
        *,
        max_items: int = DEFAULT_MAX_ITEMS,
        differ: SnapshotDifferInterface | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._path = Path(path)
        self._max_items = max_items
        self._differ = differ
        self._clock = clock

    @property
    def path(self) -> Path:
        return self._path

    def _history_kwargs(self) -> dict:
        kwargs: dict = {"max_items": self._max_items, "differ": self._differ}
        if self._clock is not None:
            kwargs["clock"] = self._clock
        return kwargs

    def empty(self) -> FeedHistory:
        """Create a blank history with this store's settings."""
        return FeedHistory(**self._history_kwargs())

    def load(self) -> FeedHistory:
        """
        Load the stored history.

        Raises:
            HistoryLoadError: If the file is missing, unreadable, not YAML,
                              or does not describe a valid history
        """
        try:
            content = self._path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise HistoryLoadError(f"History file not found: {self._path}", missing=True) from e
        except (OSError, UnicodeDecodeError) as e:
            raise HistoryLoadError(f"Failed to read history file {self._path}: {e}") from e

        try:
            data = yaml.safe_load(content)
        except (yaml.YAMLError, ValueError, RecursionError) as e:
            # safe_load raises ValueError for timestamp-shaped values that are not real dates
            raise HistoryLoadError(f"Failed to parse history file {self._path}: {e}") from e

        try:
            return FeedHistory.from_dict(data, **self._history_kwargs())
        except HistoryFormatError as e:
            raise HistoryLoadError(f"Invalid history file {self._path}: {e}") from e

    def load_or_empty(self) -> FeedHistory:
        """Load the stored history, or start from a blank one if that fails."""
        try:
            history = self.load()
        except HistoryLoadError as e:
            if e.missing:
                logger.info(f"No stored history at {self._path}, starting fresh")
            else:
                logger.warning(f"{e}; starting with an empty history")
            return self.empty()

        logger.debug(
            f"Loaded history from {self._path}: "
            f"{len(history.files)} files, {len(history)} events"
        )
        return history

    def _file_mode(self) -> int:
        """Mode for a saved file: keep the existing file's, else follow the umask."""
        try:
            return stat.S_IMODE(os.stat(self._path).st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    def save(self, history: FeedHistory) -> None:
        """
        Atomically replace the storage file with the given history.

        Raises:
            HistoryStoreError: If the file could not be written
        """
        content = yaml.safe_dump(
            history.to_dict(), default_flow_style=False, sort_keys=False, allow_unicode=True
        )
        directory = self._path.parent

        tmp_name: str | None = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            os.chmod(tmp_name, self._file_mode())
            os.replace(tmp_name, self._path)
            tmp_name = None
        except (OSError, UnicodeEncodeError) as e:
            raise HistoryStoreError(f"Failed to write history file {self._path}: {e}") from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.debug(f"Could not remove temporary file {tmp_name}")

        logger.debug(f"Saved history to {self._path}")
