"""Exception types for DiffFeed."""


class DiffFeedError(Exception):
    """Base exception for DiffFeed errors."""

    pass


class InvalidPathError(DiffFeedError, ValueError):
    """The scan root does not exist or is not a directory."""

    pass


class HistoryFormatError(DiffFeedError, ValueError):
    """Stored history data is structurally or semantically invalid."""

    pass


class HistoryLoadError(DiffFeedError):
    """The stored history could not be loaded.

    Covers a missing storage file, an unreadable one, invalid YAML and
    data rejected by FeedHistory.from_dict. The ``missing`` flag tells the
    caller whether there simply was no prior state.
    """

    def __init__(self, message: str, *, missing: bool = False):
        super().__init__(message)
        self.missing = missing


class HistoryStoreError(DiffFeedError):
    """The history could not be written to storage."""

    pass
