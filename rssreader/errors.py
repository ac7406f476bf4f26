class RSSReaderError(Exception):
    pass


class ConfigError(RSSReaderError):
    """Bad feed list, unreadable input or invalid settings. Aborts the run."""


class FeedError(RSSReaderError):
    """Failure scoped to a single feed."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class FetchError(FeedError):
    pass


class ParseError(FeedError):
    pass


class SinkClosed(RSSReaderError):
    pass
