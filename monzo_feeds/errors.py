"""Error types for monzo_feeds.

Failures are scoped: fetch and encode/write errors are reported per source,
entry parse errors never leave the extractor, and persist errors are fatal.
"""


class FeedError(Exception):
    """Base class for all monzo_feeds errors."""


class FetchError(FeedError):
    """A listing page could not be fetched."""

    def __init__(self, url: str, cause: object):
        self.url = url
        self.cause = cause
        super().__init__(f"failed to fetch {url}: {cause}")


class EntryParseError(FeedError):
    """A single card could not be turned into a blog entry."""


class FeedEncodeError(FeedError):
    """A feed could not be encoded into a syndication format."""


class WriteError(FeedError):
    """An output artifact could not be written to staging."""


class PersistError(FeedError):
    """An output artifact could not be placed at its destination.

    This is fatal: it is never collected as a source error.
    """


class SourceError(FeedError):
    """A failure that aborted one source's crawl."""

    def __init__(self, source: str, cause: Exception):
        self.source = source
        self.cause = cause
        super().__init__(f"{source}: {cause}")
