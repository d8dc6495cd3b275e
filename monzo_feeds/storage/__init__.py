"""Storage layer for monzo_feeds."""

from .encoder import to_atom, to_json_feed, to_rss
from .writer import FeedWriter

__all__ = ["FeedWriter", "to_atom", "to_json_feed", "to_rss"]
