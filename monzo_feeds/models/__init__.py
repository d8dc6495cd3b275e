"""Data models for monzo_feeds."""

from .schemas import (
    AssembledFeed,
    BlogEntry,
    CardExtraction,
    CrawlResult,
    Feed,
    FeedEntry,
    PageResult,
    SourceConfig,
)

__all__ = [
    "AssembledFeed",
    "BlogEntry",
    "CardExtraction",
    "CrawlResult",
    "Feed",
    "FeedEntry",
    "PageResult",
    "SourceConfig",
]
