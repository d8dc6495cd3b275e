"""Data models for monzo_feeds.

This module defines the core data structures for crawled blog entries and the
feeds assembled from them.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Set, Tuple


@dataclass(frozen=True)
class BlogEntry:
    """A single post summary scraped from a listing page."""

    pub_date: date
    title: str
    description: str
    tags: Tuple[str, ...]
    link: str

    def to_record(self) -> Dict[str, Any]:
        """Return every field as a JSON-ready dict.

        Keys and the RFC 3339 midnight-UTC timestamp follow the established
        ``{name}_feed_items.json`` layout.
        """
        return {
            "PubDate": f"{self.pub_date.isoformat()}T00:00:00Z",
            "Description": self.description,
            "Tags": list(self.tags),
            "Title": self.title,
            "Link": self.link,
        }


@dataclass(frozen=True)
class SourceConfig:
    """A blog section to crawl, with the identity of the feeds built from it."""

    name: str
    url: str
    title: str
    description: str
    tag_filters: Tuple[str, ...] = ()


@dataclass
class CardExtraction:
    """Entries parsed from a listing page, plus the tags of every card seen.

    Tags are collected even from cards that could not become entries.
    """

    entries: List[BlogEntry] = field(default_factory=list)
    tags: Set[str] = field(default_factory=set)


@dataclass
class PageResult:
    """Entries scraped from one listing page."""

    page: int
    url: str
    entries: List[BlogEntry] = field(default_factory=list)
    tags: Set[str] = field(default_factory=set)
    error: Optional[Exception] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class CrawlResult:
    """Everything collected for one source across all of its pages."""

    source: str
    entries: List[BlogEntry] = field(default_factory=list)
    tags: Set[str] = field(default_factory=set)
    failed_pages: List[int] = field(default_factory=list)

    def merge(self, page: PageResult) -> None:
        self.entries.extend(page.entries)
        self.tags.update(page.tags)
        if page.failed:
            self.failed_pages.append(page.page)


@dataclass
class FeedEntry:
    """One item of a syndication feed."""

    title: str
    link: str
    description: str
    created: date


@dataclass
class Feed:
    """A syndication feed ready for encoding."""

    title: str
    link: str
    description: str
    created: datetime
    entries: List[FeedEntry] = field(default_factory=list)


@dataclass
class AssembledFeed:
    """A feed plus the raw records it was built from, under its output name."""

    name: str
    feed: Feed
    records: List[Dict[str, Any]] = field(default_factory=list)
