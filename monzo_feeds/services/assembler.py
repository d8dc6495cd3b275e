"""Feed assembler.

This module orders crawled entries and builds the full feed and the
tag-filtered sub-feeds for a source.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from monzo_feeds.models.schemas import (
    AssembledFeed,
    BlogEntry,
    CrawlResult,
    Feed,
    FeedEntry,
    SourceConfig,
)

logger = logging.getLogger(__name__)


def sort_entries(entries: Iterable[BlogEntry]) -> List[BlogEntry]:
    """Sort entries newest first; entries with equal dates keep their order."""
    return sorted(entries, key=lambda entry: entry.pub_date, reverse=True)


def entry_records(entries: Iterable[BlogEntry]) -> List[Dict[str, Any]]:
    return [entry.to_record() for entry in entries]


def matches_tag(entry: BlogEntry, tag_filter: str) -> bool:
    """Check whether the filter is a substring of any of the entry's tags."""
    return any(tag_filter in tag for tag in entry.tags)


def filter_entries(entries: Iterable[BlogEntry], tag_filter: str) -> List[BlogEntry]:
    return [entry for entry in entries if matches_tag(entry, tag_filter)]


def feed_name(source_name: str, tag_filter: Optional[str] = None) -> str:
    """Output base name for a source's feed or one of its sub-feeds."""
    if not tag_filter:
        return source_name.lower()
    return f"{source_name}_{tag_filter}".lower()


def build_feed(
    entries: Iterable[BlogEntry],
    source: SourceConfig,
    tag_filter: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Feed:
    """Build a feed from already sorted entries.

    Args:
        entries: Entries in feed order
        source: Source whose identity titles the feed
        tag_filter: Filter the feed was derived with, appended to the title
        now: Creation time (defaults to the current UTC time)

    Returns:
        Feed mirroring the entries one to one
    """
    title = source.title
    if tag_filter:
        title = f"{title} - {tag_filter.capitalize()}"

    return Feed(
        title=title,
        link=source.url,
        description=source.description,
        created=now or datetime.now(timezone.utc),
        entries=[
            FeedEntry(
                title=entry.title,
                link=entry.link,
                description=entry.description,
                created=entry.pub_date,
            )
            for entry in entries
        ],
    )


def assemble(
    result: CrawlResult,
    source: SourceConfig,
    now: Optional[datetime] = None,
) -> List[AssembledFeed]:
    """Assemble the full feed and every tag sub-feed of a source.

    The full feed comes first, followed by one sub-feed per configured tag
    filter in configuration order.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    ordered = sort_entries(result.entries)
    assembled = [
        AssembledFeed(
            name=feed_name(source.name),
            feed=build_feed(ordered, source, now=now),
            records=entry_records(ordered),
        )
    ]

    for tag_filter in source.tag_filters:
        subset = sort_entries(filter_entries(ordered, tag_filter))
        logger.info(
            f"Sub-feed {feed_name(source.name, tag_filter)} has {len(subset)} "
            f"of {len(ordered)} entries"
        )
        assembled.append(
            AssembledFeed(
                name=feed_name(source.name, tag_filter),
                feed=build_feed(subset, source, tag_filter=tag_filter, now=now),
                records=entry_records(subset),
            )
        )

    return assembled
