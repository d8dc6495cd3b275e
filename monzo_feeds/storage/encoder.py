"""Feed encoder.

This module encodes feeds as RSS 2.0, Atom 1.0 and JSON Feed 1.1 documents.
"""

import json
from datetime import date, datetime, time, timezone

import feedparser
from feedgen.feed import FeedGenerator

from monzo_feeds.errors import FeedEncodeError
from monzo_feeds.models.schemas import Feed


def _as_datetime(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def _generator(feed: Feed) -> FeedGenerator:
    fg = FeedGenerator()
    fg.id(feed.link)
    fg.title(feed.title)
    fg.link(href=feed.link, rel="alternate")
    fg.description(feed.description)
    fg.updated(feed.created)
    fg.pubDate(feed.created)

    # feedgen prepends by default, which would reverse the feed order
    for item in feed.entries:
        fe = fg.add_entry(order="append")
        fe.id(item.link)
        fe.guid(item.link, permalink=True)
        fe.title(item.title)
        fe.link(href=item.link)
        fe.description(item.description, isSummary=True)
        fe.published(_as_datetime(item.created))
        fe.updated(_as_datetime(item.created))

    return fg


def _validate(data: bytes, fmt: str) -> bytes:
    parsed = feedparser.parse(data)
    if not (parsed.feed.get("title") or parsed.entries):
        raise FeedEncodeError(f"{fmt} output could not be read back: {parsed.get('bozo_exception')}")
    return data


def to_rss(feed: Feed) -> bytes:
    """Encode a feed as RSS 2.0.

    Raises:
        FeedEncodeError: If the feed is missing required fields
    """
    try:
        data = _generator(feed).rss_str(pretty=True)
    except ValueError as e:
        raise FeedEncodeError(f"cannot encode {feed.title!r} as RSS: {e}") from e
    return _validate(data, "RSS")


def to_atom(feed: Feed) -> bytes:
    """Encode a feed as Atom 1.0.

    Raises:
        FeedEncodeError: If the feed is missing required fields
    """
    try:
        data = _generator(feed).atom_str(pretty=True)
    except ValueError as e:
        raise FeedEncodeError(f"cannot encode {feed.title!r} as Atom: {e}") from e
    return _validate(data, "Atom")


JSON_FEED_VERSION = "https://jsonfeed.org/version/1.1"


def to_json_feed(feed: Feed) -> bytes:
    """Encode a feed as JSON Feed 1.1.

    Raises:
        FeedEncodeError: If the feed has no title or an item has neither title nor description
    """
    if not feed.title:
        raise FeedEncodeError("cannot encode a feed without a title as JSON Feed")

    items = []
    for item in feed.entries:
        if not (item.title or item.description):
            raise FeedEncodeError(f"cannot encode {feed.title!r} as JSON Feed: item {item.link} is empty")
        items.append({
            "id": item.link,
            "url": item.link,
            "title": item.title,
            "summary": item.description,
            "content_text": item.description,
            "date_published": _as_datetime(item.created).isoformat(),
        })

    document = {
        "version": JSON_FEED_VERSION,
        "title": feed.title,
        "home_page_url": feed.link,
        "description": feed.description,
        "items": items,
    }
    return json.dumps(document, indent=2, ensure_ascii=False).encode("utf-8")
