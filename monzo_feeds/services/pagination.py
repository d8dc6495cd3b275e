"""Pagination resolver.

This module works out how many listing pages a blog section has.
"""

import logging
from typing import Optional

from monzo_feeds.config import AppConfig
from monzo_feeds.services.fetch import fetch_document

logger = logging.getLogger(__name__)

LAST_PAGE_SELECTOR = "a[class*='Pagination_LastPageLinkDesktop']"


def page_url(base_url: str, page: int) -> str:
    """Build the URL of a numbered listing page."""
    return f"{base_url.rstrip('/')}/page/{page}"


def parse_last_page(href: str) -> int:
    """Parse the page count from a last-page link.

    Raises:
        ValueError: If the trailing path segment is not a positive integer
    """
    segment = href.rstrip("/").rsplit("/", 1)[-1]
    last = int(segment)
    if last < 1:
        raise ValueError(f"page count must be positive, got {last}")
    return last


async def resolve_last_page(base_url: str, config: Optional[AppConfig] = None) -> int:
    """Determine the number of listing pages for a blog section.

    Fetches the first listing page and reads the last page number from the
    desktop pagination link. A listing without that link is a single page.

    Args:
        base_url: Base listing URL of the section
        config: Optional configuration

    Returns:
        Total page count (at least 1)

    Raises:
        FetchError: If the first page cannot be fetched
    """
    document = await fetch_document(base_url, config)

    link = document.select_one(LAST_PAGE_SELECTOR)
    href = link.get("href", "") if link is not None else ""
    if not href:
        logger.info(f"No pagination found for {base_url}, assuming a single page")
        return 1

    try:
        last = parse_last_page(href)
    except ValueError as e:
        logger.warning(f"Malformed last page link {href!r} on {base_url}: {e}")
        return 1

    logger.info(f"Found {last} pages for {base_url}")
    return last
