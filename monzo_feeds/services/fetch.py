"""Listing page fetcher.

This module fetches a page from the blog site and parses it into a document.
"""

import logging
from typing import Optional
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup

from monzo_feeds.config import AppConfig, get_config
from monzo_feeds.errors import FetchError

logger = logging.getLogger(__name__)


async def fetch_document(url: str, config: Optional[AppConfig] = None) -> BeautifulSoup:
    """Fetch a page and parse it as HTML.

    Args:
        url: Absolute URL of the page
        config: Optional configuration (uses the global config if not provided)

    Returns:
        Parsed document

    Raises:
        FetchError: If the host is not allowed or the request fails
    """
    if config is None:
        config = get_config()

    host = urlparse(url).hostname
    if config.allowed_domains and host not in config.allowed_domains:
        raise FetchError(url, f"domain {host!r} is not allowed")

    logger.debug(f"Fetching: {url}")

    async with httpx.AsyncClient(
        follow_redirects=True,
        timeout=config.request_timeout,
        headers={"User-Agent": config.user_agent},
    ) as client:
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise FetchError(url, e) from e

    return BeautifulSoup(response.text, "lxml")
