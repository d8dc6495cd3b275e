"""Listing page scraper.

This module turns the cards on a listing page into blog entries. The markup
conventions live in ``MonzoCardExtractor``; anything implementing
``CardExtractor`` can be used instead.
"""

import logging
from datetime import date
from typing import List, Optional, Protocol, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from monzo_feeds.config import AppConfig, get_config
from monzo_feeds.errors import EntryParseError, FetchError
from monzo_feeds.models.schemas import BlogEntry, CardExtraction, PageResult
from monzo_feeds.services.fetch import fetch_document

logger = logging.getLogger(__name__)

# Card dates are always English ("2 January 2006"), whatever the local LC_TIME
MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_PUNCTUATION = str.maketrans({"’": "'", "–": "-"})


class CardExtractor(Protocol):
    """Extracts blog entries from a parsed listing page."""

    def extract(self, document: BeautifulSoup) -> CardExtraction:
        ...


def format_text(text: str) -> str:
    """Normalize typographic punctuation and surrounding whitespace."""
    return text.translate(_PUNCTUATION).strip()


def parse_card_date(text: str) -> date:
    """Parse a card date such as ``2 January 2006``.

    Raises:
        EntryParseError: If the text does not match the card date format
    """
    try:
        day, month, year = text.split()
        return date(int(year), MONTHS.index(month) + 1, int(day))
    except ValueError as e:
        raise EntryParseError(f"invalid card date {text.strip()!r}") from e


class MonzoCardExtractor:
    """Reads post cards from the Monzo blog listing markup."""

    list_selector = "div[class*='CardList_CardList']"
    card_selector = "div[class*='Card_card']"
    title_selector = "div[class*='Card_titleContainer']"
    description_selector = "div[class*='Card_descriptionContainer']"
    date_selector = "div[class*='Card_dateContainer']"
    tag_selector = (
        "div[class*='Card_tagContainer'] "
        "div[class*='TagList_tagList'] "
        "div[class*='TagList_tagWrapper']"
    )

    def __init__(self, site_root: Optional[str] = None):
        self.site_root = site_root or get_config().site_root

    def extract(self, document: BeautifulSoup) -> CardExtraction:
        extraction = CardExtraction()
        seen = set()

        for container in document.select(self.list_selector):
            for anchor in container.find_all("a"):
                # Nested card lists would otherwise yield the same anchor twice
                if id(anchor) in seen:
                    continue
                seen.add(id(anchor))

                card = anchor.select_one(self.card_selector)
                if card is None:
                    continue

                tags = self.card_tags(card)
                extraction.tags.update(tags)

                try:
                    extraction.entries.append(self.parse_card(anchor, card, tags))
                except EntryParseError as e:
                    logger.warning(f"Skipping card {anchor.get('href', '')!r}: {e}")

        return extraction

    def card_tags(self, card: Tag) -> Tuple[str, ...]:
        return tuple(t.get_text(strip=True) for t in card.select(self.tag_selector))

    def parse_card(self, anchor: Tag, card: Tag, tags: Tuple[str, ...]) -> BlogEntry:
        """Build an entry from one card.

        Raises:
            EntryParseError: If the card has no title or its date cannot be parsed
        """
        title = format_text(self._text(card, self.title_selector))
        if not title:
            raise EntryParseError("card has no title")

        return BlogEntry(
            pub_date=parse_card_date(self._text(card, self.date_selector)),
            title=title,
            description=format_text(self._text(card, self.description_selector)),
            tags=tags,
            link=urljoin(self.site_root, anchor.get("href", "")),
        )

    @staticmethod
    def _text(card: Tag, selector: str) -> str:
        element = card.select_one(selector)
        return element.get_text() if element is not None else ""


async def scrape_page(
    url: str,
    page: int,
    extractor: Optional[CardExtractor] = None,
    config: Optional[AppConfig] = None,
) -> PageResult:
    """Scrape one listing page.

    A fetch failure is logged and yields an empty result carrying the error;
    it is up to the caller whether that fails the source.

    Args:
        url: URL of the listing page
        page: Page number, kept on the result for ordering
        extractor: Card extraction strategy (defaults to MonzoCardExtractor)
        config: Optional configuration

    Returns:
        PageResult with this page's entries and observed tags
    """
    if config is None:
        config = get_config()
    if extractor is None:
        extractor = MonzoCardExtractor(config.site_root)

    try:
        document = await fetch_document(url, config)
    except FetchError as e:
        logger.error(f"Error visiting page {page}: {e}")
        return PageResult(page=page, url=url, error=e)

    extraction = extractor.extract(document)
    tags = set(extraction.tags)
    for entry in extraction.entries:
        tags.update(entry.tags)

    logger.info(f"Scraped {len(extraction.entries)} entries from page {page} ({url})")
    return PageResult(page=page, url=url, entries=extraction.entries, tags=tags)
