"""Shared fixtures for monzo_feeds tests.

The Monzo site is simulated by patching ``httpx.AsyncClient`` in the fetch
module with a mock client that serves canned listing pages.
"""

from typing import Dict, Iterable, List, Optional, Union
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from monzo_feeds.config import load_config, set_config
from monzo_feeds.models.schemas import SourceConfig


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_config():
    """Make sure no test leaks a global configuration into another."""
    set_config(None)
    yield
    set_config(None)


class MockSite:
    """Serves canned pages to patched httpx clients and records requests."""

    def __init__(self):
        self.pages: Dict[str, Union[str, Exception]] = {}
        self.requested: List[str] = []

    def add(self, url: str, body: Union[str, Exception]) -> None:
        self.pages[url] = body

    async def get(self, url, **kwargs):
        self.requested.append(url)
        request = httpx.Request("GET", url)
        body = self.pages.get(url)
        if isinstance(body, Exception):
            raise body
        if body is None:
            return httpx.Response(404, text="Not Found", request=request)
        return httpx.Response(200, text=body, request=request)

    def client(self, *args, **kwargs):
        instance = AsyncMock()
        instance.get = self.get
        instance.__aenter__ = AsyncMock(return_value=instance)
        instance.__aexit__ = AsyncMock(return_value=None)
        return instance


@pytest.fixture
def mock_site():
    """Patch the HTTP client with a MockSite."""
    site = MockSite()
    with patch("monzo_feeds.services.fetch.httpx.AsyncClient", side_effect=site.client):
        yield site


def card_html(
    title: str = "A post",
    description: str = "About the post",
    date: str = "2 January 2024",
    tags: Iterable[str] = (),
    href: str = "/blog/a-post",
) -> str:
    """Markup of one listing card, as the Monzo blog renders it."""
    tag_divs = "".join(
        f'<div class="TagList_tagWrapper__Xy12">{tag}</div>' for tag in tags
    )
    return f"""
    <a href="{href}">
        <div class="Card_card__Ab3 Card_large__9z">
            <div class="Card_titleContainer__Qw1">{title}</div>
            <div class="Card_tagContainer__Er2">
                <div class="TagList_tagList__Ty3">{tag_divs}</div>
            </div>
            <div class="Card_descriptionContainer__Ui4">{description}</div>
            <div class="Card_dateContainer__Op5">
                {date}
            </div>
        </div>
    </a>
    """


def listing_html(cards: Iterable[str] = (), last_page_href: Optional[str] = None) -> str:
    """Markup of a listing page with the given cards and pagination link."""
    pagination = ""
    if last_page_href is not None:
        pagination = (
            f'<a class="Pagination_LastPageLinkDesktop__Lp9" href="{last_page_href}">Last</a>'
        )
    return f"""
    <html>
    <body>
        <main>
            <div class="CardList_CardList__Zx7">{"".join(cards)}</div>
        </main>
        <nav class="Pagination_pagination__Nm8">{pagination}</nav>
    </body>
    </html>
    """


@pytest.fixture
def make_card():
    return card_html


@pytest.fixture
def make_listing():
    return listing_html


@pytest.fixture
def output_dirs(tmp_path):
    """Existing destination directories for record dumps and feeds."""
    items_dir = tmp_path / ".json"
    feeds_dir = tmp_path / "feeds"
    items_dir.mkdir()
    feeds_dir.mkdir()
    return items_dir, feeds_dir


@pytest.fixture
def blog_source():
    return SourceConfig(
        name="blog",
        url="https://monzo.com/blog",
        title="Monzo",
        description="An unofficial Monzo blog feed",
        tag_filters=("Technology",),
    )


@pytest.fixture
def us_source():
    return SourceConfig(
        name="us_blog",
        url="https://monzo.com/us/blog",
        title="Monzo US",
        description="An unofficial Monzo US blog feed",
    )


@pytest.fixture
def config(output_dirs, tmp_path, blog_source, us_source):
    """Configuration writing into temporary directories."""
    items_dir, feeds_dir = output_dirs
    staging_dir = tmp_path / "staging"
    staging_dir.mkdir()
    return load_config(
        items_dir=items_dir,
        feeds_dir=feeds_dir,
        staging_dir=staging_dir,
        sources=(blog_source, us_source),
    )
