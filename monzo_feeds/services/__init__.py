"""Services for monzo_feeds."""

from .assembler import assemble, build_feed, filter_entries, sort_entries
from .coordinator import crawl_source, run_source, scrape_pages
from .orchestrator import run_all
from .pagination import page_url, resolve_last_page
from .scraper import CardExtractor, MonzoCardExtractor, scrape_page

__all__ = [
    "assemble",
    "build_feed",
    "filter_entries",
    "sort_entries",
    "crawl_source",
    "run_source",
    "scrape_pages",
    "run_all",
    "page_url",
    "resolve_last_page",
    "CardExtractor",
    "MonzoCardExtractor",
    "scrape_page",
]
