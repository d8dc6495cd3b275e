"""Crawl coordinator.

This module runs the whole pipeline for one source: resolve the page count,
scrape every page concurrently, then assemble and write the feeds.
"""

import asyncio
import logging
from typing import Optional

from monzo_feeds.config import AppConfig, get_config
from monzo_feeds.errors import FeedError, PersistError, SourceError
from monzo_feeds.models.schemas import CrawlResult, SourceConfig
from monzo_feeds.services.assembler import assemble
from monzo_feeds.services.pagination import page_url, resolve_last_page
from monzo_feeds.services.scraper import CardExtractor, scrape_page
from monzo_feeds.storage.writer import FeedWriter

logger = logging.getLogger(__name__)


async def scrape_pages(
    source: SourceConfig,
    last_page: int,
    extractor: Optional[CardExtractor] = None,
    config: Optional[AppConfig] = None,
) -> CrawlResult:
    """Scrape pages 1..last_page of a source concurrently.

    Every page runs as its own task; results are merged in page order once
    all of them have finished.

    Raises:
        FetchError: If strict_pages is set and any page failed
    """
    if config is None:
        config = get_config()

    pages = await asyncio.gather(
        *(
            scrape_page(page_url(source.url, page), page, extractor, config)
            for page in range(1, last_page + 1)
        )
    )

    result = CrawlResult(source=source.name)
    for page in pages:
        result.merge(page)

    if result.failed_pages:
        logger.warning(f"{source.name}: {len(result.failed_pages)} page(s) failed: {result.failed_pages}")
        if config.strict_pages:
            raise next(page.error for page in pages if page.failed)

    logger.info(f"{source.name}: collected {len(result.entries)} entries from {last_page} pages")
    logger.debug(f"{source.name}: observed tags {sorted(result.tags)}")
    return result


async def crawl_source(
    source: SourceConfig,
    config: Optional[AppConfig] = None,
    extractor: Optional[CardExtractor] = None,
    writer: Optional[FeedWriter] = None,
) -> CrawlResult:
    """Crawl one source and write its feed and sub-feeds.

    Raises:
        FeedError: If pagination, encoding or writing fails
    """
    if config is None:
        config = get_config()
    if writer is None:
        writer = FeedWriter.from_config(config)

    last_page = await resolve_last_page(source.url, config)
    result = await scrape_pages(source, last_page, extractor, config)

    for assembled in assemble(result, source):
        await asyncio.to_thread(writer.write, assembled.name, assembled.feed, assembled.records)

    return result


async def run_source(
    source: SourceConfig,
    config: Optional[AppConfig] = None,
    extractor: Optional[CardExtractor] = None,
    writer: Optional[FeedWriter] = None,
) -> Optional[SourceError]:
    """Crawl a source, returning its failure instead of raising it.

    Raises:
        PersistError: Output could not be placed; never turned into a SourceError
    """
    try:
        await crawl_source(source, config, extractor, writer)
    except PersistError:
        raise
    except FeedError as e:
        logger.error(f"Crawl of {source.name} failed: {e}")
        return SourceError(source.name, e)

    logger.info(f"Finished {source.name}")
    return None
