"""Top-level orchestration of all configured sources."""

import asyncio
import logging
from typing import List, Optional, Sequence

from monzo_feeds.config import AppConfig, get_config
from monzo_feeds.errors import SourceError
from monzo_feeds.models.schemas import SourceConfig
from monzo_feeds.services.coordinator import run_source
from monzo_feeds.services.scraper import CardExtractor
from monzo_feeds.storage.writer import FeedWriter

logger = logging.getLogger(__name__)


async def run_all(
    config: Optional[AppConfig] = None,
    sources: Optional[Sequence[SourceConfig]] = None,
    extractor: Optional[CardExtractor] = None,
    writer: Optional[FeedWriter] = None,
) -> List[SourceError]:
    """Crawl every source concurrently and collect their errors.

    One source failing never stops the others. A PersistError from any source
    propagates to the caller.

    Returns:
        Errors of the sources that failed, in source order
    """
    if config is None:
        config = get_config()
    if sources is None:
        sources = config.sources

    logger.info(f"Crawling {len(sources)} sources: {', '.join(s.name for s in sources)}")

    outcomes = await asyncio.gather(
        *(run_source(source, config, extractor, writer) for source in sources)
    )

    errors = [error for error in outcomes if error is not None]
    if errors:
        logger.error(f"{len(errors)} of {len(sources)} sources failed")

    return errors
