"""monzo_feeds - command line application

Crawls every configured blog section and writes its feeds. The sources, tag
filters and output directories are fixed in configuration; the only option
controls log verbosity.

Exit codes:
    0  every source succeeded
    1  at least one source failed (its error has been printed)
    2  an output file could not be placed at its destination
"""

import asyncio
import sys
from typing import Optional

import click

from monzo_feeds.config import get_config
from monzo_feeds.errors import PersistError
from monzo_feeds.logging_config import logger, setup_logging
from monzo_feeds.services.orchestrator import run_all


@click.command()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (defaults to the configured level)",
)
def main(log_level: Optional[str]) -> None:
    """Generate the Monzo blog feeds."""
    config = get_config()
    setup_logging(log_level or config.log_level)

    try:
        errors = asyncio.run(run_all(config))
    except PersistError as e:
        logger.critical(f"{e}")
        sys.exit(2)

    for error in errors:
        click.echo(f"Error: {error}", err=True)

    sys.exit(1 if errors else 0)


if __name__ == "__main__":
    main()
