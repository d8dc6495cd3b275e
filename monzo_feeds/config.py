"""Configuration for monzo_feeds.

The crawled sources and their tag filters are fixed here; nothing is read
from the environment or the command line.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Tuple

from monzo_feeds.models.schemas import SourceConfig


SITE_ROOT = "https://monzo.com"

SOURCES: Tuple[SourceConfig, ...] = (
    SourceConfig(
        name="blog",
        url=f"{SITE_ROOT}/blog",
        title="Monzo",
        description="An unofficial Monzo blog feed",
        tag_filters=("Technology",),
    ),
    SourceConfig(
        name="us_blog",
        url=f"{SITE_ROOT}/us/blog",
        title="Monzo US",
        description="An unofficial Monzo US blog feed",
    ),
)


@dataclass
class AppConfig:
    """Runtime configuration for a crawl run."""

    name: str = "monzo_feeds"
    log_level: str = "INFO"
    site_root: str = SITE_ROOT
    allowed_domains: Tuple[str, ...] = ("monzo.com",)
    user_agent: str = "MonzoFeeds/1.0 (Blog Feed Generator)"
    request_timeout: float = 30.0
    items_dir: Path = Path(".json")
    feeds_dir: Path = Path("feeds")
    staging_dir: Optional[Path] = None
    # Escalate a single page's fetch failure to a source failure
    strict_pages: bool = False
    sources: Tuple[SourceConfig, ...] = field(default=SOURCES)


_config: Optional[AppConfig] = None


def load_config(**overrides) -> AppConfig:
    """Build a configuration, applying any field overrides.

    Raises:
        TypeError: If an override does not name a config field
    """
    config = AppConfig()
    if overrides:
        config = replace(config, **overrides)
    config.items_dir = Path(config.items_dir)
    config.feeds_dir = Path(config.feeds_dir)
    if config.staging_dir is not None:
        config.staging_dir = Path(config.staging_dir)
    config.sources = tuple(config.sources)
    return config


def get_config() -> AppConfig:
    """Get the process-wide configuration, loading defaults on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Optional[AppConfig]) -> None:
    """Replace the process-wide configuration (None resets to defaults)."""
    global _config
    _config = config
