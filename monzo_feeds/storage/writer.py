"""Feed writer.

This module writes assembled feeds to disk. Every artifact is written to a
staging directory first and then moved into its destination directory, which
must already exist.

Output layout:
    {items_dir}/{name}_feed_items.json  raw entry records
    {feeds_dir}/{name}.rss              RSS 2.0
    {feeds_dir}/{name}.json             JSON Feed 1.1
    {feeds_dir}/{name}.atom             Atom 1.0
"""

import json
import logging
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from monzo_feeds.config import AppConfig, get_config
from monzo_feeds.errors import PersistError, WriteError
from monzo_feeds.models.schemas import Feed
from monzo_feeds.storage.encoder import to_atom, to_json_feed, to_rss

logger = logging.getLogger(__name__)


class FeedWriter:
    """Writes feeds and raw entry records to their destination directories."""

    def __init__(
        self,
        items_dir: Path,
        feeds_dir: Path,
        staging_dir: Optional[Path] = None,
    ):
        self.items_dir = Path(items_dir)
        self.feeds_dir = Path(feeds_dir)
        self.staging_dir = Path(staging_dir) if staging_dir is not None else None

    @classmethod
    def from_config(cls, config: Optional[AppConfig] = None) -> "FeedWriter":
        if config is None:
            config = get_config()
        return cls(config.items_dir, config.feeds_dir, config.staging_dir)

    def write(
        self,
        name: str,
        feed: Feed,
        records: Optional[List[Dict[str, Any]]] = None,
    ) -> List[Path]:
        """Write a feed, and optionally its raw records, under a base name.

        Args:
            name: Output base name, e.g. ``blog`` or ``blog_technology``
            feed: Feed to encode
            records: Raw entry records to dump alongside the feed

        Returns:
            Final paths of the written artifacts

        Raises:
            FeedEncodeError: If the feed cannot be encoded
            WriteError: If an artifact cannot be written to staging
            PersistError: If an artifact cannot be moved to its destination
        """
        name = name.lower()
        artifacts = []

        if records is not None:
            dump = json.dumps(records, indent=2, ensure_ascii=False).encode("utf-8")
            artifacts.append((f"{name}_feed_items.json", dump, self.items_dir))

        artifacts.append((f"{name}.rss", to_rss(feed), self.feeds_dir))
        artifacts.append((f"{name}.json", to_json_feed(feed), self.feeds_dir))
        artifacts.append((f"{name}.atom", to_atom(feed), self.feeds_dir))

        try:
            staging_dir = tempfile.TemporaryDirectory(prefix="monzo_feeds_", dir=self.staging_dir)
        except OSError as e:
            raise WriteError(f"unable to create staging directory: {e}") from e

        written = []
        with staging_dir as staging:
            for filename, data, destination in artifacts:
                staged = self._stage(Path(staging) / filename, data)
                written.append(self._place(staged, destination))

        logger.info(f"Wrote {len(written)} files for {name}")
        return written

    @staticmethod
    def _stage(path: Path, data: bytes) -> Path:
        try:
            path.write_bytes(data)
        except OSError as e:
            raise WriteError(f"unable to write {path.name}: {e}") from e
        return path

    @staticmethod
    def _place(staged: Path, destination: Path) -> Path:
        target = destination / staged.name
        if not destination.is_dir():
            raise PersistError(
                f"unable to move {staged.name} to '{target}': destination directory does not exist"
            )
        try:
            shutil.move(str(staged), str(target))
        except OSError as e:
            raise PersistError(f"unable to move {staged.name} to '{target}': {e}") from e

        logger.debug(f"Placed {target}")
        return target
