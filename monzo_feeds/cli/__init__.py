"""Command line entry point for monzo_feeds."""

from monzo_feeds.cli.app import main

__all__ = ["main"]
