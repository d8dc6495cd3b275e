"""monzo_feeds - syndicated feeds generated from the Monzo blog listing."""

__version__ = "0.1.0"
