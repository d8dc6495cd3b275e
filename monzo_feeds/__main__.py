"""Main module for monzo_feeds.

This module allows the generator to be run as a Python module using:
python -m monzo_feeds

It delegates to the CLI application's main function.
"""

from monzo_feeds.cli.app import main

if __name__ == "__main__":
    main()
