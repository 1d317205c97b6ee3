"""Main entry point for the mef2bids package."""
import sys

from mef2bids.cli import main

if __name__ == "__main__":
    sys.exit(main())
