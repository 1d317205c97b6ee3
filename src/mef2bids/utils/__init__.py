"""Utility functions and helpers.

Import specific modules directly:

    from mef2bids.utils.config import load_config
    from mef2bids.utils.logging import message
"""

__all__ = []
