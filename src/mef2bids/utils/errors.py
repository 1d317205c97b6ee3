# src/mef2bids/utils/errors.py
"""Exceptions raised by the conversion functions.

Each failure kind has its own class so callers can tell them apart; the
command line maps all of them to exit code 1.
"""


class ConversionError(RuntimeError):
    """Base class for all conversion failures."""


class SourceInputError(ConversionError):
    """The session source is missing, unreadable or malformed."""


class OutputLocationError(ConversionError):
    """The output directory is missing, not a directory or not writable."""


class ElectrodeMatrixError(ConversionError):
    """The electrode coordinate matrix is missing or not N x 3."""


class ConfigError(ConversionError):
    """The conversion config file is unreadable or fails validation."""
