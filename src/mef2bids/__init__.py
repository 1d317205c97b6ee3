"""BIDS iEEG sidecar generation from MEF3 metadata.

This package derives the BIDS iEEG amplifier sidecars (``_channels.tsv``,
``_ieeg.json``) from MEF3 session metadata, and the electrode sidecars
(``_electrodes.tsv``, ``_coordsystem.json``) from electrode position matrices.
"""

from .core.converter import Converter, convert_amplifier_metadata, convert_electrodes

__version__ = "0.3.0"

__all__ = [
    "Converter",
    "convert_amplifier_metadata",
    "convert_electrodes",
]
