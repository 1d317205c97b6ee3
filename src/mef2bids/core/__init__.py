"""Conversion entry points."""

from .converter import Converter, convert_amplifier_metadata, convert_electrodes

__all__ = ["Converter", "convert_amplifier_metadata", "convert_electrodes"]
