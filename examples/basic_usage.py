#!/usr/bin/env python3
"""
Basic usage example for mef2bids.

Converts an exported MEF3 session metadata file and an electrode position
mat file into BIDS iEEG sidecars in ./bids_out.
"""

from pathlib import Path

from mef2bids import Converter
from mef2bids.utils.errors import ConversionError


def main():
    output_dir = Path("bids_out")
    output_dir.mkdir(exist_ok=True)

    converter = Converter(config_file="configs/mef2bids.yaml")

    try:
        written = converter.convert_amplifier_metadata(
            "session_metadata.json", output_dir
        )
        written += converter.convert_electrodes("electrodes.mat", output_dir)
    except ConversionError as e:
        print(f"Conversion failed: {e}")
        return

    for path in written:
        print(f"Wrote {path}")


if __name__ == "__main__":
    main()
