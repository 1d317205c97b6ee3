#!/usr/bin/env python3
"""
mef2bids - Command Line Interface

Generates BIDS iEEG sidecar files from MEF3 session metadata (``amp``) and
from electrode position matrices (``electrodes``).
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from mef2bids import __version__
from mef2bids.core.converter import Converter
from mef2bids.utils.errors import ConversionError
from mef2bids.utils.logging import configure_logger, message


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser for the mef2bids CLI."""
    parser = argparse.ArgumentParser(
        prog="mef2bids",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="Generate BIDS iEEG sidecar metadata files",
        epilog="""
Basic Usage:
  mef2bids amp session_metadata.json ./bids_out        # _channels.tsv + _ieeg.json
  mef2bids electrodes electrodes.mat ./bids_out        # _electrodes.tsv + _coordsystem.json
  mef2bids amp session_metadata.yaml ./bids_out --config mef2bids.yaml

For detailed help on any command: mef2bids <command> --help
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    amp_parser = subparsers.add_parser(
        "amp", help="Generate _channels.tsv and _ieeg.json from MEF3 session metadata"
    )
    amp_parser.add_argument(
        "source", type=Path, help="MEF3 session metadata file (.json, .yaml, .yml)"
    )

    electrodes_parser = subparsers.add_parser(
        "electrodes",
        help="Generate _electrodes.tsv and _coordsystem.json from electrode positions",
    )
    electrodes_parser.add_argument(
        "source", type=Path, help="Mat file with an 'elecmatrix' or 'out_els' variable"
    )

    for sub in (amp_parser, electrodes_parser):
        sub.add_argument("output_dir", type=Path, help="Existing output directory")
        sub.add_argument("--config", type=Path, help="YAML conversion config")
        sub.add_argument(
            "--verbose", "-v", action="store_true", help="Enable debug logging"
        )
        sub.add_argument(
            "--log-dir", type=Path, help="Also write a log file to this directory"
        )

    return parser


def _print_written(paths: List[Path]) -> None:
    console = Console()
    table = Table(title="Written files", show_header=True, header_style="bold")
    table.add_column("File", style="cyan", no_wrap=True)
    table.add_column("Directory", style="dim")
    for path in paths:
        table.add_row(path.name, str(path.parent))
    console.print(table)


def cmd_amp(args) -> int:
    """Execute the amp command."""
    try:
        converter = Converter(config_file=args.config)
        written = converter.convert_amplifier_metadata(args.source, args.output_dir)
    except ConversionError as e:
        message("error", f"{type(e).__name__}: {e}")
        return 1
    _print_written(written)
    return 0


def cmd_electrodes(args) -> int:
    """Execute the electrodes command."""
    try:
        converter = Converter(config_file=args.config)
        written = converter.convert_electrodes(args.source, args.output_dir)
    except ConversionError as e:
        message("error", f"{type(e).__name__}: {e}")
        return 1
    _print_written(written)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the mef2bids CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logger("debug" if args.verbose else None, log_dir=args.log_dir)

    if args.command == "amp":
        return cmd_amp(args)
    elif args.command == "electrodes":
        return cmd_electrodes(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
