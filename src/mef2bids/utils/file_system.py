# src/mef2bids/utils/file_system.py
"""
Output directory validation and timestamped output naming.
"""
import os
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from mef2bids.utils.errors import OutputLocationError
from mef2bids.utils.logging import message

STAMP_FORMAT = "%Y%m%d_%H%M%S"


def validate_output_dir(output_dir: Union[str, Path, None]) -> Path:
    """Check that ``output_dir`` is an existing, writable directory.

    Parameters
    ----------
    output_dir : str or Path
        Directory the sidecar files will be written to. It is never created.

    Returns
    -------
    Path
        The validated directory.

    Raises
    ------
    OutputLocationError
        If the argument is empty, the directory does not exist, is not a
        directory or is not writable.
    """
    if output_dir is None or (isinstance(output_dir, str) and not output_dir.strip()):
        raise OutputLocationError(
            "Invalid output argument. Pass an existing output directory"
        )
    if not isinstance(output_dir, (str, os.PathLike)):
        raise OutputLocationError(
            f"Invalid output argument of type {type(output_dir).__name__}. "
            "Pass an existing output directory"
        )

    output_dir = Path(output_dir)
    if not output_dir.exists():
        raise OutputLocationError(f"Output directory '{output_dir}' could not be found")
    if not output_dir.is_dir():
        raise OutputLocationError(f"Output location '{output_dir}' is not a directory")
    if not os.access(output_dir, os.W_OK):
        raise OutputLocationError(f"No write permission for directory: {output_dir}")

    message("debug", f"Output directory: {output_dir}")
    return output_dir


def output_stamp(now: Optional[datetime] = None) -> str:
    """Return the ``YYYYMMDD_HHMMSS_mmm`` prefix used for output file names."""
    now = now or datetime.now()
    return f"{now.strftime(STAMP_FORMAT)}_{now.microsecond // 1000:03d}"


def stamped_path(output_dir: Path, stamp: str, suffix: str) -> Path:
    """Build ``<output_dir>/<stamp>_<suffix>``, e.g. ``..._channels.tsv``."""
    return Path(output_dir) / f"{stamp}_{suffix}"
