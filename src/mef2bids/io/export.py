"""Export functions for the sidecar tables and trees."""

import math
from numbers import Real
from pathlib import Path
from typing import Any, Sequence, Type, Union

from pydantic import BaseModel

from mef2bids.types.records import NA, records_to_frame
from mef2bids.utils.logging import message

__all__ = ["format_cell", "write_tsv"]


def format_cell(value: Any) -> Any:
    """Text of one numeric table cell; other values are returned unchanged.

    Floats with an integral value lose their fractional part (``2048.0`` is
    written ``2048``), other floats keep their shortest round-trip form.
    Non-finite numbers become ``n/a``.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        return value
    if isinstance(value, int):
        return str(value)
    value = float(value)
    if not math.isfinite(value):
        return NA
    if value.is_integer():
        return str(int(value))
    return repr(value)


def write_tsv(
    records: Sequence[BaseModel],
    record_type: Type[BaseModel],
    path: Union[str, Path],
) -> Path:
    """Write records as a tab-separated table with a header row.

    Parameters
    ----------
    records : sequence of BaseModel
        Rows, written in the given order.
    record_type : type
        Record model; its field order is the column order.
    path : str or Path
        Output file, written as UTF-8 (channel units may contain ``µ``).

    Returns
    -------
    Path
        The written file.
    """
    path = Path(path)
    frame = records_to_frame(records, record_type)
    frame = frame.apply(lambda column: column.map(format_cell))
    frame.to_csv(path, sep="\t", index=False, na_rep=NA, encoding="utf-8")
    message("debug", f"Wrote {len(frame)} row(s) to {path}")
    return path
