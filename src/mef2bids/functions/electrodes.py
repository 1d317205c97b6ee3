"""``_electrodes.tsv`` and ``_coordsystem.json`` derivation."""

from types import MappingProxyType
from typing import Any, List, Mapping, Optional

import numpy as np

from mef2bids.types.records import ElectrodeRecord
from mef2bids.types.tree import Tree, to_tree
from mef2bids.utils.errors import ElectrodeMatrixError
from mef2bids.utils.logging import message

DEFAULT_COORDSYSTEM: Mapping[str, Any] = MappingProxyType(
    {
        "IntendedFor": "",
        "iEEGCoordinateSystem": "Other",
        "iEEGCoordinateUnits": "mm",
        "iEEGCoordinateSystemDescription": (
            "Scanner Native. The coordinate frame of the scanner at data "
            "acquisition of the T1w volume"
        ),
        "iEEGCoordinateProcessingDescription": "",
        "iEEGCoordinateProcessingReference": "",
    }
)

FIXED_COORDSYSTEM_FIELDS = ("iEEGCoordinateUnits",)


def check_electrode_matrix(matrix: Any) -> np.ndarray:
    """Return ``matrix`` as a float array after checking it is N x 3.

    Raises
    ------
    ElectrodeMatrixError
        If the matrix is not numeric, not two-dimensional, or does not have
        exactly three columns (x, y, z).
    """
    array = np.asarray(matrix)
    if not np.issubdtype(array.dtype, np.number) or array.dtype == np.bool_:
        raise ElectrodeMatrixError(
            f"The input electrode matrix should be numeric, got dtype '{array.dtype}'"
        )
    if array.ndim != 2 or array.shape[1] != 3:
        raise ElectrodeMatrixError(
            "The input electrode matrix should have exactly three columns, representing "
            f"the x, y and z coordinates (got shape {array.shape})"
        )
    return array.astype(float)


def derive_electrode_records(matrix: Any) -> List[ElectrodeRecord]:
    """One record per matrix row, named 1..N in row order."""
    coordinates = check_electrode_matrix(matrix)
    records = [
        ElectrodeRecord(name=index, x=x, y=y, z=z)
        for index, (x, y, z) in enumerate(coordinates.tolist(), start=1)
    ]
    message("debug", f"Derived {len(records)} electrode record(s)")
    return records


def derive_coordsystem_sidecar(overrides: Optional[Mapping[str, Any]] = None) -> Tree:
    """Build the ``_coordsystem.json`` tree; coordinates are always in mm."""
    sidecar = to_tree(DEFAULT_COORDSYSTEM)
    for name, value in (overrides or {}).items():
        if name in FIXED_COORDSYSTEM_FIELDS:
            raise ValueError(f"Field '{name}' is fixed and cannot be overridden")
        sidecar = sidecar.replace(name, value)
    return sidecar
