"""Standalone derivation functions.

Each function takes validated source metadata (or a coordinate matrix) and
returns in-memory records or sidecar trees; nothing here touches the
filesystem.

Examples
--------
>>> from mef2bids.functions import build_channel_table, derive_ieeg_sidecar
>>> rows = build_channel_table(session.channels)
>>> sidecar = derive_ieeg_sidecar(session, overrides={"TaskName": "rest"})
"""

from .channels import (
    build_channel_table,
    derive_channel_record,
    derive_channel_records,
    order_by_acquisition,
    validate_acquisition_order,
)
from .electrodes import (
    check_electrode_matrix,
    derive_coordsystem_sidecar,
    derive_electrode_records,
)
from .session import derive_ieeg_sidecar, recording_duration

__all__ = [
    "build_channel_table",
    "derive_channel_record",
    "derive_channel_records",
    "order_by_acquisition",
    "validate_acquisition_order",
    "check_electrode_matrix",
    "derive_coordsystem_sidecar",
    "derive_electrode_records",
    "derive_ieeg_sidecar",
    "recording_duration",
]
