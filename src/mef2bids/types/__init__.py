"""Record and tree types shared by the derivation and writer modules."""

from .records import (
    CHANNEL_COLUMNS,
    ELECTRODE_COLUMNS,
    NA,
    TIME_SERIES_CHANNEL_TYPE,
    ChannelRecord,
    ElectrodeRecord,
    SourceChannel,
    SourceSession,
    records_to_frame,
)
from .tree import Node, Scalar, Sequence, Text, Tree, to_node, to_tree

__all__ = [
    "CHANNEL_COLUMNS",
    "ELECTRODE_COLUMNS",
    "NA",
    "TIME_SERIES_CHANNEL_TYPE",
    "ChannelRecord",
    "ElectrodeRecord",
    "SourceChannel",
    "SourceSession",
    "records_to_frame",
    "Node",
    "Scalar",
    "Sequence",
    "Text",
    "Tree",
    "to_node",
    "to_tree",
]
