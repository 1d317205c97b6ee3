# records.py
"""Source metadata and derived table records.

The declaration order of the fields of :class:`ChannelRecord` and
:class:`ElectrodeRecord` is the column order of the written tables.
"""
from typing import List, Optional, Sequence, Tuple, Type, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict

# Marker written for unknown, unset or not meaningful values
NA = "n/a"

# Channel kind tag of sampled waveform channels (MEF3 TIME_SERIES_CHANNEL_TYPE)
TIME_SERIES_CHANNEL_TYPE = 1

Number = Union[int, float]


class SourceChannel(BaseModel):
    """One channel of the source session, as read from its metadata section."""

    model_config = ConfigDict(frozen=True)

    name: str
    channel_type: int
    sampling_frequency: Number
    units_description: str = ""
    acquisition_channel_number: int
    low_frequency_filter_setting: Optional[Number] = None
    high_frequency_filter_setting: Optional[Number] = None
    notch_filter_frequency_setting: Optional[Number] = None
    reference_description: Optional[str] = None


class SourceSession(BaseModel):
    """Session-wide settings plus the channels of one recording."""

    model_config = ConfigDict(frozen=True)

    earliest_start_time: int
    latest_end_time: int
    sampling_frequency: Number
    low_frequency_filter_setting: Optional[Number] = None
    high_frequency_filter_setting: Optional[Number] = None
    channels: Tuple[SourceChannel, ...]


class ChannelRecord(BaseModel):
    """One row of ``_channels.tsv``."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = NA
    units: str
    low_cutoff: Union[int, float, str] = NA
    high_cutoff: Union[int, float, str] = NA
    reference: str
    group: str = NA
    sampling_frequency: Number
    notch: Union[int, float, str] = NA
    status: str = NA
    status_description: str = NA


class ElectrodeRecord(BaseModel):
    """One row of ``_electrodes.tsv``."""

    model_config = ConfigDict(frozen=True)

    name: int
    x: float
    y: float
    z: float


CHANNEL_COLUMNS: Tuple[str, ...] = tuple(ChannelRecord.model_fields)
ELECTRODE_COLUMNS: Tuple[str, ...] = tuple(ElectrodeRecord.model_fields)


def records_to_frame(
    records: Sequence[BaseModel], record_type: Type[BaseModel]
) -> pd.DataFrame:
    """Collect records into a DataFrame with the record type's column order.

    Columns are kept as ``object`` so every cell holds the value of its record
    unchanged; ints are not widened to floats by other rows of the column.
    """
    columns: List[str] = list(record_type.model_fields)
    return pd.DataFrame(
        [record.model_dump() for record in records], columns=columns, dtype=object
    )
