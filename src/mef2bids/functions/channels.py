"""Channel table derivation.

Source channels are first put in acquisition order (the order the amplifier
inputs were wired in, which need not match storage order), then every
time-series channel is mapped onto one row of ``_channels.tsv``.
"""

from typing import Iterable, List, Optional, Sequence

from mef2bids.types.records import (
    NA,
    TIME_SERIES_CHANNEL_TYPE,
    ChannelRecord,
    SourceChannel,
)
from mef2bids.utils.logging import message

MICROVOLT = "µV"
DEFAULT_REFERENCE = "intracranial"
DEFAULT_TYPE = NA

NOT_STARTING_AT_ONE = (
    "The acquisition channel count does not start at 1, "
    "check the (metadata) output to see if ordered correctly"
)
NOT_CONSECUTIVE = (
    "The acquisition channel count is not consecutive, "
    "check the (metadata) output to see if ordered correctly"
)


def order_by_acquisition(channels: Iterable[SourceChannel]) -> List[SourceChannel]:
    """Sort channels by acquisition channel number; ties keep their original order."""
    return sorted(channels, key=lambda channel: channel.acquisition_channel_number)


def validate_acquisition_order(channels: Sequence[SourceChannel]) -> List[str]:
    """Check the acquisition channel numbers and warn about anomalies.

    Two checks are made over all channels, whatever their kind: the lowest
    number should be 1, and the numbers should cover every integer between
    the lowest and the highest. Neither check is fatal.

    Parameters
    ----------
    channels : sequence of SourceChannel
        Channels in any order.

    Returns
    -------
    list of str
        The warning texts that were logged, empty when the numbering is clean.
    """
    numbers = {channel.acquisition_channel_number for channel in channels}
    if not numbers:
        return []

    warnings = []
    if min(numbers) != 1:
        warnings.append(NOT_STARTING_AT_ONE)
    if set(range(min(numbers), max(numbers) + 1)) - numbers:
        warnings.append(NOT_CONSECUTIVE)

    for text in warnings:
        message("warning", text)
    return warnings


def normalize_units(units_description: str) -> str:
    """Map ``microvolts`` (any case) to ``µV``, pass anything else through."""
    if units_description.lower() == "microvolts":
        return MICROVOLT
    return units_description


def positive_or_na(value: Optional[float]):
    """Return ``value`` if it is set and strictly positive, else ``n/a``.

    A zero filter setting cannot be told apart from an unconfigured one, so
    both map to ``n/a``.
    """
    if value is not None and value > 0:
        return value
    return NA


def derive_channel_record(
    channel: SourceChannel,
    reference_default: str = DEFAULT_REFERENCE,
    type_default: str = DEFAULT_TYPE,
) -> ChannelRecord:
    """Map one source channel onto a ``_channels.tsv`` row."""
    return ChannelRecord(
        name=channel.name,
        type=type_default,
        units=normalize_units(channel.units_description),
        low_cutoff=positive_or_na(channel.low_frequency_filter_setting),
        high_cutoff=positive_or_na(channel.high_frequency_filter_setting),
        reference=channel.reference_description or reference_default,
        group=NA,
        sampling_frequency=channel.sampling_frequency,
        notch=positive_or_na(channel.notch_filter_frequency_setting),
        status=NA,
        status_description=NA,
    )


def derive_channel_records(
    channels: Iterable[SourceChannel],
    reference_default: str = DEFAULT_REFERENCE,
    type_default: str = DEFAULT_TYPE,
) -> List[ChannelRecord]:
    """Build one record per time-series channel, keeping the input order.

    Channels of any other kind are skipped.
    """
    records = [
        derive_channel_record(channel, reference_default, type_default)
        for channel in channels
        if channel.channel_type == TIME_SERIES_CHANNEL_TYPE
    ]
    message("debug", f"Derived {len(records)} channel record(s)")
    return records


def build_channel_table(
    channels: Sequence[SourceChannel],
    reference_default: str = DEFAULT_REFERENCE,
    type_default: str = DEFAULT_TYPE,
) -> List[ChannelRecord]:
    """Order, check and derive the channel rows of one session."""
    ordered = order_by_acquisition(channels)
    validate_acquisition_order(ordered)
    return derive_channel_records(ordered, reference_default, type_default)
