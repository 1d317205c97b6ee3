"""``_ieeg.json`` derivation.

The sidecar is a complete skeleton: every field of the iEEG sidecar is
present, in a fixed order, and the fields the source metadata does not cover
stay empty for a curator to fill in.
"""

from types import MappingProxyType
from typing import Any, Mapping, Optional

from mef2bids.types.records import SourceSession
from mef2bids.types.tree import Tree, to_tree
from mef2bids.utils.logging import message

MICROSECONDS_PER_SECOND = 1_000_000

DEFAULT_IEEG_SIDECAR: Mapping[str, Any] = MappingProxyType(
    {
        "TaskName": "",
        "SamplingFrequency": "",
        "PowerLineFrequency": "",
        "SoftwareFilters": "",
        "DCOffsetCorrection": "",
        "HardwareFilters": {
            "HighpassFilter": {"CutoffFrequency": ""},
            "LowpassFilter": {"CutoffFrequency": ""},
        },
        "Manufacturer": "",
        "ManufacturersModelName": "",
        "TaskDescription": "",
        "Instructions": "",
        "CogAtlasID": "",
        "CogPOID": "",
        "InstitutionName": "",
        "InstitutionAddress": "",
        "DeviceSerialNumber": "",
        # Channel kinds are not classified yet, so all counts stay at zero
        "ECOGChannelCount": 0,
        "SEEGChannelCount": 0,
        "EEGChannelCount": 0,
        "EOGChannelCount": 0,
        "ECGChannelCount": 0,
        "EMGChannelCount": 0,
        "MiscChannelCount": 0,
        "TriggerChannelCount": 0,
        "RecordingDuration": "",
        "RecordingType": "continuous",
        "EpochLength": 0,
        "SubjectArtefactDescription": "",
        "SoftwareVersions": "",
        "iEEGReference": "",
        "ElectrodeManufacturer": "",
        "ElectrodeManufacturersModelName": "",
        "iEEGGround": "",
        "iEEGPlacementScheme": "",
        "iEEGElectrodeGroups": "",
        "ElectricalStimulation": "",
        "ElectricalStimulationParameters": "",
    }
)

# Filled from the source session; config overrides may not touch these
DERIVED_FIELDS = ("SamplingFrequency", "HardwareFilters", "RecordingDuration")


def recording_duration(earliest_start_time: int, latest_end_time: int) -> float:
    """Seconds between the session start and end timestamps (in microseconds)."""
    return (float(latest_end_time) - float(earliest_start_time)) / MICROSECONDS_PER_SECOND


def derive_ieeg_sidecar(
    session: SourceSession, overrides: Optional[Mapping[str, Any]] = None
) -> Tree:
    """Build the ``_ieeg.json`` tree for one session.

    Parameters
    ----------
    session : SourceSession
        Validated session metadata.
    overrides : mapping, optional
        Values for non-derived fields (e.g. ``TaskName``), usually taken from
        the conversion config. Field order is not affected.

    Returns
    -------
    Tree
        The sidecar tree, in the fixed field order of
        :data:`DEFAULT_IEEG_SIDECAR`.
    """
    sidecar = to_tree(DEFAULT_IEEG_SIDECAR)

    for name, value in (overrides or {}).items():
        if name in DERIVED_FIELDS:
            raise ValueError(f"Field '{name}' is derived from the source and cannot be overridden")
        sidecar = sidecar.replace(name, value)

    duration = recording_duration(session.earliest_start_time, session.latest_end_time)
    message("debug", f"Recording duration: {duration:g} s")

    sidecar = sidecar.replace("SamplingFrequency", session.sampling_frequency)
    sidecar = sidecar.replace(
        "HardwareFilters",
        {
            "HighpassFilter": {"CutoffFrequency": session.low_frequency_filter_setting},
            "LowpassFilter": {"CutoffFrequency": session.high_frequency_filter_setting},
        },
    )
    return sidecar.replace("RecordingDuration", duration)
