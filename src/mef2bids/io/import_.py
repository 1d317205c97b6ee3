"""Loading of session metadata and electrode coordinate matrices.

The session metadata is the tree produced by a MEF3 metadata reader (for
example matmef's ``read_mef_session_metadata``), passed either in memory or
as a JSON/YAML dump. It is validated once against :data:`SESSION_SCHEMA`
so a malformed tree fails here, with the path of the offending entry, rather
than somewhere inside the derivation.
"""

import json
from pathlib import Path
from typing import Any, Mapping, Union

import numpy as np
import scipy.io as sio
import yaml
from pydantic import ValidationError
from scipy.io.matlab import MatReadError
from schema import And, Optional, Or, Schema, SchemaError, Use

from mef2bids.types.records import SourceChannel, SourceSession
from mef2bids.utils.errors import ElectrodeMatrixError, SourceInputError
from mef2bids.utils.logging import message

__all__ = [
    "SESSION_SCHEMA",
    "ELECTRODE_VARIABLES",
    "load_session_metadata",
    "parse_session_metadata",
    "load_electrode_matrix",
]

# Checked in order; a later non-empty variable wins
ELECTRODE_VARIABLES = ("elecmatrix", "out_els")

METADATA_SUFFIXES = {".json", ".yaml", ".yml"}


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, tuple)):
        return len(value) == 0
    if isinstance(value, np.ndarray):
        return value.size == 0
    return False


def _as_python(value: Any) -> Any:
    if isinstance(value, np.ndarray) and value.size == 1:
        value = value.item()
    if isinstance(value, np.generic):
        return value.item()
    return value


def _not_bool(value: Any) -> bool:
    return not isinstance(value, bool)


def _non_empty(value: Any) -> bool:
    return len(value) > 0


_EMPTY = And(_is_empty, Use(lambda _: None))
_NUMBER = And(Use(_as_python), Or(int, float), _not_bool)
_INTEGER = And(Use(_as_python), int, _not_bool)
_OPTIONAL_NUMBER = Or(_EMPTY, _NUMBER)
_OPTIONAL_TEXT = Or(_EMPTY, str)

_CHANNEL_SECTION_2 = {
    "sampling_frequency": _NUMBER,
    "units_description": str,
    "acquisition_channel_number": _INTEGER,
    Optional("low_frequency_filter_setting", default=None): _OPTIONAL_NUMBER,
    Optional("high_frequency_filter_setting", default=None): _OPTIONAL_NUMBER,
    Optional("notch_filter_frequency_setting", default=None): _OPTIONAL_NUMBER,
    Optional("reference_description", default=None): _OPTIONAL_TEXT,
    Optional(str): object,
}

_CHANNEL_METADATA = {"section_2": _CHANNEL_SECTION_2, Optional(str): object}

_CHANNEL = {
    "name": str,
    "channel_type": _INTEGER,
    # matmef keeps one metadata block per segment; the first one is used
    "metadata": Or(
        _CHANNEL_METADATA,
        And(list, _non_empty, Use(lambda blocks: blocks[0]), _CHANNEL_METADATA),
    ),
    Optional(str): object,
}

SESSION_SCHEMA = Schema(
    {
        "earliest_start_time": _INTEGER,
        "latest_end_time": _INTEGER,
        "time_series_metadata": {
            "section_2": {
                "sampling_frequency": _NUMBER,
                Optional("low_frequency_filter_setting", default=None): _OPTIONAL_NUMBER,
                Optional("high_frequency_filter_setting", default=None): _OPTIONAL_NUMBER,
                Optional(str): object,
            },
            Optional(str): object,
        },
        "time_series_channels": And([_CHANNEL], _non_empty),
        Optional(str): object,
    }
)


def parse_session_metadata(tree: Mapping[str, Any]) -> SourceSession:
    """Validate a session metadata tree and convert it to a :class:`SourceSession`.

    Parameters
    ----------
    tree : mapping
        Session metadata as produced by a MEF3 metadata reader.

    Returns
    -------
    SourceSession
        Session settings and channels, in storage order.

    Raises
    ------
    SourceInputError
        If the tree does not match :data:`SESSION_SCHEMA`.
    """
    if not isinstance(tree, Mapping):
        raise SourceInputError(
            f"Invalid MEF3 input of type {type(tree).__name__}. "
            "Pass a session metadata mapping or a metadata file"
        )
    try:
        validated = SESSION_SCHEMA.validate(dict(tree))
        section_2 = validated["time_series_metadata"]["section_2"]
        channels = tuple(
            SourceChannel(
                name=channel["name"],
                channel_type=channel["channel_type"],
                **_channel_fields(channel["metadata"]["section_2"]),
            )
            for channel in validated["time_series_channels"]
        )
        session = SourceSession(
            earliest_start_time=validated["earliest_start_time"],
            latest_end_time=validated["latest_end_time"],
            sampling_frequency=section_2["sampling_frequency"],
            low_frequency_filter_setting=section_2["low_frequency_filter_setting"],
            high_frequency_filter_setting=section_2["high_frequency_filter_setting"],
            channels=channels,
        )
    except (SchemaError, ValidationError) as e:
        raise SourceInputError(f"Malformed MEF3 session metadata: {e}") from e

    message("info", f"Session metadata: {len(session.channels)} channel(s)")
    return session


def _channel_fields(section_2: Mapping[str, Any]) -> dict:
    return {
        name: section_2[name]
        for name in (
            "sampling_frequency",
            "units_description",
            "acquisition_channel_number",
            "low_frequency_filter_setting",
            "high_frequency_filter_setting",
            "notch_filter_frequency_setting",
            "reference_description",
        )
    }


def load_session_metadata(source: Union[str, Path, Mapping[str, Any]]) -> SourceSession:
    """Load session metadata from a mapping or a JSON/YAML metadata file.

    Raises
    ------
    SourceInputError
        If the file is missing, unreadable, of an unknown type or malformed.
    """
    if isinstance(source, Mapping):
        return parse_session_metadata(source)
    if not isinstance(source, (str, Path)) or not str(source).strip():
        raise SourceInputError(
            "Invalid MEF3 input argument. Pass a session metadata mapping or a metadata file"
        )

    path = Path(source)
    if not path.exists():
        raise SourceInputError(f"MEF3 input '{path}' could not be found")
    if path.is_dir():
        raise SourceInputError(
            f"MEF3 input '{path}' is a session directory; export its metadata to a "
            "JSON or YAML file first"
        )
    if path.suffix.lower() not in METADATA_SUFFIXES:
        raise SourceInputError(
            f"Unsupported metadata file type '{path.suffix}', expected one of "
            f"{', '.join(sorted(METADATA_SUFFIXES))}"
        )

    message("info", f"Loading session metadata: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                tree = json.load(f)
            else:
                tree = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise SourceInputError(f"Failed to read MEF3 metadata from {path}: {e}") from e

    return parse_session_metadata(tree)


def load_electrode_matrix(source: Union[str, Path, np.ndarray]) -> np.ndarray:
    """Load the electrode coordinate matrix from a ``.mat`` file.

    The file must hold an ``elecmatrix`` or an ``out_els`` variable (``out_els``
    is used when both are present). An array passed directly is returned as is.

    Raises
    ------
    SourceInputError
        If the file is missing or cannot be read as a MAT file.
    ElectrodeMatrixError
        If neither variable is present or both are empty.
    """
    if isinstance(source, np.ndarray):
        return source
    if not isinstance(source, (str, Path)) or not str(source).strip():
        raise SourceInputError(
            "Invalid input mat file argument. Pass a mat file path or an array"
        )

    path = Path(source)
    if not path.is_file():
        raise SourceInputError(f"Input mat file '{path}' could not be found")

    message("info", f"Loading electrode positions: {path}")
    try:
        contents = sio.loadmat(str(path))
    except (OSError, ValueError, NotImplementedError, MatReadError) as e:
        raise SourceInputError(f"Failed to read mat file {path}: {e}") from e

    matrix = None
    for name in ELECTRODE_VARIABLES:
        value = contents.get(name)
        if value is not None and np.size(value) > 0:
            matrix = value
            message("debug", f"Using variable '{name}' with shape {np.shape(value)}")

    if matrix is None:
        raise ElectrodeMatrixError(
            "The input mat file contains neither an 'elecmatrix' nor an 'out_els' variable"
        )
    return np.asarray(matrix)
