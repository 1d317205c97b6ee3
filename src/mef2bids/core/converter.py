# src/mef2bids/core/converter.py
"""Conversion of MEF3 metadata and electrode positions into BIDS iEEG sidecars.

Two independent conversions are provided:

1. Amplifier metadata (``convert_amplifier_metadata``):
   - ``<stamp>_channels.tsv``  one row per time-series channel, in acquisition order
   - ``<stamp>_ieeg.json``     session-wide acquisition settings

2. Electrode positions (``convert_electrodes``):
   - ``<stamp>_electrodes.tsv``  one row per electrode (x, y, z)
   - ``<stamp>_coordsystem.json`` coordinate frame description

Everything is loaded, checked and derived in memory before the first file
is opened, so a failing call leaves no output behind. All files of one call
share the same ``YYYYMMDD_HHMMSS_mmm`` stamp.

Examples
--------
>>> from mef2bids import Converter
>>> converter = Converter(config_file="mef2bids.yaml")
>>> converter.convert_amplifier_metadata("session_metadata.json", "bids_out/")
>>> converter.convert_electrodes("electrodes.mat", "bids_out/")
"""

from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

import numpy as np

from mef2bids.functions.channels import build_channel_table
from mef2bids.functions.electrodes import (
    derive_coordsystem_sidecar,
    derive_electrode_records,
)
from mef2bids.functions.session import derive_ieeg_sidecar
from mef2bids.io.export import write_tsv
from mef2bids.io.import_ import load_electrode_matrix, load_session_metadata
from mef2bids.io.sidecar_json import write_json_sidecar
from mef2bids.types.records import ChannelRecord, ElectrodeRecord
from mef2bids.utils.config import load_config, validate_config
from mef2bids.utils.file_system import output_stamp, stamped_path, validate_output_dir
from mef2bids.utils.logging import message


class Converter:
    """Converter from MEF3 metadata / electrode matrices to BIDS sidecars.

    Parameters
    ----------
    config_file : str or Path, optional
        YAML conversion config, see :func:`mef2bids.utils.config.load_config`.
    config : mapping, optional
        Configuration given directly, validated and completed like a config
        file; takes precedence over ``config_file``.

    Raises
    ------
    ConfigError
        If the configuration is invalid.
    """

    def __init__(
        self,
        config_file: Optional[Union[str, Path]] = None,
        config: Optional[Mapping[str, Any]] = None,
    ):
        if config is not None:
            self.config = validate_config(config)
        else:
            self.config = load_config(config_file)

    def convert_amplifier_metadata(
        self,
        source: Union[str, Path, Mapping[str, Any]],
        output_dir: Union[str, Path],
    ) -> List[Path]:
        """Write ``_channels.tsv`` and ``_ieeg.json`` for one MEF3 session.

        Parameters
        ----------
        source : str, Path or mapping
            Session metadata tree, or a JSON/YAML file holding it.
        output_dir : str or Path
            Existing directory to write to.

        Returns
        -------
        list of Path
            The written files. ``_channels.tsv`` is left out when the session
            has no time-series channels.

        Raises
        ------
        SourceInputError, OutputLocationError
        """
        message("header", "Generating BIDS amplifier metadata")
        session = load_session_metadata(source)
        output_dir = validate_output_dir(output_dir)

        channel_settings = self.config["channels"]
        channels = build_channel_table(
            session.channels,
            reference_default=channel_settings["reference_default"],
            type_default=channel_settings["type_default"],
        )
        ieeg = derive_ieeg_sidecar(session, overrides=self.config["ieeg"])

        stamp = output_stamp()
        written = []
        if channels:
            written.append(
                write_tsv(channels, ChannelRecord, stamped_path(output_dir, stamp, "channels.tsv"))
            )
        else:
            message("warning", "No time-series channels found, skipping _channels.tsv")
        written.append(write_json_sidecar(ieeg, stamped_path(output_dir, stamp, "ieeg.json")))

        for path in written:
            message("success", f"✓ Wrote {path}")
        return written

    def convert_electrodes(
        self,
        source: Union[str, Path, np.ndarray],
        output_dir: Union[str, Path],
    ) -> List[Path]:
        """Write ``_electrodes.tsv`` and ``_coordsystem.json`` from electrode positions.

        Parameters
        ----------
        source : str, Path or ndarray
            ``.mat`` file with an ``elecmatrix`` or ``out_els`` variable, or
            the N x 3 matrix itself.
        output_dir : str or Path
            Existing directory to write to.

        Returns
        -------
        list of Path
            The written files.

        Raises
        ------
        SourceInputError, ElectrodeMatrixError, OutputLocationError
        """
        message("header", "Generating BIDS electrode metadata")
        matrix = load_electrode_matrix(source)
        electrodes = derive_electrode_records(matrix)
        output_dir = validate_output_dir(output_dir)

        coordsystem = derive_coordsystem_sidecar(overrides=self.config["coordsystem"])

        stamp = output_stamp()
        written = [
            write_tsv(
                electrodes, ElectrodeRecord, stamped_path(output_dir, stamp, "electrodes.tsv")
            ),
            write_json_sidecar(
                coordsystem, stamped_path(output_dir, stamp, "coordsystem.json")
            ),
        ]
        for path in written:
            message("success", f"✓ Wrote {path}")
        return written


def convert_amplifier_metadata(
    source: Union[str, Path, Mapping[str, Any]],
    output_dir: Union[str, Path],
    config_file: Optional[Union[str, Path]] = None,
) -> List[Path]:
    """Shortcut for ``Converter(config_file).convert_amplifier_metadata(...)``."""
    return Converter(config_file).convert_amplifier_metadata(source, output_dir)


def convert_electrodes(
    source: Union[str, Path, np.ndarray],
    output_dir: Union[str, Path],
    config_file: Optional[Union[str, Path]] = None,
) -> List[Path]:
    """Shortcut for ``Converter(config_file).convert_electrodes(...)``."""
    return Converter(config_file).convert_electrodes(source, output_dir)
