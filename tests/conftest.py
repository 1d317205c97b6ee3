"""Test configuration and fixtures."""

import numpy as np
import pytest
import scipy.io as sio
from loguru import logger


def channel_entry(
    name,
    acquisition_channel_number,
    channel_type=1,
    units_description="microvolts",
    low=0.15,
    high=250,
    notch=None,
    reference="",
    sampling_frequency=2048,
):
    """One channel as laid out by a MEF3 metadata reader."""
    return {
        "name": name,
        "channel_type": channel_type,
        "metadata": [
            {
                "section_2": {
                    "sampling_frequency": sampling_frequency,
                    "units_description": units_description,
                    "acquisition_channel_number": acquisition_channel_number,
                    "low_frequency_filter_setting": low,
                    "high_frequency_filter_setting": high,
                    "notch_filter_frequency_setting": notch,
                    "reference_description": reference,
                    "channel_description": "not_entered",
                }
            }
        ],
    }


@pytest.fixture
def make_channel():
    """Factory for single channel entries."""
    return channel_entry


@pytest.fixture
def session_tree():
    """A small session: three time-series channels stored out of acquisition order
    plus one non time-series channel."""
    return {
        "earliest_start_time": 1_578_000_000_000_000,
        "latest_end_time": 1_578_000_005_000_000,
        "time_series_metadata": {
            "section_2": {
                "sampling_frequency": 2048,
                "low_frequency_filter_setting": 0.15,
                "high_frequency_filter_setting": 500,
            }
        },
        "time_series_channels": [
            channel_entry("LA3", 3, notch=60, reference="LA1"),
            channel_entry("LA1", 1, low=0),
            channel_entry("LA2", 2, units_description="millivolts", high=None),
            channel_entry("EVT", 4, channel_type=2),
        ],
    }


@pytest.fixture
def output_dir(tmp_path):
    """Empty output directory."""
    path = tmp_path / "bids_out"
    path.mkdir()
    return path


@pytest.fixture
def electrode_matrix():
    """Five electrodes, one per row (x, y, z)."""
    return np.array(
        [
            [-40.5, 12.0, 33.25],
            [-41.0, 2.5, 30.0],
            [-42.75, -7.0, 28.5],
            [-43.0, -17.5, 26.0],
            [-44.25, -27.0, 24.75],
        ]
    )


@pytest.fixture
def electrode_mat_file(tmp_path, electrode_matrix):
    """Mat file holding the electrode matrix as ``elecmatrix``."""
    path = tmp_path / "electrodes.mat"
    sio.savemat(str(path), {"elecmatrix": electrode_matrix})
    return path


@pytest.fixture
def log_records():
    """Collect loguru records emitted during a test."""
    records = []
    handler_id = logger.add(lambda msg: records.append(msg.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def warning_texts(log_records):
    """Texts of the WARNING records emitted during a test."""

    def collect():
        return [r["message"] for r in log_records if r["level"].name == "WARNING"]

    return collect
