"""Tests for the tab-separated table writer."""

from mef2bids.io.export import format_cell, write_tsv
from mef2bids.types.records import NA, ChannelRecord, ElectrodeRecord


def make_record(name, low=NA, notch=NA):
    return ChannelRecord(
        name=name,
        units="µV",
        low_cutoff=low,
        high_cutoff=250,
        reference="intracranial",
        sampling_frequency=2048,
        notch=notch,
    )


def test_channels_table(tmp_path):
    records = [make_record("LA1"), make_record("LA2", low=0.15, notch=60)]

    path = write_tsv(records, ChannelRecord, tmp_path / "x_channels.tsv")

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == (
        "name\ttype\tunits\tlow_cutoff\thigh_cutoff\treference\tgroup"
        "\tsampling_frequency\tnotch\tstatus\tstatus_description"
    )
    assert lines[1] == "LA1\tn/a\tµV\tn/a\t250\tintracranial\tn/a\t2048\tn/a\tn/a\tn/a"
    assert lines[2] == "LA2\tn/a\tµV\t0.15\t250\tintracranial\tn/a\t2048\t60\tn/a\tn/a"
    assert len(lines) == 3


def test_rows_keep_input_order(tmp_path):
    records = [make_record(name) for name in ["c", "a", "b"]]

    path = write_tsv(records, ChannelRecord, tmp_path / "order.tsv")

    names = [line.split("\t")[0] for line in path.read_text(encoding="utf-8").splitlines()[1:]]
    assert names == ["c", "a", "b"]


def test_electrodes_table(tmp_path):
    records = [
        ElectrodeRecord(name=1, x=-40.5, y=12.0, z=33.25),
        ElectrodeRecord(name=2, x=1.0, y=2.0, z=3.0),
    ]

    path = write_tsv(records, ElectrodeRecord, tmp_path / "x_electrodes.tsv")

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines == ["name\tx\ty\tz", "1\t-40.5\t12\t33.25", "2\t1\t2\t3"]


def test_empty_table_has_header(tmp_path):
    path = write_tsv([], ElectrodeRecord, tmp_path / "empty.tsv")

    assert path.read_text(encoding="utf-8").splitlines() == ["name\tx\ty\tz"]


def test_mixed_int_and_float_cutoffs_keep_their_text(tmp_path):
    records = [
        make_record("LA1").model_copy(update={"high_cutoff": 250}),
        make_record("LA2").model_copy(update={"high_cutoff": 300.5}),
    ]

    path = write_tsv(records, ChannelRecord, tmp_path / "mixed.tsv")

    rows = [line.split("\t") for line in path.read_text(encoding="utf-8").splitlines()[1:]]
    assert [row[4] for row in rows] == ["250", "300.5"]


def test_integral_float_sampling_frequency(tmp_path):
    record = make_record("LA1").model_copy(update={"sampling_frequency": 2048.0})

    path = write_tsv([record], ChannelRecord, tmp_path / "sf.tsv")

    row = path.read_text(encoding="utf-8").splitlines()[1].split("\t")
    assert row[7] == "2048"


class TestFormatCell:
    """Text of numeric table cells."""

    def test_numbers(self):
        assert format_cell(250) == "250"
        assert format_cell(2048.0) == "2048"
        assert format_cell(0.15) == "0.15"
        assert format_cell(-40.5) == "-40.5"

    def test_non_finite_is_na(self):
        assert format_cell(float("nan")) == NA
        assert format_cell(float("inf")) == NA

    def test_text_passes_through(self):
        assert format_cell(NA) == NA
        assert format_cell("LA1") == "LA1"
