"""Tests for channel ordering, validation and channel table derivation."""

import pytest

from mef2bids.functions.channels import (
    MICROVOLT,
    NOT_CONSECUTIVE,
    NOT_STARTING_AT_ONE,
    build_channel_table,
    derive_channel_record,
    derive_channel_records,
    normalize_units,
    order_by_acquisition,
    positive_or_na,
    validate_acquisition_order,
)
from mef2bids.types.records import CHANNEL_COLUMNS, NA, SourceChannel


def make_source_channel(name, number, channel_type=1, **section_2):
    fields = {
        "sampling_frequency": 2048,
        "units_description": "microvolts",
    }
    fields.update(section_2)
    return SourceChannel(
        name=name,
        channel_type=channel_type,
        acquisition_channel_number=number,
        **fields,
    )


class TestOrdering:
    """Test acquisition ordering."""

    def test_reorders_by_acquisition_number(self):
        channels = [make_source_channel(n, i) for n, i in [("C", 3), ("A", 1), ("B", 2)]]

        ordered = order_by_acquisition(channels)

        assert [c.acquisition_channel_number for c in ordered] == [1, 2, 3]
        assert [c.name for c in ordered] == ["A", "B", "C"]

    def test_ordering_is_idempotent(self):
        channels = [make_source_channel(n, i) for n, i in [("C", 3), ("A", 1), ("B", 2)]]

        once = order_by_acquisition(channels)
        twice = order_by_acquisition(once)

        assert [c.name for c in twice] == [c.name for c in once]

    def test_ties_keep_original_order(self):
        channels = [
            make_source_channel("second", 2),
            make_source_channel("first-a", 1),
            make_source_channel("first-b", 1),
        ]

        ordered = order_by_acquisition(channels)

        assert [c.name for c in ordered] == ["first-a", "first-b", "second"]


class TestValidation:
    """Test the non-fatal acquisition numbering checks."""

    def test_clean_numbering_has_no_warnings(self, warning_texts):
        channels = [make_source_channel(str(i), i) for i in [3, 1, 2]]

        assert validate_acquisition_order(channels) == []
        assert warning_texts() == []

    def test_not_starting_at_one(self, warning_texts):
        channels = [make_source_channel(str(i), i) for i in [2, 3, 4]]

        assert validate_acquisition_order(channels) == [NOT_STARTING_AT_ONE]
        assert warning_texts() == [NOT_STARTING_AT_ONE]

    def test_not_consecutive(self, warning_texts):
        channels = [make_source_channel(str(i), i) for i in [1, 2, 4]]

        assert validate_acquisition_order(channels) == [NOT_CONSECUTIVE]
        assert warning_texts() == [NOT_CONSECUTIVE]

    def test_both_warnings(self):
        channels = [make_source_channel(str(i), i) for i in [5, 9]]

        assert validate_acquisition_order(channels) == [NOT_STARTING_AT_ONE, NOT_CONSECUTIVE]

    def test_duplicates_are_not_gaps(self):
        channels = [make_source_channel(str(i), n) for i, n in enumerate([1, 1, 2])]

        assert validate_acquisition_order(channels) == []

    def test_non_time_series_channels_count(self):
        channels = [
            make_source_channel("A", 1),
            make_source_channel("EVT", 2, channel_type=2),
            make_source_channel("B", 3),
        ]

        assert validate_acquisition_order(channels) == []

    def test_empty(self):
        assert validate_acquisition_order([]) == []


class TestFieldRules:
    """Test the per-field defaulting rules."""

    @pytest.mark.parametrize(
        "value, expected",
        [(None, NA), (0, NA), (0.0, NA), (-1, NA), (250, 250), (0.15, 0.15)],
    )
    def test_positive_or_na(self, value, expected):
        assert positive_or_na(value) == expected

    @pytest.mark.parametrize("units", ["microvolts", "Microvolts", "MICROVOLTS"])
    def test_microvolts_normalized(self, units):
        assert normalize_units(units) == MICROVOLT == "µV"

    def test_other_units_pass_through(self):
        assert normalize_units("millivolts") == "millivolts"
        assert normalize_units("") == ""

    def test_zero_low_cutoff(self):
        channel = make_source_channel(
            "A", 1, low_frequency_filter_setting=0, high_frequency_filter_setting=250
        )

        record = derive_channel_record(channel)

        assert record.low_cutoff == NA
        assert record.high_cutoff == 250

    def test_reference_defaults(self):
        assert derive_channel_record(make_source_channel("A", 1)).reference == "intracranial"
        assert (
            derive_channel_record(
                make_source_channel("A", 1, reference_description="")
            ).reference
            == "intracranial"
        )
        assert (
            derive_channel_record(
                make_source_channel("A", 1, reference_description="LA1")
            ).reference
            == "LA1"
        )

    def test_fixed_fields(self):
        channel = make_source_channel(
            "A", 1, sampling_frequency=512, notch_filter_frequency_setting=60
        )

        record = derive_channel_record(channel)

        assert record.name == "A"
        assert record.type == NA
        assert record.group == NA
        assert record.status == NA
        assert record.status_description == NA
        assert record.sampling_frequency == 512
        assert record.notch == 60

    def test_custom_defaults(self):
        record = derive_channel_record(
            make_source_channel("A", 1), reference_default="n/a", type_default="ECOG"
        )

        assert record.type == "ECOG"
        assert record.reference == "n/a"

    def test_every_field_set(self):
        record = derive_channel_record(make_source_channel("A", 1))

        dumped = record.model_dump()
        assert tuple(dumped) == CHANNEL_COLUMNS
        assert all(value is not None for value in dumped.values())


class TestChannelTable:
    """Test derivation of the whole channel table."""

    def test_only_time_series_channels(self):
        channels = [
            make_source_channel("A", 1),
            make_source_channel("EVT", 2, channel_type=2),
            make_source_channel("B", 3),
        ]

        records = derive_channel_records(channels)

        assert [r.name for r in records] == ["A", "B"]

    def test_no_time_series_channels(self):
        channels = [make_source_channel("EVT", 1, channel_type=2)]

        assert derive_channel_records(channels) == []

    def test_build_orders_before_filtering(self, warning_texts):
        channels = [
            make_source_channel("C", 3),
            make_source_channel("EVT", 2, channel_type=2),
            make_source_channel("A", 1),
        ]

        records = build_channel_table(channels)

        assert [r.name for r in records] == ["A", "C"]
        assert warning_texts() == []

    def test_column_order(self):
        assert CHANNEL_COLUMNS == (
            "name",
            "type",
            "units",
            "low_cutoff",
            "high_cutoff",
            "reference",
            "group",
            "sampling_frequency",
            "notch",
            "status",
            "status_description",
        )
