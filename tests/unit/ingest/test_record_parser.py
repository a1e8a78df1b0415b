"""Unit tests for measurement line classification."""

from __future__ import annotations

import pytest

from ingest.record_parser import parse_record_line

VALID_LINE = "16/12/2006\t17:24:00\t4.216\t0.418\t234.840\t18.400\t0.000\t1.000\t17.000"


def test_parse_record_line_returns_valid_record() -> None:
    """A well-formed line should parse into a record."""
    outcome = parse_record_line(VALID_LINE, "\t", 9)

    assert outcome.status == "valid" and outcome.record is not None


def test_parse_record_line_round_trips_fields() -> None:
    """Re-serializing a parsed record should reproduce every field value."""
    fields = VALID_LINE.split("\t")
    record = parse_record_line(VALID_LINE + "\n", "\t", 9).record
    assert record is not None

    rebuilt = [
        f"{record.date.day}/{record.date.month}/{record.date.year}",
        f"{record.time.hour}:{record.time.minute}:{record.time.second}",
        record.global_active_power,
        record.global_reactive_power,
        record.voltage,
        record.global_intensity,
        record.kitchen,
        record.laundry,
        record.climate_control,
    ]

    assert rebuilt[:2] == fields[:2] and rebuilt[2:] == [float(value) for value in fields[2:]]


def test_parse_record_line_keeps_unpadded_date_fragments() -> None:
    """Date fragments should be stored exactly as written."""
    line = "1/1/2007\t09:30:00\t1.2\t0.05\t240\t5\t2\t0\t18"

    record = parse_record_line(line, "\t", 9).record

    assert record is not None and (record.date.day, record.date.month) == ("1", "1")


def test_parse_record_line_flags_wrong_delimiter() -> None:
    """A line the delimiter cannot split should be a delimiter mismatch."""
    line = VALID_LINE.replace("\t", ",")

    outcome = parse_record_line(line, "\t", 9)

    assert outcome.status == "delimiter_mismatch" and outcome.is_fatal


def test_parse_record_line_skips_short_line() -> None:
    """A line with too few fields should be tolerated as skipped."""
    outcome = parse_record_line("16/12/2006\t17:25:00\t5.360\t0.436", "\t", 9)

    assert outcome.status == "skipped" and not outcome.is_fatal


def test_parse_record_line_skips_blank_line() -> None:
    """A blank trailing line should be skipped, not treated as a mismatch."""
    outcome = parse_record_line("   \n", "\t", 9)

    assert outcome.status == "skipped"


def test_parse_record_line_skips_line_with_missing_trailing_fields() -> None:
    """Trailing empty fields should count as missing fields."""
    outcome = parse_record_line("16/12/2006\t18:01:00\t1\t1\t1\t1\t1\t1\t", "\t", 9)

    assert outcome.status == "skipped"


def test_parse_record_line_flags_header_line() -> None:
    """A header read as data should be a header mismatch."""
    header = "\t".join(
        [
            "Date",
            "Time",
            "Global_active_power",
            "Global_reactive_power",
            "Voltage",
            "Global_intensity",
            "Sub_metering_1",
            "Sub_metering_2",
            "Sub_metering_3",
        ]
    )

    outcome = parse_record_line(header, "\t", 9)

    assert outcome.status == "header_mismatch" and outcome.is_fatal


@pytest.mark.parametrize(
    "raw_value",
    ["?", "", "nan", "inf", "-1.0", "1_000", " 1.0", "1.0 ", "+1.0", "1e999"],
)
def test_parse_record_line_rejects_invalid_channel_values(raw_value: str) -> None:
    """Values that are not plain unsigned decimals should be fatal."""
    line = f"16/12/2006\t17:24:00\t4.216\t0.418\t234.840\t18.400\t{raw_value}\t1.000\t17.000"

    outcome = parse_record_line(line, "\t", 9)

    assert outcome.status == "numeric_conversion"


@pytest.mark.parametrize(
    "date_time",
    ["31/4/2007\t10:00:00", "29/2/2007\t10:00:00", "1/13/2007\t10:00:00", "1/1/2007\t24:00:00"],
)
def test_parse_record_line_rejects_out_of_range_calendar_values(date_time: str) -> None:
    """Numeric but impossible dates and times should be fatal."""
    line = f"{date_time}\t1\t1\t230\t4\t0\t0\t0"

    outcome = parse_record_line(line, "\t", 9)

    assert outcome.status == "numeric_conversion"


def test_parse_record_line_accepts_leap_day() -> None:
    """February 29th should be accepted in a leap year."""
    outcome = parse_record_line("29/2/2008\t10:00:00\t1\t1\t230\t4\t0\t0\t0", "\t", 9)

    assert outcome.status == "valid"


@pytest.mark.parametrize(("raw_value", "expected"), [("17", 17.0), (".5", 0.5), ("1.", 1.0), ("2.5e1", 25.0)])
def test_parse_record_line_accepts_plain_decimal_forms(raw_value: str, expected: float) -> None:
    """Integer, fractional, and exponent forms should all parse."""
    line = f"16/12/2006\t17:24:00\t4.216\t0.418\t234.840\t18.400\t{raw_value}\t1.000\t17.000"

    record = parse_record_line(line, "\t", 9).record

    assert record is not None and record.kitchen == expected
