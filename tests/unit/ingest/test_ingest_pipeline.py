"""Unit tests for measurement ingestion orchestration."""

from __future__ import annotations

import pytest

from core.errors import (
    PowerlensConfigError,
    PowerlensDelimiterMismatchError,
    PowerlensFormatMismatchError,
    PowerlensHeaderMismatchError,
    PowerlensNumericConversionError,
)
from core.types import LoadOptions
from ingest.pipeline import ingest_lines, load_measurements
from tests.fixture_paths import measurement_fixture

EVENING_LINES = [
    "16/12/2006\t17:24:00\t4.216\t0.418\t234.84\t18.4\t0\t1\t17",
    "16/12/2006\t18:00:00\t3.0\t0.0\t230.0\t12.0\t0\t0\t0",
]


def test_ingest_lines_accepts_all_valid_lines() -> None:
    """Every valid line should become a record."""
    result = ingest_lines(EVENING_LINES, delimiter="\t", has_header=False)

    assert result.record_count == 2 and len(result.records) == 2


def test_ingest_lines_discards_declared_header() -> None:
    """Only the first line should be discarded when a header is declared."""
    result = ingest_lines(["header line", *EVENING_LINES], delimiter="\t", has_header=True)

    assert result.record_count == 2


def test_ingest_lines_counts_skipped_lines() -> None:
    """Short and blank lines should be dropped and counted."""
    lines = [EVENING_LINES[0], "16/12/2006\t17:25:00\t5.360", "", EVENING_LINES[1]]

    result = ingest_lines(lines, delimiter="\t", has_header=False)

    assert (result.record_count, result.skipped_count) == (2, 2)


def test_ingest_lines_raises_for_undeclared_header() -> None:
    """A textual header read as data should abort with a header mismatch."""
    header = "\t".join(["Date", "Time", "A", "B", "C", "D", "E", "F", "G"])

    with pytest.raises(PowerlensHeaderMismatchError) as error_info:
        ingest_lines([header, *EVENING_LINES], delimiter="\t", has_header=False)

    assert error_info.value.line_number == 1


def test_ingest_lines_raises_for_wrong_delimiter() -> None:
    """A comma file read with a tab delimiter should abort ingestion."""
    comma_lines = [line.replace("\t", ",") for line in EVENING_LINES]

    with pytest.raises(PowerlensDelimiterMismatchError):
        ingest_lines(comma_lines, delimiter="\t", has_header=False)

    assert comma_lines[0].count(",") == 8


def test_format_mismatch_errors_share_one_fatal_class() -> None:
    """Delimiter and header mismatches should be catchable together."""
    assert issubclass(PowerlensDelimiterMismatchError, PowerlensFormatMismatchError) and issubclass(
        PowerlensHeaderMismatchError, PowerlensFormatMismatchError
    )


def test_load_measurements_reads_file_with_header() -> None:
    """Loading the header fixture should keep valid rows and skip short ones."""
    options = LoadOptions(source_path=measurement_fixture("household_with_header.tsv"))

    result = load_measurements(options)

    assert (result.record_count, result.skipped_count) == (7, 2)


def test_load_measurements_reads_file_without_header() -> None:
    """Loading the headerless fixture should yield the same records."""
    options = LoadOptions(
        source_path=measurement_fixture("household_no_header.tsv"),
        has_header=False,
    )

    result = load_measurements(options)

    assert result.record_count == 7


def test_load_measurements_reads_comma_file_with_comma_delimiter() -> None:
    """A comma file should load when the comma delimiter is configured."""
    options = LoadOptions(source_path=measurement_fixture("household_comma.csv"), delimiter=",")

    result = load_measurements(options)

    assert result.record_count == 3


def test_load_measurements_raises_for_wrong_delimiter() -> None:
    """A comma file loaded with the default tab should fail at line 2."""
    options = LoadOptions(source_path=measurement_fixture("household_comma.csv"))

    with pytest.raises(PowerlensDelimiterMismatchError) as error_info:
        load_measurements(options)

    assert error_info.value.line_number == 2


def test_load_measurements_raises_for_corrupt_numbers() -> None:
    """Unparseable channel values should abort ingestion at their line."""
    options = LoadOptions(source_path=measurement_fixture("household_corrupt.tsv"))

    with pytest.raises(PowerlensNumericConversionError) as error_info:
        load_measurements(options)

    assert error_info.value.line_number == 5


def test_load_measurements_rejects_wrong_field_count() -> None:
    """Only nine-column measurement files are supported."""
    options = LoadOptions(
        source_path=measurement_fixture("household_with_header.tsv"),
        field_count=7,
    )

    with pytest.raises(PowerlensConfigError):
        load_measurements(options)

    assert options.field_count == 7


def test_load_measurements_rejects_empty_delimiter() -> None:
    """An empty delimiter should be rejected before reading."""
    options = LoadOptions(source_path=measurement_fixture("household_with_header.tsv"), delimiter="")

    with pytest.raises(PowerlensConfigError):
        load_measurements(options)

    assert options.delimiter == ""
