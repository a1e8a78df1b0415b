"""Ingest orchestration for measurement files.

This module validates load options, runs every line through the record
parser, and accumulates valid records. A fatal line aborts the whole
run and no partial result is returned.
"""

from __future__ import annotations

from typing import Iterable

from core.constants import EXPECTED_FIELD_COUNT
from core.errors import (
    PowerlensConfigError,
    PowerlensDelimiterMismatchError,
    PowerlensHeaderMismatchError,
    PowerlensIngestError,
    PowerlensNumericConversionError,
)
from core.logging_config import get_logger
from core.types import IngestResult, LoadOptions, MeasurementRecord, ParseOutcome
from ingest.input_reader import read_source_lines, resolve_source_file
from ingest.record_parser import parse_record_line

_LOGGER = get_logger(__name__)


def load_measurements(options: LoadOptions) -> IngestResult:
    """Load and validate all records from a measurement file.

    Args:
        options: Load request options.

    Returns:
        Ingest result with the accepted records.

    Raises:
        PowerlensConfigError: If options are invalid.
        PowerlensIngestError: If the file is unreadable or has a fatal line.
    """
    _validate_load_options(options)
    lines = read_source_lines(options.source_path)
    try:
        result = ingest_lines(
            lines,
            delimiter=options.delimiter,
            has_header=options.has_header,
            field_count=options.field_count,
        )
    except PowerlensIngestError as error:
        _LOGGER.warning(
            "ingest_aborted",
            source_path=options.source_path,
            error_type=type(error).__name__,
            line_number=getattr(error, "line_number", None),
        )
        raise
    _LOGGER.info(
        "ingest_completed",
        source_path=options.source_path,
        record_count=result.record_count,
        skipped_count=result.skipped_count,
        has_header=options.has_header,
    )
    return result


def ingest_lines(
    lines: Iterable[str],
    delimiter: str,
    has_header: bool,
    field_count: int = EXPECTED_FIELD_COUNT,
) -> IngestResult:
    """Parse a line sequence into measurement records.

    Args:
        lines: Raw source lines.
        delimiter: Column delimiter.
        has_header: Whether to discard the first line.
        field_count: Expected number of top-level fields.

    Returns:
        Ingest result with valid records and the skipped line count.

    Raises:
        PowerlensDelimiterMismatchError: If the delimiter does not fit the file.
        PowerlensHeaderMismatchError: If a header line is read as data.
        PowerlensNumericConversionError: If a numeric field is corrupt.
    """
    records: list[MeasurementRecord] = []
    skipped_count = 0
    for line_number, line in enumerate(lines, 1):
        if has_header and line_number == 1:
            continue
        outcome = parse_record_line(line, delimiter, field_count)
        if outcome.is_fatal:
            raise _build_fatal_error(outcome, line_number)
        if outcome.record is None:
            skipped_count += 1
            continue
        records.append(outcome.record)
    return IngestResult(
        records=tuple(records),
        record_count=len(records),
        skipped_count=skipped_count,
    )


def _validate_load_options(options: LoadOptions) -> None:
    """Reject load options the engine cannot honor.

    Args:
        options: Load request options.

    Raises:
        PowerlensConfigError: If any option is invalid.
    """
    resolve_source_file(options.source_path)
    if not options.delimiter:
        raise PowerlensConfigError(
            "No delimiter given for the measurement file. "
            "Provide the column delimiter, e.g. '\\t'."
        )
    if options.field_count != EXPECTED_FIELD_COUNT:
        raise PowerlensConfigError(
            f"Invalid field count {options.field_count}: measurement files "
            f"have exactly {EXPECTED_FIELD_COUNT} columns."
        )


def _build_fatal_error(outcome: ParseOutcome, line_number: int) -> PowerlensIngestError:
    """Map a fatal parse outcome onto its error type."""
    if outcome.status == "delimiter_mismatch":
        return PowerlensDelimiterMismatchError(
            f"Delimiter mismatch at line {line_number}: {outcome.reason}. "
            "Set the delimiter used by the file and reload.",
            line_number,
        )
    if outcome.status == "header_mismatch":
        return PowerlensHeaderMismatchError(
            f"Header mismatch at line {line_number}: {outcome.reason}. "
            "A header line was read as data; declare the header line and reload.",
            line_number,
        )
    return PowerlensNumericConversionError(
        f"Corrupt numeric data at line {line_number}: {outcome.reason}. "
        "Fix or remove the line and reload.",
        line_number,
    )
