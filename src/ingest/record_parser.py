"""Measurement line classification.

This module turns one raw delimited line into a typed parse outcome.
Fatal layout problems are reported as outcomes, never raised, so the
ingest pipeline decides how to abort.
"""

from __future__ import annotations

import calendar
import math
import re

from core.constants import DATE_SEPARATOR, TIME_SEPARATOR
from core.types import MeasurementRecord, ParseOutcome, RecordDate, RecordTime

_CHANNEL_FIELD_NAMES = (
    "global_active_power",
    "global_reactive_power",
    "voltage",
    "global_intensity",
    "kitchen",
    "laundry",
    "climate_control",
)
_DECIMAL_PATTERN = re.compile(r"(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_record_line(line: str, delimiter: str, field_count: int) -> ParseOutcome:
    """Classify and parse one measurement line.

    Args:
        line: Raw source line, with or without a trailing newline.
        delimiter: Column delimiter configured for the file.
        field_count: Expected number of top-level fields.

    Returns:
        Exactly one parse outcome for the line.
    """
    stripped_line = line.rstrip("\r\n")
    if not stripped_line.strip():
        return ParseOutcome(status="skipped", reason="blank line")
    fields = _split_fields(stripped_line, delimiter)
    if len(fields) < 2:
        return ParseOutcome(
            status="delimiter_mismatch",
            reason=f"delimiter {delimiter!r} does not split the line into date and time fields",
        )
    if len(fields) != field_count:
        return ParseOutcome(
            status="skipped",
            reason=f"expected {field_count} fields, found {len(fields)}",
        )
    date_parts = fields[0].split(DATE_SEPARATOR)
    time_parts = fields[1].split(TIME_SEPARATOR)
    if not _is_numeric_triple(date_parts) or not _is_numeric_triple(time_parts):
        return ParseOutcome(
            status="header_mismatch",
            reason=f"fields {fields[0]!r} and {fields[1]!r} are not a date and a time",
        )
    record_date = RecordDate(day=date_parts[0], month=date_parts[1], year=date_parts[2])
    record_time = RecordTime(hour=time_parts[0], minute=time_parts[1], second=time_parts[2])
    range_error = _find_calendar_range_error(record_date, record_time)
    if range_error is not None:
        return ParseOutcome(status="numeric_conversion", reason=range_error)
    channel_values: list[float] = []
    for field_name, raw_value in zip(_CHANNEL_FIELD_NAMES, fields[2:]):
        value = _parse_channel_value(raw_value)
        if value is None:
            return ParseOutcome(
                status="numeric_conversion",
                reason=f"field {field_name} has invalid value {raw_value!r}",
            )
        channel_values.append(value)
    record = MeasurementRecord(
        record_date,
        record_time,
        *channel_values,
    )
    return ParseOutcome(status="valid", record=record)


def _split_fields(line: str, delimiter: str) -> list[str]:
    """Split a line and drop trailing empty fields."""
    fields = line.split(delimiter)
    while fields and fields[-1] == "":
        fields.pop()
    return fields


def _is_numeric_triple(parts: list[str]) -> bool:
    """Return whether parts are exactly three digit-only strings."""
    return len(parts) == 3 and all(part.isascii() and part.isdigit() for part in parts)


def _find_calendar_range_error(record_date: RecordDate, record_time: RecordTime) -> str | None:
    """Check date and time fragments against calendar ranges.

    Args:
        record_date: Numeric date fragments.
        record_time: Numeric time fragments.

    Returns:
        Error description, or None when all values are in range.
    """
    short_fragments = (
        record_date.day,
        record_date.month,
        record_time.hour,
        record_time.minute,
        record_time.second,
    )
    if any(len(fragment) > 2 for fragment in short_fragments):
        return "day, month, hour, minute and second take at most two digits"
    year = record_date.year_number
    month = record_date.month_number
    if not 1 <= year <= 9999:
        return f"year {record_date.year!r} is out of range"
    if not 1 <= month <= 12:
        return f"month {record_date.month!r} is out of range"
    days_in_month = calendar.monthrange(year, month)[1]
    if not 1 <= record_date.day_number <= days_in_month:
        return f"day {record_date.day!r} is out of range for {year}-{month:02d}"
    if not 0 <= record_time.hour_number <= 23:
        return f"hour {record_time.hour!r} is out of range"
    if not 0 <= int(record_time.minute) <= 59:
        return f"minute {record_time.minute!r} is out of range"
    if not 0 <= int(record_time.second) <= 59:
        return f"second {record_time.second!r} is out of range"
    return None


def _parse_channel_value(raw_value: str) -> float | None:
    """Parse a plain unsigned decimal channel value, or None if invalid."""
    if _DECIMAL_PATTERN.fullmatch(raw_value) is None:
        return None
    value = float(raw_value)
    if not math.isfinite(value):
        return None
    return value
