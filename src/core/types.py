"""Shared typed models.

This module defines immutable data models used by ingest, aggregation,
reporting, and history layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from core.constants import DEFAULT_DELIMITER, DEFAULT_HAS_HEADER, EXPECTED_FIELD_COUNT

TimeUnitKind = Literal["season", "month", "dayofweek", "periodofday"]
AggregateFunction = Literal["sum", "avg"]
ExportType = Literal["txt", "md", "html"]
MeterChannel = Literal["kitchen", "laundry", "climate_control"]
ParseStatus = Literal[
    "valid",
    "skipped",
    "delimiter_mismatch",
    "header_mismatch",
    "numeric_conversion",
]
FATAL_PARSE_STATUSES: tuple[ParseStatus, ...] = (
    "delimiter_mismatch",
    "header_mismatch",
    "numeric_conversion",
)


@dataclass(frozen=True)
class RecordDate:
    """Calendar date fragments exactly as read from the source line.

    Attributes:
        day: Day of month, e.g. ``"16"`` or ``"1"``.
        month: Month number, e.g. ``"12"`` or ``"01"``.
        year: Four-digit year.
    """

    day: str
    month: str
    year: str

    @property
    def day_number(self) -> int:
        return int(self.day)

    @property
    def month_number(self) -> int:
        return int(self.month)

    @property
    def year_number(self) -> int:
        return int(self.year)


@dataclass(frozen=True)
class RecordTime:
    """Time-of-day fragments exactly as read from the source line."""

    hour: str
    minute: str
    second: str

    @property
    def hour_number(self) -> int:
        return int(self.hour)


@dataclass(frozen=True)
class MeasurementRecord:
    """One household power sample.

    Attributes:
        date: Sample date fragments.
        time: Sample time fragments.
        global_active_power: Household global active power (kW).
        global_reactive_power: Household global reactive power (kW).
        voltage: Minute-averaged voltage (V).
        global_intensity: Household global current intensity (A).
        kitchen: Sub-meter 1 energy (watt-hours).
        laundry: Sub-meter 2 energy (watt-hours).
        climate_control: Sub-meter 3 energy (watt-hours).
    """

    date: RecordDate
    time: RecordTime
    global_active_power: float
    global_reactive_power: float
    voltage: float
    global_intensity: float
    kitchen: float
    laundry: float
    climate_control: float


@dataclass(frozen=True)
class ParseOutcome:
    """Classified result of parsing one source line.

    Attributes:
        status: Outcome tag.
        record: Parsed record, set only for ``valid`` outcomes.
        reason: Human-readable explanation for non-valid outcomes.
    """

    status: ParseStatus
    record: MeasurementRecord | None = None
    reason: str | None = None

    @property
    def is_fatal(self) -> bool:
        """Whether this outcome must abort the whole ingestion."""
        return self.status in FATAL_PARSE_STATUSES


@dataclass(frozen=True)
class LoadOptions:
    """Measurement file load options.

    Attributes:
        source_path: Input measurement file path.
        delimiter: Column delimiter used by the file.
        has_header: Whether the first line is a header to discard.
        field_count: Expected number of top-level fields per data line.
    """

    source_path: str
    delimiter: str = DEFAULT_DELIMITER
    has_header: bool = DEFAULT_HAS_HEADER
    field_count: int = EXPECTED_FIELD_COUNT


@dataclass(frozen=True)
class IngestResult:
    """Records accepted by one ingestion run.

    Attributes:
        records: Valid records in source order.
        record_count: Number of valid records.
        skipped_count: Number of tolerated short or blank lines.
    """

    records: tuple[MeasurementRecord, ...]
    record_count: int
    skipped_count: int


@dataclass(frozen=True)
class AggregateOptions:
    """Aggregation request options.

    Attributes:
        time_unit: Grouping time-unit kind.
        aggregate_function: Statistic applied per bucket and channel.
        description: Free-text description carried into reports.
    """

    time_unit: str
    aggregate_function: str
    description: str


@dataclass(frozen=True)
class ReportMetadata:
    """History entry describing one written report.

    Attributes:
        description: Report description.
        export_type: Report format (txt, md, html).
        output_path: Absolute path of the written report.
    """

    description: str
    export_type: str
    output_path: str
