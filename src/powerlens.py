"""Public SDK surface for Powerlens.

This module provides a stable import path for SDK users.
It re-exports the client, typed option models, and engine functions.
"""

from __future__ import annotations

from aggregate.calendar_mapping import month_name, period_of_day, season, weekday
from aggregate.grouped_result import GroupedResult
from aggregate.time_unit_aggregation import group_by_time_unit
from core.config import PowerlensConfig
from core.types import (
    AggregateOptions,
    IngestResult,
    LoadOptions,
    MeasurementRecord,
    ParseOutcome,
    ReportMetadata,
)
from ingest.pipeline import ingest_lines, load_measurements
from ingest.record_parser import parse_record_line
from reporting.report_renderers import render_report
from store.engine_sdk import PowerlensClient

__all__ = [
    "AggregateOptions",
    "GroupedResult",
    "IngestResult",
    "LoadOptions",
    "MeasurementRecord",
    "ParseOutcome",
    "PowerlensClient",
    "PowerlensConfig",
    "ReportMetadata",
    "group_by_time_unit",
    "ingest_lines",
    "load_measurements",
    "month_name",
    "parse_record_line",
    "period_of_day",
    "render_report",
    "season",
    "weekday",
]
