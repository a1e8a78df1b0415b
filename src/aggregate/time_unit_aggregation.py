"""Time-unit aggregation of measurement records.

This module groups records into calendar buckets with a sequential
fold and computes the per-bucket statistics for every meter channel.
"""

from __future__ import annotations

from typing import Iterable

from aggregate.calendar_mapping import time_unit_key
from aggregate.grouped_result import GroupedResult
from core.constants import SUPPORTED_AGGREGATE_FUNCTIONS, SUPPORTED_TIME_UNITS
from core.errors import PowerlensConfigError
from core.logging_config import get_logger
from core.types import MeasurementRecord

_LOGGER = get_logger(__name__)


def group_by_time_unit(
    records: Iterable[MeasurementRecord],
    time_unit: str,
    aggregate_function: str,
    description: str,
) -> GroupedResult:
    """Group records by time unit and compute channel statistics.

    Args:
        records: Validated measurement records.
        time_unit: One of season, month, dayofweek, periodofday.
        aggregate_function: One of sum, avg.
        description: Free-text result description.

    Returns:
        Computed grouped result.

    Raises:
        PowerlensConfigError: If a selector or the description is invalid.
        PowerlensCalendarError: If a record carries invalid calendar fragments.
    """
    _validate_selectors(time_unit, aggregate_function, description)
    result = GroupedResult(time_unit, aggregate_function, description)
    record_count = 0
    for record in records:
        result.add(time_unit_key(record, time_unit), record)
        record_count += 1
    result.compute()
    _LOGGER.info(
        "aggregation_completed",
        time_unit=time_unit,
        aggregate_function=aggregate_function,
        record_count=record_count,
        bucket_count=len(result.buckets),
    )
    return result


def supported_time_units() -> tuple[str, ...]:
    """Return supported time-unit selectors."""
    return SUPPORTED_TIME_UNITS


def supported_aggregate_functions() -> tuple[str, ...]:
    """Return supported aggregate function selectors."""
    return SUPPORTED_AGGREGATE_FUNCTIONS


def _validate_selectors(time_unit: str, aggregate_function: str, description: str) -> None:
    """Reject unknown selectors and empty descriptions.

    Raises:
        PowerlensConfigError: If any value is invalid.
    """
    if time_unit not in SUPPORTED_TIME_UNITS:
        raise PowerlensConfigError(
            f"Unsupported time unit '{time_unit}'. "
            f"Use one of: {', '.join(SUPPORTED_TIME_UNITS)}."
        )
    if aggregate_function not in SUPPORTED_AGGREGATE_FUNCTIONS:
        raise PowerlensConfigError(
            f"Unsupported aggregate function '{aggregate_function}'. "
            f"Use one of: {', '.join(SUPPORTED_AGGREGATE_FUNCTIONS)}."
        )
    if not description.strip():
        raise PowerlensConfigError(
            "A description of the measurements was not given. Provide a non-empty description."
        )
