"""Grouped measurements and per-bucket statistics.

This module holds the stateful result of one aggregation request:
records grouped per time-unit bucket, plus one statistic mapping per
meter channel filled by an explicit compute step.
"""

from __future__ import annotations

from operator import attrgetter
from types import MappingProxyType
from typing import Callable, Mapping

from core.constants import METER_CHANNELS, SUPPORTED_AGGREGATE_FUNCTIONS
from core.errors import PowerlensAggregationError, PowerlensConfigError
from core.types import MeasurementRecord

CHANNEL_ACCESSORS: Mapping[str, Callable[[MeasurementRecord], float]] = MappingProxyType(
    {channel: attrgetter(channel) for channel in METER_CHANNELS}
)


class GroupedResult:
    """Records grouped by time-unit key with per-channel statistics."""

    def __init__(self, time_unit: str, aggregate_function: str, description: str) -> None:
        if aggregate_function not in SUPPORTED_AGGREGATE_FUNCTIONS:
            raise PowerlensConfigError(
                f"Unsupported aggregate function '{aggregate_function}'. "
                f"Use one of: {', '.join(SUPPORTED_AGGREGATE_FUNCTIONS)}."
            )
        self._time_unit = time_unit
        self._aggregate_function = aggregate_function
        self._description = description
        self._buckets: dict[str, list[MeasurementRecord]] = {}
        self._statistics: dict[str, dict[str, float]] = {}

    @property
    def time_unit(self) -> str:
        return self._time_unit

    @property
    def aggregate_function(self) -> str:
        return self._aggregate_function

    @property
    def description(self) -> str:
        return self._description

    @property
    def buckets(self) -> Mapping[str, tuple[MeasurementRecord, ...]]:
        """Read-only view of bucket members in insertion order."""
        return MappingProxyType(
            {key: tuple(members) for key, members in self._buckets.items()}
        )

    @property
    def is_computed(self) -> bool:
        """Whether statistics reflect the current bucket membership."""
        return bool(self._statistics) or not self._buckets

    def add(self, key: str, record: MeasurementRecord) -> int:
        """Append a record to a bucket, creating the bucket on first use.

        Args:
            key: Time-unit bucket label.
            record: Measurement record to add.

        Returns:
            Size of the bucket after insertion.
        """
        members = self._buckets.setdefault(key, [])
        members.append(record)
        self._statistics = {}
        return len(members)

    def compute(self) -> None:
        """Compute per-bucket statistics for every meter channel."""
        self._statistics = {
            channel: self._compute_channel(accessor)
            for channel, accessor in CHANNEL_ACCESSORS.items()
        }

    def statistics(self, channel: str) -> Mapping[str, float]:
        """Return the per-bucket statistic mapping of one channel.

        Args:
            channel: Meter channel name.

        Returns:
            Read-only mapping from bucket label to statistic.

        Raises:
            PowerlensAggregationError: If channel is unknown or not computed yet.
        """
        if channel not in CHANNEL_ACCESSORS:
            raise PowerlensAggregationError(
                f"Unknown meter channel '{channel}'. Use one of: {', '.join(METER_CHANNELS)}."
            )
        if not self.is_computed:
            raise PowerlensAggregationError(
                "Statistics are not computed for the current buckets. Call compute() first."
            )
        return MappingProxyType(dict(self._statistics.get(channel, {})))

    @property
    def kitchen(self) -> Mapping[str, float]:
        return self.statistics("kitchen")

    @property
    def laundry(self) -> Mapping[str, float]:
        return self.statistics("laundry")

    @property
    def climate_control(self) -> Mapping[str, float]:
        return self.statistics("climate_control")

    def _compute_channel(
        self,
        accessor: Callable[[MeasurementRecord], float],
    ) -> dict[str, float]:
        channel_values: dict[str, float] = {}
        for key, members in self._buckets.items():
            total = sum(accessor(record) for record in members)
            if self._aggregate_function == "avg":
                channel_values[key] = total / len(members)
            else:
                channel_values[key] = total
        return channel_values
