"""Unit tests for grouped result state."""

from __future__ import annotations

import pytest

from aggregate.grouped_result import GroupedResult
from core.errors import PowerlensAggregationError, PowerlensConfigError


def test_add_returns_bucket_size(make_record) -> None:
    """Adding to an existing bucket should grow it."""
    result = GroupedResult("season", "sum", "demo")
    result.add("WINTER", make_record())

    size = result.add("WINTER", make_record())

    assert size == 2


def test_compute_averages_bucket_members(make_record) -> None:
    """Average of 2.0 and 4.0 should be exactly 3.0."""
    result = GroupedResult("season", "avg", "demo")
    result.add("WINTER", make_record(kitchen=2.0))
    result.add("WINTER", make_record(kitchen=4.0))

    result.compute()

    assert result.kitchen["WINTER"] == 3.0


def test_compute_shares_bucket_keys_across_channels(make_record) -> None:
    """All channel statistics should cover exactly the bucket keys."""
    result = GroupedResult("season", "sum", "demo")
    result.add("WINTER", make_record())
    result.add("SUMMER", make_record())

    result.compute()

    assert set(result.kitchen) == set(result.laundry) == set(result.climate_control) == {
        "WINTER",
        "SUMMER",
    }


def test_recompute_reflects_new_members(make_record) -> None:
    """Computing again after more adds should use the updated membership."""
    result = GroupedResult("season", "sum", "demo")
    result.add("WINTER", make_record(laundry=1.0))
    result.compute()
    result.add("WINTER", make_record(laundry=2.5))

    result.compute()

    assert result.laundry["WINTER"] == 3.5


def test_statistics_require_compute_after_add(make_record) -> None:
    """Reading statistics of uncomputed buckets should raise."""
    result = GroupedResult("season", "sum", "demo")
    result.add("WINTER", make_record())

    with pytest.raises(PowerlensAggregationError):
        result.statistics("kitchen")

    assert result.is_computed is False


def test_buckets_view_is_read_only(make_record) -> None:
    """Callers should not be able to mutate the bucket mapping."""
    result = GroupedResult("season", "sum", "demo")
    result.add("WINTER", make_record())

    with pytest.raises(TypeError):
        result.buckets["SUMMER"] = ()  # type: ignore[index]

    assert list(result.buckets) == ["WINTER"]


def test_unknown_aggregate_function_is_rejected() -> None:
    """Only sum and avg are supported."""
    with pytest.raises(PowerlensConfigError):
        GroupedResult("season", "median", "demo")

    assert True
