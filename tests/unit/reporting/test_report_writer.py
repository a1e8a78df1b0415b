"""Unit tests for report file output."""

from __future__ import annotations

from pathlib import Path

import pytest

from aggregate.grouped_result import GroupedResult
from aggregate.time_unit_aggregation import group_by_time_unit
from core.errors import PowerlensReportError
from reporting.report_writer import write_report


def test_write_report_creates_file_with_rendered_text(tmp_path: Path, make_record) -> None:
    """Writer should create the report file and return its absolute path."""
    result = group_by_time_unit([make_record()], "month", "avg", "December")
    output_path = tmp_path / "reports" / "december.txt"

    report_path = write_report(result, "txt", str(output_path))

    assert report_path.is_absolute() and report_path.read_text(encoding="utf-8").startswith(
        "December\n"
    )


def test_write_report_refuses_to_overwrite(tmp_path: Path, make_record) -> None:
    """Writer should fail instead of replacing an existing file."""
    result = group_by_time_unit([make_record()], "month", "avg", "December")
    output_path = tmp_path / "existing.txt"
    output_path.write_text("keep me", encoding="utf-8")

    with pytest.raises(PowerlensReportError):
        write_report(result, "txt", str(output_path))

    assert output_path.read_text(encoding="utf-8") == "keep me"


def test_write_report_requires_computed_statistics(tmp_path: Path, make_record) -> None:
    """Writer should reject results whose buckets changed after compute."""
    result = GroupedResult("month", "sum", "Pending")
    result.add("DEC", make_record())
    output_path = tmp_path / "pending.txt"

    with pytest.raises(PowerlensReportError):
        write_report(result, "txt", str(output_path))

    assert output_path.exists() is False
