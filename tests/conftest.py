"""Pytest configuration and shared fixtures for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def make_record() -> Callable[..., object]:
    """Build measurement records with only the fields a test cares about."""
    from core.types import MeasurementRecord, RecordDate, RecordTime

    def _make_record(
        date: str = "16/12/2006",
        time: str = "17:24:00",
        kitchen: float = 0.0,
        laundry: float = 0.0,
        climate_control: float = 0.0,
    ) -> MeasurementRecord:
        day, month, year = date.split("/")
        hour, minute, second = time.split(":")
        return MeasurementRecord(
            date=RecordDate(day=day, month=month, year=year),
            time=RecordTime(hour=hour, minute=minute, second=second),
            global_active_power=1.0,
            global_reactive_power=0.1,
            voltage=230.0,
            global_intensity=4.0,
            kitchen=kitchen,
            laundry=laundry,
            climate_control=climate_control,
        )

    return _make_record
