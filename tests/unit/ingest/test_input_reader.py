"""Unit tests for input reader module."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import PowerlensConfigError
from ingest.input_reader import read_source_lines
from tests.fixture_paths import measurement_fixture


def test_read_source_lines_reads_all_lines() -> None:
    """Reader should return every line of the file."""
    lines = read_source_lines(measurement_fixture("household_with_header.tsv"))

    assert len(lines) == 10 and lines[0].startswith("Date\tTime")


def test_read_source_lines_raises_for_missing_path(tmp_path: Path) -> None:
    """Reader should fail when source path is missing."""
    missing_path = tmp_path / "does-not-exist.tsv"

    with pytest.raises(PowerlensConfigError):
        read_source_lines(str(missing_path))

    assert missing_path.exists() is False


def test_read_source_lines_raises_for_directory(tmp_path: Path) -> None:
    """Reader should reject a directory path."""
    with pytest.raises(PowerlensConfigError):
        read_source_lines(str(tmp_path))

    assert tmp_path.is_dir()


def test_read_source_lines_strips_byte_order_mark(tmp_path: Path) -> None:
    """A UTF-8 byte order mark should not leak into the first field."""
    source_path = tmp_path / "bom.tsv"
    source_path.write_bytes("\ufeff1/1/2007\t00:00:00\n".encode("utf-8"))

    lines = read_source_lines(str(source_path))

    assert lines == ["1/1/2007\t00:00:00"]


def test_read_source_lines_splits_only_on_line_terminators(tmp_path: Path) -> None:
    """Form feeds and other separators inside a row should not split it."""
    source_path = tmp_path / "form_feed.tsv"
    source_path.write_bytes("1/1/2007\t00:00\x0c:00\r\n2/1/2007\t00:01:00 \n".encode("utf-8"))

    lines = read_source_lines(str(source_path))

    assert lines == ["1/1/2007\t00:00\x0c:00", "2/1/2007\t00:01:00 "]
