"""Measurement file readers for ingestion.

This module loads raw text lines from local measurement files.
Line classification happens downstream in the record parser.
"""

from __future__ import annotations

from pathlib import Path

from core.errors import PowerlensConfigError, PowerlensIngestError


def read_source_lines(source_path: str) -> list[str]:
    """Read all lines from a local measurement file.

    Args:
        source_path: Local file path.

    Returns:
        File lines without line terminators.

    Raises:
        PowerlensConfigError: If path is missing or is not a file.
        PowerlensIngestError: If the file cannot be read.
    """
    file_path = resolve_source_file(source_path)
    try:
        with file_path.open(encoding="utf-8-sig") as source_file:
            return [line.rstrip("\n") for line in source_file]
    except (OSError, UnicodeDecodeError) as error:
        raise PowerlensIngestError(
            f"Failed to read measurements at {file_path}: {error}. "
            "Check file permissions and encoding, then retry."
        ) from error


def resolve_source_file(source_path: str) -> Path:
    """Validate that a source path names an existing regular file.

    Args:
        source_path: Raw user-supplied path.

    Returns:
        Expanded file path.

    Raises:
        PowerlensConfigError: If path does not exist or is a directory.
    """
    file_path = Path(source_path).expanduser()
    if not file_path.exists():
        raise PowerlensConfigError(
            f"Failed to read measurements at {file_path}: path does not exist. "
            "Provide an existing measurement file."
        )
    if not file_path.is_file():
        raise PowerlensConfigError(
            f"Failed to read measurements at {file_path}: path is not a file. "
            "Provide a single measurement file, not a directory."
        )
    return file_path
