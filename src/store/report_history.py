"""Append-only report history store.

This module persists metadata of written reports as one
``description;export_type;output_path`` line per report.
"""

from __future__ import annotations

from pathlib import Path

from core.constants import HISTORY_FIELD_SEPARATOR
from core.errors import PowerlensHistoryError
from core.logging_config import get_logger
from core.types import ReportMetadata

_LOGGER = get_logger(__name__)


class ReportHistory:
    """Filesystem-backed history of written reports."""

    def __init__(self, history_path: Path) -> None:
        self._history_path = history_path
        self._reports: list[ReportMetadata] = _read_history_file(history_path)

    @property
    def history_path(self) -> Path:
        return self._history_path

    def save(self, metadata: ReportMetadata) -> ReportMetadata:
        """Append one report entry to memory and to the history file.

        Args:
            metadata: Report metadata to record.

        Returns:
            Stored entry with an absolute output path.

        Raises:
            PowerlensHistoryError: If fields are not storable or the write fails.
        """
        entry = normalize_history_entry(metadata)
        line = HISTORY_FIELD_SEPARATOR.join(
            (entry.description, entry.export_type, entry.output_path)
        )
        try:
            self._history_path.parent.mkdir(parents=True, exist_ok=True)
            with self._history_path.open("a", encoding="utf-8") as history_file:
                history_file.write(line + "\n")
        except OSError as error:
            raise PowerlensHistoryError(
                f"Failed to append report history at {self._history_path}: {error}. "
                "Check the data root permissions and retry."
            ) from error
        self._reports.append(entry)
        _LOGGER.info(
            "report_recorded",
            history_path=str(self._history_path),
            export_type=entry.export_type,
            output_path=entry.output_path,
        )
        return entry

    def list_reports(self) -> tuple[ReportMetadata, ...]:
        """Return recorded reports in insertion order."""
        return tuple(self._reports)

    def __len__(self) -> int:
        return len(self._reports)


def _read_history_file(history_path: Path) -> list[ReportMetadata]:
    """Read and validate existing history entries.

    Args:
        history_path: History file path.

    Returns:
        Parsed entries, empty when the file does not exist yet.

    Raises:
        PowerlensHistoryError: If the file is unreadable or has malformed rows.
    """
    if not history_path.exists():
        return []
    try:
        lines = history_path.read_text(encoding="utf-8").splitlines()
    except OSError as error:
        raise PowerlensHistoryError(
            f"Failed to read report history at {history_path}: {error}."
        ) from error
    reports: list[ReportMetadata] = []
    for line_number, line in enumerate(lines, 1):
        if not line.strip():
            continue
        fields = line.split(HISTORY_FIELD_SEPARATOR)
        if len(fields) != 3:
            raise PowerlensHistoryError(
                f"Malformed report history row at {history_path}:{line_number}: "
                f"expected 3 fields, found {len(fields)}. Fix or remove the row."
            )
        reports.append(
            ReportMetadata(description=fields[0], export_type=fields[1], output_path=fields[2])
        )
    return reports


def normalize_history_entry(metadata: ReportMetadata) -> ReportMetadata:
    """Resolve the output path and check that every field fits one history row.

    Args:
        metadata: Report metadata to record.

    Returns:
        Entry with an absolute output path.

    Raises:
        PowerlensHistoryError: If a value contains the separator or a line break.
    """
    entry = ReportMetadata(
        description=metadata.description,
        export_type=metadata.export_type,
        output_path=str(Path(metadata.output_path).expanduser().resolve()),
    )
    for value in (entry.description, entry.export_type, entry.output_path):
        if HISTORY_FIELD_SEPARATOR in value or "\n" in value or "\r" in value:
            raise PowerlensHistoryError(
                f"Cannot record report history value {value!r}: "
                f"'{HISTORY_FIELD_SEPARATOR}' and line breaks are not allowed."
            )
    return entry
