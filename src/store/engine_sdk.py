"""Python SDK for measurement workflows.

This module exposes high-level APIs for loading measurement files,
aggregating them by time unit, writing reports, and browsing the
report history.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from aggregate.grouped_result import GroupedResult
from aggregate.time_unit_aggregation import group_by_time_unit
from core.config import PowerlensConfig
from core.errors import PowerlensConfigError
from core.run_spec_execution import execute_run_spec_file
from core.types import AggregateOptions, LoadOptions, MeasurementRecord, ReportMetadata
from ingest.pipeline import load_measurements
from reporting.report_writer import write_report
from store.report_history import ReportHistory, normalize_history_entry


class PowerlensClient:
    """Primary SDK entry point for load, aggregate, and report workflows."""

    def __init__(self, config: PowerlensConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or PowerlensConfig.from_env()
        self._records: tuple[MeasurementRecord, ...] = ()
        self._history: ReportHistory | None = None

    @property
    def config(self) -> PowerlensConfig:
        return self._config

    @property
    def records(self) -> tuple[MeasurementRecord, ...]:
        """Records accepted by the latest successful load."""
        return self._records

    def load(self, options: LoadOptions) -> int:
        """Load a measurement file, replacing previously loaded records.

        Args:
            options: Load options.

        Returns:
            Number of loaded records.

        Raises:
            PowerlensConfigError: If options are invalid.
            PowerlensIngestError: If the file has a fatal line or is unreadable.
        """
        self._records = ()
        result = load_measurements(options)
        self._records = result.records
        return result.record_count

    def aggregate(self, options: AggregateOptions) -> GroupedResult:
        """Aggregate loaded records by a time unit.

        Args:
            options: Aggregation options.

        Returns:
            Computed grouped result.

        Raises:
            PowerlensConfigError: If nothing is loaded or options are invalid.
        """
        if not self._records:
            raise PowerlensConfigError(
                "No measurements are loaded. Load a measurement file before aggregating."
            )
        return group_by_time_unit(
            self._records,
            time_unit=options.time_unit,
            aggregate_function=options.aggregate_function,
            description=options.description,
        )

    def report(self, result: GroupedResult, export_type: str, output_path: str) -> Path:
        """Write a grouped result to a new report file.

        Args:
            result: Computed grouped result.
            export_type: One of txt, md, html.
            output_path: Destination path, which must not exist.

        Returns:
            Absolute report path.
        """
        return write_report(result, export_type, output_path)

    def check_history_entry(
        self,
        description: str,
        export_type: str,
        output_path: str,
    ) -> ReportMetadata:
        """Validate a history entry before its report is written.

        Args:
            description: Report description.
            export_type: Report format.
            output_path: Report file path.

        Returns:
            Entry as it would be stored.

        Raises:
            PowerlensHistoryError: If a value cannot be stored in the history.
        """
        return normalize_history_entry(
            ReportMetadata(
                description=description,
                export_type=export_type,
                output_path=output_path,
            )
        )

    def add_to_history(
        self,
        description: str,
        export_type: str,
        output_path: str,
    ) -> ReportMetadata:
        """Record a written report in the history store.

        Args:
            description: Report description.
            export_type: Report format.
            output_path: Report file path.

        Returns:
            Stored history entry.
        """
        metadata = ReportMetadata(
            description=description,
            export_type=export_type,
            output_path=output_path,
        )
        return self._history_store().save(metadata)

    def list_reports(self) -> tuple[ReportMetadata, ...]:
        """List recorded reports in insertion order."""
        return self._history_store().list_reports()

    def with_data_root(self, data_root: str) -> "PowerlensClient":
        """Clone the client with a different local data root.

        Args:
            data_root: New data root path.

        Returns:
            New SDK client instance without loaded records.
        """
        resolved_root = Path(data_root).expanduser().resolve()
        updated_config = replace(self._config, data_root=resolved_root)
        return PowerlensClient(updated_config)

    def run_spec(self, spec_file: str) -> tuple[str, ...]:
        """Execute a YAML run-spec through the shared execution engine.

        Args:
            spec_file: Path to YAML run-spec file.

        Returns:
            Ordered command output lines.
        """
        return execute_run_spec_file(self, spec_file)

    def _history_store(self) -> ReportHistory:
        if self._history is None:
            self._history = ReportHistory(self._config.history_path)
        return self._history
