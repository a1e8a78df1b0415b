"""Shared run-spec execution engine for CLI and SDK workflows.

This module maps validated run-spec steps to client operations so different
entry points can execute one declarative pipeline path without drift.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

from core.config import parse_delimiter
from core.constants import DEFAULT_EXPORT_TYPE
from core.errors import PowerlensConfigError, PowerlensRunSpecError
from core.run_spec import RunSpec, RunSpecStep, load_run_spec
from core.run_spec_fields import (
    optional_bool,
    optional_raw_string,
    optional_string,
    required_string,
)
from core.types import AggregateOptions, LoadOptions, ReportMetadata


class RunSpecClient(Protocol):
    """Client API contract required by run-spec execution."""

    @property
    def config(self) -> Any: ...

    def with_data_root(self, data_root: str) -> Any: ...

    def load(self, options: LoadOptions) -> int: ...

    def aggregate(self, options: AggregateOptions) -> Any: ...

    def report(self, result: Any, export_type: str, output_path: str) -> Path: ...

    def check_history_entry(
        self,
        description: str,
        export_type: str,
        output_path: str,
    ) -> ReportMetadata: ...

    def add_to_history(
        self,
        description: str,
        export_type: str,
        output_path: str,
    ) -> ReportMetadata: ...

    def list_reports(self) -> tuple[ReportMetadata, ...]: ...


class RunSpecSession:
    """Mutable state carried from one run-spec step to the next."""

    def __init__(self, client: RunSpecClient, spec: RunSpec) -> None:
        self.client = client
        self.default_delimiter = spec.defaults.delimiter
        self.default_has_header = spec.defaults.has_header
        self.last_result: Any = None


def execute_run_spec_file(client: RunSpecClient, spec_file: str) -> tuple[str, ...]:
    """Load and execute a run-spec file, returning printable output lines."""
    spec = load_run_spec(spec_file)
    return execute_run_spec(client, spec)


def execute_run_spec(client: RunSpecClient, spec: RunSpec) -> tuple[str, ...]:
    """Execute a parsed run-spec object and return output lines."""
    execution_client = (
        client.with_data_root(spec.defaults.data_root) if spec.defaults.data_root else client
    )
    session = RunSpecSession(execution_client, spec)
    output_lines: list[str] = []
    for step in spec.steps:
        output_lines.extend(_execute_step(session, step))
    return tuple(output_lines)


def _execute_step(session: RunSpecSession, step: RunSpecStep) -> tuple[str, ...]:
    if step.command == "load":
        return (_execute_load_step(session, step),)
    if step.command == "aggregate":
        return (_execute_aggregate_step(session, step),)
    if step.command == "report":
        return (_execute_report_step(session, step),)
    if step.command == "history":
        return _execute_history_step(session)
    raise PowerlensRunSpecError(f"Unsupported run-spec command '{step.command}'.")


def _execute_load_step(session: RunSpecSession, step: RunSpecStep) -> str:
    config = session.client.config
    raw_delimiter = optional_raw_string(step.args, "delimiter") or session.default_delimiter
    default_has_header = (
        config.has_header if session.default_has_header is None else session.default_has_header
    )
    options = LoadOptions(
        source_path=required_string(step.args, "source"),
        delimiter=_resolve_delimiter(raw_delimiter, config.delimiter),
        has_header=optional_bool(step.args, "has_header", default_value=default_has_header),
    )
    record_count = session.client.load(options)
    return f"records_loaded={record_count}"


def _execute_aggregate_step(session: RunSpecSession, step: RunSpecStep) -> str:
    options = AggregateOptions(
        time_unit=required_string(step.args, "time_unit"),
        aggregate_function=required_string(step.args, "function"),
        description=required_string(step.args, "description"),
    )
    session.last_result = session.client.aggregate(options)
    return f"time_units={len(session.last_result.buckets)}"


def _execute_report_step(session: RunSpecSession, step: RunSpecStep) -> str:
    if session.last_result is None:
        raise PowerlensRunSpecError(
            "Run-spec command 'report' requires a prior 'aggregate' step."
        )
    export_type = optional_string(step.args, "format") or DEFAULT_EXPORT_TYPE
    output_path = required_string(step.args, "output")
    record_history = optional_bool(step.args, "history", default_value=True)
    if record_history:
        session.client.check_history_entry(
            session.last_result.description,
            export_type,
            output_path,
        )
    report_path = session.client.report(session.last_result, export_type, output_path)
    if record_history:
        session.client.add_to_history(
            session.last_result.description,
            export_type,
            str(report_path),
        )
    return str(report_path)


def _execute_history_step(session: RunSpecSession) -> tuple[str, ...]:
    return tuple(format_history_row(entry) for entry in session.client.list_reports())


def format_history_row(entry: ReportMetadata) -> str:
    """Format one history entry as a tab-separated output row."""
    return f"{entry.description}\t{entry.export_type}\t{entry.output_path}"


def _resolve_delimiter(raw_delimiter: str | None, fallback: str) -> str:
    if raw_delimiter is None:
        return fallback
    try:
        return parse_delimiter(raw_delimiter)
    except PowerlensConfigError as error:
        raise PowerlensRunSpecError(f"Invalid run-spec delimiter: {error}") from error
