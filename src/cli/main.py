"""Powerlens CLI entry points.
This module exposes report and history commands over the SDK client.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from aggregate.time_unit_aggregation import supported_aggregate_functions, supported_time_units
from cli.run_spec_command import add_run_spec_command, run_run_spec_command
from core.config import PowerlensConfig, parse_delimiter
from core.constants import DEFAULT_EXPORT_TYPE, SUPPORTED_EXPORT_TYPES
from core.errors import PowerlensError
from core.run_spec_execution import format_history_row
from core.types import AggregateOptions, LoadOptions
from reporting.report_renderers import render_report
from store.engine_sdk import PowerlensClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="powerlens",
        description="Household power consumption reports by time unit",
    )
    parser.add_argument("--data-root", help="Override POWERLENS_DATA_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_report_command(subparsers)
    _add_history_command(subparsers)
    add_run_spec_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Powerlens CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.data_root)
        if args.command == "report":
            return _run_report_command(client, args)
        if args.command == "history":
            return _run_history_command(client)
        if args.command == "run-spec":
            return run_run_spec_command(client, args)
    except PowerlensError as error:
        print(f"error={error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(data_root: str | None) -> PowerlensClient:
    """Build SDK client with optional data-root override.

    Args:
        data_root: Optional override path.

    Returns:
        Configured SDK client.
    """
    config = PowerlensConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return PowerlensClient(config)


def _run_report_command(client: PowerlensClient, args: argparse.Namespace) -> int:
    """Handle report command.

    Loads the source, aggregates it, then prints the rendered report or
    writes it to ``--output`` and records it in the history.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    config = client.config
    load_options = LoadOptions(
        source_path=args.source,
        delimiter=parse_delimiter(args.delimiter) if args.delimiter else config.delimiter,
        has_header=config.has_header if args.has_header is None else args.has_header,
    )
    record_count = client.load(load_options)
    result = client.aggregate(
        AggregateOptions(
            time_unit=args.time_unit,
            aggregate_function=args.function,
            description=args.description,
        )
    )
    if not args.output:
        print(render_report(result, args.format))
        return 0
    client.check_history_entry(result.description, args.format, args.output)
    report_path = client.report(result, args.format, args.output)
    client.add_to_history(result.description, args.format, str(report_path))
    print(f"records_loaded={record_count}")
    print(f"time_units={len(result.buckets)}")
    print(f"report_path={report_path}")
    return 0


def _run_history_command(client: PowerlensClient) -> int:
    """Handle history command."""
    reports = client.list_reports()
    print(f"reports={len(reports)}")
    for entry in reports:
        print(format_history_row(entry))
    return 0


def _add_report_command(subparsers: Any) -> None:
    """Register report subcommand."""
    parser = subparsers.add_parser(
        "report",
        help="Aggregate a measurement file by time unit and report the result",
    )
    parser.add_argument("source", help="Measurement file path")
    parser.add_argument(
        "--time-unit",
        required=True,
        choices=supported_time_units(),
        help="Time unit used to group measurements",
    )
    parser.add_argument(
        "--function",
        required=True,
        choices=supported_aggregate_functions(),
        help="Aggregate function applied per time unit",
    )
    parser.add_argument("--description", required=True, help="Short description of the result")
    parser.add_argument("--delimiter", help="Column delimiter, e.g. '\\t' or ','")
    header_group = parser.add_mutually_exclusive_group()
    header_group.add_argument(
        "--header",
        dest="has_header",
        action="store_const",
        const=True,
        help="The file starts with a header line",
    )
    header_group.add_argument(
        "--no-header",
        dest="has_header",
        action="store_const",
        const=False,
        help="The file has no header line",
    )
    parser.add_argument(
        "--format",
        default=DEFAULT_EXPORT_TYPE,
        choices=SUPPORTED_EXPORT_TYPES,
        help="Report format",
    )
    parser.add_argument("--output", help="Write the report to this new file and record it")


def _add_history_command(subparsers: Any) -> None:
    """Register history subcommand."""
    subparsers.add_parser("history", help="List previously written reports")
