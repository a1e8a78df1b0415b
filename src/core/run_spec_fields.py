"""Type-safe field parsing helpers for run-spec execution.

This module centralizes primitive parsing so run-spec executors can stay
concise and produce consistent validation errors across CLI and SDK flows.
"""

from __future__ import annotations

from typing import Mapping

from core.errors import PowerlensRunSpecError


def required_string(args: Mapping[str, object], field_name: str) -> str:
    """Read a required string field from a run-spec step."""
    value = optional_string(args, field_name)
    if value is None:
        raise PowerlensRunSpecError(f"Run-spec step is missing required field '{field_name}'.")
    return value


def optional_string(args: Mapping[str, object], field_name: str) -> str | None:
    """Read an optional string field from a run-spec step."""
    value = args.get(field_name)
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    raise PowerlensRunSpecError(f"Run-spec field '{field_name}' must be a string when provided.")


def optional_raw_string(args: Mapping[str, object], field_name: str) -> str | None:
    """Read an optional string field without trimming whitespace.

    Delimiters such as a tab or a space are whitespace themselves.
    """
    value = args.get(field_name)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    raise PowerlensRunSpecError(f"Run-spec field '{field_name}' must be a string when provided.")


def optional_bool(
    args: Mapping[str, object],
    field_name: str,
    default_value: bool,
) -> bool:
    """Read an optional boolean field from a run-spec step."""
    value = args.get(field_name)
    if value is None:
        return default_value
    if isinstance(value, bool):
        return value
    raise PowerlensRunSpecError(f"Run-spec field '{field_name}' must be true/false.")
