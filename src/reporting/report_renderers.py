"""Text renderers for grouped results.

This module formats computed per-channel statistics as plain text,
markdown, or HTML. Renderers only read the result.
"""

from __future__ import annotations

from html import escape
from typing import Callable, Mapping

from aggregate.calendar_mapping import ordered_keys
from aggregate.grouped_result import GroupedResult
from core.constants import METER_CHANNEL_TITLES, METER_CHANNELS, SUPPORTED_EXPORT_TYPES
from core.errors import PowerlensConfigError

_TEXT_RULE = "======================================="
_SECTION_RULE = "--------------"


def render_report(result: GroupedResult, export_type: str) -> str:
    """Render a grouped result in one export format.

    Args:
        result: Computed grouped result.
        export_type: One of txt, md, html.

    Returns:
        Rendered report text.

    Raises:
        PowerlensConfigError: If export type is unsupported.
    """
    renderer = _RENDERERS.get(export_type)
    if renderer is None:
        raise PowerlensConfigError(
            f"Unsupported export type '{export_type}'. "
            f"Use one of: {', '.join(SUPPORTED_EXPORT_TYPES)}."
        )
    return renderer(result)


def render_text(result: GroupedResult) -> str:
    """Render a plain-text report."""
    lines = [result.description, _TEXT_RULE, _summary_line(result), ""]
    for channel in METER_CHANNELS:
        lines.extend([METER_CHANNEL_TITLES[channel], _SECTION_RULE])
        lines.extend(
            f"* {key}: \t{value}" for key, value in _ordered_rows(result, channel)
        )
        lines.append("")
    return "\n".join(lines)


def render_markdown(result: GroupedResult) -> str:
    """Render a markdown report."""
    lines = [f"# {result.description}", "", _summary_line(result), ""]
    for channel in METER_CHANNELS:
        lines.extend([f"## {METER_CHANNEL_TITLES[channel]}", ""])
        lines.extend(f"* {key}: {value}" for key, value in _ordered_rows(result, channel))
        lines.append("")
    return "\n".join(lines)


def render_html(result: GroupedResult) -> str:
    """Render a standalone HTML report."""
    title = escape(result.description)
    lines = [
        "<!doctype html>",
        "<html>",
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{title}</title>",
        "</head>",
        "<body>",
        f"<h1>{title}</h1>",
        f"<p>{escape(_summary_line(result))}</p>",
    ]
    for channel in METER_CHANNELS:
        lines.append(f"<h2>{escape(METER_CHANNEL_TITLES[channel])}</h2>")
        lines.append("<ul>")
        lines.extend(
            f"<li>{escape(key)}: {value}</li>" for key, value in _ordered_rows(result, channel)
        )
        lines.append("</ul>")
    lines.extend(["</body>", "</html>", ""])
    return "\n".join(lines)


def _summary_line(result: GroupedResult) -> str:
    return (
        f"{result.aggregate_function} consumption (watt-hours) per {result.time_unit} "
        "over (a) Kitchen, (b) Laundry, (c) A/C"
    )


def _ordered_rows(result: GroupedResult, channel: str) -> list[tuple[str, float]]:
    """Return channel statistics in calendar order of their bucket keys."""
    values = result.statistics(channel)
    return [(key, values[key]) for key in _key_order(result.time_unit, values)]


def _key_order(time_unit: str, values: Mapping[str, float]) -> list[str]:
    calendar_order = [key for key in ordered_keys(time_unit) if key in values]
    unknown_keys = sorted(set(values) - set(calendar_order))
    return calendar_order + unknown_keys


_RENDERERS: Mapping[str, Callable[[GroupedResult], str]] = {
    "txt": render_text,
    "md": render_markdown,
    "html": render_html,
}
