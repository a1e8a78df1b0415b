"""Report file output.

This module renders a grouped result and writes it to a new file.
Existing files are never overwritten.
"""

from __future__ import annotations

from pathlib import Path

from aggregate.grouped_result import GroupedResult
from core.errors import PowerlensReportError
from core.logging_config import get_logger
from reporting.report_renderers import render_report

_LOGGER = get_logger(__name__)


def write_report(result: GroupedResult, export_type: str, output_path: str) -> Path:
    """Render and write a report file.

    Args:
        result: Computed grouped result.
        export_type: One of txt, md, html.
        output_path: Destination file path, which must not exist yet.

    Returns:
        Absolute path of the written report.

    Raises:
        PowerlensConfigError: If export type is unsupported.
        PowerlensReportError: If result is not computed or the file cannot be written.
    """
    if not result.is_computed:
        raise PowerlensReportError(
            "Cannot report a result whose statistics are not computed. "
            "Run the aggregation before reporting."
        )
    report_text = render_report(result, export_type)
    report_path = Path(output_path).expanduser().resolve()
    if report_path.exists():
        raise PowerlensReportError(
            f"Report path {report_path} already exists. Choose a different file name."
        )
    try:
        report_path.parent.mkdir(parents=True, exist_ok=True)
        with report_path.open("x", encoding="utf-8") as report_file:
            report_file.write(report_text)
    except OSError as error:
        raise PowerlensReportError(
            f"Failed to write report at {report_path}: {error}. "
            "Check the directory permissions and retry."
        ) from error
    _LOGGER.info(
        "report_written",
        output_path=str(report_path),
        export_type=export_type,
        bucket_count=len(result.buckets),
    )
    return report_path
