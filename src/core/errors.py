"""Powerlens exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class PowerlensError(Exception):
    """Base exception for all Powerlens failures."""


class PowerlensConfigError(PowerlensError):
    """Raised for invalid runtime configuration or caller input."""


class PowerlensIngestError(PowerlensError):
    """Raised for source reading and ingest failures."""


class PowerlensFormatMismatchError(PowerlensIngestError):
    """Raised when the declared file layout does not match the file.

    Attributes:
        line_number: One-based line number of the offending line.
    """

    def __init__(self, message: str, line_number: int) -> None:
        super().__init__(message)
        self.line_number = line_number


class PowerlensDelimiterMismatchError(PowerlensFormatMismatchError):
    """Raised when the configured delimiter does not split the file."""


class PowerlensHeaderMismatchError(PowerlensFormatMismatchError):
    """Raised when a header line is read as a data line."""


class PowerlensNumericConversionError(PowerlensIngestError):
    """Raised when a numeric field of a data line is corrupt.

    Attributes:
        line_number: One-based line number of the offending line.
    """

    def __init__(self, message: str, line_number: int) -> None:
        super().__init__(message)
        self.line_number = line_number


class PowerlensAggregationError(PowerlensError):
    """Raised for grouping and statistics failures."""


class PowerlensCalendarError(PowerlensAggregationError):
    """Raised when a calendar code falls outside its domain."""


class PowerlensReportError(PowerlensError):
    """Raised for report rendering and writing failures."""


class PowerlensHistoryError(PowerlensError):
    """Raised for report history store failures."""


class PowerlensDependencyError(PowerlensError):
    """Raised when an optional runtime dependency is missing."""


class PowerlensRunSpecError(PowerlensError):
    """Raised for invalid or unsupported run-spec configuration."""
