"""Core constants used across Powerlens modules.

This module centralizes file-format and selector constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".powerlens")
HISTORY_FILE_NAME = "report_history.db"
HISTORY_FIELD_SEPARATOR = ";"
DEFAULT_DELIMITER = "\t"
DEFAULT_HAS_HEADER = True
EXPECTED_FIELD_COUNT = 9
DATE_SEPARATOR = "/"
TIME_SEPARATOR = ":"
SUPPORTED_TIME_UNITS = ("season", "month", "dayofweek", "periodofday")
SUPPORTED_AGGREGATE_FUNCTIONS = ("sum", "avg")
SUPPORTED_EXPORT_TYPES = ("txt", "md", "html")
DEFAULT_EXPORT_TYPE = "txt"
METER_CHANNELS = ("kitchen", "laundry", "climate_control")
METER_CHANNEL_TITLES = {
    "kitchen": "Kitchen",
    "laundry": "Laundry",
    "climate_control": "A/C",
}
