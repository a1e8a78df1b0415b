"""Runtime configuration model for Powerlens.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DATA_ROOT,
    DEFAULT_DELIMITER,
    DEFAULT_HAS_HEADER,
    HISTORY_FILE_NAME,
)
from core.errors import PowerlensConfigError

_ESCAPED_DELIMITERS = {
    "\\t": "\t",
    "tab": "\t",
    "\\s": " ",
    "space": " ",
}


@dataclass(frozen=True)
class PowerlensConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory for the report history store.
        delimiter: Default column delimiter for measurement files.
        has_header: Default header-line flag for measurement files.
    """

    data_root: Path
    delimiter: str
    has_header: bool

    @property
    def history_path(self) -> Path:
        """Path of the append-only report history file."""
        return self.data_root / HISTORY_FILE_NAME

    @classmethod
    def from_env(cls) -> "PowerlensConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            PowerlensConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("POWERLENS_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        delimiter_value = os.getenv("POWERLENS_DELIMITER", DEFAULT_DELIMITER)
        has_header_value = os.getenv("POWERLENS_HAS_HEADER", str(DEFAULT_HAS_HEADER))
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            delimiter=parse_delimiter(delimiter_value),
            has_header=_parse_has_header(has_header_value),
        )


def parse_delimiter(raw_value: str) -> str:
    """Decode a user-supplied delimiter value.

    Args:
        raw_value: Literal delimiter or escaped name such as ``\\t``.

    Returns:
        Delimiter string used to split lines.

    Raises:
        PowerlensConfigError: If value is empty.
    """
    if raw_value == "":
        raise PowerlensConfigError(
            "Invalid delimiter: expected a non-empty value. "
            "Use a literal character or an escape such as '\\t'."
        )
    return _ESCAPED_DELIMITERS.get(raw_value.lower(), raw_value)


def _parse_has_header(raw_value: str) -> bool:
    """Parse the header flag environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed boolean flag.

    Raises:
        PowerlensConfigError: If value is not true/false.
    """
    normalized = raw_value.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    raise PowerlensConfigError(
        "Invalid POWERLENS_HAS_HEADER value: "
        f"expected 'true' or 'false', got '{raw_value}'. "
        "Set POWERLENS_HAS_HEADER to true or false."
    )
