"""Calendar code to time-unit label mapping.

This module maps date and time fragments onto named grouping buckets
(season, month, weekday, period of day). Lookups are immutable tables
and every function fails loudly outside its domain.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from core.errors import PowerlensCalendarError
from core.types import MeasurementRecord

SEASON_BY_MONTH: Mapping[int, str] = MappingProxyType(
    {
        12: "WINTER",
        1: "WINTER",
        2: "WINTER",
        3: "SPRING",
        4: "SPRING",
        5: "SPRING",
        6: "SUMMER",
        7: "SUMMER",
        8: "SUMMER",
        9: "AUTUMN",
        10: "AUTUMN",
        11: "AUTUMN",
    }
)
MONTH_NAMES: Mapping[int, str] = MappingProxyType(
    {
        1: "JAN",
        2: "FEB",
        3: "MAR",
        4: "APR",
        5: "MAY",
        6: "JUN",
        7: "JUL",
        8: "AUG",
        9: "SEP",
        10: "OCT",
        11: "NOV",
        12: "DEC",
    }
)
WEEKDAY_NAMES: Mapping[int, str] = MappingProxyType(
    {1: "MON", 2: "TUE", 3: "WED", 4: "THU", 5: "FRI", 6: "SAT", 7: "SUN"}
)
PERIOD_BY_HOUR: Mapping[int, str] = MappingProxyType(
    {
        **{hour: "NIGHT" for hour in range(0, 5)},
        **{hour: "EARLY_MORNING" for hour in range(5, 9)},
        **{hour: "MORNING" for hour in range(9, 13)},
        **{hour: "AFTERNOON" for hour in range(13, 17)},
        **{hour: "EVENING" for hour in range(17, 21)},
        **{hour: "NIGHT" for hour in range(21, 24)},
    }
)
# Index 0 is January.
MONTH_OFFSETS = (0, 3, 2, 5, 0, 3, 5, 1, 4, 6, 2, 4)

_KEY_ORDER: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "season": ("WINTER", "SPRING", "SUMMER", "AUTUMN"),
        "month": tuple(MONTH_NAMES.values()),
        "dayofweek": tuple(WEEKDAY_NAMES.values()),
        "periodofday": ("NIGHT", "EARLY_MORNING", "MORNING", "AFTERNOON", "EVENING"),
    }
)


def season(month: str) -> str:
    """Map a month code (``"1"`` or ``"01"``) to its season."""
    return SEASON_BY_MONTH[_parse_code(month, "month", SEASON_BY_MONTH)]


def month_name(month: str) -> str:
    """Map a month code (``"1"`` or ``"01"``) to its abbreviation."""
    return MONTH_NAMES[_parse_code(month, "month", MONTH_NAMES)]


def period_of_day(hour: str) -> str:
    """Map an hour code (``"00"`` to ``"23"``) to its period of day."""
    return PERIOD_BY_HOUR[_parse_code(hour, "hour", PERIOD_BY_HOUR)]


def weekday(day: int, month: int, year: int) -> str:
    """Derive the weekday label of a Gregorian date.

    Uses the closed-form congruence with a per-month offset table. January
    and February count as months of the previous year so the leap day is
    handled. A result code of 0 is Sunday and is remapped to 7.

    Args:
        day: Day of month.
        month: Month number in [1, 12].
        year: Positive year.

    Returns:
        Weekday label from MON to SUN.

    Raises:
        PowerlensCalendarError: If month is out of range or year is not positive.
    """
    if not 1 <= month <= 12:
        raise PowerlensCalendarError(
            f"Invalid month {month} for weekday lookup: expected a value in [1, 12]."
        )
    if year < 1 or not 1 <= day <= 31:
        raise PowerlensCalendarError(
            f"Invalid date {day}/{month}/{year} for weekday lookup."
        )
    adjusted_year = year - 1 if month < 3 else year
    day_code = (
        adjusted_year
        + adjusted_year // 4
        - adjusted_year // 100
        + adjusted_year // 400
        + MONTH_OFFSETS[month - 1]
        + day
    ) % 7
    if day_code == 0:
        day_code = 7
    return WEEKDAY_NAMES[day_code]


def time_unit_key(record: MeasurementRecord, time_unit: str) -> str:
    """Derive the grouping key of a record for a time-unit kind.

    Args:
        record: Measurement record.
        time_unit: One of season, month, dayofweek, periodofday.

    Returns:
        Bucket label.

    Raises:
        PowerlensCalendarError: If time unit is unknown or fragments are invalid.
    """
    if time_unit == "season":
        return season(record.date.month)
    if time_unit == "month":
        return month_name(record.date.month)
    if time_unit == "dayofweek":
        return weekday(
            record.date.day_number,
            record.date.month_number,
            record.date.year_number,
        )
    if time_unit == "periodofday":
        return period_of_day(record.time.hour)
    raise PowerlensCalendarError(f"Unsupported time unit '{time_unit}'.")


def ordered_keys(time_unit: str) -> tuple[str, ...]:
    """Return bucket labels of a time-unit kind in calendar order."""
    try:
        return _KEY_ORDER[time_unit]
    except KeyError as error:
        raise PowerlensCalendarError(f"Unsupported time unit '{time_unit}'.") from error


def _parse_code(raw_code: str, code_name: str, table: Mapping[int, str]) -> int:
    """Parse a one- or two-digit calendar code present in a lookup table.

    Args:
        raw_code: Unpadded or zero-padded numeric string.
        code_name: Code name used in error messages.
        table: Lookup table the code must belong to.

    Returns:
        Integer code.

    Raises:
        PowerlensCalendarError: If code is malformed or outside the table.
    """
    if not (1 <= len(raw_code) <= 2 and raw_code.isascii() and raw_code.isdigit()):
        raise PowerlensCalendarError(
            f"Invalid {code_name} code {raw_code!r}: expected one or two digits."
        )
    code = int(raw_code)
    if code not in table:
        raise PowerlensCalendarError(
            f"Invalid {code_name} code {raw_code!r}: value is out of range."
        )
    return code
