# SPDX-License-Identifier: MIT

"""
Datetime helpers. Everything stored or compared is a UTC pendulum DateTime;
local time only appears when parsing user input and when displaying.
"""

import datetime
from typing import Optional, cast

import pendulum

DISPLAY_FORMAT = "YYYY-MM-DD ddd HH:mm"


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def python_to_pendulum_utc(python_value: datetime.datetime) -> pendulum.DateTime:
    """Aware datetimes keep their instant, naive ones are read as local time."""
    return pendulum.instance(python_value, tz="local").in_tz("UTC")


def python_to_pendulum_utc_optional(
    python_value: Optional[datetime.datetime],
) -> Optional[pendulum.DateTime]:
    if python_value is None:
        return None
    return python_to_pendulum_utc(python_value)


def datetime_to_iso_str(value: pendulum.DateTime) -> str:
    return value.isoformat()


def datetime_to_iso_str_optional(value: Optional[pendulum.DateTime]) -> Optional[str]:
    return None if value is None else datetime_to_iso_str(value)


def datetime_from_str(value: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(value))


def datetime_from_str_optional(value: Optional[str]) -> Optional[pendulum.DateTime]:
    return None if value is None else datetime_from_str(value)


def datetime_from_str_utc(value: str) -> pendulum.DateTime:
    """Parse a date or datetime without offset as local wall time, return UTC."""
    wall_time = cast(pendulum.DateTime, pendulum.parse(value))
    return wall_time.set(tz="local").in_tz("UTC")


def datetime_to_display_local_datetime_str_optional(
    value: Optional[pendulum.DateTime],
) -> Optional[str]:
    if value is None:
        return None
    return value.in_tz("local").format(DISPLAY_FORMAT)


def seconds_between(start: pendulum.DateTime, end: pendulum.DateTime) -> int:
    """Whole seconds from start to end, rounded to the nearest second."""
    return round((end - start).total_seconds())


def duration_seconds_to_str(seconds: float) -> str:
    """1h 2m 3s, 4m 0s, 5s"""
    if not seconds:
        return "0s"

    hours, remainder = divmod(int(seconds), 3600)
    minutes, remaining_seconds = divmod(remainder, 60)

    if hours:
        return f"{hours}h {minutes}m {remaining_seconds}s"
    if minutes:
        return f"{minutes}m {remaining_seconds}s"
    return f"{remaining_seconds}s"
