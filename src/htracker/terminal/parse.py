# SPDX-License-Identifier: MIT

import re
from typing import Callable, Optional

import pendulum
import typer

from htracker.time import datetime_from_str_utc

DATETIME_HELP = "valid inputs: YYYY-MM-DD[THH:mm[:ss]], HH:mm, now, today, yesterday"

KEYWORDS: dict[str, Callable[[], pendulum.DateTime]] = {
    "now": lambda: pendulum.now("local"),
    "today": lambda: pendulum.today("local"),
    "yesterday": lambda: pendulum.yesterday("local"),
}
KEYWORDS.update({keyword[0]: moment for keyword, moment in list(KEYWORDS.items())})

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}")
CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_datetime(datetime_param: Optional[str]) -> Optional[pendulum.DateTime]:
    """Parse a command line date or time, read as local time, into UTC."""
    if datetime_param is None:
        return None

    value = datetime_param.strip().lower()

    if value in KEYWORDS:
        return KEYWORDS[value]().in_tz("UTC")

    if DATE_PATTERN.match(value):
        try:
            return datetime_from_str_utc(datetime_param.strip())
        except ValueError:
            raise typer.BadParameter(f"Invalid date: {datetime_param}") from None

    clock = CLOCK_PATTERN.match(value)
    if clock:
        hour, minute = int(clock.group(1)), int(clock.group(2))
        if hour > 23 or minute > 59:
            raise typer.BadParameter(f"Invalid time of day: {datetime_param}")
        return pendulum.today("local").set(hour=hour, minute=minute).in_tz("UTC")

    raise typer.BadParameter(f"Incorrect datetime format, {DATETIME_HELP}")
