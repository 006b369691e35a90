# SPDX-License-Identifier: MIT

from typing import Optional

from htracker.model.tracker import Statistics, TrackerType
from htracker.time import duration_seconds_to_str


def format_tags(tags: Optional[list[str]]) -> str:
    """Format a list of tags as a comma-separated string without brackets or quotes."""
    if tags is None or len(tags) == 0:
        return ""
    return ", ".join(tags)


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


def format_period_value(tracker_type: TrackerType, value: float) -> str:
    if tracker_type == TrackerType.TIMER:
        return duration_seconds_to_str(value)
    return format_number(value)


def format_statistics(tracker_type: TrackerType, statistics: Statistics) -> str:
    entries = f"{statistics['total_entries']} entries"
    if tracker_type == TrackerType.TIMER:
        return f"{entries}, {duration_seconds_to_str(statistics['total_time'])}"
    if tracker_type in (TrackerType.COUNTER, TrackerType.AMOUNT):
        return f"{entries}, total {format_number(statistics['total_value'])}"
    if statistics["total_custom"]:
        return f"{entries}, {statistics['total_custom']}"
    return entries


def colorize(text: str, color: Optional[str]) -> str:
    """Wrap text in rich markup for a "#RGB" or "#RRGGBB" color."""
    if color is None or color == "":
        return text
    hex_digits = color.lstrip("#")
    if len(hex_digits) == 3:
        hex_digits = "".join(digit * 2 for digit in hex_digits)
    return f"[#{hex_digits}]{text}[/]"
