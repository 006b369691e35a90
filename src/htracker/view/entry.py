# SPDX-License-Identifier: MIT

from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from htracker.model.entry import Entry
from htracker.model.tracker import Tracker, TrackerType
from htracker.time import (
    datetime_to_display_local_datetime_str_optional,
    duration_seconds_to_str,
)
from htracker.view.util import format_number, format_tags


def _format_value(tracker: Tracker | dict[str, Any], entry: Entry) -> str:
    if tracker["type"] == TrackerType.TIMER:
        if entry["start_time"] is not None and entry["value"] is None:
            return "(running)"
        if entry["value"] is not None:
            return duration_seconds_to_str(entry["value"])
        return ""
    if entry["value"] is not None:
        return format_number(entry["value"])
    return ""


def entries_view(
    tracker: Tracker | dict[str, Any],
    entries: list[Entry],
    total: int,
    columns: list[str] = ["id", "date", "value", "note", "tags"],
) -> None:
    """Display list of entries for a tracker."""
    entries_table = Table(
        box=box.SIMPLE,
        title=f"entries for {tracker['name']}",
        caption=f"{len(entries)} of {total} entries",
    )
    for column in columns:
        entries_table.add_column(column)

    for entry in entries:
        row = []
        for column in columns:
            column_value = ""
            if column == "date":
                column_value = (
                    datetime_to_display_local_datetime_str_optional(entry["date"]) or ""
                )
            elif column == "value":
                column_value = _format_value(tracker, entry)
            elif column == "tags":
                column_value = format_tags(entry["tags"])
            elif entry.get(column) is not None:
                column_value = str(entry[column])  # type: ignore[literal-required]
            row.append(column_value)
        entries_table.add_row(*row)

    console = Console()
    console.print(entries_table)


def single_entry_view(tracker: Tracker | dict[str, Any], entry: Entry) -> None:
    """Display detailed view of a single entry."""
    entry_table = Table(box=box.SIMPLE)
    entry_table.add_column("property")
    entry_table.add_column("value")

    entry_table.add_row("id", str(entry["id"]))
    entry_table.add_row("tracker", tracker["name"])
    entry_table.add_row(
        "date", datetime_to_display_local_datetime_str_optional(entry["date"]) or ""
    )
    entry_table.add_row(
        "start_time",
        datetime_to_display_local_datetime_str_optional(entry["start_time"]) or "",
    )
    entry_table.add_row(
        "end_time",
        datetime_to_display_local_datetime_str_optional(entry["end_time"]) or "",
    )
    entry_table.add_row("value", _format_value(tracker, entry))
    entry_table.add_row("note", entry["note"] or "")
    entry_table.add_row("tags", format_tags(entry["tags"]))

    console = Console()
    console.print(entry_table)
