# SPDX-License-Identifier: MIT

from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from htracker.model.tracker import PeriodTotals, Tracker, TrackerPage
from htracker.time import datetime_to_display_local_datetime_str_optional
from htracker.view.util import (
    colorize,
    format_period_value,
    format_statistics,
    format_tags,
)


def trackers_view(
    tracker_page: TrackerPage,
    columns: list[str] = ["id", "name", "type", "status", "entries", "statistics"],
    use_color: bool = True,
) -> None:
    """Display one page of trackers in a table."""
    trackers_table = Table(
        box=box.SIMPLE,
        caption=(
            f"page {tracker_page['page']} of {max(tracker_page['total_pages'], 1)}"
            f" ({tracker_page['total']} trackers)"
        ),
    )
    for column in columns:
        trackers_table.add_column(column)

    for tracker in tracker_page["trackers"]:
        row = []
        for column in columns:
            column_value = ""
            if column == "entries":
                column_value = str(tracker["entries_count"])
            elif column == "statistics":
                column_value = format_statistics(tracker["type"], tracker["statistics"])
            elif column == "tags":
                column_value = format_tags(tracker["tags"])
            elif column == "updated":
                column_value = (
                    datetime_to_display_local_datetime_str_optional(tracker["updated"])
                    or ""
                )
            elif tracker.get(column) is not None:
                column_value = str(tracker[column])  # type: ignore[literal-required]

            if use_color:
                column_value = colorize(column_value, tracker["color"])

            row.append(column_value)
        trackers_table.add_row(*row)

    console = Console()
    console.print(trackers_table)


def single_tracker_view(tracker: Tracker | dict[str, Any]) -> None:
    """Display detailed view of a single tracker."""
    tracker_table = Table(box=box.SIMPLE)
    tracker_table.add_column("property")
    tracker_table.add_column("value")

    tracker_table.add_row("id", str(tracker["id"]))
    tracker_table.add_row("name", colorize(tracker["name"], tracker["color"]))
    tracker_table.add_row("description", tracker["description"] or "")
    tracker_table.add_row("type", str(tracker["type"]))
    tracker_table.add_row("status", str(tracker["status"]))
    tracker_table.add_row("tags", format_tags(tracker["tags"]))
    tracker_table.add_row("color", tracker["color"] or "")
    tracker_table.add_row("icon", tracker["icon"] or "")
    tracker_table.add_row(
        "statistics", format_statistics(tracker["type"], tracker["statistics"])
    )
    tracker_table.add_row(
        "created",
        datetime_to_display_local_datetime_str_optional(tracker["created"]) or "",
    )
    tracker_table.add_row(
        "updated",
        datetime_to_display_local_datetime_str_optional(tracker["updated"]) or "",
    )

    console = Console()
    console.print(tracker_table)


def tracker_stats_view(tracker: Tracker | dict[str, Any], totals: PeriodTotals) -> None:
    """
    Display today/week/month activity for a tracker.

    period   Coding
    ────────────────
    today    1h 5m 0s
    week     6h 30m 0s
    month    20h 0m 0s
    """
    stats_table = Table(box=box.SIMPLE)
    stats_table.add_column("period")
    stats_table.add_column(colorize(tracker["name"], tracker["color"]))

    for period in ("today", "week", "month"):
        stats_table.add_row(
            period,
            format_period_value(tracker["type"], totals[period]),  # type: ignore[literal-required]
        )

    console = Console()
    console.print(stats_table)
