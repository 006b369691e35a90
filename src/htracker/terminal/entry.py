# SPDX-License-Identifier: MIT

from typing import Annotated, Any, Optional

import pendulum
import typer

from htracker.action import entry as entry_action
from htracker.action.tracker import get_tracker
from htracker.repository.configuration import CONFIGURATION_REPO
from htracker.terminal.context import get_request_context, unwrap
from htracker.terminal.custom_typer import AliasedTyperGroup
from htracker.terminal.parse import DATETIME_HELP, parse_datetime
from htracker.time import duration_seconds_to_str
from htracker.view import entry as entry_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _show_entry(entry_id: str) -> None:
    context = get_request_context()
    entry = unwrap(entry_action.get_entry(entry_id, context))
    tracker = unwrap(get_tracker(entry["tracker_id"], context))
    entry_report.single_entry_view(tracker, entry)


@app.command("add, a", no_args_is_help=True)
def add(
    tracker_id: str,
    value: Annotated[Optional[float], typer.Option("--value", "-v")] = None,
    start: Annotated[
        Optional[pendulum.DateTime],
        typer.Option(
            "--start",
            "-st",
            parser=parse_datetime,
            help="Session start, timer trackers only",
        ),
    ] = None,
    end: Annotated[
        Optional[pendulum.DateTime],
        typer.Option(
            "--end",
            "-en",
            parser=parse_datetime,
            help="Session end, timer trackers only",
        ),
    ] = None,
    date: Annotated[
        Optional[pendulum.DateTime],
        typer.Option(
            "--date", "-d", parser=parse_datetime, help="Date of entry (default: now)"
        ),
    ] = None,
    note: Annotated[Optional[str], typer.Option("--note", "-n")] = None,
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-tg", help="accepts multiple tag options"),
    ] = None,
) -> None:
    """Record an entry for a tracker."""
    data: dict[str, Any] = {
        "tracker_id": tracker_id,
        "start_time": start,
        "end_time": end,
        "value": value,
        "note": note,
        "tags": tags or [],
    }
    if date is not None:
        data["date"] = date

    created = unwrap(entry_action.create_entry(data, get_request_context()))
    _show_entry(created["id"])


@app.command("list, ls", no_args_is_help=True)
def list_entries(
    tracker_id: str,
    page: Annotated[int, typer.Option("--page", "-p")] = 1,
    limit: Annotated[Optional[int], typer.Option("--limit", "-l")] = None,
) -> None:
    """List the entries of a tracker, newest first."""
    config = CONFIGURATION_REPO.get_config()
    context = get_request_context()

    tracker = unwrap(get_tracker(tracker_id, context))
    entry_page = unwrap(
        entry_action.get_entries_by_tracker(
            tracker_id,
            context,
            limit=limit if limit is not None else config["entry_limit"],
            page=page,
        )
    )
    entry_report.entries_view(tracker, entry_page["entries"], entry_page["total"])


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: str,
    value: Annotated[Optional[float], typer.Option("--value", "-v")] = None,
    start: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--start", "-st", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    end: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--end", "-en", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    date: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--date", "-d", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    note: Annotated[Optional[str], typer.Option("--note", "-n")] = None,
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-tg", help="replaces the tag list"),
    ] = None,
    remove_value: Annotated[bool, typer.Option("--remove-value", "-rv")] = False,
    remove_note: Annotated[bool, typer.Option("--remove-note", "-rn")] = False,
) -> None:
    """Modify an entry."""
    data: dict[str, Any] = {}
    if value is not None:
        data["value"] = value
    if start is not None:
        data["start_time"] = start
    if end is not None:
        data["end_time"] = end
    if date is not None:
        data["date"] = date
    if note is not None:
        data["note"] = note
    if tags is not None:
        data["tags"] = tags
    if remove_value:
        data["value"] = None
    if remove_note:
        data["note"] = None

    unwrap(entry_action.update_entry(id, data, get_request_context()))
    _show_entry(id)


@app.command("delete, d", no_args_is_help=True)
def delete(id: str) -> None:
    """Delete an entry."""
    deleted = unwrap(entry_action.delete_entry(id, get_request_context()))
    typer.echo(f"Deleted entry {deleted['id']}")


@app.command("start", no_args_is_help=True)
def start(
    tracker_id: str,
    note: Annotated[str, typer.Option("--note", "-n")] = "",
) -> None:
    """Start a timer session."""
    started = unwrap(
        entry_action.start_timer_entry(tracker_id, get_request_context(), note=note)
    )
    _show_entry(started["id"])


@app.command("stop", no_args_is_help=True)
def stop(
    id: str,
    note: Annotated[
        str, typer.Option("--note", "-n", help="appended to the session note")
    ] = "",
) -> None:
    """Stop a running timer session."""
    stopped = unwrap(
        entry_action.stop_timer_entry(id, get_request_context(), additional_note=note)
    )
    typer.echo(f"Stopped after {duration_seconds_to_str(stopped['duration'])}")
    _show_entry(stopped["id"])


@app.command("count, c", no_args_is_help=True)
def count(
    tracker_id: str,
    value: Annotated[float, typer.Option("--value", "-v")] = 1,
    note: Annotated[str, typer.Option("--note", "-n")] = "",
) -> None:
    """Add to a counter or amount tracker (default +1)."""
    created = unwrap(
        entry_action.add_counter_entry(
            tracker_id, get_request_context(), value=value, note=note
        )
    )
    _show_entry(created["id"])
