# SPDX-License-Identifier: MIT

from typing import Annotated, Any, Optional

import typer

from htracker.action import tracker as tracker_action
from htracker.action.entry import get_tracker_stats
from htracker.repository.configuration import CONFIGURATION_REPO
from htracker.terminal.context import get_request_context, unwrap
from htracker.terminal.custom_typer import AliasedTyperGroup
from htracker.view import tracker as tracker_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a", no_args_is_help=True)
def add(
    name: str,
    tracker_type: Annotated[
        str,
        typer.Option(
            "--type",
            "-t",
            help="TIMER, COUNTER, AMOUNT, OCCURRENCE, CUSTOM",
        ),
    ] = "OCCURRENCE",
    description: Annotated[
        Optional[str], typer.Option("--description", "-d")
    ] = None,
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-tg", help="accepts multiple tag options"),
    ] = None,
    color: Annotated[
        Optional[str], typer.Option("--color", "-col", help="#RGB or #RRGGBB")
    ] = None,
    icon: Annotated[Optional[str], typer.Option("--icon", "-i")] = None,
) -> None:
    """Create a new tracker."""
    context = get_request_context()
    data: dict[str, Any] = {
        "name": name,
        "type": tracker_type.upper(),
        "description": description,
        "tags": tags or [],
        "color": color,
        "icon": icon,
    }
    created = unwrap(tracker_action.create_tracker(data, context))

    new_tracker = unwrap(tracker_action.get_tracker(created["id"], context))
    tracker_report.single_tracker_view(new_tracker)


@app.command("list, ls")
def list_trackers(
    status: Annotated[
        Optional[str],
        typer.Option("--status", "-s", help="ACTIVE, INACTIVE, ARCHIVED"),
    ] = None,
    tracker_type: Annotated[
        Optional[str],
        typer.Option("--type", "-t", help="TIMER, COUNTER, AMOUNT, OCCURRENCE, CUSTOM"),
    ] = None,
    search: Annotated[
        Optional[str],
        typer.Option("--search", "-q", help="name, description or tag"),
    ] = None,
    sort: Annotated[
        Optional[str], typer.Option("--sort", help="name, created, recent")
    ] = None,
    page: Annotated[int, typer.Option("--page", "-p")] = 1,
    limit: Annotated[Optional[int], typer.Option("--limit", "-l")] = None,
) -> None:
    """List trackers."""
    config = CONFIGURATION_REPO.get_config()
    context = get_request_context()
    filters: dict[str, Any] = {
        "status": status.upper() if status is not None else None,
        "type": tracker_type.upper() if tracker_type is not None else None,
        "search": search,
        "sort": sort,
        "page": page,
        "limit": limit if limit is not None else config["page_limit"],
    }
    tracker_page = unwrap(tracker_action.get_trackers(filters, context))
    tracker_report.trackers_view(tracker_page)


@app.command("show, s", no_args_is_help=True)
def show(id: str) -> None:
    """Show a tracker."""
    tracker = unwrap(tracker_action.get_tracker(id, get_request_context()))
    tracker_report.single_tracker_view(tracker)


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: str,
    name: Annotated[Optional[str], typer.Option("--name", "-n")] = None,
    description: Annotated[
        Optional[str], typer.Option("--description", "-d")
    ] = None,
    status: Annotated[
        Optional[str],
        typer.Option("--status", "-s", help="ACTIVE, INACTIVE, ARCHIVED"),
    ] = None,
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-tg", help="replaces the tag list"),
    ] = None,
    color: Annotated[Optional[str], typer.Option("--color", "-col")] = None,
    icon: Annotated[Optional[str], typer.Option("--icon", "-i")] = None,
    remove_description: Annotated[
        bool, typer.Option("--remove-description", "-rd")
    ] = False,
    remove_tags: Annotated[bool, typer.Option("--remove-tags", "-rtgs")] = False,
    remove_color: Annotated[bool, typer.Option("--remove-color", "-rcol")] = False,
    remove_icon: Annotated[bool, typer.Option("--remove-icon", "-ri")] = False,
) -> None:
    """Modify a tracker."""
    context = get_request_context()

    data: dict[str, Any] = {}
    if name is not None:
        data["name"] = name
    if description is not None:
        data["description"] = description
    if status is not None:
        data["status"] = status.upper()
    if tags is not None:
        data["tags"] = tags
    if color is not None:
        data["color"] = color
    if icon is not None:
        data["icon"] = icon
    if remove_description:
        data["description"] = None
    if remove_tags:
        data["tags"] = None
    if remove_color:
        data["color"] = None
    if remove_icon:
        data["icon"] = None

    unwrap(tracker_action.update_tracker(id, data, context))

    tracker = unwrap(tracker_action.get_tracker(id, context))
    tracker_report.single_tracker_view(tracker)


@app.command("archive, ar", no_args_is_help=True)
def archive(id: str) -> None:
    """Archive a tracker."""
    context = get_request_context()
    unwrap(tracker_action.update_tracker(id, {"status": "ARCHIVED"}, context))

    tracker = unwrap(tracker_action.get_tracker(id, context))
    tracker_report.single_tracker_view(tracker)


@app.command("delete, d", no_args_is_help=True)
def delete(
    id: str,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="skip confirmation")] = False,
) -> None:
    """Delete a tracker and all of its entries."""
    if not yes:
        typer.confirm("Delete this tracker and all of its entries?", abort=True)
    deleted = unwrap(tracker_action.delete_tracker(id, get_request_context()))
    typer.echo(f"Deleted tracker {deleted['id']}")


@app.command("stats, st", no_args_is_help=True)
def stats(id: str) -> None:
    """Show today, week and month activity for a tracker."""
    context = get_request_context()
    tracker = unwrap(tracker_action.get_tracker(id, context))
    totals = unwrap(get_tracker_stats(id, context))
    tracker_report.tracker_stats_view(tracker, totals)


@app.command("rebuild, rb", no_args_is_help=True)
def rebuild(id: str) -> None:
    """Rebuild a tracker's statistics from its entries."""
    context = get_request_context()
    unwrap(tracker_action.rebuild_tracker_statistics(id, context))

    tracker = unwrap(tracker_action.get_tracker(id, context))
    tracker_report.single_tracker_view(tracker)
