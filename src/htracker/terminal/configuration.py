# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from htracker import configuration
from htracker.repository.configuration import CONFIGURATION_REPO
from htracker.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("show, s")
def show() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("config_path", str(configuration.APP_CONFIG_PATH))
    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("user_id", config["user_id"])
    table.add_row("page_limit", str(config["page_limit"]))
    table.add_row("entry_limit", str(config["entry_limit"]))
    table.add_row("log_level", config["log_level"])
    table.add_row("log_file", config["log_file"] or "None")

    console.print(table)


@app.command("set")
def set(
    data_path: Annotated[Optional[str], typer.Option("--data-path")] = None,
    remove_data_path: Annotated[bool, typer.Option("--remove-data-path")] = False,
    page_limit: Annotated[Optional[int], typer.Option("--page-limit", min=1)] = None,
    entry_limit: Annotated[
        Optional[int], typer.Option("--entry-limit", min=1)
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR"),
    ] = None,
    log_file: Annotated[Optional[str], typer.Option("--log-file")] = None,
    remove_log_file: Annotated[bool, typer.Option("--remove-log-file")] = False,
) -> None:
    """Update configuration settings."""
    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        page_limit=page_limit,
        entry_limit=entry_limit,
        log_level=log_level,
        log_file=log_file,
        remove_log_file=remove_log_file,
    )
    CONFIGURATION_REPO.flush()
    show()
