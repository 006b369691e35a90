# SPDX-License-Identifier: MIT

from typing import Any

import typer
from rich.console import Console

from htracker.model.context import RequestContext
from htracker.model.response import ActionResponse
from htracker.repository.configuration import CONFIGURATION_REPO

error_console = Console(stderr=True)


def get_request_context() -> RequestContext:
    """The command line acts as the user named in the configuration."""
    config = CONFIGURATION_REPO.get_config()
    return {"user_id": config["user_id"]}


def unwrap(response: ActionResponse) -> Any:
    """Return the data of a success envelope, or exit with its error."""
    if not response["success"]:
        error_console.print(f"[red]Error: {response['error']}[/red]")
        raise typer.Exit(1)
    return response["data"]
