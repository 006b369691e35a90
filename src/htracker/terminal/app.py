# SPDX-License-Identifier: MIT

import typer

from htracker.terminal import configuration, entry, tracker
from htracker.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(
    cls=AliasedTyperGroup,
    help="HTracker - Track time, counts, amounts and occurrences",
    no_args_is_help=True,
)
app.add_typer(configuration.app, name="config, c")
app.add_typer(tracker.app, name="tracker, tr")
app.add_typer(entry.app, name="entry, e")


def run() -> None:
    app()
