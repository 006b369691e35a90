# SPDX-License-Identifier: MIT

from typing import Optional

import click
import typer.core


def split_aliases(name: str) -> list[str]:
    # "tracker, tr" -> ["tracker", "tr"]
    return [alias.strip() for alias in name.split(",") if alias.strip()]


class AliasedTyperGroup(typer.core.TyperGroup):
    """
    Command group whose commands are registered under a comma-separated
    name, e.g. "list, ls", and can be invoked by any of those aliases.
    """

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        for registered_name in self.commands:
            if cmd_name in split_aliases(registered_name):
                return super().get_command(ctx, registered_name)
        return super().get_command(ctx, cmd_name)
