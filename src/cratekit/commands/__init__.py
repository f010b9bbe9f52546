"""Subcommand modules for cratekit.

Provides register_commands() which uses deferred imports to keep
``cratekit --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from cratekit.commands.graph import graph
    from cratekit.commands.new import new
    from cratekit.commands.plan import plan

    cli.add_command(new)
    cli.add_command(plan)
    cli.add_command(graph)
