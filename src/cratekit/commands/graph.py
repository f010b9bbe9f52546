"""Command: print the dependency graph."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cratekit.commands._base import CrateCommand, template_option

if TYPE_CHECKING:
    from cratekit.commands._context import AppContext


@click.command(
    "graph",
    cls=CrateCommand,
    examples="""\
  cratekit graph shop
  cratekit --json graph shop --template layered""",
)
@click.argument("project_base")
@template_option
@click.pass_obj
def graph(app: AppContext, project_base: str, template: str | None) -> None:
    """Show the crates and dependencies generated for PROJECT_BASE."""
    from cratekit.services.graph import GraphService

    app.emit(
        GraphService.describe(
            project_base,
            template=template or app.settings.scaffold.template,
        )
    )
