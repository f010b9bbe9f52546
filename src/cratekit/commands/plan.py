"""Command: show the commands a run would execute."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from cratekit.commands._base import CrateCommand, template_option

if TYPE_CHECKING:
    from cratekit.commands._context import AppContext


@click.command(
    "plan",
    cls=CrateCommand,
    examples="""\
  cratekit plan /tmp/ws demo
  cratekit --json plan /tmp/ws demo""",
)
@click.argument("location", type=click.Path(file_okay=False, path_type=Path))
@click.argument("project_base")
@template_option
@click.pass_obj
def plan(app: AppContext, location: Path, project_base: str, template: str | None) -> None:
    """List every mkdir/cargo command for LOCATION/PROJECT_BASE without running it."""
    from cratekit.services.workspace import WorkspaceService

    settings = app.load_settings(location)
    graph = app.graph(project_base, template)
    app.emit(WorkspaceService(settings).plan(location, project_base, graph))
