"""Command: materialize a workspace."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from cratekit.commands._base import CrateCommand, template_option

if TYPE_CHECKING:
    from cratekit.commands._context import AppContext

_NEW_EXAMPLES = """\
  cratekit new /tmp/ws demo
  cratekit --dry-run -v new ~/code shop
  cratekit new . shop --keep-going
  cratekit new . shop --template ./my-graph.toml"""


@click.command("new", cls=CrateCommand, examples=_NEW_EXAMPLES)
@click.argument("location", type=click.Path(file_okay=False, path_type=Path))
@click.argument("project_base")
@template_option
@click.option(
    "--keep-going",
    is_flag=True,
    help="Ignore nonzero exit codes from mkdir/cargo (reported as warnings).",
)
@click.pass_obj
def new(
    app: AppContext,
    location: Path,
    project_base: str,
    template: str | None,
    keep_going: bool,
) -> None:
    """Create LOCATION/PROJECT_BASE with every crate of the graph."""
    from cratekit.infrastructure.commands import CommandRunner
    from cratekit.services.workspace import WorkspaceService

    settings = app.load_settings(location)
    graph = app.graph(project_base, template)
    runner = CommandRunner(
        dry_run=settings.dry_run,
        check=settings.scaffold.check_exit and not keep_going,
    )
    svc = WorkspaceService(settings, runner=runner, progress=app.progress)
    app.emit(svc.make(location, project_base, graph))
