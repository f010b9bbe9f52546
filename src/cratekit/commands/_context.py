"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Settings are built on first use, so commands that
take a LOCATION can have ``cratekit.toml`` looked up from there first.
Also provides graph resolution and centralized result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from cratekit.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from cratekit.config.settings import CrateSettings
    from cratekit.domain.crates import DependencyGraph
    from cratekit.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Args:
        config_path: The ``-c`` value, if given.
        flags: Global flags that were set on the command line.
    """

    def __init__(
        self,
        *,
        config_path: str | None = None,
        flags: dict[str, Any] | None = None,
    ) -> None:
        self._config_path = config_path
        self._flags = flags or {}
        self._settings: CrateSettings | None = None

    def load_settings(self, location: Path | None = None) -> CrateSettings:
        """Build settings, searching for ``cratekit.toml`` from *location* then the cwd."""
        from cratekit.config.logging import configure_logging
        from cratekit.config.settings import CrateSettings

        search_from = (location, Path.cwd()) if location is not None else ()
        settings = CrateSettings.from_cli(
            config_path=self._config_path,
            search_from=search_from,
            **self._flags,
        )
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        self._settings = settings
        return settings

    @property
    def settings(self) -> CrateSettings:
        if self._settings is None:
            return self.load_settings()
        return self._settings

    @property
    def show_progress(self) -> bool:
        """Progress lines are for humans; JSON and quiet modes omit them."""
        return not (self.settings.json_output or self.settings.quiet)

    def progress(self, line: str) -> None:
        if self.show_progress:
            click.echo(line)

    def graph(self, project_base: str, template: str | None) -> DependencyGraph:
        """Resolve the graph, preferring *template* over ``[scaffold] template``."""
        from cratekit.domain.template import TemplateError
        from cratekit.services.graph import resolve_graph

        try:
            return resolve_graph(project_base, template or self.settings.scaffold.template)
        except TemplateError as exc:
            raise click.ClickException(str(exc)) from exc

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
