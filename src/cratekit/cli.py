"""Root CLI group for cratekit with global flags and command registration."""

from __future__ import annotations

import click

from cratekit import __version__
from cratekit.commands import register_commands
from cratekit.commands._context import AppContext


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="cratekit")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Trace every command and its output.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-n", "--dry-run", is_flag=True, help="Build commands without running them.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    dry_run: bool,
    config_path: str | None,
) -> None:
    """cratekit — scaffold a layered multi-crate Cargo workspace."""
    flags = {
        "json_output": json_output,
        "quiet": quiet,
        "verbose": verbose,
        "log_json": log_json,
        "dry_run": dry_run,
    }
    # Unset flags must not shadow env vars or cratekit.toml.
    ctx.obj = AppContext(
        config_path=config_path,
        flags={k: v for k, v in flags.items() if v},
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
