"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from cratekit.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from cratekit.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="crate.ok")
    op = Text(f"  {result.op}", style="crate.op")
    console.print(label, op)


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="crate.key")
    if isinstance(value, (dict, list)):
        v = Text(_json.dumps(value, separators=(",", ":")))
    elif key in ("destination", "manifest"):
        v = Text(str(value), style="crate.path")
    else:
        v = Text(str(value))
    console.print(k, v, soft_wrap=True)


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="crate.error")
    op = Text(f"  {result.op}", style="crate.op")
    console.print(label, op, Text(" — "), Text(msg), soft_wrap=True)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"), soft_wrap=True)


def _render_make(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    _field(console, "destination", data.get("destination", ""))
    _field(console, "manifest", data.get("manifest", ""))
    if not data.get("manifest_written"):
        console.print(Text("    (manifest left untouched)", style="dim"))
    _field(console, "crates_created", data.get("crates_created", 0))
    _field(console, "dependencies_added", data.get("dependencies_added", 0))
    if data.get("dry_run"):
        console.print(Text("  dry run: no commands were executed", style="crate.warning"))
    if verbose:
        for name in data.get("crates", []):
            console.print(Text(f"    {name}", style="crate.name"))


def _render_plan(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "destination", result.data.get("destination", ""))
    _field(console, "manifest", result.data.get("manifest", ""))

    # Commands are grouped under the directory they run in.
    current_cwd: str | None = None
    for cmd in result.data.get("commands", []):
        cwd = cmd.get("cwd")
        if cwd and cwd != current_cwd:
            console.print(Text(f"  in {cwd}", style="crate.path"), soft_wrap=True)
            current_cwd = cwd
        console.print(Text(f"    {cmd['command']}"), soft_wrap=True)


def _render_graph(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    _field(console, "crate_count", data.get("crate_count", 0))
    _field(console, "dependency_count", data.get("dependency_count", 0))

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Crate", style="crate.name")
    table.add_column("Kind")
    table.add_column("Dependencies")
    for name, entry in data.get("crates", {}).items():
        kind = entry["kind"]
        deps = Text()
        for i, dep in enumerate(entry["dependencies"]):
            if i:
                deps.append(", ")
            if dep["kind"] == "local":
                deps.append(dep["path"], style="crate.dep.local")
            else:
                label = dep["name"]
                if dep.get("features") is not None:
                    label += f"[{','.join(dep['features'])}]"
                deps.append(label, style="crate.dep.remote")
        table.add_row(name, Text(kind, style=f"crate.kind.{kind}"), deps)
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "make_workspace": _render_make,
    "plan_workspace": _render_plan,
    "describe_graph": _render_graph,
}
