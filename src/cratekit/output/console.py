"""Rich Console factory and theme for cratekit output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CRATE_THEME = Theme(
    {
        "crate.ok": "bold green",
        "crate.error": "bold red",
        "crate.warning": "bold yellow",
        "crate.op": "bold cyan",
        "crate.key": "dim",
        "crate.name": "bold",
        "crate.path": "dim",
        "crate.kind.bin": "magenta",
        "crate.kind.lib": "blue",
        "crate.dep.local": "green",
        "crate.dep.remote": "default",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=CRATE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
