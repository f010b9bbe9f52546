"""External command construction and execution.

A :class:`Command` is an argv plus working directory. Building one has no
side effects; :class:`CommandRunner` decides whether to execute it.

INVARIANT: Commands run strictly one at a time; each call blocks until
the child exits.
"""

from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

import structlog

log = structlog.get_logger(__name__)


class CommandSpawnError(OSError):
    """The command could not be started at all (missing binary, bad cwd)."""

    def __init__(self, command: Command, cause: OSError) -> None:
        super().__init__(f"failed to run {command}: {cause.strerror or cause}")
        self.command = command


class CommandFailedError(RuntimeError):
    """The command ran but exited nonzero."""

    def __init__(self, command: Command, result: CommandResult) -> None:
        super().__init__(f"{command} exited with status {result.returncode}")
        self.command = command
        self.result = result


@dataclass(frozen=True)
class Command:
    """A single subprocess invocation."""

    argv: tuple[str, ...]
    cwd: Path | None = None

    def __str__(self) -> str:
        return shlex.join(self.argv)

    def to_dict(self) -> dict[str, str | None]:
        return {"command": str(self), "cwd": str(self.cwd) if self.cwd else None}


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of an executed command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner:
    """Execute commands, or only trace them when *dry_run* is set.

    Args:
        dry_run: Construct and log commands without spawning anything.
        check: Raise :class:`CommandFailedError` on nonzero exit.
    """

    def __init__(self, *, dry_run: bool = False, check: bool = True) -> None:
        self.dry_run = dry_run
        self.check = check

    def run(self, command: Command) -> CommandResult | None:
        """Run *command*. Returns None in dry-run mode."""
        log.debug("command.run", command=str(command), cwd=str(command.cwd or "."))
        if self.dry_run:
            return None

        result = self._spawn(command)
        log.debug(
            "command.result",
            command=str(command),
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )
        if self.check and not result.ok:
            raise CommandFailedError(command, result)
        return result

    def _spawn(self, command: Command) -> CommandResult:
        try:
            completed = subprocess.run(
                list(command.argv),
                cwd=command.cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise CommandSpawnError(command, exc) from exc
        return CommandResult(
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
