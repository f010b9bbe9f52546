"""Shared pytest fixtures and test helpers for cratekit tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from cratekit.config.settings import CrateSettings
from cratekit.infrastructure.commands import (
    Command,
    CommandResult,
    CommandRunner,
    CommandSpawnError,
)

EXPECTED_CRATES = {
    "kernel",
    "repository",
    "postgres",
    "services",
    "http",
    "rs",
    "api",
}


class RecordingRunner(CommandRunner):
    """CommandRunner that records commands and fakes mkdir/cargo new.

    ``fail_on`` makes any command containing the substring exit 101;
    ``spawn_error_on`` makes it fail to start.
    """

    def __init__(
        self,
        *,
        dry_run: bool = False,
        check: bool = True,
        fail_on: str | None = None,
        spawn_error_on: str | None = None,
    ) -> None:
        super().__init__(dry_run=dry_run, check=check)
        self.calls: list[Command] = []
        self.fail_on = fail_on
        self.spawn_error_on = spawn_error_on

    def _spawn(self, command: Command) -> CommandResult:
        self.calls.append(command)
        text = str(command)
        if self.spawn_error_on and self.spawn_error_on in text:
            raise CommandSpawnError(command, FileNotFoundError(2, "No such file or directory"))
        if self.fail_on and self.fail_on in text:
            return CommandResult(returncode=101, stderr="error: simulated failure\n")

        argv = command.argv
        if argv[0] == "mkdir":
            Path(argv[-1]).mkdir(parents=True, exist_ok=True)
        elif argv[1] == "new":
            assert command.cwd is not None
            target = command.cwd / argv[-1]
            if target.exists():
                return CommandResult(
                    returncode=101,
                    stderr=f"error: destination `{target}` already exists\n",
                )
            target.mkdir()
        return CommandResult(returncode=0, stdout="", stderr="")


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's CRATEKIT_* environment out of the tests."""
    for name in ("CRATEKIT_CONFIG", "CRATEKIT_DRY_RUN", "CRATEKIT_VERBOSE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings(tmp_path: Path) -> CrateSettings:
    """Settings with code defaults (no cratekit.toml)."""
    return CrateSettings.from_cli(search_from=[tmp_path])


@pytest.fixture
def make_runner() -> Callable[..., RecordingRunner]:
    """Factory for :class:`RecordingRunner` instances."""

    def _make(**kwargs: Any) -> RecordingRunner:
        return RecordingRunner(**kwargs)

    return _make


@pytest.fixture
def fake_cargo(monkeypatch: pytest.MonkeyPatch) -> RecordingRunner:
    """Patch every CommandRunner so CLI runs never spawn real processes.

    Returns a recorder whose ``calls`` accumulate across runners.
    """
    recorder = RecordingRunner()

    def _spawn(self: CommandRunner, command: Command) -> CommandResult:
        return RecordingRunner._spawn(recorder, command)

    monkeypatch.setattr(CommandRunner, "_spawn", _spawn)
    return recorder
