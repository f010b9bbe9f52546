"""WorkspaceService — turn a dependency graph into crates on disk.

A run is two phases. :func:`plan_workspace` builds every command up front
without side effects; :meth:`WorkspaceService.make` then executes them in
order:

1. ``mkdir -p <location>/<project_base>``
2. write ``<location>/Cargo.toml`` unless it already exists
3. ``cargo new --bin|--lib <base>-<crate>`` per crate
4. ``cargo add ...`` per dependency, inside each crate folder

INVARIANT: Nothing is rolled back. A failure leaves whatever was already
created in place, and the error detail records how far the run got.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cratekit.domain.crates import DependencyGraph, LocalDependency, RemoteDependency
from cratekit.domain.graph import missing_siblings
from cratekit.infrastructure.commands import (
    Command,
    CommandFailedError,
    CommandRunner,
    CommandSpawnError,
)
from cratekit.infrastructure.filesystem import WorkspacePathError, path_text, write_if_absent
from cratekit.infrastructure.templates import workspace_manifest
from cratekit.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from cratekit.config.settings import CrateSettings
    from cratekit.domain.crates import Dependency

logger = logging.getLogger(__name__)


class ManifestWriteError(RuntimeError):
    """The root manifest was created but its content could not be written."""


@dataclass(frozen=True)
class WorkspacePlan:
    """Every command a run will execute, in execution order."""

    location: Path
    destination: Path
    manifest_path: Path
    mkdir: Command
    create: tuple[Command, ...] = ()
    add: tuple[Command, ...] = ()
    crates: tuple[str, ...] = ()

    def commands(self) -> list[Command]:
        return [self.mkdir, *self.create, *self.add]


def add_dependency_argv(dep: Dependency, *, cargo: str = "cargo") -> tuple[str, ...]:
    """Build the ``cargo add`` argv for a single dependency.

    - local: ``cargo add --path ../<base>-<sib> <base>-<sib>``
    - remote: ``cargo add <pkg> [--features f1,f2]``
    """
    if isinstance(dep, LocalDependency):
        return (cargo, "add", "--path", dep.path, dep.crate_name)
    assert isinstance(dep, RemoteDependency)
    argv: tuple[str, ...] = (cargo, "add", dep.name)
    feature_arg = dep.feature_arg
    if feature_arg is not None:
        argv += ("--features", feature_arg)
    return argv


def plan_workspace(
    location: Path,
    project_base: str,
    graph: DependencyGraph,
    *,
    cargo: str = "cargo",
    manifest_name: str = "Cargo.toml",
) -> WorkspacePlan:
    """Build the full command plan. Pure apart from the path checks.

    Raises :class:`WorkspacePathError` if *location* or the destination
    directory cannot be represented as text.
    """
    path_text(location, what="workspace root")
    destination = location / project_base
    dest_text = path_text(destination, what="project base")

    create: list[Command] = []
    add: list[Command] = []
    names: list[str] = []
    for crate in graph:
        full_name = crate.full_name(project_base)
        names.append(full_name)
        create.append(Command((cargo, "new", crate.flag, full_name), cwd=destination))

    for crate, deps in graph.items():
        crate_dir = destination / crate.full_name(project_base)
        for dep in deps:
            add.append(Command(add_dependency_argv(dep, cargo=cargo), cwd=crate_dir))

    return WorkspacePlan(
        location=location,
        destination=destination,
        manifest_path=location / manifest_name,
        mkdir=Command(("mkdir", "-p", dest_text)),
        create=tuple(create),
        add=tuple(add),
        crates=tuple(names),
    )


class WorkspaceService:
    """Materialize a workspace from a dependency graph.

    Args:
        settings: Supplies ``dry_run`` and the ``[scaffold]`` section.
        runner: Command runner; built from *settings* when omitted.
        progress: Receives the human progress lines. Silent when omitted.
    """

    def __init__(
        self,
        settings: CrateSettings,
        *,
        runner: CommandRunner | None = None,
        progress: Callable[[str], None] | None = None,
    ) -> None:
        self._settings = settings
        self._runner = runner or CommandRunner(
            dry_run=settings.dry_run,
            check=settings.scaffold.check_exit,
        )
        self._progress = progress or (lambda _line: None)

    def _plan(self, location: Path, project_base: str, graph: DependencyGraph) -> WorkspacePlan:
        return plan_workspace(
            location,
            project_base,
            graph,
            cargo=self._settings.scaffold.cargo,
            manifest_name=self._settings.scaffold.manifest_name,
        )

    def plan(self, location: Path, project_base: str, graph: DependencyGraph) -> ServiceResult:
        """Return the commands :meth:`make` would run, without running them."""
        op = "plan_workspace"
        try:
            plan = self._plan(location, project_base, graph)
        except WorkspacePathError as exc:
            return _path_error(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "destination": str(plan.destination),
                "manifest": str(plan.manifest_path),
                "commands": [cmd.to_dict() for cmd in plan.commands()],
            },
            warnings=_sibling_warnings(graph, project_base),
        )

    def make(self, location: Path, project_base: str, graph: DependencyGraph) -> ServiceResult:
        """Create the directory, manifest, crates, and dependencies in order."""
        op = "make_workspace"
        self._progress(f"making workspace for {project_base}")
        warnings = _sibling_warnings(graph, project_base)

        try:
            plan = self._plan(location, project_base, graph)
        except WorkspacePathError as exc:
            return _path_error(op, exc)

        progress: dict[str, Any] = {
            "destination": str(plan.destination),
            "manifest_written": False,
            "crates_created": 0,
            "dependencies_added": 0,
        }
        try:
            self._run(plan.mkdir, warnings)
            progress["manifest_written"] = self._write_manifest(plan)

            self._progress("generating crates")
            for cmd in plan.create:
                self._run(cmd, warnings)
                progress["crates_created"] += 1

            self._progress("adding dependencies")
            for cmd in plan.add:
                self._run(cmd, warnings)
                progress["dependencies_added"] += 1
        except ManifestWriteError as exc:
            return ServiceResult.failure(
                op,
                ErrorCode.WRITE_FAILED,
                str(exc),
                detail={"manifest": str(plan.manifest_path), "progress": progress},
                warnings=warnings,
            )
        except CommandSpawnError as exc:
            return _command_failure(
                op, ErrorCode.SPAWN_FAILED, exc, exc.command, progress, warnings
            )
        except CommandFailedError as exc:
            return _command_failure(
                op,
                ErrorCode.COMMAND_FAILED,
                exc,
                exc.command,
                progress,
                warnings,
                returncode=exc.result.returncode,
                stderr=exc.result.stderr.strip(),
            )

        self._progress("done!")
        return ServiceResult(
            ok=True,
            op=op,
            data={
                **progress,
                "manifest": str(plan.manifest_path),
                "crates": list(plan.crates),
                "dry_run": self._runner.dry_run,
            },
            warnings=warnings,
        )

    def _run(self, cmd: Command, warnings: list[str]) -> None:
        result = self._runner.run(cmd)
        if result is not None and not result.ok:
            # Only reachable with check_exit disabled.
            warnings.append(f"{cmd} exited with status {result.returncode}")

    def _write_manifest(self, plan: WorkspacePlan) -> bool:
        if self._runner.dry_run:
            logger.debug("dry run: skipping manifest %s", plan.manifest_path)
            return False
        try:
            written = write_if_absent(plan.manifest_path, workspace_manifest())
        except OSError as exc:
            msg = f"Failed to write {plan.manifest_path}: {exc}"
            raise ManifestWriteError(msg) from exc
        if not written:
            logger.debug("manifest not created, leaving it alone: %s", plan.manifest_path)
        return written


# ---------------------------------------------------------------------------
# Result helpers
# ---------------------------------------------------------------------------


def _sibling_warnings(graph: DependencyGraph, project_base: str) -> list[str]:
    return [
        f"Local dependency has no matching crate: {ref}"
        for ref in missing_siblings(graph, project_base)
    ]


def _path_error(op: str, exc: WorkspacePathError) -> ServiceResult:
    return ServiceResult.failure(op, ErrorCode.INVALID_PATH, str(exc))


def _command_failure(
    op: str,
    code: ErrorCode,
    exc: Exception,
    command: Command,
    progress: dict[str, Any],
    warnings: list[str],
    **extra: Any,
) -> ServiceResult:
    return ServiceResult.failure(
        op,
        code,
        str(exc),
        detail={**command.to_dict(), **extra, "progress": progress},
        warnings=warnings,
    )
