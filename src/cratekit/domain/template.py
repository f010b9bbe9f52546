"""Declarative graph templates.

A template describes the crates of a workspace and their dependencies
without reference to a project base; :meth:`GraphTemplate.build` binds a
base name and produces the same shape as :func:`cratekit.domain.graph.mappings`.

TOML layout::

    [[crate]]
    name = "http"
    kind = "lib"

    [[crate.dependency]]
    kind = "local"
    sibling = "kernel"

    [[crate.dependency]]
    kind = "remote"
    name = "uuid"
    features = ["serde", "v4"]
"""

from __future__ import annotations

import tomllib
from typing import Annotated, Literal

from pydantic import BaseModel, Field, ValidationError, model_validator

from cratekit.domain.crates import (
    Crate,
    CrateKind,
    Dependency,
    DependencyGraph,
    RemoteDependency,
    local,
)


class TemplateError(ValueError):
    """Raised when a graph template cannot be parsed or validated."""


class RemoteSpec(BaseModel):
    """``kind = "remote"`` dependency record."""

    model_config = {"frozen": True, "extra": "forbid"}

    kind: Literal["remote"]
    name: str
    features: list[str] | None = None


class LocalSpec(BaseModel):
    """``kind = "local"`` dependency record naming a sibling crate."""

    model_config = {"frozen": True, "extra": "forbid"}

    kind: Literal["local"]
    sibling: str


DependencySpec = Annotated[RemoteSpec | LocalSpec, Field(discriminator="kind")]


class CrateSpec(BaseModel):
    """One ``[[crate]]`` table."""

    model_config = {"frozen": True, "extra": "forbid"}

    name: str
    kind: CrateKind
    dependency: list[DependencySpec] = Field(default_factory=list)


class GraphTemplate(BaseModel):
    """Root of a graph template file."""

    model_config = {"frozen": True, "extra": "forbid"}

    crate: list[CrateSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_crates(self) -> GraphTemplate:
        # Folder names ignore kind: lib "a" and bin "a" are both <base>-a.
        seen: set[str] = set()
        for spec in self.crate:
            if spec.name in seen:
                msg = f"duplicate crate: {spec.name!r}"
                raise ValueError(msg)
            seen.add(spec.name)
        return self

    @classmethod
    def from_toml(cls, text: str, *, source: str = "<template>") -> GraphTemplate:
        """Parse and validate TOML *text*. Raises :class:`TemplateError`."""
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {source}: {exc}"
            raise TemplateError(msg) from exc
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            msg = f"Invalid graph template {source}: {exc}"
            raise TemplateError(msg) from exc

    def build(self, project_base: str) -> DependencyGraph:
        """Bind *project_base* and return the dependency graph."""
        graph: DependencyGraph = {}
        for spec in self.crate:
            deps: list[Dependency] = []
            for dep in spec.dependency:
                if isinstance(dep, LocalSpec):
                    deps.append(local(project_base, dep.sibling))
                else:
                    features = tuple(dep.features) if dep.features is not None else None
                    deps.append(RemoteDependency(name=dep.name, features=features))
            graph[Crate(kind=spec.kind, name=spec.name)] = deps
        return graph
