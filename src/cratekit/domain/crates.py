"""Crate identities and dependency records.

Both are tagged variants modelled as frozen pydantic models with a ``kind``
discriminator, so they hash, compare, and serialize as plain records.

INVARIANT: A crate's identity is ``(kind, name)``. Two crates with the same
name but different kinds are distinct keys.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import PurePosixPath
from typing import Annotated, Literal

from pydantic import BaseModel, Field


class CrateKind(StrEnum):
    """Kind of sub-project ``cargo new`` generates."""

    BIN = "bin"
    LIB = "lib"


class Crate(BaseModel):
    """A sub-project to generate, keyed by kind and short name."""

    model_config = {"frozen": True}

    kind: CrateKind
    name: str

    @classmethod
    def bin(cls, name: str) -> Crate:
        return cls(kind=CrateKind.BIN, name=name)

    @classmethod
    def lib(cls, name: str) -> Crate:
        return cls(kind=CrateKind.LIB, name=name)

    @property
    def flag(self) -> str:
        """The ``cargo new`` flag selecting binary or library layout."""
        return f"--{self.kind.value}"

    def full_name(self, project_base: str) -> str:
        return crate_full_name(project_base, self.name)


class RemoteDependency(BaseModel):
    """A registry package with optional feature flags."""

    model_config = {"frozen": True}

    kind: Literal["remote"] = "remote"
    name: str
    features: tuple[str, ...] | None = None

    @property
    def feature_arg(self) -> str | None:
        """Comma-joined features, or None when the package takes none."""
        if self.features is None:
            return None
        return ",".join(self.features)


class LocalDependency(BaseModel):
    """A sibling sub-project wired in by relative path."""

    model_config = {"frozen": True}

    kind: Literal["local"] = "local"
    path: str

    @property
    def crate_name(self) -> str:
        """Full name of the sibling crate (last path component)."""
        return PurePosixPath(self.path).name


Dependency = Annotated[RemoteDependency | LocalDependency, Field(discriminator="kind")]

DependencyGraph = dict[Crate, list[Dependency]]


def crate_full_name(project_base: str, name: str) -> str:
    """Return ``{project_base}-{name}``."""
    return f"{project_base}-{name}"


def remote(name: str, *features: str) -> RemoteDependency:
    """Shorthand for a remote dependency; no features means no ``--features``."""
    return RemoteDependency(name=name, features=features or None)


def local(project_base: str, sibling: str) -> LocalDependency:
    """Shorthand for ``../{project_base}-{sibling}``."""
    return LocalDependency(path=f"../{crate_full_name(project_base, sibling)}")
