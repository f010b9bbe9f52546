"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, cratekit.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel


class ScaffoldConfig(BaseModel):
    """[scaffold] section."""

    model_config = {"frozen": True}

    cargo: str = "cargo"
    manifest_name: str = "Cargo.toml"
    template: str | None = None
    check_exit: bool = True
