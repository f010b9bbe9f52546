"""CrateSettings: global flags and the ``[scaffold]`` section in one object.

Sources, highest priority first:

1. CLI flags that were actually given
2. ``CRATEKIT_*`` environment variables (``CRATEKIT_SCAFFOLD__CARGO=...``)
3. ``cratekit.toml``
4. defaults on the models
"""

from __future__ import annotations

import tomllib
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, InitSettingsSource, PydanticBaseSettingsSource

from cratekit.config.discovery import find_config
from cratekit.config.models import ScaffoldConfig


def read_config(path: Path | None) -> dict[str, Any]:
    """Parse *path* as TOML. No path reads as an empty config."""
    if path is None:
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc


class CrateSettings(BaseSettings):
    """Settings for one cratekit invocation.

    ``config_path`` is the file the TOML layer was read from; the file
    itself is loaded in :meth:`settings_customise_sources`.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CRATEKIT_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    dry_run: bool = False

    scaffold: ScaffoldConfig = Field(default_factory=ScaffoldConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        init_kwargs = getattr(init_settings, "init_kwargs", {})
        config = read_config(init_kwargs.get("config_path"))
        return (
            init_settings,
            env_settings,
            InitSettingsSource(settings_cls, init_kwargs=config),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        search_from: Iterable[Path] = (),
        **cli_flags: Any,
    ) -> CrateSettings:
        """Build settings for a command.

        An explicit *config_path* is used only if it exists. Otherwise
        ``cratekit.toml`` is looked up from each of *search_from* in order,
        then from the cwd if none is given.
        """
        if config_path:
            path: Path | None = Path(config_path)
            if not path.is_file():
                path = None
        else:
            path = find_config(*search_from)
        return cls(config_path=path, **cli_flags)
