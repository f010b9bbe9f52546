"""Locate the ``cratekit.toml`` that applies to a run.

A workspace location is searched before the cwd, so a config kept next to
the workspaces it describes applies wherever ``cratekit`` is invoked from.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "cratekit.toml"
CONFIG_ENV_VAR = "CRATEKIT_CONFIG"


def config_candidates(start: Path) -> Iterator[Path]:
    """Yield ``cratekit.toml`` paths from *start* up to the filesystem root.

    *start* need not exist yet; ``new`` is usually pointed at a directory
    it is about to create.
    """
    start = start.expanduser().resolve()
    for directory in (start, *start.parents):
        yield directory / CONFIG_FILENAME


def find_config(*starts: Path) -> Path | None:
    """Return the config file for a run, or None.

    ``CRATEKIT_CONFIG`` names the file outright. Otherwise each of *starts*
    (default: the cwd) is searched upward in turn and the first hit wins.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    for start in starts or (Path.cwd(),):
        for candidate in config_candidates(start):
            if candidate.is_file():
                return candidate
    return None
