"""Filesystem helpers for workspace materialization."""

from __future__ import annotations

from pathlib import Path

import structlog

log = structlog.get_logger(__name__)


class WorkspacePathError(ValueError):
    """A path cannot be represented as text for use in a command line."""


def path_text(path: Path, *, what: str) -> str:
    """Return *path* as a UTF-8 representable string.

    Paths decoded from undecodable bytes carry surrogate escapes; those
    cannot be passed on as text and raise :class:`WorkspacePathError`.
    """
    text = str(path)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        msg = f"unable to make {what}"
        raise WorkspacePathError(msg) from exc
    return text


def write_if_absent(path: Path, content: bytes) -> bool:
    """Create *path* with *content* unless it cannot be created.

    Returns False without writing when the file already exists or cannot
    be created at all (read-only location, missing parent). Once the file
    is created, a failed write propagates.
    """
    try:
        fh = path.open("xb")
    except OSError as exc:
        log.debug("file.skipped", path=str(path), reason=exc.strerror or str(exc))
        return False
    with fh:
        fh.write(content)
    return True
