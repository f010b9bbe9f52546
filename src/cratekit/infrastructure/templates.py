"""Packaged resources: the workspace manifest and graph templates."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, PackageLoader, TemplateNotFound

from cratekit.domain.template import GraphTemplate, TemplateError

WORKSPACE_MANIFEST = "Cargo.toml"
DEFAULT_GRAPH = "layered"

_env = Environment(keep_trailing_newline=True)


def _packaged_source(group: str, name: str) -> tuple[str, str]:
    """Return ``(text, filename)`` for a file under ``templates/<group>/``."""
    loader = PackageLoader("cratekit", f"templates/{group}")
    source, filename, _ = loader.get_source(_env, name)
    return source, filename or name


def workspace_manifest() -> bytes:
    """Return the root workspace manifest exactly as packaged.

    The file is written verbatim; it is never rendered.
    """
    source, _ = _packaged_source("workspace", WORKSPACE_MANIFEST)
    return source.encode("utf-8")


def is_template_path(ref: str | Path) -> bool:
    """A ref naming a file: a Path, anything with a separator, or a ``.toml`` suffix."""
    if isinstance(ref, Path):
        return True
    return "/" in ref or "\\" in ref or ref.endswith(".toml")


def load_graph_template(ref: str | Path | None = None) -> GraphTemplate:
    """Load a graph template by file path or packaged name.

    File refs (see :func:`is_template_path`) are read from disk and never
    fall back to a packaged template. Bare names look under
    ``templates/graphs/`` (default ``layered``).
    """
    ref = ref or DEFAULT_GRAPH
    if is_template_path(ref):
        path = Path(ref)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            msg = f"Graph template not found: {path}"
            raise TemplateError(msg) from exc
        except OSError as exc:
            msg = f"Cannot read graph template {path}: {exc}"
            raise TemplateError(msg) from exc
        return GraphTemplate.from_toml(text, source=str(path))

    try:
        source, filename = _packaged_source("graphs", f"{ref}.toml")
    except TemplateNotFound as exc:
        msg = f"Graph template not found: {ref}"
        raise TemplateError(msg) from exc
    return GraphTemplate.from_toml(source, source=filename)
