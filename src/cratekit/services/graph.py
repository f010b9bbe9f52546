"""Graph resolution and inspection."""

from __future__ import annotations

from pathlib import Path

from cratekit.domain.crates import DependencyGraph
from cratekit.domain.graph import dependency_count, graph_to_dict, mappings, missing_siblings
from cratekit.domain.template import TemplateError
from cratekit.infrastructure.templates import load_graph_template
from cratekit.services.result import ErrorCode, ServiceResult


def resolve_graph(project_base: str, template: str | Path | None = None) -> DependencyGraph:
    """Return the graph for *project_base*.

    Without *template* this is the built-in :func:`mappings`; otherwise the
    named or file-based graph template is loaded and bound to the base.
    Raises :class:`TemplateError` for unreadable templates.
    """
    if template is None:
        return mappings(project_base)
    return load_graph_template(template).build(project_base)


class GraphService:
    """Read-only view of the dependency graph a run would use."""

    @staticmethod
    def describe(project_base: str, *, template: str | Path | None = None) -> ServiceResult:
        op = "describe_graph"
        try:
            graph = resolve_graph(project_base, template)
        except TemplateError as exc:
            return ServiceResult.failure(op, ErrorCode.INVALID_TEMPLATE, str(exc))

        warnings = [
            f"Local dependency has no matching crate: {ref}"
            for ref in missing_siblings(graph, project_base)
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "project_base": project_base,
                "crate_count": len(graph),
                "dependency_count": dependency_count(graph),
                "crates": graph_to_dict(graph, project_base),
            },
            warnings=warnings,
        )
