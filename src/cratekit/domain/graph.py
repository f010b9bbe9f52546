"""The layered workspace template as a dependency graph.

Layers, bottom to top: kernel -> repository -> postgres/services -> http
-> rs/api. Each crate depends on a fixed set of registry packages plus its
siblings from lower layers.
"""

from __future__ import annotations

from cratekit.domain.crates import (
    Crate,
    DependencyGraph,
    LocalDependency,
    crate_full_name,
    local,
    remote,
)


def mappings(project_base: str) -> DependencyGraph:
    """Build the dependency graph for *project_base*.

    Pure: the same base always yields the same keys and ordered lists.
    Sibling references are not checked; see :func:`missing_siblings`.
    """

    def sib(name: str) -> LocalDependency:
        return local(project_base, name)

    async_trait = remote("async-trait")
    chrono = remote("chrono", "serde")
    tokio = remote("tokio", "full")
    tracing = remote("tracing")
    uuid = remote("uuid", "serde", "v4")

    return {
        Crate.lib("rs"): [
            sib("http"),
            remote("reqwest", "json"),
            tracing,
            remote("url", "serde"),
        ],
        Crate.lib("http"): [
            sib("kernel"),
            chrono,
            remote("serde", "derive"),
            remote("serde_json", "derive"),
            uuid,
        ],
        Crate.bin("api"): [
            sib("http"),
            sib("kernel"),
            sib("postgres"),
            sib("repository"),
            async_trait,
            remote(
                "axum",
                "http1",
                "json",
                "macros",
                "matched-path",
                "original-uri",
                "tower-log",
                "query",
            ),
            remote("axum-macros"),
            remote("axum-test"),
            tokio,
            remote("tower-http", "cors"),
            tracing,
            uuid,
        ],
        Crate.lib("kernel"): [
            async_trait,
            chrono,
            tracing,
            uuid,
        ],
        Crate.lib("services"): [
            sib("kernel"),
            sib("repository"),
            async_trait,
            tokio,
            chrono,
            tracing,
            uuid,
        ],
        Crate.lib("repository"): [
            sib("kernel"),
            async_trait,
            chrono,
            tracing,
            uuid,
        ],
        Crate.lib("postgres"): [
            sib("repository"),
            async_trait,
            chrono,
            remote(
                "sqlx",
                "chrono",
                "migrate",
                "postgres",
                "runtime-tokio-rustls",
                "uuid",
            ),
            tokio,
            tracing,
            uuid,
        ],
    }


def dependency_count(graph: DependencyGraph) -> int:
    """Total number of ``cargo add`` invocations the graph implies."""
    return sum(len(deps) for deps in graph.values())


def missing_siblings(graph: DependencyGraph, project_base: str) -> list[str]:
    """Local references whose target crate is not a key of *graph*.

    Returned as ``"{crate} -> {sibling}"`` strings, in graph order.
    """
    known = {crate.full_name(project_base) for crate in graph}
    missing: list[str] = []
    for crate, deps in graph.items():
        for dep in deps:
            if isinstance(dep, LocalDependency) and dep.crate_name not in known:
                missing.append(f"{crate_full_name(project_base, crate.name)} -> {dep.crate_name}")
    return missing


def graph_to_dict(graph: DependencyGraph, project_base: str) -> dict[str, object]:
    """JSON-friendly view of *graph*, keyed by full crate name."""
    return {
        crate.full_name(project_base): {
            "kind": crate.kind.value,
            "dependencies": [dep.model_dump(exclude_none=True) for dep in deps],
        }
        for crate, deps in graph.items()
    }
