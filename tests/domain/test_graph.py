"""Tests for the built-in dependency graph."""

from __future__ import annotations

import pytest

from cratekit.domain.crates import Crate, CrateKind, LocalDependency, RemoteDependency, local
from cratekit.domain.graph import dependency_count, graph_to_dict, mappings, missing_siblings
from tests.conftest import EXPECTED_CRATES


class TestMappings:
    @pytest.mark.parametrize("base", ["demo", "shop", "a-b"])
    def test_seven_crates(self, base: str) -> None:
        graph = mappings(base)
        assert len(graph) == 7
        assert {crate.name for crate in graph} == EXPECTED_CRATES

    def test_only_api_is_binary(self) -> None:
        bins = [crate for crate in mappings("demo") if crate.kind is CrateKind.BIN]
        assert bins == [Crate.bin("api")]

    @pytest.mark.parametrize("base", ["demo", "shop"])
    def test_local_paths_use_base(self, base: str) -> None:
        for deps in mappings(base).values():
            for dep in deps:
                if isinstance(dep, LocalDependency):
                    assert dep.path.startswith(f"../{base}-")
                    assert dep.path.removeprefix(f"../{base}-") in EXPECTED_CRATES

    def test_pure(self) -> None:
        first = mappings("shop")
        second = mappings("shop")
        assert list(first) == list(second)
        assert first == second

    def test_kernel_has_no_local_dependencies(self) -> None:
        deps = mappings("shop")[Crate.lib("kernel")]
        assert all(isinstance(dep, RemoteDependency) for dep in deps)

    def test_rs_dependencies_in_order(self) -> None:
        deps = mappings("shop")[Crate.lib("rs")]
        assert deps[0] == local("shop", "http")
        assert [d.name for d in deps[1:] if isinstance(d, RemoteDependency)] == [
            "reqwest",
            "tracing",
            "url",
        ]

    def test_api_axum_features(self) -> None:
        deps = mappings("shop")[Crate.bin("api")]
        axum = next(d for d in deps if isinstance(d, RemoteDependency) and d.name == "axum")
        assert axum.feature_arg == (
            "http1,json,macros,matched-path,original-uri,tower-log,query"
        )

    def test_dependency_count(self) -> None:
        assert dependency_count(mappings("shop")) == 44


class TestMissingSiblings:
    def test_builtin_graph_is_closed(self) -> None:
        assert missing_siblings(mappings("shop"), "shop") == []

    def test_reports_dangling_reference(self) -> None:
        graph = {Crate.lib("http"): [local("shop", "kernel")]}
        assert missing_siblings(graph, "shop") == ["shop-http -> shop-kernel"]


class TestGraphToDict:
    def test_keyed_by_full_name(self) -> None:
        data = graph_to_dict(mappings("shop"), "shop")
        assert set(data) == {f"shop-{name}" for name in EXPECTED_CRATES}
        assert data["shop-api"]["kind"] == "bin"
        assert data["shop-kernel"]["dependencies"][0] == {
            "kind": "remote",
            "name": "async-trait",
        }
