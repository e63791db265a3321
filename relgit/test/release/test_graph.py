from __future__ import annotations

from relgit.release.graph import ArtifactGraph, DependencyEdge
from relgit.release.model import Artifact, ArtifactId
from relgit.release.version import Version


def _a(name: str, version: str = "1.0.0") -> Artifact:
    major, minor, rest = version.split(".", 2)
    patch, _, pre = rest.partition("-")
    return Artifact(
        id=ArtifactId("org.example", name),
        version=Version(int(major), int(minor), int(patch), prerelease=pre or None),
    )


def _collect(graph: ArtifactGraph, *, include_optional: bool = True) -> list[tuple[str, str, int]]:
    seen: list[tuple[str, str, int]] = []

    def visit(origin: Artifact, destination: Artifact, edge: DependencyEdge, depth: int) -> bool:
        seen.append((origin.id.name, destination.id.name, depth))
        return True

    assert graph.traverse(graph.root, include_optional, visit) is True
    return seen


def test_visits_every_reachable_edge_with_depth() -> None:
    root, lib, util, log = _a("app"), _a("lib"), _a("util"), _a("log")
    graph = ArtifactGraph(root=root)
    graph.add_edge(root, lib)
    graph.add_edge(root, log)
    graph.add_edge(lib, util)

    assert _collect(graph) == [
        ("app", "lib", 1),
        ("app", "log", 1),
        ("lib", "util", 2),
    ]


def test_cycle_terminates() -> None:
    root, a, b = _a("app"), _a("a"), _a("b")
    graph = ArtifactGraph(root=root)
    graph.add_edge(root, a)
    graph.add_edge(a, b)
    graph.add_edge(b, a)
    graph.add_edge(b, root)

    edges = _collect(graph)
    assert ("b", "a", 3) in edges
    assert ("b", "app", 3) in edges
    assert len(edges) == 4


def test_shared_dependency_is_expanded_once() -> None:
    root, a, b, shared, leaf = _a("app"), _a("a"), _a("b"), _a("shared"), _a("leaf")
    graph = ArtifactGraph(root=root)
    graph.add_edge(root, a)
    graph.add_edge(root, b)
    graph.add_edge(a, shared)
    graph.add_edge(b, shared)
    graph.add_edge(shared, leaf)

    edges = _collect(graph)
    assert edges.count(("shared", "leaf", 3)) == 1
    assert ("b", "shared", 2) in edges


def test_visitor_can_stop_traversal() -> None:
    root, a, b, c = _a("app"), _a("a"), _a("b", "2.0.0-SNAPSHOT"), _a("c")
    graph = ArtifactGraph(root=root)
    graph.add_edge(root, a)
    graph.add_edge(a, b)
    graph.add_edge(b, c)

    visited: list[str] = []

    def visit(origin: Artifact, destination: Artifact, edge: DependencyEdge, depth: int) -> bool:
        visited.append(destination.id.name)
        return not destination.version.is_integration

    assert graph.traverse(root, True, visit) is False
    assert visited == ["a", "b"]


def test_optional_edges_skipped_unless_included() -> None:
    root, lib, opt, below = _a("app"), _a("lib"), _a("opt"), _a("below")
    graph = ArtifactGraph(root=root)
    graph.add_edge(root, lib)
    graph.add_edge(root, opt, group="provided", optional=True)
    graph.add_edge(opt, below)

    assert [e[1] for e in _collect(graph, include_optional=False)] == ["lib"]
    assert [e[1] for e in _collect(graph, include_optional=True)] == ["lib", "opt", "below"]


def test_duplicate_edges_are_ignored() -> None:
    root, lib = _a("app"), _a("lib")
    graph = ArtifactGraph(root=root)
    graph.add_edge(root, lib)
    graph.add_edge(root, lib)

    assert list(graph.dependencies(root)) == [(lib, DependencyEdge())]
