"""Artifact dependency graph.

The graph is rooted at the project's own artifact; an edge means "origin
depends on destination". Traversal visits every edge reachable from a start
node exactly once per expanded origin, so cyclic graphs terminate.

Usage:
    graph = ArtifactGraph(root=project_artifact)
    graph.add_edge(project_artifact, lib, group="compile")
    graph.add_edge(lib, util, group="runtime", optional=True)

    def visit(origin, destination, edge, depth) -> bool:
        print("  " * depth + str(destination))
        return True  # keep going

    graph.traverse(graph.root, include_optional=True, visitor=visit)
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from relgit.release.model import Artifact

__all__ = ["ArtifactGraph", "DependencyEdge", "Visitor"]


@dataclass(frozen=True, slots=True)
class DependencyEdge:
    group: str = "compile"
    optional: bool = False


Visitor = Callable[[Artifact, Artifact, DependencyEdge, int], bool]
"""Called as visitor(origin, destination, edge, depth); return False to stop."""


def _empty_edges() -> dict[Artifact, list[tuple[Artifact, DependencyEdge]]]:
    return {}


@dataclass
class ArtifactGraph:
    root: Artifact
    _edges: dict[Artifact, list[tuple[Artifact, DependencyEdge]]] = field(
        default_factory=_empty_edges, repr=False
    )

    def add_edge(
        self,
        origin: Artifact,
        destination: Artifact,
        *,
        group: str = "compile",
        optional: bool = False,
    ) -> None:
        edges = self._edges.setdefault(origin, [])
        for existing, edge in edges:
            if existing == destination and edge.group == group:
                return
        edges.append((destination, DependencyEdge(group=group, optional=optional)))

    def dependencies(self, origin: Artifact) -> Iterator[tuple[Artifact, DependencyEdge]]:
        """Direct (outgoing) edges of origin, in insertion order."""
        yield from self._edges.get(origin, ())

    def traverse(self, start: Artifact, include_optional: bool, visitor: Visitor) -> bool:
        """Visit every edge reachable from start, depth first.

        Optional edges (and everything only reachable through them) are skipped
        unless include_optional is set. Each node is expanded at most once.

        Returns:
            True if the traversal completed, False if the visitor stopped it.
        """
        visited: set[Artifact] = {start}
        stack: list[tuple[Artifact, int]] = [(start, 0)]

        while stack:
            origin, depth = stack.pop()
            pending: list[tuple[Artifact, int]] = []
            for destination, edge in self.dependencies(origin):
                if edge.optional and not include_optional:
                    continue
                if not visitor(origin, destination, edge, depth + 1):
                    return False
                if destination not in visited:
                    visited.add(destination)
                    pending.append((destination, depth + 1))
            # Reverse so the first declared dependency is expanded first.
            stack.extend(reversed(pending))

        return True
