from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from mxm.flowchart.types import Direction, Position

__all__ = [
    "MIN_NODE_WIDTH",
    "NODE_HEIGHT",
    "Edge",
    "Graph",
    "Layout",
    "Node",
]

MIN_NODE_WIDTH = 5
NODE_HEIGHT = 3


# --- typed default factories -------------------------------------------------
def _empty_nodes() -> Mapping[str, Node]:
    return MappingProxyType({})


def _empty_edges() -> tuple[Edge, ...]:
    return ()


# --- model dataclasses -------------------------------------------------------
@dataclass(frozen=True)
class Node:
    id: str
    label: str
    width: int = MIN_NODE_WIDTH
    height: int = NODE_HEIGHT

    @classmethod
    def create(cls, id: str, label: str | None = None) -> Node:
        """
        Build a node whose box is sized to fit its label plus a 1-column border.

        Labels are measured in characters, one grid cell each. Double-width
        characters (CJK, emoji) therefore overflow the right border on screen.
        """
        text = label or id
        return cls(
            id=id,
            label=text,
            width=max(MIN_NODE_WIDTH, len(text) + 2),
            height=NODE_HEIGHT,
        )


@dataclass(frozen=True)
class Edge:
    source: str
    target: str


@dataclass(frozen=True)
class Graph:
    direction: Direction
    nodes: Mapping[str, Node] = field(default_factory=_empty_nodes)
    edges: tuple[Edge, ...] = field(default_factory=_empty_edges)

    def with_direction(self, direction: Direction) -> Graph:
        return replace(self, direction=direction)

    def successors(self) -> dict[str, list[str]]:
        """Adjacency lists keyed by node id (duplicates kept, one per edge)."""
        adj: dict[str, list[str]] = {n: [] for n in self.nodes}
        for edge in self.edges:
            adj.setdefault(edge.source, []).append(edge.target)
        return adj

    def in_degrees(self) -> dict[str, int]:
        indeg: dict[str, int] = {n: 0 for n in self.nodes}
        for edge in self.edges:
            indeg[edge.target] = indeg.get(edge.target, 0) + 1
        return indeg


@dataclass(frozen=True)
class Layout:
    graph: Graph
    layers: Mapping[str, int]
    positions: Mapping[str, Position]
