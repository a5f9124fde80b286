"""
Coordinate assignment for layered flowcharts.

Layers become bands along the flow axis (columns for LR/RL, rows for TB/BT).
Inside a band nodes are stacked across the flow axis in id order, and each
band is centred against the largest one.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from mxm.flowchart.dag import assign_layers
from mxm.flowchart.model import MIN_NODE_WIDTH, NODE_HEIGHT, Graph, Layout, Node
from mxm.flowchart.types import Position

__all__ = ["HORIZONTAL_GAP", "VERTICAL_GAP", "assign_coordinates", "layout_graph"]

HORIZONTAL_GAP = 6
VERTICAL_GAP = 3


def _group_by_layer(graph: Graph, layers: Mapping[str, int]) -> list[list[Node]]:
    depth = max(layers.values(), default=0) + 1
    groups: list[list[Node]] = [[] for _ in range(depth)]
    for node_id, node in graph.nodes.items():
        groups[layers.get(node_id, 0)].append(node)
    for group in groups:
        group.sort(key=lambda n: n.id)
    return groups


def _cross_extent(nodes: list[Node], horizontal: bool) -> int:
    """Size of a layer across the flow axis, gaps included."""
    if not nodes:
        return 0
    if horizontal:
        return sum(n.height for n in nodes) + (len(nodes) - 1) * VERTICAL_GAP
    return sum(n.width for n in nodes) + (len(nodes) - 1) * HORIZONTAL_GAP


def assign_coordinates(
    graph: Graph,
    layers: Mapping[str, int],
) -> dict[str, Position]:
    """
    Map every node to the top-left character cell of its box.

    Parameters
    ----------
    graph : Graph
        Parsed graph; node sizes are read, never written.
    layers : Mapping[str, int]
        Output of :func:`mxm.flowchart.dag.assign_layers`.

    Returns
    -------
    dict[str, Position]
        Position per node id.
    """
    direction = graph.direction
    horizontal = direction.is_horizontal
    groups = _group_by_layer(graph, layers)
    extents = [_cross_extent(g, horizontal) for g in groups]
    largest = max(extents, default=0)

    order = list(range(len(groups)))
    if direction.is_reversed:
        order.reverse()

    positions: dict[str, Position] = {}
    along = 0
    for index in order:
        across = max(0, (largest - extents[index]) // 2)
        if horizontal:
            band = MIN_NODE_WIDTH
            for node in groups[index]:
                positions[node.id] = Position(x=along, y=across)
                across += node.height + VERTICAL_GAP
                band = max(band, node.width)
            along += band + HORIZONTAL_GAP
        else:
            band = NODE_HEIGHT
            for node in groups[index]:
                positions[node.id] = Position(x=across, y=along)
                across += node.width + HORIZONTAL_GAP
                band = max(band, node.height)
            along += band + VERTICAL_GAP
    return positions


def layout_graph(graph: Graph) -> Layout:
    """Run layering and coordinate assignment for an acyclic graph."""
    layers = assign_layers(graph)
    positions = assign_coordinates(graph, layers)
    return Layout(
        graph=graph,
        layers=MappingProxyType(layers),
        positions=MappingProxyType(positions),
    )
