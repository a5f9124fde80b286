from __future__ import annotations

from bisect import insort
from collections import deque
import logging

from mxm.flowchart.errors import CycleError
from mxm.flowchart.model import Graph

__all__ = ["assign_layers", "ensure_acyclic", "has_cycle"]

logger = logging.getLogger("mxm.flowchart.dag")


def has_cycle(graph: Graph) -> bool:
    """Return True if Kahn's algorithm cannot remove every node."""
    indeg = graph.in_degrees()
    children = graph.successors()

    frontier: deque[str] = deque(sorted(n for n, d in indeg.items() if d == 0))
    removed = 0

    while frontier:
        n = frontier.popleft()
        removed += 1
        for v in children.get(n, []):
            indeg[v] -= 1
            if indeg[v] == 0:
                frontier.append(v)

    return removed != len(graph.nodes)


def ensure_acyclic(graph: Graph) -> None:
    """Raise :class:`CycleError` if the graph is not a DAG."""
    if has_cycle(graph):
        raise CycleError()


def assign_layers(graph: Graph) -> dict[str, int]:
    """
    Longest-path layering of an acyclic graph.

    Sources get layer 0 and every other node sits one layer past its deepest
    predecessor. The ready queue and each node's successors are processed in
    sorted id order so the result does not depend on insertion order.

    Parameters
    ----------
    graph : Graph
        Acyclic graph (call :func:`ensure_acyclic` first).

    Returns
    -------
    dict[str, int]
        Layer index for every node id.
    """
    indeg = graph.in_degrees()
    children = graph.successors()

    ready: list[str] = sorted(n for n, d in indeg.items() if d == 0)
    layer: dict[str, int] = {n: 0 for n in graph.nodes}

    while ready:
        n = ready.pop(0)
        for v in sorted(children.get(n, [])):
            layer[v] = max(layer[v], layer[n] + 1)
            indeg[v] -= 1
            if indeg[v] == 0:
                insort(ready, v)

    logger.debug("assigned %d layers", max(layer.values(), default=-1) + 1)
    return layer
