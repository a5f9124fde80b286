"""
Parser for the supported flowchart subset.

Grammar (one statement per line, after the header)::

    flowchart LR|RL|TB|BT
    A[Label] --> B --> C[Other label]
    D[Standalone]

Directive lines (``subgraph``/``end``/``direction``/``classDef``/``class``/
``style``/``linkStyle``) are skipped: their nodes are still registered by the
statements inside the block, but grouping and styling are not modelled.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from types import MappingProxyType

from mxm.flowchart.errors import (
    EmptyInputError,
    FlowchartSyntaxError,
    NoNodesError,
    UnsupportedDiagramError,
)
from mxm.flowchart.model import Edge, Graph, Node
from mxm.flowchart.types import Direction

__all__ = ["EDGE_OPERATOR", "parse_flowchart"]

EDGE_OPERATOR = "-->"

_HEADER = re.compile(r"^flowchart\s+(LR|RL|TB|BT)$", re.IGNORECASE)
_NODE = re.compile(r"^(\w+)(?:\[(.*?)\])?$", re.ASCII)
_DIRECTIVE_PREFIXES = (
    "subgraph ",
    "direction ",
    "classdef ",
    "class ",
    "style ",
    "linkstyle ",
)

logger = logging.getLogger("mxm.flowchart.parser")


@dataclass(frozen=True)
class _SourceLine:
    text: str
    line_no: int


def _is_ignorable(line: str) -> bool:
    lower = line.lower()
    if not lower or lower.startswith("%%") or lower == "end":
        return True
    return lower.startswith(_DIRECTIVE_PREFIXES)


def _significant_lines(source: str) -> list[_SourceLine]:
    lines = source.replace("\r\n", "\n").split("\n")
    out: list[_SourceLine] = []
    for i, raw in enumerate(lines, start=1):
        text = raw.strip()
        if _is_ignorable(text):
            continue
        out.append(_SourceLine(text=text, line_no=i))
    return out


def _parse_node_ref(fragment: str, line_no: int) -> tuple[str, str | None]:
    """Return ``(id, explicit_label)``; the label is None when no bracket text is given."""
    match = _NODE.match(fragment)
    if match is None:
        raise FlowchartSyntaxError(line_no, fragment)
    node_id, label = match.group(1), match.group(2)
    return node_id, (label or None)


class _GraphBuilder:
    """Mutable accumulator used while reading lines; frozen into a Graph at the end."""

    def __init__(self, direction: Direction) -> None:
        self.direction = direction
        self.labels: dict[str, str] = {}
        self.edges: list[Edge] = []

    def add_node(self, node_id: str, label: str | None) -> None:
        if node_id not in self.labels:
            self.labels[node_id] = label or node_id
            return
        # Last explicit label wins; bare re-declarations keep the current one.
        if label is not None and label != node_id:
            self.labels[node_id] = label

    def add_edge(self, source: str, target: str) -> None:
        self.edges.append(Edge(source=source, target=target))

    def build(self) -> Graph:
        nodes = {
            node_id: Node.create(node_id, label)
            for node_id, label in self.labels.items()
        }
        return Graph(
            direction=self.direction,
            nodes=MappingProxyType(nodes),
            edges=tuple(self.edges),
        )


def parse_flowchart(source: str) -> Graph:
    """
    Parse flowchart source text into an immutable :class:`Graph`.

    Parameters
    ----------
    source : str
        Diagram text, typically the body of a fenced ``mermaid`` code block.

    Returns
    -------
    Graph
        Nodes keyed by id (sized to their labels) and edges in source order.

    Raises
    ------
    EmptyInputError
        If no significant lines remain after dropping blanks and comments.
    UnsupportedDiagramError
        If the first significant line is not a ``flowchart`` header.
    FlowchartSyntaxError
        If a statement does not match the node/edge grammar.
    NoNodesError
        If the header is followed by no node statements.
    """
    lines = _significant_lines(source)
    if not lines:
        raise EmptyInputError()

    header = _HEADER.match(lines[0].text)
    if header is None:
        raise UnsupportedDiagramError(lines[0].text)

    builder = _GraphBuilder(Direction(header.group(1).upper()))

    for line in lines[1:]:
        prev: str | None = None
        for part in line.text.split(EDGE_OPERATOR):
            node_id, label = _parse_node_ref(part.strip(), line.line_no)
            builder.add_node(node_id, label)
            if prev is not None:
                builder.add_edge(prev, node_id)
            prev = node_id

    if not builder.labels:
        raise NoNodesError()

    graph = builder.build()
    logger.debug(
        "parsed flowchart %s: %d nodes, %d edges",
        graph.direction.value,
        len(graph.nodes),
        len(graph.edges),
    )
    return graph
