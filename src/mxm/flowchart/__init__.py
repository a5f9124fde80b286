"""
Public API for mxm-flowchart.
"""

from .api import layout_diagram, render_diagram, render_with_layout
from .errors import (
    CycleError,
    EmptyInputError,
    FlowchartError,
    FlowchartSyntaxError,
    NoNodesError,
    UnsupportedDiagramError,
)
from .markdown import render_markdown, render_mermaid_block
from .model import Edge, Graph, Layout, Node
from .types import Charset, Direction, Position, RenderOptions

__all__ = [
    "Charset",
    "CycleError",
    "Direction",
    "Edge",
    "EmptyInputError",
    "FlowchartError",
    "FlowchartSyntaxError",
    "Graph",
    "Layout",
    "NoNodesError",
    "Node",
    "Position",
    "RenderOptions",
    "UnsupportedDiagramError",
    "layout_diagram",
    "render_diagram",
    "render_markdown",
    "render_mermaid_block",
    "render_with_layout",
]
