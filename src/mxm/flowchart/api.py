"""
Public API for rendering flowcharts.

This module is the façade used by callers (CLI, markdown embedding, tests)
to go from source text to display rows without touching the individual
pipeline stages.

Layering:
- mxm.flowchart.parser : source text -> Graph
- mxm.flowchart.dag    : cycle gate + layer assignment
- mxm.flowchart.layout : coordinates
- mxm.flowchart.raster : character grid -> rows
- mxm.flowchart.api    : public façade (this module)
"""

from __future__ import annotations

import logging

from rich.cells import cell_len

from mxm.flowchart.dag import ensure_acyclic
from mxm.flowchart.layout import layout_graph
from mxm.flowchart.model import Graph, Layout
from mxm.flowchart.parser import parse_flowchart
from mxm.flowchart.raster import render_layout
from mxm.flowchart.types import Charset, RenderOptions

__all__ = [
    "RenderOptions",
    "layout_diagram",
    "render_diagram",
    "render_with_layout",
    "widest_line",
]

logger = logging.getLogger("mxm.flowchart.api")


def widest_line(lines: list[str]) -> int:
    """Terminal cell width of the widest row."""
    return max((cell_len(line) for line in lines), default=0)


def _parse_checked(source: str) -> Graph:
    graph = parse_flowchart(source)
    ensure_acyclic(graph)
    return graph


def layout_diagram(source: str) -> Layout:
    """
    Parse, validate and lay out a flowchart without rasterizing it.

    Raises
    ------
    FlowchartError
        Any parse or cycle error (see :mod:`mxm.flowchart.errors`).
    """
    return layout_graph(_parse_checked(source))


def render_diagram(
    source: str,
    options: RenderOptions | None = None,
) -> list[str]:
    """
    Render flowchart source into box-drawing rows.

    All validation happens before any layout work, so an invalid diagram
    never produces partial output.

    Parameters
    ----------
    source : str
        Flowchart text starting with a ``flowchart LR|RL|TB|BT`` header.
    options : RenderOptions | None
        ``max_width`` (0 = unlimited) and ``ascii`` (plain glyphs).
        When a horizontal diagram is wider than ``max_width`` it is redrawn
        top-to-bottom (LR -> TB, RL -> BT).

    Returns
    -------
    list[str]
        Display rows without styling; trailing spaces and blank edge rows
        are trimmed.

    Raises
    ------
    FlowchartError
        If the source is empty, not a supported flowchart, malformed, has no
        nodes, or contains a cycle.
    """
    _, lines = render_with_layout(source, options)
    return lines


def render_with_layout(
    source: str,
    options: RenderOptions | None = None,
) -> tuple[Layout, list[str]]:
    """
    Same as :func:`render_diagram`, also returning the layout that was drawn.

    The layout's graph carries the direction actually used, which differs
    from the header when the width fallback applied.
    """
    opts: RenderOptions = options or {}
    max_width = int(opts.get("max_width", 0))
    charset = Charset.ASCII if opts.get("ascii", False) else Charset.UNICODE

    graph = _parse_checked(source)
    layout = layout_graph(graph)
    lines = render_layout(layout, charset)

    if max_width > 0 and widest_line(lines) > max_width:
        fallback = graph.direction.vertical_fallback()
        if fallback is not None:
            logger.info(
                "diagram is %d columns wide (limit %d); switching %s -> %s",
                widest_line(lines),
                max_width,
                graph.direction.value,
                fallback.value,
            )
            layout = layout_graph(graph.with_direction(fallback))
            lines = render_layout(layout, charset)
    return layout, lines
