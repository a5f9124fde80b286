"""
Embedding of flowchart diagrams in markdown text.

A document viewer hands us fenced ``mermaid`` blocks; we hand back display
rows. A diagram we cannot render never breaks the document: the block falls
back to its source text under a one-line notice.
"""

from __future__ import annotations

from collections.abc import Iterator
import logging
import re

from rich.cells import cell_len

from mxm.flowchart.api import render_diagram, widest_line
from mxm.flowchart.errors import FlowchartError
from mxm.flowchart.types import RenderOptions

__all__ = ["FALLBACK_NOTICE", "render_markdown", "render_mermaid_block"]

FALLBACK_NOTICE = "Mermaid not supported in this format; showing source."

_FENCE = re.compile(r"^(?P<indent>\s*)(?P<fence>`{3,}|~{3,})\s*(?P<info>.*)$")

logger = logging.getLogger("mxm.flowchart.markdown")


def _center(lines: list[str], prefix: str, width: int) -> list[str]:
    """Shift the whole diagram by one pad so rows stay aligned with each other."""
    content_width = width - cell_len(prefix)
    pad = (content_width - widest_line(lines)) // 2
    if pad <= 0:
        return [prefix + line for line in lines]
    indent = " " * pad
    return [prefix + indent + line if line else prefix for line in lines]


def render_mermaid_block(
    source: str,
    width: int = 0,
    prefix: str = "",
    ascii: bool = False,
) -> list[str]:
    """
    Render one fenced ``mermaid`` block for display.

    Parameters
    ----------
    source : str
        Block body (without the fences).
    width : int
        Display columns available including ``prefix``; 0 disables both the
        width fallback and centring.
    prefix : str
        Text prepended to every row (e.g. blockquote or list indentation).
    ascii : bool
        Draw with plain ASCII glyphs.

    Returns
    -------
    list[str]
        Opening fence, diagram (or notice + source) rows, closing fence.
    """
    out = [prefix + "```mermaid"]
    options: RenderOptions = {"ascii": ascii}
    if width > 0:
        options["max_width"] = width - cell_len(prefix)
    try:
        diagram = render_diagram(source, options)
    except FlowchartError as exc:
        logger.debug("falling back to source: %s", exc)
        out.append(prefix + FALLBACK_NOTICE)
        out.extend(prefix + line for line in source.splitlines())
    else:
        if width > 0:
            out.extend(_center(diagram, prefix, width))
        else:
            out.extend(prefix + line for line in diagram)
    out.append(prefix + "```")
    return out


def _blocks(lines: list[str]) -> Iterator[tuple[str, str, str, list[str]]]:
    """
    Yield ``(kind, indent, info, body)`` segments.

    ``kind`` is ``"text"`` for a single pass-through line, ``"raw"`` for a
    non-mermaid fenced block (body holds its original lines) or ``"fence"``
    for a mermaid block (body holds the dedented content). An unterminated
    fence runs to the end of input.
    """
    i = 0
    while i < len(lines):
        match = _FENCE.match(lines[i])
        if match is None:
            yield "text", "", "", [lines[i]]
            i += 1
            continue
        fence = match.group("fence")
        indent = match.group("indent")
        body: list[str] = []
        raw = [lines[i]]
        i += 1
        closed = False
        while i < len(lines):
            line = lines[i]
            raw.append(line)
            i += 1
            stripped = line.strip()
            if stripped.startswith(fence[0] * len(fence)) and not stripped.strip(fence[0]):
                closed = True
                break
            body.append(line[len(indent):] if line.startswith(indent) else line.lstrip())
        info = match.group("info").strip()
        if info.split(" ", 1)[0].lower() != "mermaid":
            yield "raw", "", "", raw
            continue
        if not closed:
            logger.debug("unterminated mermaid fence")
        yield "fence", indent, info, body


def render_markdown(text: str, width: int = 0, ascii: bool = False) -> list[str]:
    """
    Pass a markdown document through, rendering every ``mermaid`` fence.

    Only fenced blocks whose info string starts with ``mermaid``
    (case-insensitive) are touched; everything else is returned line for line.
    """
    out: list[str] = []
    for kind, indent, _info, body in _blocks(text.splitlines()):
        if kind == "fence":
            out.extend(
                render_mermaid_block("\n".join(body), width=width, prefix=indent, ascii=ascii)
            )
        else:
            out.extend(body)
    return out
