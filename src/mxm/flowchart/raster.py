"""
Character-grid rasterizer for positioned flowcharts.

Boxes and labels are drawn first and *locked*; edges are routed afterwards as
orthogonal paths and can only write into free or edge-owned cells. Where a
horizontal and a vertical segment meet, the cell becomes a crossing glyph.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging

from mxm.flowchart.model import Layout, Node
from mxm.flowchart.types import Charset, Direction, Position

__all__ = ["ASCII_GLYPHS", "UNICODE_GLYPHS", "Glyphs", "Grid", "render_layout"]

GRID_MARGIN = 2

logger = logging.getLogger("mxm.flowchart.raster")


@dataclass(frozen=True)
class Glyphs:
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    horizontal: str
    vertical: str
    cross: str
    arrow_right: str
    arrow_left: str
    arrow_down: str
    arrow_up: str

    @property
    def arrows(self) -> frozenset[str]:
        return frozenset(
            (self.arrow_right, self.arrow_left, self.arrow_down, self.arrow_up)
        )

    def arrow_for(self, direction: Direction) -> str:
        match direction:
            case Direction.LR:
                return self.arrow_right
            case Direction.RL:
                return self.arrow_left
            case Direction.TB:
                return self.arrow_down
            case Direction.BT:
                return self.arrow_up


UNICODE_GLYPHS = Glyphs("┌", "┐", "└", "┘", "─", "│", "┼", "▶", "◀", "▼", "▲")
ASCII_GLYPHS = Glyphs("+", "+", "+", "+", "-", "|", "+", ">", "<", "v", "^")


def glyphs_for(charset: Charset) -> Glyphs:
    return ASCII_GLYPHS if charset is Charset.ASCII else UNICODE_GLYPHS


class Grid:
    """A fixed-size character buffer owned by a single render call."""

    def __init__(self, width: int, height: int, glyphs: Glyphs = UNICODE_GLYPHS):
        self.width = width
        self.height = height
        self.glyphs = glyphs
        self._rows: list[list[str]] = [[" "] * width for _ in range(height)]
        self._locked: list[list[bool]] = [[False] * width for _ in range(height)]

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> str:
        return self._rows[y][x] if self._inside(x, y) else " "

    def is_locked(self, x: int, y: int) -> bool:
        return self._inside(x, y) and self._locked[y][x]

    def put(self, x: int, y: int, ch: str, lock: bool = False) -> None:
        """Write unconditionally; spaces never erase existing content."""
        if not self._inside(x, y) or ch == " ":
            return
        self._rows[y][x] = ch
        if lock:
            self._locked[y][x] = True

    def put_edge(self, x: int, y: int, ch: str) -> None:
        """Write an edge glyph, merging with edge glyphs already in the cell."""
        if not self._inside(x, y) or ch == " ":
            return
        current = self._rows[y][x]
        if current == " ":
            self._rows[y][x] = ch
            return
        if self._locked[y][x]:
            return
        if ch in self.glyphs.arrows:
            self._rows[y][x] = ch
            return
        merged = self._merge(current, ch)
        if merged is not None:
            self._rows[y][x] = merged

    def _merge(self, current: str, new: str) -> str | None:
        g = self.glyphs
        if current == new:
            return current
        horizontal = current in (g.horizontal, g.cross) or new == g.horizontal
        vertical = current in (g.vertical, g.cross) or new == g.vertical
        if horizontal and vertical:
            return g.cross
        if horizontal:
            return g.horizontal
        if vertical:
            return g.vertical
        return None

    def hline(self, start: int, end: int, y: int) -> None:
        lo, hi = sorted((start, end))
        for x in range(lo, hi + 1):
            self.put_edge(x, y, self.glyphs.horizontal)

    def vline(self, x: int, start: int, end: int) -> None:
        lo, hi = sorted((start, end))
        for y in range(lo, hi + 1):
            self.put_edge(x, y, self.glyphs.vertical)

    def lines(self) -> list[str]:
        """Rows with trailing spaces removed and blank leading/trailing rows dropped."""
        return trim_blank_edges(["".join(row).rstrip(" ") for row in self._rows])


def trim_blank_edges(lines: list[str]) -> list[str]:
    start = 0
    end = len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]


def _midpoint(start: int, end: int) -> int:
    """Bend coordinate between two anchors, at least one cell past ``start``."""
    offset = max(1, abs(end - start) // 2)
    return start + offset if end >= start else start - offset


def draw_node(grid: Grid, node: Node, pos: Position) -> None:
    g = grid.glyphs
    x, y, w, h = pos.x, pos.y, node.width, node.height
    grid.put(x, y, g.top_left, lock=True)
    grid.put(x + w - 1, y, g.top_right, lock=True)
    grid.put(x, y + h - 1, g.bottom_left, lock=True)
    grid.put(x + w - 1, y + h - 1, g.bottom_right, lock=True)
    for i in range(1, w - 1):
        grid.put(x + i, y, g.horizontal, lock=True)
        grid.put(x + i, y + h - 1, g.horizontal, lock=True)
    for i in range(1, h - 1):
        grid.put(x, y + i, g.vertical, lock=True)
        grid.put(x + w - 1, y + i, g.vertical, lock=True)

    label_x = x + max(1, (w - len(node.label)) // 2)
    for i, ch in enumerate(node.label):
        grid.put(label_x + i, y + 1, ch, lock=True)


def _anchors(
    source: Node,
    src: Position,
    target: Node,
    dst: Position,
    direction: Direction,
) -> tuple[int, int, int, int]:
    """Return ``(start_x, start_y, end_x, end_y)`` just outside both boxes."""
    match direction:
        case Direction.LR:
            return src.x + source.width, src.y + 1, dst.x - 1, dst.y + 1
        case Direction.RL:
            return src.x - 1, src.y + 1, dst.x + target.width, dst.y + 1
        case Direction.TB:
            return (
                src.x + source.width // 2,
                src.y + source.height,
                dst.x + target.width // 2,
                dst.y - 1,
            )
        case Direction.BT:
            return (
                src.x + source.width // 2,
                src.y - 1,
                dst.x + target.width // 2,
                dst.y + target.height,
            )


def draw_edge(
    grid: Grid,
    source: Node,
    src: Position,
    target: Node,
    dst: Position,
    direction: Direction,
) -> None:
    start_x, start_y, end_x, end_y = _anchors(source, src, target, dst, direction)
    arrow = grid.glyphs.arrow_for(direction)

    if direction.is_horizontal:
        if start_y == end_y:
            grid.hline(start_x, end_x, start_y)
        else:
            mid_x = _midpoint(start_x, end_x)
            grid.hline(start_x, mid_x, start_y)
            grid.vline(mid_x, start_y, end_y)
            grid.hline(mid_x, end_x, end_y)
        grid.put_edge(end_x, end_y, arrow)
        return

    if abs(start_x - end_x) <= 1:
        column = min(start_x, end_x)
        grid.vline(column, start_y, end_y)
        grid.put_edge(column, end_y, arrow)
        return
    mid_y = _midpoint(start_y, end_y)
    grid.vline(start_x, start_y, mid_y)
    grid.hline(start_x, end_x, mid_y)
    grid.vline(end_x, mid_y, end_y)
    grid.put_edge(end_x, end_y, arrow)


def render_layout(layout: Layout, charset: Charset = Charset.UNICODE) -> list[str]:
    """
    Rasterize a laid-out graph into display rows.

    Edges whose endpoints have no position are skipped.
    """
    graph = layout.graph
    positions = layout.positions
    max_x = 0
    max_y = 0
    for node_id, pos in positions.items():
        node = graph.nodes[node_id]
        max_x = max(max_x, pos.x + node.width)
        max_y = max(max_y, pos.y + node.height)

    grid = Grid(max_x + GRID_MARGIN, max_y + GRID_MARGIN, glyphs_for(charset))
    logger.debug("grid %dx%d", grid.width, grid.height)

    for node_id in sorted(positions):
        draw_node(grid, graph.nodes[node_id], positions[node_id])

    for edge in graph.edges:
        src = positions.get(edge.source)
        dst = positions.get(edge.target)
        if src is None or dst is None:
            logger.debug("skipping edge %s -> %s without position", edge.source, edge.target)
            continue
        draw_edge(
            grid,
            graph.nodes[edge.source],
            src,
            graph.nodes[edge.target],
            dst,
            graph.direction,
        )

    return grid.lines()
