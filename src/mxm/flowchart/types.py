"""
Lightweight types for mxm-flowchart.

This module intentionally contains *only* small value types (enums,
TypedDicts, NamedTuples) so the parser, layout and rasterizer can share them
without importing each other.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, TypedDict

__all__ = ["Charset", "Direction", "Position", "RenderOptions"]


class Direction(str, Enum):
    """Overall flow direction declared by the flowchart header."""

    LR = "LR"
    RL = "RL"
    TB = "TB"
    BT = "BT"

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LR, Direction.RL)

    @property
    def is_reversed(self) -> bool:
        """True when the first layer is drawn last (right or bottom)."""
        return self in (Direction.RL, Direction.BT)

    def vertical_fallback(self) -> Direction | None:
        """
        Return the vertical direction used when a horizontal diagram is too wide.

        TB and BT have no fallback.
        """
        match self:
            case Direction.LR:
                return Direction.TB
            case Direction.RL:
                return Direction.BT
            case _:
                return None


class Charset(str, Enum):
    UNICODE = "unicode"
    ASCII = "ascii"


class Position(NamedTuple):
    x: int
    y: int


class RenderOptions(TypedDict, total=False):
    """
    Rendering options accepted by :func:`mxm.flowchart.api.render_diagram`.

    Attributes
    ----------
    max_width : int
        Available terminal columns. When a horizontal diagram is wider, it is
        re-laid out vertically. ``0`` (default) means unlimited.
    ascii : bool
        If True, draw with plain ASCII glyphs instead of box-drawing characters.
    """

    max_width: int
    ascii: bool
