"""
Error taxonomy for mxm-flowchart.

Every failure is detected before layout starts and surfaces as a subclass of
:class:`FlowchartError`. It derives from ``ValueError`` because all of them
describe invalid input.
"""

from __future__ import annotations

__all__ = [
    "CycleError",
    "EmptyInputError",
    "FlowchartError",
    "FlowchartSyntaxError",
    "NoNodesError",
    "UnsupportedDiagramError",
]


class FlowchartError(ValueError):
    """Base class for every diagram failure."""


class EmptyInputError(FlowchartError):
    def __init__(self) -> None:
        super().__init__("empty mermaid content")


class UnsupportedDiagramError(FlowchartError):
    def __init__(self, header: str) -> None:
        super().__init__("only flowchart LR/RL/TB/BT is supported")
        self.header = header


class FlowchartSyntaxError(FlowchartError):
    """A node or edge statement outside the supported grammar."""

    def __init__(self, line: int, fragment: str) -> None:
        super().__init__(f"line {line}: unsupported syntax {fragment!r}")
        self.line = line
        self.fragment = fragment


class NoNodesError(FlowchartError):
    def __init__(self) -> None:
        super().__init__("no nodes found in mermaid flowchart")


class CycleError(FlowchartError):
    def __init__(self) -> None:
        super().__init__("cyclic graphs are not supported yet")
