from __future__ import annotations

from types import MappingProxyType

from mxm.flowchart.layout import layout_graph
from mxm.flowchart.model import Layout
from mxm.flowchart.parser import parse_flowchart
from mxm.flowchart.raster import ASCII_GLYPHS, Grid, render_layout, trim_blank_edges
from mxm.flowchart.types import Charset, Position


def _render(source: str, charset: Charset = Charset.UNICODE) -> list[str]:
    return render_layout(layout_graph(parse_flowchart(source)), charset)


def test_lr_golden(start_end_lr: str) -> None:
    assert _render(start_end_lr) == [
        "┌─────┐      ┌───┐",
        "│Start│─────▶│End│",
        "└─────┘      └───┘",
    ]


def test_rl_golden() -> None:
    assert _render("flowchart RL\nA --> B") == [
        "┌───┐      ┌───┐",
        "│ B │◀─────│ A │",
        "└───┘      └───┘",
    ]


def test_tb_golden() -> None:
    assert _render("flowchart TB\nA --> B") == [
        "┌───┐",
        "│ A │",
        "└───┘",
        "  │",
        "  │",
        "  ▼",
        "┌───┐",
        "│ B │",
        "└───┘",
    ]


def test_bt_golden() -> None:
    assert _render("flowchart BT\nA --> B") == [
        "┌───┐",
        "│ B │",
        "└───┘",
        "  ▲",
        "  │",
        "  │",
        "┌───┐",
        "│ A │",
        "└───┘",
    ]


def test_ascii_charset(start_end_lr: str) -> None:
    assert _render(start_end_lr, Charset.ASCII) == [
        "+-----+      +---+",
        "|Start|----->|End|",
        "+-----+      +---+",
    ]


def test_bent_lr_edge_reaches_lower_target() -> None:
    lines = _render("flowchart LR\nroot --> a\nroot --> b")

    assert "\n".join(lines).count("▶") == 2
    # Both edges leave "root" (row 4) and bend at column 8 towards rows 1 and 7.
    assert [line[8] for line in lines[1:8]] == ["┼", "│", "│", "┼", "│", "│", "┼"]


def test_fan_out_junction_becomes_a_crossing() -> None:
    lines = _render("flowchart TB\nA --> B\nA --> C")
    assert any("┼" in line for line in lines)
    assert "\n".join(lines).count("▼") == 2


def test_rows_have_no_trailing_whitespace() -> None:
    for line in _render("flowchart TB\nA --> B\nA --> C[Longer label]"):
        assert line == line.rstrip()


def test_edges_to_unpositioned_nodes_are_skipped() -> None:
    graph = parse_flowchart("flowchart LR\nA --> B")
    layout = Layout(
        graph=graph,
        layers=MappingProxyType({"A": 0}),
        positions=MappingProxyType({"A": Position(0, 0)}),
    )

    lines = render_layout(layout)

    assert lines == ["┌───┐", "│ A │", "└───┘"]


def test_grid_merges_crossing_edges_and_respects_locks() -> None:
    grid = Grid(5, 5)
    grid.put(0, 0, "X", lock=True)
    grid.hline(0, 4, 2)
    grid.vline(2, 0, 4)
    grid.put_edge(0, 0, "─")

    assert grid.get(2, 2) == "┼"
    assert grid.get(0, 0) == "X"
    assert grid.is_locked(0, 0)


def test_grid_ignores_spaces_and_out_of_bounds() -> None:
    grid = Grid(3, 1)
    grid.put(1, 0, "a")
    grid.put(1, 0, " ")
    grid.put(9, 9, "z")
    grid.put_edge(-1, 0, "─")

    assert grid.lines() == [" a"]


def test_arrowhead_overrides_edge_line() -> None:
    grid = Grid(3, 1)
    grid.hline(0, 2, 0)
    grid.put_edge(2, 0, "▶")

    assert grid.lines() == ["──▶"]


def test_ascii_grid_uses_plus_for_crossings() -> None:
    grid = Grid(3, 3, ASCII_GLYPHS)
    grid.hline(0, 2, 1)
    grid.vline(1, 0, 2)
    assert grid.lines() == [" |", "-+-", " |"]


def test_trim_keeps_interior_blank_rows() -> None:
    assert trim_blank_edges(["", "  ", "a", "", "b", " ", ""]) == ["a", "", "b"]
    assert trim_blank_edges(["", ""]) == []


def test_rl_fan_out_bends_between_layers() -> None:
    # The bend column (8) sits between the targets (x 0-4) and "root" (x 11-16).
    assert _render("flowchart RL\nroot --> a\nroot --> b") == [
        "┌───┐",
        "│ a │◀──┼",
        "└───┘   │",
        "        │  ┌────┐",
        "        ┼──│root│",
        "        │  └────┘",
        "┌───┐   │",
        "│ b │◀──┼",
        "└───┘",
    ]


def test_bt_fan_out_bends_between_layers() -> None:
    # The bend row (4) sits between the targets (y 0-2) and "A" (y 6-8).
    assert _render("flowchart BT\nA --> B\nA --> C") == [
        "┌───┐      ┌───┐",
        "│ B │      │ C │",
        "└───┘      └───┘",
        "  ▲          ▲",
        "  ┼────┼─────┼",
        "       │",
        "     ┌───┐",
        "     │ A │",
        "     └───┘",
    ]
