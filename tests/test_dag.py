from __future__ import annotations

import pytest

from mxm.flowchart.dag import assign_layers, ensure_acyclic, has_cycle
from mxm.flowchart.errors import CycleError
from mxm.flowchart.parser import parse_flowchart


def test_acyclic_chain_has_no_cycle() -> None:
    graph = parse_flowchart("flowchart LR\nA --> B --> C")
    assert has_cycle(graph) is False
    ensure_acyclic(graph)


def test_two_node_cycle_is_rejected() -> None:
    graph = parse_flowchart("flowchart LR\nA --> B\nB --> A")

    assert has_cycle(graph) is True
    with pytest.raises(CycleError) as err:
        ensure_acyclic(graph)
    assert "not supported" in str(err.value)


def test_self_loop_is_a_cycle() -> None:
    graph = parse_flowchart("flowchart TB\nA --> A")
    assert has_cycle(graph) is True


def test_cycle_downstream_of_a_source_is_detected() -> None:
    graph = parse_flowchart("flowchart TB\nS --> A --> B --> C --> A")
    assert has_cycle(graph) is True


def test_duplicate_edges_do_not_look_cyclic() -> None:
    graph = parse_flowchart("flowchart LR\nA --> B\nA --> B")
    assert has_cycle(graph) is False
    assert assign_layers(graph) == {"A": 0, "B": 1}


def test_layers_use_longest_path() -> None:
    # A -> B -> C and a shortcut A -> C: C must sit below B.
    graph = parse_flowchart("flowchart TB\nA --> B --> C\nA --> C")
    assert assign_layers(graph) == {"A": 0, "B": 1, "C": 2}


def test_layers_for_fan_in() -> None:
    graph = parse_flowchart("flowchart TB\nA --> B\nA --> C\nB --> D\nC --> D")
    assert assign_layers(graph) == {"A": 0, "B": 1, "C": 1, "D": 2}


def test_disconnected_nodes_are_sources() -> None:
    graph = parse_flowchart("flowchart LR\nX\nA --> B\nY[Lonely]")
    layers = assign_layers(graph)

    assert layers["X"] == 0
    assert layers["Y"] == 0
    assert layers["B"] == 1


def test_every_edge_points_to_a_deeper_layer() -> None:
    graph = parse_flowchart(
        "flowchart LR\na --> b --> c --> d\na --> d\ne --> c\nf --> a"
    )
    layers = assign_layers(graph)

    for edge in graph.edges:
        assert layers[edge.target] > layers[edge.source]


def test_layering_ignores_declaration_order() -> None:
    first = parse_flowchart("flowchart LR\nA --> C\nB --> C\nC --> D")
    second = parse_flowchart("flowchart LR\nC --> D\nB --> C\nA --> C")
    assert assign_layers(first) == assign_layers(second)
