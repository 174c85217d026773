"""Tests for applying operations to a workflow document."""
from __future__ import annotations

import pytest

from backend.flowgen.workflow.document import Edge, Node, NodeData, Position, WorkflowDocument
from backend.flowgen.workflow.mutator import apply_operation, repair_triggers
from backend.flowgen.workflow.operations import (
    AddEdge,
    AddNode,
    RemoveEdge,
    RemoveNode,
    SetAssistantMessage,
    SetDescription,
    SetName,
    UpdateNode,
)


def _node(node_id: str, kind: str = "action", config: dict | None = None) -> Node:
    return Node(id=node_id, kind=kind, data=NodeData(label=node_id, kind=kind, config=config or {}))


def _edge(edge_id: str, source: str, target: str) -> Edge:
    return Edge(id=edge_id, source=source, target=target)


def test_name_and_description_are_never_cleared():
    document = WorkflowDocument()

    apply_operation(document, SetName("Demo"))
    apply_operation(document, SetDescription("Does things"))
    apply_operation(document, SetName(""))
    apply_operation(document, SetName(None))
    apply_operation(document, SetDescription(""))

    assert document.name == "Demo"
    assert document.description == "Does things"


def test_assistant_message_may_go_blank():
    document = WorkflowDocument()

    apply_operation(document, SetAssistantMessage("Working on it"))
    apply_operation(document, SetAssistantMessage(None))
    assert document.assistant_message == "Working on it"

    apply_operation(document, SetAssistantMessage(""))
    assert document.assistant_message == ""


def test_add_node_normalizes_config_without_touching_operation():
    operation = AddNode(_node("http", config={"httpHeaders": {"a": "b"}}))
    document = WorkflowDocument()

    apply_operation(document, operation)

    assert document.nodes[0].data.config["httpHeaders"] == '{"a":"b"}'
    assert operation.node.data.config["httpHeaders"] == {"a": "b"}


@pytest.mark.parametrize("trigger_count", [1, 2, 5])
def test_at_most_one_trigger_after_every_add(trigger_count):
    document = WorkflowDocument()
    for index in range(trigger_count):
        apply_operation(document, AddNode(_node(f"a{index}")))
        apply_operation(document, AddNode(_node(f"t{index}", kind="trigger")))
        assert len(document.trigger_nodes()) <= 1

    assert [node.id for node in document.trigger_nodes()] == ["t0"]
    assert len(document.nodes) == trigger_count + 1


def test_repair_drops_edges_of_extra_triggers():
    document = WorkflowDocument(
        nodes=[_node("t1", "trigger"), _node("a1"), _node("t2", "trigger")],
        edges=[_edge("e1", "t1", "a1"), _edge("e2", "t2", "a1"), _edge("e3", "a1", "t2")],
    )

    dropped = repair_triggers(document)

    assert dropped == ["t2"]
    assert [node.id for node in document.nodes] == ["t1", "a1"]
    assert [edge.id for edge in document.edges] == ["e1"]


def test_edges_towards_discarded_trigger_are_not_added():
    document = WorkflowDocument()
    apply_operation(document, AddNode(_node("t1", "trigger")))
    apply_operation(document, AddNode(_node("t2", "trigger")))
    apply_operation(document, AddEdge(_edge("e1", "t1", "t2")))

    assert document.edges == []


def test_add_edge_has_no_referential_check():
    document = WorkflowDocument()

    apply_operation(document, AddEdge(_edge("e1", "later", "even-later")))
    apply_operation(document, AddNode(_node("later")))

    assert [edge.id for edge in document.edges] == ["e1"]


def test_remove_node_removes_touching_edges():
    document = WorkflowDocument(
        nodes=[_node("a"), _node("b"), _node("c")],
        edges=[_edge("ab", "a", "b"), _edge("bc", "b", "c"), _edge("ca", "c", "a")],
    )

    apply_operation(document, RemoveNode("b"))

    assert [node.id for node in document.nodes] == ["a", "c"]
    assert all(not edge.touches("b") for edge in document.edges)
    assert [edge.id for edge in document.edges] == ["ca"]


def test_remove_unknown_ids_is_noop():
    document = WorkflowDocument(nodes=[_node("a")], edges=[_edge("e", "a", "a")])

    apply_operation(document, RemoveNode("missing"))
    apply_operation(document, RemoveEdge("missing"))

    assert len(document.nodes) == 1
    assert len(document.edges) == 1


def test_remove_edge():
    document = WorkflowDocument(edges=[_edge("e1", "a", "b"), _edge("e2", "b", "c")])

    apply_operation(document, RemoveEdge("e1"))

    assert [edge.id for edge in document.edges] == ["e2"]


def test_update_node_merges_config():
    document = WorkflowDocument(nodes=[_node("n", config={"a": 1, "b": 2})])

    apply_operation(
        document,
        UpdateNode("n", position=Position(10, 20), data={"config": {"b": 3, "c": 4}}),
    )

    node = document.nodes[0]
    assert node.data.config == {"a": 1, "b": 3, "c": 4}
    assert node.position == Position(10, 20)


def test_update_without_position_keeps_position():
    document = WorkflowDocument(nodes=[_node("n")])
    document.nodes[0].position = Position(5, 6)

    apply_operation(document, UpdateNode("n", data={"label": "Renamed"}))

    assert document.nodes[0].position == Position(5, 6)
    assert document.nodes[0].data.label == "Renamed"


def test_update_unknown_node_is_noop():
    document = WorkflowDocument(nodes=[_node("n")])

    apply_operation(document, UpdateNode("ghost", data={"label": "x"}))

    assert document.nodes[0].data.label == "n"


def test_unhandled_object_is_rejected():
    assert apply_operation(WorkflowDocument(), object()) is False
