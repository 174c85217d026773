"""Tests for classifying and decoding operation lines."""
from __future__ import annotations

import json

import pytest

from backend.flowgen.workflow.decoder import OperationDecoder
from backend.flowgen.workflow.operations import AddEdge, AddNode, SetName, UpdateNode


@pytest.mark.parametrize("line", ["", "   ", "```", "```json", "  ```  "])
def test_blank_and_fence_lines_are_not_operations(line):
    decoder = OperationDecoder()

    assert decoder.decode(line) is None
    assert decoder.operations == 0
    assert decoder.malformed == 0


def test_malformed_line_is_counted_and_skipped(caplog):
    decoder = OperationDecoder()

    assert decoder.decode('{"op": "setName", "name": ') is None
    assert decoder.decode("[1, 2, 3]") is None
    assert decoder.malformed == 2
    assert "Skipping invalid line" in caplog.text

    operation = decoder.decode('{"op": "setName", "name": "Demo"}')
    assert operation == SetName("Demo")
    assert decoder.operations == 1


def test_unknown_tag_is_ignored():
    decoder = OperationDecoder()

    assert decoder.decode('{"op": "renameCanvas", "title": "x"}') is None
    assert decoder.decode('{"name": "no tag"}') is None
    assert decoder.ignored == 2
    assert decoder.malformed == 0


def test_known_tag_with_invalid_payload_is_malformed():
    decoder = OperationDecoder()

    assert decoder.decode('{"op": "addNode", "node": "t1"}') is None
    assert decoder.decode('{"op": "addEdge", "edge": {"id": "e1", "source": "a"}}') is None
    assert decoder.decode('{"op": "removeNode"}') is None
    assert decoder.malformed == 3


def test_add_node_accepts_kind_or_type():
    decoder = OperationDecoder()

    by_kind = decoder.decode('{"op":"addNode","node":{"id":"t1","kind":"trigger"}}')
    by_type = decoder.decode('{"op":"addNode","node":{"id":2,"type":"action"}}')

    assert isinstance(by_kind, AddNode)
    assert by_kind.node.kind == "trigger"
    assert by_kind.node.data.kind == "trigger"
    assert isinstance(by_type, AddNode)
    assert by_type.node.id == "2"
    assert by_type.node.kind == "action"


def test_edge_defaults_to_default_kind():
    decoder = OperationDecoder()

    operation = decoder.decode('{"op":"addEdge","edge":{"id":"e1","source":"a","target":"b"}}')

    assert isinstance(operation, AddEdge)
    assert operation.edge.kind == "default"


def test_update_node_record_roundtrip():
    decoder = OperationDecoder()
    line = json.dumps(
        {
            "op": "updateNode",
            "nodeId": "n1",
            "updates": {"position": {"x": 1, "y": 2}, "data": {"config": {"a": 1}}},
        }
    )

    operation = decoder.decode(line)

    assert isinstance(operation, UpdateNode)
    assert operation.to_record() == json.loads(line)


def test_deeply_nested_line_is_malformed_not_fatal():
    decoder = OperationDecoder()

    assert decoder.decode("[" * 100000) is None
    assert decoder.malformed == 1
    assert isinstance(decoder.decode('{"op": "setName", "name": "After"}'), SetName)
