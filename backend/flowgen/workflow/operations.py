"""Typed graph-mutation operations and their wire records."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Union

from .document import Edge, Node, OperationFormatError, Position, coerce_id


def _optional_text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class SetName:
    name: str | None
    op: ClassVar[str] = "setName"

    def to_record(self) -> dict[str, Any]:
        return {"op": self.op, "name": self.name}


@dataclass(frozen=True)
class SetDescription:
    description: str | None
    op: ClassVar[str] = "setDescription"

    def to_record(self) -> dict[str, Any]:
        return {"op": self.op, "description": self.description}


@dataclass(frozen=True)
class AddNode:
    node: Node
    op: ClassVar[str] = "addNode"

    def to_record(self) -> dict[str, Any]:
        return {"op": self.op, "node": self.node.to_dict()}


@dataclass(frozen=True)
class AddEdge:
    edge: Edge
    op: ClassVar[str] = "addEdge"

    def to_record(self) -> dict[str, Any]:
        return {"op": self.op, "edge": self.edge.to_dict()}


@dataclass(frozen=True)
class RemoveNode:
    node_id: str
    op: ClassVar[str] = "removeNode"

    def to_record(self) -> dict[str, Any]:
        return {"op": self.op, "nodeId": self.node_id}


@dataclass(frozen=True)
class RemoveEdge:
    edge_id: str
    op: ClassVar[str] = "removeEdge"

    def to_record(self) -> dict[str, Any]:
        return {"op": self.op, "edgeId": self.edge_id}


@dataclass(frozen=True)
class UpdateNode:
    node_id: str
    position: Position | None = None
    data: Mapping[str, Any] | None = None
    op: ClassVar[str] = "updateNode"

    def to_record(self) -> dict[str, Any]:
        updates: dict[str, Any] = {}
        if self.position is not None:
            updates["position"] = self.position.to_dict()
        if self.data is not None:
            updates["data"] = dict(self.data)
        return {"op": self.op, "nodeId": self.node_id, "updates": updates}


@dataclass(frozen=True)
class SetAssistantMessage:
    message: str | None
    op: ClassVar[str] = "setAssistantMessage"

    def to_record(self) -> dict[str, Any]:
        return {"op": self.op, "message": self.message}


Operation = Union[
    SetName,
    SetDescription,
    AddNode,
    AddEdge,
    RemoveNode,
    RemoveEdge,
    UpdateNode,
    SetAssistantMessage,
]


def _parse_update_node(record: Mapping[str, Any]) -> UpdateNode:
    node_id = coerce_id(record.get("nodeId"), "nodeId")
    updates = record.get("updates")
    if updates is None:
        return UpdateNode(node_id=node_id)
    if not isinstance(updates, Mapping):
        raise OperationFormatError("updates must be an object")

    position = updates.get("position")
    data = updates.get("data")
    if data is not None and not isinstance(data, Mapping):
        raise OperationFormatError("updates.data must be an object")
    return UpdateNode(
        node_id=node_id,
        position=Position.from_dict(position) if position is not None else None,
        data=dict(data) if data is not None else None,
    )


_PARSERS: dict[str, Callable[[Mapping[str, Any]], Operation]] = {
    SetName.op: lambda record: SetName(_optional_text(record.get("name"))),
    SetDescription.op: lambda record: SetDescription(_optional_text(record.get("description"))),
    AddNode.op: lambda record: AddNode(Node.from_dict(record.get("node"))),
    AddEdge.op: lambda record: AddEdge(Edge.from_dict(record.get("edge"))),
    RemoveNode.op: lambda record: RemoveNode(coerce_id(record.get("nodeId"), "nodeId")),
    RemoveEdge.op: lambda record: RemoveEdge(coerce_id(record.get("edgeId"), "edgeId")),
    UpdateNode.op: _parse_update_node,
    SetAssistantMessage.op: lambda record: SetAssistantMessage(
        _optional_text(record.get("message"))
    ),
}

OPERATION_TAGS = frozenset(_PARSERS)


def parse_operation(record: Mapping[str, Any]) -> Operation | None:
    """Build an operation from a decoded record.

    Returns ``None`` for records whose ``op`` tag is unknown and raises
    :class:`OperationFormatError` when a known tag carries an unusable payload.
    """

    tag = record.get("op")
    parser = _PARSERS.get(tag) if isinstance(tag, str) else None
    if parser is None:
        return None
    return parser(record)
