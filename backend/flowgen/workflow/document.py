"""In-memory representation of a workflow document built during a session."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

NODE_KINDS = ("trigger", "action")
NODE_STATUSES = ("idle", "running", "success", "error")
DEFAULT_EDGE_KIND = "default"

_DATA_FIELDS = {"label", "description", "type", "kind", "config", "status"}


class OperationFormatError(ValueError):
    """Raised when a record has a known shape but an unusable payload."""


def coerce_id(value: Any, field_name: str) -> str:
    """Return an identifier as string, rejecting empty or structured values."""

    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise OperationFormatError(f"{field_name} must be a string")
    identifier = str(value)
    if not identifier:
        raise OperationFormatError(f"{field_name} must not be empty")
    return identifier


def _coerce_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise OperationFormatError(f"{field_name} must be a number")
    return value


@dataclass
class Position:
    x: float = 0
    y: float = 0

    @classmethod
    def from_dict(cls, payload: Any) -> Position:
        if not isinstance(payload, Mapping):
            raise OperationFormatError("position must be an object")
        return cls(
            x=_coerce_number(payload.get("x", 0), "position.x"),
            y=_coerce_number(payload.get("y", 0), "position.y"),
        )

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass
class NodeData:
    """Display and configuration payload of a node.

    ``kind`` duplicates the owning node's kind; keys the model sends that are
    not modelled explicitly are kept in ``extra`` so updates stay lossless.
    """

    label: str = ""
    kind: str = "action"
    description: str | None = None
    config: dict[str, Any] = field(default_factory=dict)
    status: str = "idle"
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Any, kind: str) -> NodeData:
        if payload is None:
            return cls(kind=kind)
        if not isinstance(payload, Mapping):
            raise OperationFormatError("node data must be an object")

        config = payload.get("config")
        if config is None:
            config = {}
        elif not isinstance(config, Mapping):
            raise OperationFormatError("node config must be an object")

        status = payload.get("status")
        description = payload.get("description")
        label = payload.get("label")
        return cls(
            label=str(label) if label is not None else "",
            kind=kind,
            description=str(description) if description is not None else None,
            config=dict(config),
            status=status if status in NODE_STATUSES else "idle",
            extra={key: value for key, value in payload.items() if key not in _DATA_FIELDS},
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = dict(self.extra)
        payload.update(
            {
                "label": self.label,
                "type": self.kind,
                "config": dict(self.config),
                "status": self.status,
            }
        )
        if self.description is not None:
            payload["description"] = self.description
        return payload


def _node_kind(payload: Mapping[str, Any]) -> str:
    candidate = payload.get("type", payload.get("kind"))
    if candidate is None:
        data = payload.get("data")
        if isinstance(data, Mapping):
            candidate = data.get("type", data.get("kind"))
    if candidate is None:
        return "action"
    if candidate not in NODE_KINDS:
        raise OperationFormatError(f"node type must be one of {', '.join(NODE_KINDS)}")
    return candidate


@dataclass
class Node:
    id: str
    kind: str = "action"
    position: Position = field(default_factory=Position)
    data: NodeData = field(default_factory=NodeData)

    @property
    def is_trigger(self) -> bool:
        return self.kind == "trigger"

    @classmethod
    def from_dict(cls, payload: Any) -> Node:
        if not isinstance(payload, Mapping):
            raise OperationFormatError("node must be an object")
        kind = _node_kind(payload)
        position = payload.get("position")
        return cls(
            id=coerce_id(payload.get("id"), "node.id"),
            kind=kind,
            position=Position.from_dict(position) if position is not None else Position(),
            data=NodeData.from_dict(payload.get("data"), kind),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.kind,
            "position": self.position.to_dict(),
            "data": self.data.to_dict(),
        }


@dataclass
class Edge:
    id: str
    source: str
    target: str
    kind: str = DEFAULT_EDGE_KIND

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id

    @classmethod
    def from_dict(cls, payload: Any) -> Edge:
        if not isinstance(payload, Mapping):
            raise OperationFormatError("edge must be an object")
        kind = payload.get("type", payload.get("kind"))
        return cls(
            id=coerce_id(payload.get("id"), "edge.id"),
            source=coerce_id(payload.get("source"), "edge.source"),
            target=coerce_id(payload.get("target"), "edge.target"),
            kind=str(kind) if kind else DEFAULT_EDGE_KIND,
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "type": self.kind,
        }


@dataclass
class WorkflowDocument:
    """Workflow graph owned by exactly one generation session.

    ``discarded_triggers`` remembers trigger ids dropped by the single-trigger
    repair so that edges streamed later towards them are not resurrected.
    It is session state and never serialised.
    """

    name: str | None = None
    description: str | None = None
    assistant_message: str | None = None
    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    discarded_triggers: set[str] = field(default_factory=set, repr=False, compare=False)

    def find_node(self, node_id: str) -> Node | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def trigger_nodes(self) -> list[Node]:
        return [node for node in self.nodes if node.is_trigger]

    @classmethod
    def from_dict(cls, payload: Any) -> WorkflowDocument:
        """Build a document from its JSON form, e.g. to seed an edit session."""

        if not isinstance(payload, Mapping):
            raise OperationFormatError("workflow must be an object")

        nodes = payload.get("nodes") or []
        edges = payload.get("edges") or []
        if not isinstance(nodes, list):
            raise OperationFormatError("nodes must be a list")
        if not isinstance(edges, list):
            raise OperationFormatError("edges must be a list")

        def _optional_text(key: str) -> str | None:
            value = payload.get(key)
            return value if isinstance(value, str) else None

        return cls(
            name=_optional_text("name"),
            description=_optional_text("description"),
            assistant_message=_optional_text("assistantMessage"),
            nodes=[Node.from_dict(node) for node in nodes],
            edges=[Edge.from_dict(edge) for edge in edges],
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }
        if self.name is not None:
            payload["name"] = self.name
        if self.description is not None:
            payload["description"] = self.description
        if self.assistant_message is not None:
            payload["assistantMessage"] = self.assistant_message
        return payload
