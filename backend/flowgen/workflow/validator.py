"""Completeness checks run before a generated workflow may be persisted."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..catalog import NodeCatalog, get_default_catalog
from .document import Node, WorkflowDocument


@dataclass(frozen=True)
class IncompleteNode:
    node_id: str
    label: str
    kind: str
    missing: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.node_id,
            "label": self.label,
            "type": self.kind,
            "missing": list(self.missing),
        }


class FinalizationError(Exception):
    """Raised when a structurally valid document fails completeness rules."""

    def __init__(
        self,
        nodes: list[IncompleteNode],
        dangling_edges: list[str] | None = None,
        extra_triggers: list[str] | None = None,
    ) -> None:
        self.nodes = nodes
        self.dangling_edges = dangling_edges or []
        self.extra_triggers = extra_triggers or []
        parts: list[str] = []
        if nodes:
            ids = ", ".join(node.node_id for node in nodes)
            parts.append(f"{len(nodes)} incomplete node(s): {ids}")
        if self.dangling_edges:
            ids = ", ".join(self.dangling_edges)
            parts.append(f"{len(self.dangling_edges)} edge(s) referencing missing nodes: {ids}")
        if self.extra_triggers:
            ids = ", ".join(self.extra_triggers)
            parts.append(f"{len(self.extra_triggers)} trigger(s) beyond the first: {ids}")
        super().__init__("Cannot create workflow: " + "; ".join(parts))

    @property
    def node_ids(self) -> list[str]:
        return [node.node_id for node in self.nodes]


def _is_missing(config: dict[str, Any], key: str) -> bool:
    value = config.get(key)
    return value is None or value == ""


def _missing_keys(node: Node, catalog: NodeCatalog) -> tuple[str, ...]:
    config = node.data.config
    discriminator = catalog.discriminator(node.kind)
    sub_kind = config.get(discriminator) if discriminator else None
    required = catalog.required_keys(node.kind, sub_kind)
    return tuple(key for key in required if _is_missing(config, key))


def find_incomplete_nodes(
    document: WorkflowDocument, catalog: NodeCatalog | None = None
) -> list[IncompleteNode]:
    """Return every node lacking a mandatory configuration key."""

    catalog = catalog or get_default_catalog()
    incomplete: list[IncompleteNode] = []
    for node in document.nodes:
        missing = _missing_keys(node, catalog)
        if missing:
            incomplete.append(
                IncompleteNode(
                    node_id=node.id,
                    label=node.data.label,
                    kind=node.kind,
                    missing=missing,
                )
            )
    return incomplete


def find_dangling_edges(document: WorkflowDocument) -> list[str]:
    """Return the ids of edges whose source or target is not in the document."""

    node_ids = {node.id for node in document.nodes}
    return [
        edge.id
        for edge in document.edges
        if edge.source not in node_ids or edge.target not in node_ids
    ]


def find_extra_triggers(document: WorkflowDocument) -> list[str]:
    """Return the ids of trigger nodes after the first one."""

    return [node.id for node in document.trigger_nodes()[1:]]


def finalize_document(
    document: WorkflowDocument, catalog: NodeCatalog | None = None
) -> WorkflowDocument:
    """Accept the document unchanged or raise :class:`FinalizationError`."""

    incomplete = find_incomplete_nodes(document, catalog)
    dangling = find_dangling_edges(document)
    extra_triggers = find_extra_triggers(document)
    if incomplete or dangling or extra_triggers:
        raise FinalizationError(incomplete, dangling, extra_triggers)
    return document
