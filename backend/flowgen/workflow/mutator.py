"""Apply operations to a workflow document, one at a time."""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any

from .document import WorkflowDocument
from .node_config import merge_node_data, normalize_config
from .operations import (
    AddEdge,
    AddNode,
    Operation,
    RemoveEdge,
    RemoveNode,
    SetAssistantMessage,
    SetDescription,
    SetName,
    UpdateNode,
)


def _remove_edges_touching(document: WorkflowDocument, node_ids: set[str]) -> None:
    document.edges = [
        edge
        for edge in document.edges
        if edge.source not in node_ids and edge.target not in node_ids
    ]


def repair_triggers(document: WorkflowDocument) -> list[str]:
    """Keep only the first trigger node and drop edges of the removed ones."""

    triggers = document.trigger_nodes()
    if len(triggers) <= 1:
        return []

    keep = triggers[0]
    dropped = [node.id for node in triggers[1:]]
    document.nodes = [node for node in document.nodes if not node.is_trigger or node is keep]
    _remove_edges_touching(document, set(dropped))
    document.discarded_triggers.update(dropped)
    return dropped


def prepare_seed(document: WorkflowDocument) -> WorkflowDocument:
    """Bring a prior document into the form streamed operations produce.

    Node configs are canonicalised and surplus triggers are dropped.
    """

    for node in document.nodes:
        node.data.config = normalize_config(node.data.config)
    repair_triggers(document)
    return document


def _set_name(document: WorkflowDocument, operation: SetName) -> None:
    if operation.name:
        document.name = operation.name


def _set_description(document: WorkflowDocument, operation: SetDescription) -> None:
    if operation.description:
        document.description = operation.description


def _set_assistant_message(document: WorkflowDocument, operation: SetAssistantMessage) -> None:
    if isinstance(operation.message, str):
        document.assistant_message = operation.message


def _add_node(document: WorkflowDocument, operation: AddNode) -> None:
    node = copy.deepcopy(operation.node)
    node.data.config = normalize_config(node.data.config)
    document.discarded_triggers.discard(node.id)
    document.nodes.append(node)
    repair_triggers(document)


def _add_edge(document: WorkflowDocument, operation: AddEdge) -> None:
    # Targets may arrive later in the same burst; integrity is checked on finalize.
    edge = operation.edge
    if edge.source in document.discarded_triggers or edge.target in document.discarded_triggers:
        return
    document.edges.append(copy.copy(edge))


def _remove_node(document: WorkflowDocument, operation: RemoveNode) -> None:
    document.nodes = [node for node in document.nodes if node.id != operation.node_id]
    _remove_edges_touching(document, {operation.node_id})


def _remove_edge(document: WorkflowDocument, operation: RemoveEdge) -> None:
    document.edges = [edge for edge in document.edges if edge.id != operation.edge_id]


def _update_node(document: WorkflowDocument, operation: UpdateNode) -> None:
    node = document.find_node(operation.node_id)
    if node is None:
        return
    if operation.position is not None:
        node.position = copy.copy(operation.position)
    if operation.data is not None:
        merge_node_data(node.data, copy.deepcopy(dict(operation.data)))


_HANDLERS: dict[str, Callable[[WorkflowDocument, Any], None]] = {
    SetName.op: _set_name,
    SetDescription.op: _set_description,
    AddNode.op: _add_node,
    AddEdge.op: _add_edge,
    RemoveNode.op: _remove_node,
    RemoveEdge.op: _remove_edge,
    UpdateNode.op: _update_node,
    SetAssistantMessage.op: _set_assistant_message,
}


def apply_operation(document: WorkflowDocument, operation: Operation) -> bool:
    """Mutate ``document`` in place; return ``False`` for unhandled operations."""

    handler = _HANDLERS.get(getattr(operation, "op", None))
    if handler is None:
        return False
    handler(document, operation)
    return True
