"""Canonical storage and merge rules for node configuration mappings."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from .document import NODE_STATUSES, NodeData

# Structured values (header maps, bodies, schemas, mock payloads) are stored
# as their JSON text so that editors and code generators see one shape.
COMPOSITE_CONFIG_KEYS = frozenset(
    {
        "httpHeaders",
        "httpBody",
        "webhookSchema",
        "webhookMockRequest",
        "aiSchema",
        "dbSchema",
    }
)

STRING_CONFIG_KEYS = frozenset(
    {
        "ticketPriority",
        "limit",
        "linearAssigneeId",
        "linearTeamId",
    }
)


def _serialize_composite(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _stringify_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return _serialize_composite(value)
    return str(value)


def normalize_config(config: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``config`` with composite and scalar keys canonicalised."""

    normalized: dict[str, Any] = {}
    for key, value in config.items():
        if key in COMPOSITE_CONFIG_KEYS:
            normalized[key] = _serialize_composite(value)
        elif key in STRING_CONFIG_KEYS:
            normalized[key] = _stringify_scalar(value)
        else:
            normalized[key] = value
    return normalized


def merge_config(existing: Mapping[str, Any], update: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``update`` onto ``existing`` key by key; absent keys are preserved."""

    merged = dict(existing)
    merged.update(update)
    return normalize_config(merged)


def merge_node_data(data: NodeData, update: Mapping[str, Any]) -> None:
    """Apply a partial data update in place.

    Every field overrides the current one except ``config``, which is merged,
    and the duplicated ``type``, which always follows the node's own kind.
    """

    for key, value in update.items():
        if key == "config":
            if isinstance(value, Mapping):
                data.config = merge_config(data.config, value)
        elif key in ("type", "kind"):
            continue
        elif key == "label":
            data.label = "" if value is None else str(value)
        elif key == "description":
            data.description = None if value is None else str(value)
        elif key == "status":
            if value in NODE_STATUSES:
                data.status = value
        else:
            data.extra[key] = value
