"""Catalog of node sub-kinds and the configuration keys they require."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from . import actions, triggers

DISCRIMINATOR_KEYS = {
    "trigger": "triggerType",
    "action": "actionType",
}


@dataclass(frozen=True)
class CatalogEntry:
    """Metadata describing one trigger or action sub-kind."""

    kind: str
    name: str
    required: tuple[str, ...]
    description: str
    example: Mapping[str, Any] = field(default_factory=dict)


def _build(kind: str, items: Iterable[dict[str, Any]]) -> list[CatalogEntry]:
    return [
        CatalogEntry(
            kind=kind,
            name=item["name"],
            required=tuple(item["required"]),
            description=item["description"],
            example=dict(item["example"]),
        )
        for item in items
    ]


_ENTRIES: list[CatalogEntry] = [
    *_build(triggers.KIND, triggers.TRIGGERS),
    *_build(actions.KIND, actions.ACTIONS),
]


def iter_entries(kind: str | None = None) -> Iterable[CatalogEntry]:
    """Yield the registered entries, optionally restricted to one node kind."""

    for entry in _ENTRIES:
        if kind is None or entry.kind == kind:
            yield entry


def find_entry(kind: str, name: str) -> CatalogEntry | None:
    """Return the entry for a sub-kind, if available."""

    for entry in _ENTRIES:
        if entry.kind == kind and entry.name == name:
            return entry
    return None


class NodeCatalog:
    """Answers which configuration keys a node must carry to be complete."""

    def __init__(
        self,
        entries: Iterable[CatalogEntry],
        discriminators: Mapping[str, str] | None = None,
    ) -> None:
        self._entries = {(entry.kind, entry.name): entry for entry in entries}
        self._discriminators = dict(discriminators or DISCRIMINATOR_KEYS)

    def entries(self, kind: str | None = None) -> list[CatalogEntry]:
        return [entry for entry in self._entries.values() if kind is None or entry.kind == kind]

    def discriminator(self, kind: str) -> str | None:
        return self._discriminators.get(kind)

    def required_keys(self, kind: str, sub_kind: Any) -> tuple[str, ...]:
        """Return the discriminator followed by the keys its sub-kind requires."""

        discriminator = self.discriminator(kind)
        if discriminator is None:
            return ()
        entry = self._entries.get((kind, sub_kind)) if isinstance(sub_kind, str) else None
        if entry is None:
            return (discriminator,)
        return (discriminator, *entry.required)


_default_catalog: NodeCatalog | None = None


def get_default_catalog() -> NodeCatalog:
    """Return the catalog built from the registered triggers and actions."""

    global _default_catalog
    if _default_catalog is None:
        _default_catalog = NodeCatalog(_ENTRIES)
    return _default_catalog


__all__ = [
    "CatalogEntry",
    "DISCRIMINATOR_KEYS",
    "NodeCatalog",
    "find_entry",
    "get_default_catalog",
    "iter_entries",
]
