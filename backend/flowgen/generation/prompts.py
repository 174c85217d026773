"""Prompt composition for the workflow generator."""

from __future__ import annotations

import json

from ..catalog import NodeCatalog, get_default_catalog
from ..workflow.document import WorkflowDocument
from ..workflow.operations import OPERATION_TAGS

_OPERATION_GRAMMAR = """\
Output one JSON operation per line, without markdown fences or commentary:
{"op": "setAssistantMessage", "message": "Short status for the user"}
{"op": "setName", "name": "Workflow name"}
{"op": "setDescription", "description": "What the workflow does"}
{"op": "addNode", "node": {"id": "node-id", "type": "trigger|action", "position": {"x": 100, "y": 200}, "data": {"label": "Label", "type": "trigger|action", "config": {...}, "status": "idle"}}}
{"op": "addEdge", "edge": {"id": "edge-id", "source": "source-node-id", "target": "target-node-id", "type": "default"}}
{"op": "removeNode", "nodeId": "node-id"}
{"op": "removeEdge", "edgeId": "edge-id"}
{"op": "updateNode", "nodeId": "node-id", "updates": {"position": {"x": 0, "y": 0}, "data": {...}}}
"""

_RULES = """\
RULES:
- A workflow has exactly ONE trigger node; additional triggers are discarded.
- ALWAYS include the discriminator in config (triggerType for triggers, actionType for actions).
- After adding all nodes, you MUST add edges to connect them. Every node should be reachable from the trigger.
- Use template variables to reference outputs from previous nodes: {{NodeLabel.field}}.
- Keep existing template variables intact when updating nodes.
- For REST or JSON APIs use "HTTP Request"; use "Scrape" only for HTML pages.
"""


def _format_entries(catalog: NodeCatalog, kind: str) -> str:
    lines = []
    for entry in catalog.entries(kind):
        lines.append(
            f"- {entry.name}: {entry.description} Example config: "
            f"{json.dumps(dict(entry.example))}"
        )
    return "\n".join(lines) or "None registered."


def build_system_prompt(catalog: NodeCatalog | None = None) -> str:
    """Describe the operation grammar and the available node sub-kinds."""

    catalog = catalog or get_default_catalog()
    return "\n".join(
        [
            "You build automation workflows as a stream of graph operations.",
            "",
            _OPERATION_GRAMMAR,
            f"Triggers (set data.config.{catalog.discriminator('trigger')}):",
            _format_entries(catalog, "trigger"),
            "",
            f"Actions (set data.config.{catalog.discriminator('action')}):",
            _format_entries(catalog, "action"),
            "",
            _RULES,
        ]
    )


def build_user_prompt(prompt: str, existing: WorkflowDocument | None = None) -> str:
    """Return the user prompt, framed as an edit request when a workflow exists."""

    if existing is None:
        return prompt

    nodes_list = "\n".join(
        f"- {node.id} ({node.data.label or 'Unlabeled'})" for node in existing.nodes
    )
    edges_list = "\n".join(
        f"- {edge.id}: {edge.source} -> {edge.target}" for edge in existing.edges
    )
    allowed = ", ".join(sorted(OPERATION_TAGS))
    return f"""I have an existing workflow. I want you to make ONLY the changes I request.

Current workflow nodes:
{nodes_list}

Current workflow edges:
{edges_list}

Full workflow data (DO NOT recreate these, they already exist):
{json.dumps(existing.to_dict(), indent=2)}

User's request: {prompt}

Start by outputting {{"op": "setAssistantMessage", "message": "Short summary of what you will change or any blockers"}} so the user sees your plan.

IMPORTANT: Output ONLY the operations needed to make the requested changes.
- Allowed operations: {allowed}
- New nodes MUST be connected with edges; add edges right after adding nodes.
- When changing an existing card, use "updateNode" with the full config so required fields stay intact.
- DO NOT output operations for existing nodes/edges unless specifically modifying them."""
