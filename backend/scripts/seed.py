"""Seed the database with an example workflow built from catalog examples."""
from __future__ import annotations

import json
import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.flowgen import create_app
from backend.flowgen.catalog import find_entry
from backend.flowgen.extensions import db
from backend.flowgen.models.workflow import Workflow
from backend.flowgen.workflow import GenerationSession, finalize_document

EXAMPLE_WORKFLOW_NAME = "Daily News Digest"
EXAMPLE_CHAIN = (("trigger", "Schedule"), ("action", "Search"), ("action", "Send Email"))


def _example_operations() -> str:
    """Render the example chain as the operation lines a model would emit."""

    records: list[dict[str, object]] = [
        {"op": "setName", "name": EXAMPLE_WORKFLOW_NAME},
        {"op": "setDescription", "description": "Searches the news every morning and mails a digest."},
    ]
    previous: str | None = None
    for index, (kind, name) in enumerate(EXAMPLE_CHAIN, start=1):
        entry = find_entry(kind, name)
        if entry is None:
            raise RuntimeError(f"Missing catalog entry for {kind} {name!r}")
        node_id = f"{kind}-{index}"
        records.append(
            {
                "op": "addNode",
                "node": {
                    "id": node_id,
                    "type": kind,
                    "position": {"x": 100 + 300 * (index - 1), "y": 200},
                    "data": {"label": name, "type": kind, "config": dict(entry.example)},
                },
            }
        )
        if previous is not None:
            records.append(
                {"op": "addEdge", "edge": {"id": f"e-{previous}-{node_id}", "source": previous, "target": node_id}}
            )
        previous = node_id
    return "".join(json.dumps(record) + "\n" for record in records)


def _ensure_example_workflow() -> tuple[bool, bool]:
    session = GenerationSession()
    list(session.run([_example_operations()]))
    document = finalize_document(session.document)
    document_json = json.dumps(
        {
            "nodes": [node.to_dict() for node in document.nodes],
            "edges": [edge.to_dict() for edge in document.edges],
        }
    )

    workflow = Workflow.query.filter_by(name=EXAMPLE_WORKFLOW_NAME).first()
    created = False
    updated = False

    if workflow is None:
        workflow = Workflow(
            name=EXAMPLE_WORKFLOW_NAME,
            description=document.description or "",
            document_json=document_json,
        )
        db.session.add(workflow)
        created = True
    elif workflow.document_json != document_json:
        workflow.document_json = document_json
        updated = True
    return created, updated


def main() -> None:
    app = create_app()
    with app.app_context():
        created, updated = _ensure_example_workflow()
        db.session.commit()

        print(
            "Seed completed",
            f"workflows created={int(created)}",
            f"workflows updated={int(updated)}",
        )


if __name__ == "__main__":
    main()
