"""REST API endpoints for accepting and retrieving generated workflows."""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any

from flask import Blueprint, current_app, jsonify, request

from ..extensions import db
from ..models.logs import persist_run_log
from ..models.workflow import Workflow
from ..workflow.document import OperationFormatError, WorkflowDocument
from ..workflow.validator import FinalizationError, finalize_document

bp = Blueprint("workflows", __name__)

DEFAULT_WORKFLOW_NAME = "AI Generated Workflow"


def _serialize_workflow(workflow: Workflow) -> dict[str, Any]:
    """Return a JSON serialisable representation of a workflow."""

    try:
        document = json.loads(workflow.document_json)
    except (TypeError, ValueError):
        document = {}
    return {
        "id": workflow.id,
        "name": workflow.name,
        "description": workflow.description or "",
        "nodes": document.get("nodes", []),
        "edges": document.get("edges", []),
        "createdAt": workflow.created_at.isoformat(),
        "updatedAt": workflow.updated_at.isoformat(),
    }


def _parse_document(payload: Any) -> tuple[WorkflowDocument | None, list[str]]:
    """Build a document from the request payload, returning errors if present."""

    if not isinstance(payload, dict):
        return None, ["payload must be an object"]
    try:
        return WorkflowDocument.from_dict(payload), []
    except OperationFormatError as exc:
        return None, [str(exc)]


def _rejection(exc: FinalizationError) -> tuple[object, int]:
    body = {
        "error": str(exc),
        "nodes": [node.to_dict() for node in exc.nodes],
        "edges": list(exc.dangling_edges),
        "triggers": list(exc.extra_triggers),
    }
    return jsonify(body), HTTPStatus.UNPROCESSABLE_ENTITY


def _accept(document: WorkflowDocument) -> tuple[str | None, list[str]]:
    """Serialise an accepted document, enforcing the configured size cap."""

    document_text = json.dumps(
        {
            "nodes": [node.to_dict() for node in document.nodes],
            "edges": [edge.to_dict() for edge in document.edges],
        }
    )
    max_bytes = int(current_app.config.get("MAX_DOCUMENT_BYTES", 500_000))
    if len(document_text.encode("utf-8")) > max_bytes:
        return None, ["workflow exceeds the maximum size"]
    return document_text, []


@bp.post("/workflows")
def create_workflow() -> tuple[object, int]:
    document, errors = _parse_document(request.get_json(silent=True, force=True))
    if errors:
        return jsonify({"errors": errors}), HTTPStatus.BAD_REQUEST

    try:
        finalize_document(document)
    except FinalizationError as exc:
        persist_run_log("persist", f"rejected new workflow: {exc}")
        return _rejection(exc)

    document_text, errors = _accept(document)
    if errors:
        return jsonify({"errors": errors}), HTTPStatus.BAD_REQUEST

    workflow = Workflow(
        name=(document.name or "").strip() or DEFAULT_WORKFLOW_NAME,
        description=document.description or "",
        document_json=document_text,
    )
    db.session.add(workflow)
    db.session.commit()
    persist_run_log("persist", f"created workflow {workflow.id} with {len(document.nodes)} nodes")

    return jsonify(_serialize_workflow(workflow)), HTTPStatus.CREATED


@bp.post("/workflows/validate")
def validate_workflow() -> tuple[object, int]:
    document, errors = _parse_document(request.get_json(silent=True, force=True))
    if errors:
        return jsonify({"errors": errors}), HTTPStatus.BAD_REQUEST

    try:
        finalize_document(document)
    except FinalizationError as exc:
        return _rejection(exc)
    return jsonify({"valid": True}), HTTPStatus.OK


@bp.get("/workflows")
def list_workflows() -> tuple[object, int]:
    workflows = Workflow.query.order_by(Workflow.created_at.desc()).all()
    return (
        jsonify([{"id": wf.id, "name": wf.name, "description": wf.description or ""} for wf in workflows]),
        HTTPStatus.OK,
    )


@bp.get("/workflows/<int:workflow_id>")
def get_workflow(workflow_id: int) -> tuple[object, int]:
    workflow = db.get_or_404(Workflow, workflow_id)
    return jsonify(_serialize_workflow(workflow)), HTTPStatus.OK


@bp.put("/workflows/<int:workflow_id>")
def update_workflow(workflow_id: int) -> tuple[object, int]:
    workflow = db.get_or_404(Workflow, workflow_id)
    document, errors = _parse_document(request.get_json(silent=True, force=True))
    if errors:
        return jsonify({"errors": errors}), HTTPStatus.BAD_REQUEST

    try:
        finalize_document(document)
    except FinalizationError as exc:
        persist_run_log("persist", f"rejected update of workflow {workflow_id}: {exc}")
        return _rejection(exc)

    document_text, errors = _accept(document)
    if errors:
        return jsonify({"errors": errors}), HTTPStatus.BAD_REQUEST

    if document.name and document.name.strip():
        workflow.name = document.name.strip()
    if document.description is not None:
        workflow.description = document.description
    workflow.document_json = document_text
    db.session.commit()

    return jsonify(_serialize_workflow(workflow)), HTTPStatus.OK


@bp.delete("/workflows/<int:workflow_id>")
def delete_workflow(workflow_id: int) -> tuple[object, int]:
    workflow = db.get_or_404(Workflow, workflow_id)
    db.session.delete(workflow)
    db.session.commit()
    return "", HTTPStatus.NO_CONTENT
