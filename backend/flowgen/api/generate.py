"""Streaming endpoint turning a prompt into workflow operations."""

from __future__ import annotations

import json
from collections.abc import Iterator
from http import HTTPStatus

from flask import Blueprint, Response, current_app, jsonify, request, stream_with_context

from ..extensions import limiter
from ..generation import GenerationRequest, build_system_prompt, build_user_prompt, get_fragment_source
from ..models.logs import persist_run_log
from ..streaming.envelope import NDJSON_MIMETYPE, iter_envelopes
from ..workflow.document import OperationFormatError, WorkflowDocument
from ..workflow.session import GenerationSession
from ..workflow.validator import find_incomplete_nodes

bp = Blueprint("generate", __name__)


def _generate_limit() -> str:
    return current_app.config.get("GENERATE_RATE_LIMIT", "10 per minute")


def _parse_history(value: object) -> list[dict[str, str]]:
    if not isinstance(value, list):
        return []
    history: list[dict[str, str]] = []
    for message in value:
        if not isinstance(message, dict):
            continue
        role = message.get("role")
        content = message.get("content")
        if isinstance(role, str) and isinstance(content, str):
            history.append({"role": role, "content": content})
    return history


@bp.post("/ai/generate")
@limiter.limit(_generate_limit)
def generate_workflow() -> Response | tuple[object, int]:
    payload = request.get_json(silent=True, force=True) or {}
    prompt = payload.get("prompt")
    if not isinstance(prompt, str) or not prompt.strip():
        return jsonify({"error": "Prompt is required"}), HTTPStatus.BAD_REQUEST

    existing: WorkflowDocument | None = None
    if payload.get("existingWorkflow") is not None:
        try:
            existing = WorkflowDocument.from_dict(payload["existingWorkflow"])
        except OperationFormatError as exc:
            return jsonify({"error": f"existingWorkflow is invalid: {exc}"}), HTTPStatus.BAD_REQUEST

    source = get_fragment_source(current_app)
    if source is None:
        return (
            jsonify({"error": "AI source not configured on server. Please contact support."}),
            HTTPStatus.INTERNAL_SERVER_ERROR,
        )

    session = GenerationSession(existing)
    generation_request = GenerationRequest(
        prompt=prompt,
        user_prompt=build_user_prompt(prompt, existing),
        system_prompt=build_system_prompt(),
        history=_parse_history(payload.get("conversationHistory")),
        existing=existing,
    )
    logger = current_app.logger

    def fragments() -> Iterator[str]:
        # The model call starts lazily so its failures surface as an error envelope.
        yield from source(generation_request)

    @stream_with_context
    def envelope_stream() -> Iterator[str]:
        logger.info("Generating workflow (edit=%s)", existing is not None)
        yield from iter_envelopes(fragments(), session)

        stats = session.stats()
        incomplete = find_incomplete_nodes(session.document)
        if incomplete:
            logger.warning(
                "Generated workflow has %s incomplete node(s): %s",
                len(incomplete),
                ", ".join(node.node_id for node in incomplete),
            )
        stats["incomplete"] = len(incomplete)
        persist_run_log("generate", json.dumps(stats))

    return Response(
        envelope_stream(),
        mimetype=NDJSON_MIMETYPE,
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )
