"""API endpoints exposing run log entries."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from ..models.logs import LOG_SOURCES, RunLog

bp = Blueprint("logs", __name__)


def _serialize_entry(entry: RunLog) -> dict[str, object]:
    return {
        "id": entry.id,
        "source": entry.source,
        "message": entry.message,
        "createdAt": entry.created_at.isoformat(),
    }


@bp.get("/logs")
def get_logs() -> tuple[object, int]:
    source = request.args.get("source")
    limit = request.args.get("limit", type=int) or 200
    limit = max(1, min(limit, 200))

    query = RunLog.query
    if source:
        if source not in LOG_SOURCES:
            return jsonify({"error": "invalid source"}), HTTPStatus.BAD_REQUEST
        query = query.filter_by(source=source)

    entries = query.order_by(RunLog.id.desc()).limit(limit).all()
    return jsonify([_serialize_entry(entry) for entry in entries]), HTTPStatus.OK
