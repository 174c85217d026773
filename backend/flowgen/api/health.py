"""Health check endpoint."""

from flask import Blueprint, current_app, jsonify

from ..generation import get_fragment_source

bp = Blueprint("health", __name__)


@bp.get("/health")
def health() -> tuple[dict[str, object], int]:
    """Return the service status and whether generation can be served."""
    return (
        jsonify(
            {
                "status": "ok",
                "generation": get_fragment_source(current_app) is not None,
            }
        ),
        200,
    )
