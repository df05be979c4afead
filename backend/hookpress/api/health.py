"""Health check endpoint."""

from flask import Blueprint, jsonify

from ..extensions import host

bp = Blueprint("health", __name__)


@bp.get("/health")
def health() -> tuple[dict[str, object], int]:
    """Return the service health status and the plugins that are active."""
    return jsonify({"status": "ok", "plugins": host.state().active_plugins}), 200
