"""Health check blueprint."""

from typing import Any

from flask import Blueprint, current_app, jsonify

from app.storage import StorageError

health_bp = Blueprint("health", __name__)


@health_bp.route("/healthz")
def health_check() -> Any:
    """Health check endpoint.

    Returns:
        JSON response with status information; 503 if storage is unreachable
    """
    storage = current_app.extensions["runway_planner"]["storage"]
    try:
        storage.list_keys()
    except StorageError as e:
        current_app.logger.error(f"Storage health check failed: {str(e)}")
        return jsonify({"status": "degraded", "storage": "unavailable"}), 503
    return jsonify({"status": "ok", "storage": "ok"})
