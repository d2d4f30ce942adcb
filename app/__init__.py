"""Campus Runway Planner Flask Application Factory."""

import logging
from typing import Any, Optional

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from app.config import Settings, get_global_settings


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        settings: Explicit settings (defaults to the global environment settings)

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)

    # Configuration from Pydantic Settings
    settings = settings or get_global_settings()
    app.config["SECRET_KEY"] = settings.secret_key
    app.config["ENV"] = settings.flask_env
    app.config["DEBUG"] = settings.app_env == "development"
    app.config["TESTING"] = settings.app_env == "testing"
    app.config["CURRENCY_CODE"] = settings.currency_code

    logging.basicConfig(level=settings.log_level)
    app.logger.setLevel(settings.log_level)

    # Services share one storage backend so every request sees the same data
    from app.services import FinancialsService, ProfileService, RunwayService
    from app.storage import create_storage_service

    storage = create_storage_service(settings)
    profile_service = ProfileService(storage)
    financials_service = FinancialsService(storage)
    app.extensions["runway_planner"] = {
        "storage": storage,
        "profile_service": profile_service,
        "financials_service": financials_service,
        "runway_service": RunwayService(profile_service, financials_service),
    }

    # Register blueprints
    from app.blueprints.health import health_bp
    from app.blueprints.runway import runway_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(runway_bp)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception) -> Any:
        if isinstance(e, HTTPException):
            return e
        app.logger.error(f"Unhandled error: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500

    return app
