"""
Runway blueprint: profile, financial records and runway projections.

All handlers go through the services registered on the application by
``create_app``, which share one storage backend.
"""

from datetime import date
from typing import Any, Dict, Tuple

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from app.models.financials import IncomeEvent, RecurringObligation
from app.models.profile import ProfileCreate
from app.models.runway import InvalidInput, ProjectionInput, RunwayProjector
from app.models.runway_metrics import summarize_projection
from app.services import (
    FinancialsService,
    ProfileNotFoundError,
    ProfileService,
    RunwayService,
)
from app.storage import export_documents

runway_bp = Blueprint("runway", __name__, url_prefix="/api")

EXTENSION_KEY = "runway_planner"


def _services() -> Dict[str, Any]:
    return current_app.extensions[EXTENSION_KEY]


def _profile_service() -> ProfileService:
    return _services()["profile_service"]


def _financials_service() -> FinancialsService:
    return _services()["financials_service"]


def _runway_service() -> RunwayService:
    return _services()["runway_service"]


def _validation_error(e: ValidationError) -> Tuple[Any, int]:
    details = [
        {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
        for err in e.errors()
    ]
    return jsonify({"error": "Validation failed", "details": details}), 400


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@runway_bp.errorhandler(ValidationError)
def handle_validation_error(e: ValidationError) -> Any:
    return _validation_error(e)


@runway_bp.errorhandler(InvalidInput)
def handle_invalid_input(e: InvalidInput) -> Any:
    return jsonify({"error": "Invalid input", "details": str(e)}), 400


@runway_bp.errorhandler(ProfileNotFoundError)
def handle_profile_not_found(e: ProfileNotFoundError) -> Any:
    return jsonify({"error": "Profile not found", "details": str(e)}), 404


@runway_bp.route("/profile", methods=["GET"])
def get_profile() -> Any:
    """Get the stored student profile."""
    profile = _profile_service().require_profile()
    return jsonify(profile.model_dump(mode="json"))


@runway_bp.route("/profile", methods=["POST"])
def create_profile() -> Any:
    """Create the student profile from an onboarding form."""
    form = ProfileCreate.model_validate(_json_body())
    profile = _profile_service().create_profile(form)
    return jsonify(profile.model_dump(mode="json")), 201


@runway_bp.route("/profile", methods=["PATCH"])
def update_profile() -> Any:
    """Update fields of the stored profile."""
    try:
        profile = _profile_service().update_profile(**_json_body())
    except ValidationError:
        raise
    except ValueError as e:
        return jsonify({"error": "Invalid update", "details": str(e)}), 400
    return jsonify(profile.model_dump(mode="json"))


@runway_bp.route("/profile", methods=["DELETE"])
def reset_profile() -> Any:
    """Delete the stored profile."""
    _profile_service().reset_profile()
    return "", 204


@runway_bp.route("/financials", methods=["GET"])
def get_financials() -> Any:
    """Get all obligations and income events."""
    data = _financials_service().get_financials()
    return jsonify(data.model_dump(mode="json"))


@runway_bp.route("/financials/obligations", methods=["POST"])
def add_obligation() -> Any:
    """Add a recurring obligation."""
    obligation = RecurringObligation.model_validate(_json_body())
    _financials_service().add_obligation(obligation)
    return jsonify(obligation.model_dump(mode="json")), 201


@runway_bp.route("/financials/obligations/<obligation_id>", methods=["DELETE"])
def remove_obligation(obligation_id: str) -> Any:
    """Remove a recurring obligation."""
    if not _financials_service().remove_obligation(obligation_id):
        return jsonify({"error": "Obligation not found"}), 404
    return "", 204


@runway_bp.route("/financials/income", methods=["POST"])
def add_income_event() -> Any:
    """Add an expected income event."""
    income_event = IncomeEvent.model_validate(_json_body())
    _financials_service().add_income_event(income_event)
    return jsonify(income_event.model_dump(mode="json")), 201


@runway_bp.route("/financials/income/<income_event_id>", methods=["DELETE"])
def remove_income_event(income_event_id: str) -> Any:
    """Remove an expected income event."""
    if not _financials_service().remove_income_event(income_event_id):
        return jsonify({"error": "Income event not found"}), 404
    return "", 204


@runway_bp.route("/runway", methods=["GET"])
def get_runway() -> Any:
    """Project the stored profile's runway.

    Query parameters:
        start_date: Optional ISO date of the first simulated day (default today)
    """
    raw_start = request.args.get("start_date")
    start_date = None
    if raw_start:
        try:
            start_date = date.fromisoformat(raw_start)
        except ValueError:
            return (
                jsonify({"error": "Invalid start_date", "details": raw_start}),
                400,
            )

    report = _runway_service().calculate(start_date)
    return jsonify(report.model_dump(mode="json"))


@runway_bp.route("/runway/projection", methods=["POST"])
def run_projection() -> Any:
    """Run a stateless projection from the request body."""
    projection_input = ProjectionInput.model_validate(_json_body())
    projector: RunwayProjector = _runway_service().projector
    result = projector.project(projection_input)
    summary = summarize_projection(result, projection_input.current_balance)
    return jsonify(
        {
            "projection": result.model_dump(mode="json"),
            "summary": summary.model_dump(mode="json"),
        }
    )


@runway_bp.route("/export", methods=["GET"])
def export_data() -> Any:
    """Download every stored document as a ``{key: document}`` backup."""
    backup = export_documents(_services()["storage"])
    current_app.logger.info(f"Exported {len(backup)} stored documents")
    return jsonify(backup)
