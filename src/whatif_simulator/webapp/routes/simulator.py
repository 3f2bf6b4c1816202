"""Simulator routes - health, scenario processing and configuration."""

import asyncio

from flask import Blueprint, current_app, jsonify, request

from whatif_simulator import __version__

from ..responses import dump, error_response, utc_timestamp
from ..services import get_api

bp = Blueprint("simulator", __name__)


@bp.route("/", methods=["GET"])
def health():
    """Health check."""
    return jsonify(
        {
            "status": "healthy",
            "service": current_app.config["SERVICE_NAME"],
            "version": __version__,
            "timestamp": utc_timestamp(),
        }
    )


@bp.route("/process", methods=["POST"])
def process():
    """Run one scenario through the pipeline.

    Body: ``{"scenario": str, "sessionId"?: str}``. Responds 400 with the
    specific validation message when the scenario is rejected.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or "scenario" not in data:
        return error_response("Missing required field: scenario")

    session_id = data.get("sessionId")
    if session_id is not None and not isinstance(session_id, str):
        return error_response("sessionId must be a string")

    # Run async pipeline in sync context
    response = asyncio.run(get_api().process_scenario(data["scenario"], session_id))

    return jsonify(dump(response)), 200 if response.success else 400


@bp.route("/config", methods=["GET"])
def get_config():
    """Current simulator configuration."""
    config = get_api().get_config()
    return jsonify({"success": True, "config": config.model_dump(by_alias=True)})


@bp.route("/config", methods=["PUT"])
def update_config():
    """Partially update simulator configuration.

    Body: ``{"config": {...}}`` with camelCase or snake_case keys.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not isinstance(data.get("config"), dict):
        return error_response("Missing required field: config")

    try:
        config = get_api().update_config(data["config"])
    except ValueError as e:
        return error_response(str(e))

    return jsonify(
        {
            "success": True,
            "message": "Configuration updated successfully",
            "config": config.model_dump(by_alias=True),
        }
    )
