"""Feedback routes - submit, list and aggregate user ratings."""

from flask import Blueprint, jsonify, request

from ..responses import dump, error_response
from ..services import get_api

bp = Blueprint("feedback", __name__)


@bp.route("/feedback", methods=["POST"])
def submit():
    """Store one feedback record (UserFeedback fields, camelCase or snake_case).

    Missing or out-of-range fields are reported by feedback validation.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return error_response("Request body must be a JSON object")

    response = get_api().submit_feedback(data)
    return jsonify(dump(response)), 200 if response.success else 400


@bp.route("/feedback", methods=["GET"])
def list_feedback():
    """Feedback for one session: ``/feedback?sessionId=...``."""
    session_id = request.args.get("sessionId")
    if not session_id:
        return error_response("Missing required query parameter: sessionId")

    feedback = get_api().get_feedback(session_id)
    return jsonify({"success": True, "feedback": [dump(entry) for entry in feedback]})


@bp.route("/stats", methods=["GET"])
def stats():
    """Aggregated feedback statistics."""
    return jsonify({"success": True, "stats": dump(get_api().get_feedback_stats())})
