"""JSON response helpers shared by the blueprints."""

from datetime import datetime, timezone
from typing import Any

from flask import jsonify
from pydantic import BaseModel


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def dump(model: BaseModel) -> dict[str, Any]:
    """Serialize a model with its public camelCase field names."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def error_response(message: str, status: int = 400):
    """Uniform failure body: ``{success: false, error, timestamp}``."""
    return jsonify({"success": False, "error": message, "timestamp": utc_timestamp()}), status
