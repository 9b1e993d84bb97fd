"""Shared route helpers: standardized error responses and query validation."""

from flask import jsonify, request
from pydantic import ValidationError


def api_error(message, status_code=400, details=None):
    """Standardized error response: {"error": "...", "status": N}"""
    payload = {"error": message, "status": status_code}
    if details:
        payload.update(details)
    return jsonify(payload), status_code


def validate_query(model_class):
    """Parse and validate query-string arguments against a Pydantic model.

    Returns (model_instance, None) on success, or (None, error_response) on failure.
    """
    try:
        return model_class(**request.args.to_dict()), None
    except ValidationError as e:
        errors = [{"field": err["loc"][-1], "message": err["msg"]} for err in e.errors()]
        return None, api_error("Validation failed", 400, {"details": errors})
