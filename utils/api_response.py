"""
JSON envelope helpers shared by every route.

    Success:  {"success": true, "data": ..., "message": "...", "warning": "..."}
    Error:    {"success": false, "error": "..."}

Domain errors (utils.exceptions) are turned into the error envelope by
api_exception, using the HTTP status each error class carries.

Usage:
    from utils.api_response import api_success, api_error, api_exception, request_json

    data = request_json()

    return api_success(data=reservation, message='Reservation confirmed')
    return api_error('Request body is required')
    return api_exception(ConflictError('This time slot is already blocked'))
"""

from flask import jsonify, request
from typing import Any

from utils.exceptions import ReservationSystemError, ValidationError
from utils.messages import MESSAGES


def api_success(
    data: dict | list | None = None,
    message: str | None = None,
    warning: str | None = None,
    status: int = 200,
    **extra_fields: Any
) -> tuple:
    """
    Build a success response.

    Args:
        data: Payload under 'data' (omitted when None)
        message: Text for the operator or customer
        warning: Non-fatal problem, e.g. a notification that did not go out
        status: HTTP status code
        **extra_fields: Extra top-level keys such as count

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': True}

    if data is not None:
        response['data'] = data
    if message:
        response['message'] = message
    if warning:
        response['warning'] = warning
    response.update(extra_fields)

    return jsonify(response), status


def api_error(error: str, status: int = 400, **extra_fields: Any) -> tuple:
    """
    Build an error response.

    Args:
        error: User-facing message
        status: HTTP status code
        **extra_fields: Extra top-level keys

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': False, 'error': error}
    response.update(extra_fields)
    return jsonify(response), status


def api_exception(error: ReservationSystemError) -> tuple:
    """Error response for a domain exception (400, 403, 404 or 409)."""
    return api_error(error.message, status=error.status_code)


def request_json() -> dict:
    """
    JSON object body of the current request.

    Raises:
        ValidationError: Body is missing, empty, or not a JSON object
    """
    data = request.get_json(silent=True)
    if data is not None and not isinstance(data, dict):
        raise ValidationError(MESSAGES['body_must_be_object'])
    if not data:
        raise ValidationError(MESSAGES['data_required'])
    return data
