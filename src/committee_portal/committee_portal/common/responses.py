from __future__ import annotations

import logging

from flask import jsonify

from ..core.exceptions import (
    AuthorizationError,
    ConstraintViolation,
    DomainError,
    InvalidCredentials,
    NotFound,
    StorageUnavailable,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (InvalidCredentials, 401),
    (AuthorizationError, 403),
    (NotFound, 404),
    (ConstraintViolation, 409),
    (ValidationError, 400),
    (StorageUnavailable, 503),
)


def ok(**payload):
    return jsonify({"success": True, **payload})


def error_response(exc: DomainError):
    for error_cls, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            return jsonify({"success": False, "error": type(exc).__name__, "message": str(exc)}), status
    return jsonify({"success": False, "error": type(exc).__name__, "message": str(exc)}), 400


def internal_error(action: str):
    logger.exception("unexpected error while %s", action)
    return jsonify({"success": False, "message": f"Internal error while {action}"}), 500
