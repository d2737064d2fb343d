from __future__ import annotations

import logging

from flask import jsonify

from ..core.exceptions import (
    AuthorizationError,
    DomainError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def error_response(exc: DomainError):
    """Map a domain error onto a JSON error body and HTTP status."""
    if isinstance(exc, ValidationError):
        return jsonify({"error": str(exc)}), 400
    if isinstance(exc, NotFoundError):
        return jsonify({"error": str(exc)}), 404
    if isinstance(exc, AuthorizationError):
        return jsonify({"error": str(exc)}), 403
    if isinstance(exc, StoreUnavailableError):
        logger.error("Shift store unavailable: %s", exc)
        return jsonify({"error": "Service temporarily unavailable"}), 503
    logger.error("Unhandled domain error: %s", exc)
    return jsonify({"error": "Internal server error"}), 500
