"""
Error taxonomy for the API.

Every error the service layer raises on purpose is a CookenuError; the
handlers registered here turn them into `{"message": ...}` JSON bodies
with the matching status code.
"""
from __future__ import annotations

import logging

from flask import Flask, g, jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class CookenuError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CookenuError):
    """Bad or missing input, or credentials that do not match."""

    status_code = 400


class AuthenticationError(CookenuError):
    """Missing, malformed, expired or forged bearer token."""

    status_code = 401


class NotFoundError(CookenuError):
    status_code = 404

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class StorageError(CookenuError):
    """The database rejected or failed a statement."""

    status_code = 500

    def __init__(self, operation: str):
        super().__init__(f"Storage failure during {operation}")
        self.operation = operation


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(CookenuError)
    def _handle_cookenu_error(e: CookenuError):
        if isinstance(e, StorageError):
            app.logger.error("Storage error (operation=%s request_id=%s)", e.operation, getattr(g, "request_id", None))
        return jsonify({"message": e.message}), e.status_code

    @app.errorhandler(HTTPException)
    def _handle_http_error(e: HTTPException):
        return jsonify({"message": e.description}), e.code

    @app.errorhandler(Exception)
    def _handle_unexpected(e: Exception):
        # Ensure stack trace shows in the server logs.
        app.logger.exception("Unhandled 500 (request_id=%s)", getattr(g, "request_id", None))
        return jsonify({"message": "Internal server error"}), 500
