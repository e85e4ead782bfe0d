"""Map domain exceptions onto JSON error responses."""

from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def handle_validation(exc: ValidationError):
        logger.info("Validation error on %s %s: %s", request.method, request.path, exc)
        body = {"error": str(exc)}
        if exc.errors:
            body["errors"] = exc.errors
        return jsonify(body), 400

    @app.errorhandler(AuthenticationError)
    def handle_authentication(exc: AuthenticationError):
        return jsonify({"error": str(exc)}), 401

    @app.errorhandler(AuthorizationError)
    def handle_authorization(exc: AuthorizationError):
        logger.warning("Forbidden %s %s: %s", request.method, request.path, exc)
        return jsonify({"error": str(exc)}), 403

    @app.errorhandler(NotFoundError)
    def handle_not_found(exc: NotFoundError):
        return jsonify({"error": str(exc)}), 404

    @app.errorhandler(404)
    def handle_unknown_route(exc):
        return jsonify({"error": "Route not found"}), 404

    @app.errorhandler(HTTPException)
    def handle_http(exc: HTTPException):
        return jsonify({"error": exc.description or exc.name}), exc.code or 500

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Internal server error"}), 500
