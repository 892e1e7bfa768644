"""JSON plumbing shared by the controllers: request bodies, error mapping, CORS."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from flask import Flask, jsonify, request
from werkzeug.exceptions import BadRequest, HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from .validators import require_json_object

logger = logging.getLogger(__name__)

# Checked in order; the first matching class wins.
ERROR_STATUS: tuple[tuple[type[DomainError], int], ...] = (
    (UnauthenticatedError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    # 400 rather than 409: the existing client expects it.
    (ConflictError, 400),
    (AuthenticationError, 400),
    (ValidationError, 400),
)


def status_for(exc: DomainError) -> int:
    for exc_type, status in ERROR_STATUS:
        if isinstance(exc, exc_type):
            return status
    return 400


def json_body() -> Mapping[str, Any]:
    """The request's JSON object; an empty body counts as `{}`."""
    if not request.get_data(cache=True):
        return {}
    try:
        payload = request.get_json(force=True)
    except BadRequest:
        raise ValidationError("Request body must be valid JSON")
    return require_json_object(payload)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status = status_for(exc)
        if status in (401, 403):
            logger.warning("%s %s -> %s: %s", request.method, request.path, status, exc)
        return jsonify({"message": str(exc)}), status

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"message": exc.description or exc.name}), exc.code or 500

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        body = {"message": "Server error"}
        if app.config.get("DEBUG"):
            body["error"] = str(exc)
        return jsonify(body), 500


def register_cors(app: Flask, *, origins: str = "*") -> None:
    allowed = [o.strip() for o in (origins or "*").split(",") if o.strip()] or ["*"]

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        if "*" in allowed:
            response.headers["Access-Control-Allow-Origin"] = "*"
        elif origin in allowed:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers.add("Vary", "Origin")
        response.headers["Access-Control-Allow-Headers"] = "Authorization, Content-Type"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, DELETE, OPTIONS"
        return response
