from __future__ import annotations

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from .http import fail

_STATUS_BY_ERROR = (
    (ValidationError, 400, "VALIDATION_ERROR"),
    (AuthenticationError, 401, "AUTHENTICATION_ERROR"),
    (AuthorizationError, 403, "FORBIDDEN"),
    (NotFoundError, 404, "NOT_FOUND"),
    (ConflictError, 409, "CONFLICT"),
)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        for error_type, status, code in _STATUS_BY_ERROR:
            if isinstance(e, error_type):
                return fail(str(e), status=status, code=code)
        # e.g. UnknownEmployeeTypeError: data that should never have been stored
        app.logger.exception("Unhandled domain error on %s %s", request.method, request.path)
        return fail("Error interno del servidor", status=500, code="INTERNAL_ERROR")

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return fail(e.description or e.name, status=e.code or 500)

    @app.errorhandler(Exception)
    def _unhandled(e: Exception):
        app.logger.exception("Unexpected error on %s %s", request.method, request.path)
        detail = str(e) if app.config.get("DEBUG") else None
        return fail("Error interno del servidor", status=500, code="INTERNAL_ERROR", detail=detail)
