# Overview: Translate domain exceptions into JSON error responses.

from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException

from .services.auth_service import InvalidCredentialsError
from .services.permission_service import PermissionDeniedError
from .services.token_service import AuthenticationError
from .validation import ConflictError, NotFoundError, ValidationError


def error_response(message: str, status: int, kind: str, errors: dict | None = None):
    body = {"error": kind, "message": message}
    if errors:
        body["errors"] = errors
    return jsonify(body), status


def register_error_handlers(app) -> None:
    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        return error_response(str(e), 400, "ValidationError", e.errors)

    @app.errorhandler(ConflictError)
    def handle_conflict(e):
        return error_response(str(e), 400, "Conflict")

    @app.errorhandler(InvalidCredentialsError)
    def handle_invalid_credentials(e):
        return error_response("Invalid credentials", 400, "InvalidCredentials")

    @app.errorhandler(NotFoundError)
    def handle_not_found(e):
        return error_response(str(e), 404, "NotFound")

    @app.errorhandler(AuthenticationError)
    def handle_unauthenticated(e):
        return error_response(str(e), 401, "Unauthenticated")

    @app.errorhandler(PermissionDeniedError)
    def handle_forbidden(e):
        return error_response(str(e), 403, "Forbidden")

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return error_response(e.description, e.code, e.name.replace(" ", ""))

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        current_app.logger.exception("Unhandled error")
        return error_response("Internal server error", 500, "InternalError")
