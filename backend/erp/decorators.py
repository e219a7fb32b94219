# Overview: Request and permission decorators for API routes.

from functools import wraps

from flask import current_app, g, jsonify, request

from .extensions import db
from .models import User
from .services import permission_service
from .services.permission_service import PermissionDeniedError
from .services.token_service import AuthenticationError, decode_token


def _unauthenticated(message: str):
    return jsonify({"error": "Unauthenticated", "message": message}), 401


def require_auth(f):
    """
    Require a valid bearer token from an active user.

    Sets g.principal (id, username, email, role names, permission set).
    Roles and permissions are loaded from the database on each request, so
    revoking a role takes effect on the caller's next request.

    Returns 401 if:
    - No Authorization header
    - Invalid or expired token
    - User no longer exists or is deactivated
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth_header = request.headers.get("Authorization")

        if not auth_header or not auth_header.startswith("Bearer "):
            return _unauthenticated("Authentication required")

        token = auth_header.split(" ", 1)[1].strip()

        try:
            claims = decode_token(token)
        except AuthenticationError as e:
            return _unauthenticated(str(e))

        user = db.session.get(User, claims["id"])
        if user is None or not user.is_active:
            return _unauthenticated("Invalid or expired token")

        g.principal = permission_service.build_principal(user)
        return f(*args, **kwargs)

    return decorated_function


def require_permission(permission_code):
    """Require a specific permission. Must be stacked under @require_auth."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            principal = getattr(g, "principal", None)
            if principal is None:
                return _unauthenticated("Authentication required")

            try:
                permission_service.require_permission(principal, permission_code)
            except PermissionDeniedError as e:
                current_app.logger.warning(
                    "Permission denied: user=%s permission=%s path=%s",
                    principal.id, permission_code, request.path,
                )
                return jsonify({
                    "error": "Forbidden",
                    "required_permission": str(permission_code),
                    "message": str(e),
                }), 403

            return f(*args, **kwargs)

        return decorated_function
    return decorator
