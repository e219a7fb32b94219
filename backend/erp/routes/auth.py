# Overview: Flask API routes for auth operations; parses input and returns JSON responses.

# backend/erp/routes/auth.py
"""
Authentication API routes.

- POST /register: self-registration, gets the default (viewer) role
- POST /login: username (or email) + password -> signed token
- GET /me: the caller with role names and effective permissions
"""

from flask import Blueprint, current_app, g, request

from ..decorators import require_auth
from ..models import User
from ..services import auth_service
from ..services.auth_service import InvalidCredentialsError
from ..validation import ModelValidationPolicy, enforce_rules_email, validate_payload
from .common import json_body, pop_field

REGISTER_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({"username", "email", "first_name", "last_name"}),
    required_on_create=frozenset({"username", "email"}),
)

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.post("/register")
def register_route():
    payload = dict(json_body())
    password = pop_field(payload, "password")
    patch = validate_payload(model=User, payload=payload, policy=REGISTER_POLICY, partial=False)
    enforce_rules_email(patch)

    result = auth_service.register(patch=patch, password=password)
    current_app.logger.info("User %s registered", result["user"]["id"])
    return result, 201


@auth_bp.post("/login")
def login_route():
    """
    Authenticate user and issue a token.

    Every failure answers the same "Invalid credentials" so callers cannot
    discover which usernames exist.
    """
    payload = json_body()
    try:
        return auth_service.login(payload.get("username") or payload.get("email"), payload.get("password"))
    except InvalidCredentialsError:
        current_app.logger.warning("Failed login attempt from %s", request.remote_addr)
        raise


@auth_bp.get("/me")
@require_auth
def me_route():
    return g.principal.to_dict()
