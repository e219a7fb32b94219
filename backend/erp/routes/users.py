# Overview: Flask API routes for user administration.

from flask import Blueprint

from ..decorators import require_auth, require_permission
from ..models import User
from ..permissions import PermissionCode
from ..services import users_service
from ..validation import ModelValidationPolicy, enforce_rules_email, parse_id_list, validate_payload
from .common import json_body, list_args, pop_field

USER_POLICY = ModelValidationPolicy(
    writable_fields=frozenset(users_service.USER_MUTABLE_FIELDS),
    required_on_create=frozenset({"username", "email"}),
    aliases={"active": "is_active"},
)

users_bp = Blueprint("users", __name__, url_prefix="/api/users")


def _parse(partial: bool):
    """Split a user payload into (patch, password, role ids)."""
    payload = dict(json_body())
    password = pop_field(payload, "password")
    roles = pop_field(payload, "roles", "roleIds", "role_ids")

    patch = validate_payload(model=User, payload=payload, policy=USER_POLICY, partial=partial)
    enforce_rules_email(patch)
    role_ids = parse_id_list(roles, "roles") if roles is not None else None
    return patch, password, role_ids


@users_bp.get("")
@require_auth
@require_permission(PermissionCode.VIEW_USERS)
def list_users():
    return users_service.list_users(**list_args())


@users_bp.get("/<int:user_id>")
@require_auth
@require_permission(PermissionCode.VIEW_USERS)
def get_user(user_id: int):
    return users_service.get_user(user_id)


@users_bp.post("")
@require_auth
@require_permission(PermissionCode.CREATE_USERS)
def create_user():
    patch, password, role_ids = _parse(partial=False)
    return users_service.create_user(patch=patch, password=password, role_ids=role_ids), 201


@users_bp.put("/<int:user_id>")
@require_auth
@require_permission(PermissionCode.EDIT_USERS)
def update_user(user_id: int):
    patch, password, role_ids = _parse(partial=True)
    # Forms send an empty password to mean "unchanged"
    if password == "":
        password = None
    return users_service.update_user(user_id, patch=patch, password=password, role_ids=role_ids)


@users_bp.delete("/<int:user_id>")
@require_auth
@require_permission(PermissionCode.DELETE_USERS)
def delete_user(user_id: int):
    users_service.delete_user(user_id)
    return {"message": "User deleted successfully"}
