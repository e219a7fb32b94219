# Overview: Flask API routes for roles and their permission sets.

from flask import Blueprint

from ..decorators import require_auth, require_permission
from ..models import Role
from ..permissions import PermissionCode
from ..services import roles_service
from ..validation import ModelValidationPolicy, parse_id_list, validate_payload
from .common import json_body, list_args, pop_field

ROLE_POLICY = ModelValidationPolicy(
    writable_fields=frozenset(roles_service.ROLE_MUTABLE_FIELDS),
    required_on_create=frozenset({"name"}),
)

roles_bp = Blueprint("roles", __name__, url_prefix="/api/roles")


def _parse(partial: bool):
    payload = dict(json_body())
    permissions = pop_field(payload, "permissions", "permissionIds", "permission_ids")
    patch = validate_payload(model=Role, payload=payload, policy=ROLE_POLICY, partial=partial)
    permission_ids = parse_id_list(permissions, "permissions") if permissions is not None else None
    return patch, permission_ids


@roles_bp.get("")
@require_auth
@require_permission(PermissionCode.VIEW_ROLES)
def list_roles():
    return roles_service.list_roles(**list_args())


@roles_bp.get("/<int:role_id>")
@require_auth
@require_permission(PermissionCode.VIEW_ROLES)
def get_role(role_id: int):
    """Role with its permissions."""
    return roles_service.get_role(role_id)


@roles_bp.post("")
@require_auth
@require_permission(PermissionCode.CREATE_ROLES)
def create_role():
    patch, permission_ids = _parse(partial=False)
    return roles_service.create_role(patch=patch, permission_ids=permission_ids), 201


@roles_bp.put("/<int:role_id>")
@require_auth
@require_permission(PermissionCode.EDIT_ROLES)
def update_role(role_id: int):
    patch, permission_ids = _parse(partial=True)
    return roles_service.update_role(role_id, patch=patch, permission_ids=permission_ids)


@roles_bp.delete("/<int:role_id>")
@require_auth
@require_permission(PermissionCode.DELETE_ROLES)
def delete_role(role_id: int):
    roles_service.delete_role(role_id)
    return {"message": "Role deleted successfully"}
