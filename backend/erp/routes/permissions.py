# Overview: Read-only Flask API routes for the permission catalog.

from flask import Blueprint

from ..decorators import require_auth, require_permission
from ..permissions import PermissionCode
from ..services import permission_service
from .common import list_args

permissions_bp = Blueprint("permissions", __name__, url_prefix="/api/permissions")


@permissions_bp.get("")
@require_auth
@require_permission(PermissionCode.VIEW_PERMISSIONS)
def list_permissions():
    return permission_service.list_permissions(**list_args())


@permissions_bp.get("/<int:permission_id>")
@require_auth
@require_permission(PermissionCode.VIEW_PERMISSIONS)
def get_permission(permission_id: int):
    return permission_service.get_permission(permission_id)
