# Overview: Service-layer operations for permissions; resolves principals and manages role grants.
"""
Permission resolution and catalog management.

A user's effective permission set is the deduplicated union of the
permissions of every role currently assigned to them. It is resolved
fresh for each authenticated request.
"""
from __future__ import annotations

from dataclasses import dataclass

from ..extensions import db
from ..models import Permission, Role, RolePermission, User, UserRole
from ..permissions import PERMISSION_DEFINITIONS, DEFAULT_ROLE_PERMISSIONS
from .common import get_or_404, paginate, search_filter


class PermissionDeniedError(Exception):
    """Raised when user lacks required permission."""


@dataclass(frozen=True)
class Principal:
    """The authenticated caller of the current request."""
    id: int
    username: str
    email: str
    roles: tuple[str, ...]
    permissions: frozenset[str]

    def has_permission(self, code: str) -> bool:
        return str(code) in self.permissions

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "roles": list(self.roles),
            "permissions": sorted(self.permissions),
        }


def get_user_permissions(user_id: int) -> set[str]:
    """
    Get all permission names for a user, e.g. {"view_orders", "create_orders"}.
    """
    rows = (
        db.session.query(Permission.name)
        .join(RolePermission, RolePermission.permission_id == Permission.id)
        .join(UserRole, UserRole.role_id == RolePermission.role_id)
        .filter(UserRole.user_id == user_id)
        .distinct()
        .all()
    )
    return {name for (name,) in rows}


def get_user_role_names(user_id: int) -> list[str]:
    """Get list of role names for a user."""
    rows = (
        db.session.query(Role.name)
        .join(UserRole, UserRole.role_id == Role.id)
        .filter(UserRole.user_id == user_id)
        .order_by(Role.name.asc())
        .all()
    )
    return [name for (name,) in rows]


def build_principal(user: User) -> Principal:
    return Principal(
        id=user.id,
        username=user.username,
        email=user.email,
        roles=tuple(get_user_role_names(user.id)),
        permissions=frozenset(get_user_permissions(user.id)),
    )


def require_permission(principal: Principal, permission_code: str) -> None:
    """Raise PermissionDeniedError unless the principal holds `permission_code`."""
    if not principal.has_permission(permission_code):
        raise PermissionDeniedError(f"Permission denied: {permission_code}")


def list_permissions(page: int | None = None, limit: int | None = None, search: str | None = None) -> dict:
    query = db.session.query(Permission)
    if search:
        query = query.filter(search_filter((Permission.name, Permission.description), search))
    query = query.order_by(Permission.name.asc(), Permission.id.asc())
    return paginate(query, key="permissions", page=page, limit=limit)


def get_permission(permission_id: int) -> dict:
    return get_or_404(Permission, permission_id, "Permission").to_dict()


def initialize_permissions() -> int:
    """
    Create Permission rows for every code in PERMISSION_DEFINITIONS.

    Idempotent: Safe to run multiple times.
    """
    created_count = 0
    for code, description, category in PERMISSION_DEFINITIONS:
        existing = db.session.query(Permission).filter_by(name=code.value).first()
        if not existing:
            db.session.add(Permission(name=code.value, description=description, category=category))
            created_count += 1

    db.session.commit()
    return created_count


def assign_default_role_permissions() -> int:
    """
    Link each default role to its DEFAULT_ROLE_PERMISSIONS.

    Roles that do not exist yet are skipped. Idempotent.
    """
    assigned_count = 0
    permissions_by_name = {p.name: p for p in db.session.query(Permission).all()}

    for role_name, codes in DEFAULT_ROLE_PERMISSIONS.items():
        role = db.session.query(Role).filter_by(name=role_name).first()
        if not role:
            continue
        existing = {
            pid for (pid,) in db.session.query(RolePermission.permission_id).filter_by(role_id=role.id)
        }
        for code in codes:
            permission = permissions_by_name.get(code.value)
            if permission is None or permission.id in existing:
                continue
            db.session.add(RolePermission(role_id=role.id, permission_id=permission.id))
            assigned_count += 1

    db.session.commit()
    return assigned_count


def grant_permission_to_role(role_name: str, permission_name: str) -> bool:
    """Returns False when the grant already existed."""
    role = db.session.query(Role).filter_by(name=role_name).first()
    if not role:
        raise ValueError(f"Role '{role_name}' not found")
    permission = db.session.query(Permission).filter_by(name=permission_name).first()
    if not permission:
        raise ValueError(f"Permission '{permission_name}' not found")

    if db.session.get(RolePermission, (role.id, permission.id)):
        return False

    db.session.add(RolePermission(role_id=role.id, permission_id=permission.id))
    db.session.commit()
    return True


def revoke_permission_from_role(role_name: str, permission_name: str) -> bool:
    """Returns False when the role did not hold the permission."""
    role = db.session.query(Role).filter_by(name=role_name).first()
    if not role:
        raise ValueError(f"Role '{role_name}' not found")
    permission = db.session.query(Permission).filter_by(name=permission_name).first()
    if not permission:
        raise ValueError(f"Permission '{permission_name}' not found")

    grant = db.session.get(RolePermission, (role.id, permission.id))
    if grant is None:
        return False

    db.session.delete(grant)
    db.session.commit()
    return True
