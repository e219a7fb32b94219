# Overview: Service-layer operations for roles and their permission sets.

from __future__ import annotations

from ..extensions import db
from ..models import Permission, Role, RolePermission
from ..validation import ValidationError
from .common import apply_patch, commit, delete_record, ensure_unique, get_or_404, paginate, search_filter

ROLE_MUTABLE_FIELDS = {"name", "description"}
DUPLICATE_NAME = "Role with this name already exists"


def _serialize(role: Role) -> dict:
    return role.to_dict(include_permissions=True)


def _load_permissions(permission_ids: list[int]) -> list[Permission]:
    if not permission_ids:
        return []
    permissions = db.session.query(Permission).filter(Permission.id.in_(permission_ids)).all()
    missing = sorted(set(permission_ids) - {p.id for p in permissions})
    if missing:
        raise ValidationError(
            "Validation failed",
            {"permissions": f"unknown permission id(s): {', '.join(str(i) for i in missing)}"},
        )
    return permissions


def _replace_permissions(role: Role, permissions: list[Permission]) -> None:
    wanted = {p.id for p in permissions}
    current = {link.permission_id for link in role.role_permissions}
    role.role_permissions = [link for link in role.role_permissions if link.permission_id in wanted] + [
        RolePermission(permission_id=pid) for pid in sorted(wanted - current)
    ]


def list_roles(page: int | None = None, limit: int | None = None, search: str | None = None) -> dict:
    query = db.session.query(Role)
    if search:
        query = query.filter(search_filter((Role.name, Role.description), search))
    query = query.order_by(Role.name.asc(), Role.id.asc())
    return paginate(query, key="roles", page=page, limit=limit, serialize=_serialize)


def get_role(role_id: int) -> dict:
    return _serialize(get_or_404(Role, role_id, "Role"))


def create_role(*, patch: dict, permission_ids: list[int] | None = None) -> dict:
    ensure_unique(Role, Role.name, patch.get("name"), message=DUPLICATE_NAME)
    permissions = _load_permissions(permission_ids or [])

    role = Role()
    apply_patch(role, patch, ROLE_MUTABLE_FIELDS)
    _replace_permissions(role, permissions)
    db.session.add(role)
    commit(DUPLICATE_NAME)
    return _serialize(role)


def update_role(role_id: int, *, patch: dict, permission_ids: list[int] | None = None) -> dict:
    """A supplied permission list replaces the role's grants; users see it on their next request."""
    role = get_or_404(Role, role_id, "Role")
    if "name" in patch and patch["name"] != role.name:
        ensure_unique(Role, Role.name, patch["name"], exclude_id=role.id, message=DUPLICATE_NAME)

    if permission_ids is not None:
        _replace_permissions(role, _load_permissions(permission_ids))

    apply_patch(role, patch, ROLE_MUTABLE_FIELDS)
    commit(DUPLICATE_NAME)
    return _serialize(role)


def delete_role(role_id: int) -> None:
    """Removes the role's user assignments and permission grants with it."""
    delete_record(get_or_404(Role, role_id, "Role"))
