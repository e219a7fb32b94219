# Overview: Service-layer operations for user administration.

from __future__ import annotations

from ..extensions import db
from ..models import Role, User, UserRole
from ..validation import ValidationError
from .auth_service import DUPLICATE_USER, hash_password, validate_password
from .common import apply_patch, commit, delete_record, ensure_unique, get_or_404, paginate, search_filter

USER_MUTABLE_FIELDS = {"username", "email", "first_name", "last_name", "is_active"}
USER_SEARCH_COLUMNS = (User.username, User.email, User.first_name, User.last_name)


def _serialize(user: User) -> dict:
    return user.to_dict(include_roles=True)


def _load_roles(role_ids: list[int]) -> list[Role]:
    if not role_ids:
        return []
    roles = db.session.query(Role).filter(Role.id.in_(role_ids)).all()
    missing = sorted(set(role_ids) - {r.id for r in roles})
    if missing:
        raise ValidationError(
            "Validation failed",
            {"roles": f"unknown role id(s): {', '.join(str(i) for i in missing)}"},
        )
    return roles


def _replace_roles(user: User, roles: list[Role]) -> None:
    wanted = {role.id for role in roles}
    current = {link.role_id for link in user.user_roles}
    user.user_roles = [link for link in user.user_roles if link.role_id in wanted] + [
        UserRole(role_id=role_id) for role_id in sorted(wanted - current)
    ]


def list_users(page: int | None = None, limit: int | None = None, search: str | None = None) -> dict:
    query = db.session.query(User)
    if search:
        query = query.filter(search_filter(USER_SEARCH_COLUMNS, search))
    query = query.order_by(User.username.asc(), User.id.asc())
    return paginate(query, key="users", page=page, limit=limit, serialize=_serialize)


def get_user(user_id: int) -> dict:
    return _serialize(get_or_404(User, user_id, "User"))


def create_user(*, patch: dict, password, role_ids: list[int] | None = None) -> dict:
    """Admin-side account creation. `role_ids` replaces the default of no roles."""
    validate_password(password)
    ensure_unique(User, User.username, patch.get("username"), message=DUPLICATE_USER)
    ensure_unique(User, User.email, patch.get("email"), message=DUPLICATE_USER)
    roles = _load_roles(role_ids or [])

    user = User(password_hash=hash_password(password), is_active=True)
    apply_patch(user, patch, USER_MUTABLE_FIELDS)
    _replace_roles(user, roles)
    db.session.add(user)
    commit(DUPLICATE_USER)
    return _serialize(user)


def update_user(user_id: int, *, patch: dict, password=None, role_ids: list[int] | None = None) -> dict:
    """
    Partial update. A supplied password is re-hashed; a supplied role list
    replaces the user's roles (an empty list removes them all).
    """
    user = get_or_404(User, user_id, "User")

    if "username" in patch and patch["username"] != user.username:
        ensure_unique(User, User.username, patch["username"], exclude_id=user.id, message=DUPLICATE_USER)
    if "email" in patch and patch["email"] != user.email:
        ensure_unique(User, User.email, patch["email"], exclude_id=user.id, message=DUPLICATE_USER)

    if password is not None:
        validate_password(password)
        user.password_hash = hash_password(password)
    if role_ids is not None:
        _replace_roles(user, _load_roles(role_ids))

    apply_patch(user, patch, USER_MUTABLE_FIELDS)
    commit(DUPLICATE_USER)
    return _serialize(user)


def delete_user(user_id: int) -> None:
    """Role assignments go with the user."""
    delete_record(get_or_404(User, user_id, "User"))
