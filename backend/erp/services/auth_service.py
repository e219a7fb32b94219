# Overview: Service-layer operations for auth; encapsulates business logic and database work.

"""
Authentication service.

SECURITY NOTES:
- Passwords hashed with bcrypt (cost factor from BCRYPT_ROUNDS, 12 by default)
- Minimum 6 characters required
- Login failures never say whether the username exists
- Tokens are signed JWTs (see token_service.py)
"""

from __future__ import annotations

import bcrypt
from flask import current_app

from ..extensions import db
from ..models import Role, User, UserRole
from ..permissions import DEFAULT_ROLE_DESCRIPTIONS
from ..validation import ValidationError
from .common import commit, ensure_unique
from .token_service import issue_token

MIN_PASSWORD_LENGTH = 6

DUPLICATE_USER = "Username or email already exists"


class InvalidCredentialsError(Exception):
    """Unknown user, inactive user or wrong password (deliberately indistinguishable)."""


def validate_password(password) -> None:
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            "Validation failed",
            {"password": f"must be at least {MIN_PASSWORD_LENGTH} characters"},
        )


def hash_password(password: str) -> str:
    rounds = current_app.config.get("BCRYPT_ROUNDS", 12)
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """bcrypt.checkpw is constant-time; malformed hashes count as a mismatch."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def authenticate(username: str, password: str) -> User | None:
    """
    Authenticate user by username (or email) and password.

    Returns User if credentials valid and the account is active, None otherwise.
    """
    user = db.session.query(User).filter(
        db.or_(User.username == username, User.email == username),
        User.is_active.is_(True),
    ).first()

    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def login(username, password) -> dict:
    if not isinstance(username, str) or not isinstance(password, str) or not username or not password:
        raise InvalidCredentialsError("Invalid credentials")

    user = authenticate(username.strip(), password)
    if user is None:
        raise InvalidCredentialsError("Invalid credentials")

    return {"user": _token_user(user), "token": issue_token(user)}


def register(*, patch: dict, password) -> dict:
    """
    Self-registration. The new account gets the default role (viewer).

    Raises:
        ValidationError: password too short
        ConflictError: username or email taken
    """
    validate_password(password)
    ensure_unique(User, User.username, patch.get("username"), message=DUPLICATE_USER)
    ensure_unique(User, User.email, patch.get("email"), message=DUPLICATE_USER)

    user = User(
        username=patch["username"],
        email=patch["email"],
        first_name=patch.get("first_name"),
        last_name=patch.get("last_name"),
        password_hash=hash_password(password),
        is_active=True,
    )
    db.session.add(user)
    db.session.flush()

    default_role = current_app.config.get("DEFAULT_ROLE", "viewer")
    role = db.session.query(Role).filter_by(name=default_role).first()
    if role is not None:
        db.session.add(UserRole(user_id=user.id, role_id=role.id))

    commit(DUPLICATE_USER)
    return {"user": _token_user(user), "token": issue_token(user)}


def _token_user(user: User) -> dict:
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "firstName": user.first_name,
        "lastName": user.last_name,
    }


def assign_role(user_id: int, role_name: str) -> None:
    """Assign role to user. Raises ValueError if role doesn't exist."""
    role = db.session.query(Role).filter_by(name=role_name).first()
    if not role:
        raise ValueError(f"Role '{role_name}' not found")

    if db.session.get(UserRole, (user_id, role.id)):
        return

    db.session.add(UserRole(user_id=user_id, role_id=role.id))
    db.session.commit()


def create_default_roles() -> int:
    """Create admin/manager/sales/viewer if missing. Idempotent."""
    created = 0
    for name, description in DEFAULT_ROLE_DESCRIPTIONS.items():
        if db.session.query(Role).filter_by(name=name).first():
            continue
        db.session.add(Role(name=name, description=description))
        created += 1
    db.session.commit()
    return created
