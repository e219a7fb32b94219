# Overview: Signed bearer tokens (JWT) carrying the user's identity claims.

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
from flask import current_app


class AuthenticationError(Exception):
    """Raised when a request cannot be tied to an active user."""


def issue_token(user) -> str:
    """
    Sign a time-limited token for `user`.

    Only identity claims go into the token. Roles and permissions are
    resolved from the database on every request so changes apply at once.
    """
    now = datetime.now(timezone.utc)
    hours = current_app.config.get("JWT_EXPIRES_HOURS", 24)
    payload = {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "iat": now,
        "exp": now + timedelta(hours=hours),
    }
    return jwt.encode(
        payload,
        current_app.config["JWT_SECRET_KEY"],
        algorithm=current_app.config.get("JWT_ALGORITHM", "HS256"),
    )


def decode_token(token: str) -> dict:
    try:
        claims = jwt.decode(
            token,
            current_app.config["JWT_SECRET_KEY"],
            algorithms=[current_app.config.get("JWT_ALGORITHM", "HS256")],
            options={"require": ["exp", "id"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token expired")
    except jwt.PyJWTError:
        raise AuthenticationError("Invalid token")

    if not isinstance(claims.get("id"), int) or isinstance(claims.get("id"), bool):
        raise AuthenticationError("Invalid token")
    return claims
