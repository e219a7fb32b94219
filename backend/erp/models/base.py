# Overview: Column mixins and serialization helpers shared by all models.

from __future__ import annotations

from decimal import Decimal

from ..extensions import db
from ..time_utils import utcnow


class TimestampMixin:
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime,
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=db.func.now(),
    )


def money_str(value) -> str | None:
    """Decimal money as a two-decimal string ("19.90")."""
    if value is None:
        return None
    return f"{Decimal(value):.2f}"
