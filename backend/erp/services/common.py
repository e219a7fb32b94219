# Overview: Shared helpers for entity services: lookup, pagination, search and commits.

from __future__ import annotations

from flask import current_app
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..time_utils import utcnow
from ..validation import INT_MAX, INT_MIN, ConflictError, NotFoundError


def get_or_404(model, record_id: int, label: str | None = None):
    obj = db.session.get(model, record_id) if INT_MIN <= record_id <= INT_MAX else None
    if obj is None:
        raise NotFoundError(f"{label or model.__name__} not found")
    return obj


def normalize_paging(page: int | None, limit: int | None) -> tuple[int, int]:
    """Clamp page/limit query params to the configured bounds."""
    default_limit = current_app.config.get("DEFAULT_PAGE_SIZE", 10)
    max_limit = current_app.config.get("MAX_PAGE_SIZE", 100)

    page = min(max(page or 1, 1), INT_MAX)
    limit = limit or default_limit
    limit = min(max(limit, 1), max_limit)
    return page, limit


def search_filter(columns, term: str):
    """Case-insensitive substring match of `term` against any of `columns`."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"
    return or_(*[col.ilike(pattern, escape="\\") for col in columns])


def paginate(query, *, key: str, page: int | None, limit: int | None, serialize=None) -> dict:
    """
    Run a list query one page at a time.

    The caller's query must already be ordered deterministically (ending on
    the primary key) so consecutive pages partition the result set.
    """
    page, limit = normalize_paging(page, limit)
    total = query.order_by(None).count()
    rows = query.offset((page - 1) * limit).limit(limit).all()
    serialize = serialize or (lambda obj: obj.to_dict())

    return {
        key: [serialize(row) for row in rows],
        "total": total,
        "page": page,
        "limit": limit,
        "totalPages": (total + limit - 1) // limit if total > 0 else 0,
    }


def ensure_unique(model, column, value, *, exclude_id: int | None = None, message: str) -> None:
    """Read-side uniqueness check; the table's unique constraint backs it up on commit."""
    if value is None:
        return
    query = db.session.query(model.id).filter(column == value)
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    if query.first() is not None:
        raise ConflictError(message)


def apply_patch(obj, patch: dict, mutable_fields) -> None:
    for k, v in patch.items():
        if k not in mutable_fields:
            continue
        setattr(obj, k, v)
    obj.updated_at = utcnow()


def commit(conflict_message: str = "Record already exists") -> None:
    """Commit the session, reporting unique-constraint races as conflicts."""
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(conflict_message)


def delete_record(obj) -> None:
    db.session.delete(obj)
    db.session.commit()
