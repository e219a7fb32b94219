# Overview: Service-layer operations for product categories.

from __future__ import annotations

from ..extensions import db
from ..models import Category
from .common import apply_patch, commit, delete_record, ensure_unique, get_or_404, paginate, search_filter

CATEGORY_MUTABLE_FIELDS = {"name", "description"}
DUPLICATE_NAME = "Category with this name already exists"


def list_categories(page: int | None = None, limit: int | None = None, search: str | None = None) -> dict:
    query = db.session.query(Category)
    if search:
        query = query.filter(search_filter((Category.name, Category.description), search))
    query = query.order_by(Category.name.asc(), Category.id.asc())
    return paginate(query, key="categories", page=page, limit=limit)


def get_category(category_id: int) -> dict:
    return get_or_404(Category, category_id, "Category").to_dict()


def create_category(*, patch: dict) -> dict:
    ensure_unique(Category, Category.name, patch.get("name"), message=DUPLICATE_NAME)

    category = Category()
    apply_patch(category, patch, CATEGORY_MUTABLE_FIELDS)
    db.session.add(category)
    commit(DUPLICATE_NAME)
    return category.to_dict()


def update_category(category_id: int, *, patch: dict) -> dict:
    category = get_or_404(Category, category_id, "Category")
    if "name" in patch and patch["name"] != category.name:
        ensure_unique(Category, Category.name, patch["name"], exclude_id=category.id, message=DUPLICATE_NAME)

    apply_patch(category, patch, CATEGORY_MUTABLE_FIELDS)
    commit(DUPLICATE_NAME)
    return category.to_dict()


def delete_category(category_id: int) -> None:
    delete_record(get_or_404(Category, category_id, "Category"))
