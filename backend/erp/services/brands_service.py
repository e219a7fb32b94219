# Overview: Service-layer operations for brands.

from __future__ import annotations

from ..extensions import db
from ..models import Brand
from .common import apply_patch, commit, delete_record, ensure_unique, get_or_404, paginate, search_filter

BRAND_MUTABLE_FIELDS = {"name", "description"}
DUPLICATE_NAME = "Brand with this name already exists"


def list_brands(page: int | None = None, limit: int | None = None, search: str | None = None) -> dict:
    query = db.session.query(Brand)
    if search:
        query = query.filter(search_filter((Brand.name, Brand.description), search))
    query = query.order_by(Brand.name.asc(), Brand.id.asc())
    return paginate(query, key="brands", page=page, limit=limit)


def get_brand(brand_id: int) -> dict:
    return get_or_404(Brand, brand_id, "Brand").to_dict()


def create_brand(*, patch: dict) -> dict:
    ensure_unique(Brand, Brand.name, patch.get("name"), message=DUPLICATE_NAME)

    brand = Brand()
    apply_patch(brand, patch, BRAND_MUTABLE_FIELDS)
    db.session.add(brand)
    commit(DUPLICATE_NAME)
    return brand.to_dict()


def update_brand(brand_id: int, *, patch: dict) -> dict:
    brand = get_or_404(Brand, brand_id, "Brand")
    if "name" in patch and patch["name"] != brand.name:
        ensure_unique(Brand, Brand.name, patch["name"], exclude_id=brand.id, message=DUPLICATE_NAME)

    apply_patch(brand, patch, BRAND_MUTABLE_FIELDS)
    commit(DUPLICATE_NAME)
    return brand.to_dict()


def delete_brand(brand_id: int) -> None:
    # products.brand_id is cleared by the foreign key (ON DELETE SET NULL)
    delete_record(get_or_404(Brand, brand_id, "Brand"))
