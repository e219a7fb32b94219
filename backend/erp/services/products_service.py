# backend/erp/services/products_service.py
"""
Products service.

SKU is unique across the catalog. Brand and category references are
optional but must point at existing rows when supplied.
"""
from __future__ import annotations

from ..extensions import db
from ..models import Brand, Category, Product
from ..validation import ValidationError
from .common import apply_patch, commit, delete_record, ensure_unique, get_or_404, paginate, search_filter

PRODUCT_MUTABLE_FIELDS = {"name", "sku", "price", "stock", "brand_id", "category_id", "description"}
PRODUCT_SEARCH_COLUMNS = (Product.name, Product.sku, Product.description)
DUPLICATE_SKU = "Product with this SKU already exists"


def _check_references(patch: dict) -> None:
    errors = {}
    if patch.get("brand_id") is not None and db.session.get(Brand, patch["brand_id"]) is None:
        errors["brandId"] = "brand not found"
    if patch.get("category_id") is not None and db.session.get(Category, patch["category_id"]) is None:
        errors["categoryId"] = "category not found"
    if errors:
        raise ValidationError("Validation failed", errors)


def list_products(page: int | None = None, limit: int | None = None, search: str | None = None) -> dict:
    """Products ordered by name, optionally filtered by name/sku/description."""
    query = db.session.query(Product)
    if search:
        query = query.filter(search_filter(PRODUCT_SEARCH_COLUMNS, search))
    query = query.order_by(Product.name.asc(), Product.id.asc())
    return paginate(query, key="products", page=page, limit=limit)


def get_product(product_id: int) -> dict:
    return get_or_404(Product, product_id, "Product").to_dict()


def create_product(*, patch: dict) -> dict:
    """
    Create product using a validated patch dict.

    Raises:
        ConflictError: If the SKU is already used
        ValidationError: If brandId/categoryId do not exist
    """
    ensure_unique(Product, Product.sku, patch.get("sku"), message=DUPLICATE_SKU)
    _check_references(patch)

    product = Product()
    product.stock = 0
    apply_patch(product, patch, PRODUCT_MUTABLE_FIELDS)
    db.session.add(product)
    commit(DUPLICATE_SKU)
    return product.to_dict()


def update_product(product_id: int, *, patch: dict) -> dict:
    product = get_or_404(Product, product_id, "Product")

    # Only re-check SKU when it actually changes
    if "sku" in patch and patch["sku"] != product.sku:
        ensure_unique(Product, Product.sku, patch["sku"], exclude_id=product.id, message=DUPLICATE_SKU)
    _check_references(patch)

    apply_patch(product, patch, PRODUCT_MUTABLE_FIELDS)
    commit(DUPLICATE_SKU)
    return product.to_dict()


def delete_product(product_id: int) -> None:
    """Order items keep their productId after the product is removed."""
    delete_record(get_or_404(Product, product_id, "Product"))
