# Overview: Flask API routes for products; parses input and returns JSON responses.

# backend/erp/routes/products.py
"""
Product catalog routes.

- Read operations require view_products
- Writes require create_products / edit_products / delete_products
"""
from flask import Blueprint

from ..decorators import require_auth, require_permission
from ..models import Product
from ..permissions import PermissionCode
from ..services import products_service
from ..validation import ModelValidationPolicy, enforce_rules_product, validate_payload
from .common import json_body, list_args

PRODUCT_POLICY = ModelValidationPolicy(
    writable_fields=frozenset(products_service.PRODUCT_MUTABLE_FIELDS),
    required_on_create=frozenset({"name", "sku", "price"}),
)

products_bp = Blueprint("products", __name__, url_prefix="/api/products")


@products_bp.get("")
@require_auth
@require_permission(PermissionCode.VIEW_PRODUCTS)
def list_products():
    """
    List products ordered by name.

    Query params:
    - page: int (default 1)
    - limit: int (default 10, max 100)
    - search: matches name, sku or description (case-insensitive)
    """
    return products_service.list_products(**list_args())


@products_bp.get("/<int:product_id>")
@require_auth
@require_permission(PermissionCode.VIEW_PRODUCTS)
def get_product(product_id: int):
    return products_service.get_product(product_id)


@products_bp.post("")
@require_auth
@require_permission(PermissionCode.CREATE_PRODUCTS)
def create_product_route():
    patch = validate_payload(model=Product, payload=json_body(), policy=PRODUCT_POLICY, partial=False)
    enforce_rules_product(patch)
    return products_service.create_product(patch=patch), 201


@products_bp.put("/<int:product_id>")
@require_auth
@require_permission(PermissionCode.EDIT_PRODUCTS)
def update_product_route(product_id: int):
    patch = validate_payload(model=Product, payload=json_body(), policy=PRODUCT_POLICY, partial=True)
    enforce_rules_product(patch)
    return products_service.update_product(product_id, patch=patch)


@products_bp.delete("/<int:product_id>")
@require_auth
@require_permission(PermissionCode.DELETE_PRODUCTS)
def delete_product_route(product_id: int):
    products_service.delete_product(product_id)
    return {"message": "Product deleted successfully"}
