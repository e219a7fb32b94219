# Overview: Flask API routes for product categories.

from flask import Blueprint

from ..decorators import require_auth, require_permission
from ..models import Category
from ..permissions import PermissionCode
from ..services import categories_service
from ..validation import ModelValidationPolicy, validate_payload
from .common import json_body, list_args

CATEGORY_POLICY = ModelValidationPolicy(
    writable_fields=frozenset(categories_service.CATEGORY_MUTABLE_FIELDS),
    required_on_create=frozenset({"name"}),
)

categories_bp = Blueprint("categories", __name__, url_prefix="/api/categories")


@categories_bp.get("")
@require_auth
@require_permission(PermissionCode.VIEW_CATEGORIES)
def list_categories():
    return categories_service.list_categories(**list_args())


@categories_bp.get("/<int:category_id>")
@require_auth
@require_permission(PermissionCode.VIEW_CATEGORIES)
def get_category(category_id: int):
    return categories_service.get_category(category_id)


@categories_bp.post("")
@require_auth
@require_permission(PermissionCode.CREATE_CATEGORIES)
def create_category():
    patch = validate_payload(model=Category, payload=json_body(), policy=CATEGORY_POLICY, partial=False)
    return categories_service.create_category(patch=patch), 201


@categories_bp.put("/<int:category_id>")
@require_auth
@require_permission(PermissionCode.EDIT_CATEGORIES)
def update_category(category_id: int):
    patch = validate_payload(model=Category, payload=json_body(), policy=CATEGORY_POLICY, partial=True)
    return categories_service.update_category(category_id, patch=patch)


@categories_bp.delete("/<int:category_id>")
@require_auth
@require_permission(PermissionCode.DELETE_CATEGORIES)
def delete_category(category_id: int):
    categories_service.delete_category(category_id)
    return {"message": "Category deleted successfully"}
