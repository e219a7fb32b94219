# Overview: Flask API routes for brands.

from flask import Blueprint

from ..decorators import require_auth, require_permission
from ..models import Brand
from ..permissions import PermissionCode
from ..services import brands_service
from ..validation import ModelValidationPolicy, validate_payload
from .common import json_body, list_args

BRAND_POLICY = ModelValidationPolicy(
    writable_fields=frozenset(brands_service.BRAND_MUTABLE_FIELDS),
    required_on_create=frozenset({"name"}),
)

brands_bp = Blueprint("brands", __name__, url_prefix="/api/brands")


@brands_bp.get("")
@require_auth
@require_permission(PermissionCode.VIEW_BRANDS)
def list_brands():
    return brands_service.list_brands(**list_args())


@brands_bp.get("/<int:brand_id>")
@require_auth
@require_permission(PermissionCode.VIEW_BRANDS)
def get_brand(brand_id: int):
    return brands_service.get_brand(brand_id)


@brands_bp.post("")
@require_auth
@require_permission(PermissionCode.CREATE_BRANDS)
def create_brand():
    patch = validate_payload(model=Brand, payload=json_body(), policy=BRAND_POLICY, partial=False)
    return brands_service.create_brand(patch=patch), 201


@brands_bp.put("/<int:brand_id>")
@require_auth
@require_permission(PermissionCode.EDIT_BRANDS)
def update_brand(brand_id: int):
    patch = validate_payload(model=Brand, payload=json_body(), policy=BRAND_POLICY, partial=True)
    return brands_service.update_brand(brand_id, patch=patch)


@brands_bp.delete("/<int:brand_id>")
@require_auth
@require_permission(PermissionCode.DELETE_BRANDS)
def delete_brand(brand_id: int):
    brands_service.delete_brand(brand_id)
    return {"message": "Brand deleted successfully"}
