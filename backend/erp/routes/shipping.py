# Overview: Flask API routes for shipments.

from flask import Blueprint, request

from ..decorators import require_auth, require_permission
from ..models import Shipping
from ..permissions import PermissionCode
from ..services import shipping_service
from ..validation import ModelValidationPolicy, enforce_rules_shipping, validate_payload
from .common import json_body, list_args

SHIPPING_POLICY = ModelValidationPolicy(
    writable_fields=frozenset(shipping_service.SHIPPING_MUTABLE_FIELDS),
    required_on_create=frozenset({"order_id"}),
)

shipping_bp = Blueprint("shipping", __name__, url_prefix="/api/shipping")


@shipping_bp.get("")
@require_auth
@require_permission(PermissionCode.VIEW_SHIPPING)
def list_shipping():
    """Query params: page, limit, search (carrier/trackingCode/status), orderId."""
    return shipping_service.list_shipping(order_id=request.args.get("orderId", type=int), **list_args())


@shipping_bp.get("/<int:shipping_id>")
@require_auth
@require_permission(PermissionCode.VIEW_SHIPPING)
def get_shipping(shipping_id: int):
    return shipping_service.get_shipping(shipping_id)


@shipping_bp.post("")
@require_auth
@require_permission(PermissionCode.CREATE_SHIPPING)
def create_shipping():
    raw = {k: v for k, v in json_body().items() if k != "order"}
    patch = validate_payload(model=Shipping, payload=raw, policy=SHIPPING_POLICY, partial=False)
    enforce_rules_shipping(patch)
    return shipping_service.create_shipping(patch=patch), 201


@shipping_bp.put("/<int:shipping_id>")
@require_auth
@require_permission(PermissionCode.EDIT_SHIPPING)
def update_shipping(shipping_id: int):
    raw = {k: v for k, v in json_body().items() if k != "order"}
    patch = validate_payload(model=Shipping, payload=raw, policy=SHIPPING_POLICY, partial=True)
    enforce_rules_shipping(patch)
    return shipping_service.update_shipping(shipping_id, patch=patch)


@shipping_bp.delete("/<int:shipping_id>")
@require_auth
@require_permission(PermissionCode.DELETE_SHIPPING)
def delete_shipping(shipping_id: int):
    shipping_service.delete_shipping(shipping_id)
    return {"message": "Shipping record deleted successfully"}
