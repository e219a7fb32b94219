# Overview: Flask API routes for payments.

from flask import Blueprint, request

from ..decorators import require_auth, require_permission
from ..models import Payment
from ..permissions import PermissionCode
from ..services import payments_service
from ..validation import ModelValidationPolicy, enforce_rules_payment, validate_payload
from .common import json_body, list_args

PAYMENT_POLICY = ModelValidationPolicy(
    writable_fields=frozenset(payments_service.PAYMENT_MUTABLE_FIELDS),
    required_on_create=frozenset({"order_id", "payment_method", "amount"}),
)

payments_bp = Blueprint("payments", __name__, url_prefix="/api/payments")


@payments_bp.get("")
@require_auth
@require_permission(PermissionCode.VIEW_PAYMENTS)
def list_payments():
    """Query params: page, limit, search, orderId."""
    return payments_service.list_payments(order_id=request.args.get("orderId", type=int), **list_args())


@payments_bp.get("/<int:payment_id>")
@require_auth
@require_permission(PermissionCode.VIEW_PAYMENTS)
def get_payment(payment_id: int):
    return payments_service.get_payment(payment_id)


@payments_bp.post("")
@require_auth
@require_permission(PermissionCode.CREATE_PAYMENTS)
def create_payment():
    raw = {k: v for k, v in json_body().items() if k != "order"}
    patch = validate_payload(model=Payment, payload=raw, policy=PAYMENT_POLICY, partial=False)
    enforce_rules_payment(patch)
    return payments_service.create_payment(patch=patch), 201


@payments_bp.put("/<int:payment_id>")
@require_auth
@require_permission(PermissionCode.EDIT_PAYMENTS)
def update_payment(payment_id: int):
    raw = {k: v for k, v in json_body().items() if k != "order"}
    patch = validate_payload(model=Payment, payload=raw, policy=PAYMENT_POLICY, partial=True)
    enforce_rules_payment(patch)
    return payments_service.update_payment(payment_id, patch=patch)


@payments_bp.delete("/<int:payment_id>")
@require_auth
@require_permission(PermissionCode.DELETE_PAYMENTS)
def delete_payment(payment_id: int):
    payments_service.delete_payment(payment_id)
    return {"message": "Payment deleted successfully"}
