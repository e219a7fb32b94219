# Overview: Flask API routes for customers; parses input and returns JSON responses.

from flask import Blueprint

from ..decorators import require_auth, require_permission
from ..models import Customer
from ..permissions import PermissionCode
from ..services import customers_service
from ..validation import ModelValidationPolicy, enforce_rules_email, validate_payload
from .common import json_body, list_args

CUSTOMER_POLICY = ModelValidationPolicy(
    writable_fields=frozenset(customers_service.CUSTOMER_MUTABLE_FIELDS),
    required_on_create=frozenset({"name", "email"}),
)

customers_bp = Blueprint("customers", __name__, url_prefix="/api/customers")


@customers_bp.get("")
@require_auth
@require_permission(PermissionCode.VIEW_CUSTOMERS)
def list_customers():
    """Query params: page, limit (default 10), search (name/email/phone/document/city/state)."""
    return customers_service.list_customers(**list_args())


@customers_bp.get("/<int:customer_id>")
@require_auth
@require_permission(PermissionCode.VIEW_CUSTOMERS)
def get_customer(customer_id: int):
    return customers_service.get_customer(customer_id)


@customers_bp.post("")
@require_auth
@require_permission(PermissionCode.CREATE_CUSTOMERS)
def create_customer():
    patch = validate_payload(model=Customer, payload=json_body(), policy=CUSTOMER_POLICY, partial=False)
    enforce_rules_email(patch)
    return customers_service.create_customer(patch=patch), 201


@customers_bp.put("/<int:customer_id>")
@require_auth
@require_permission(PermissionCode.EDIT_CUSTOMERS)
def update_customer(customer_id: int):
    patch = validate_payload(model=Customer, payload=json_body(), policy=CUSTOMER_POLICY, partial=True)
    enforce_rules_email(patch)
    return customers_service.update_customer(customer_id, patch=patch)


@customers_bp.delete("/<int:customer_id>")
@require_auth
@require_permission(PermissionCode.DELETE_CUSTOMERS)
def delete_customer(customer_id: int):
    customers_service.delete_customer(customer_id)
    return {"message": "Customer deleted successfully"}
