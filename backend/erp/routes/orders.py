# Overview: Flask API routes for orders and order items.

"""
Order routes.

POST /api/orders takes {"order": {...header...}, "items": [{productId, quantity, price}, ...]}
and creates header and items in one transaction. PUT only changes header
fields; lines are edited through /api/order-items.
"""
from flask import Blueprint, current_app, g

from ..decorators import require_auth, require_permission
from ..models import Order, OrderItem
from ..permissions import PermissionCode
from ..services import orders_service
from ..validation import (
    ModelValidationPolicy,
    ValidationError,
    enforce_rules_order,
    enforce_rules_order_item,
    validate_payload,
)
from .common import json_body, list_args

ORDER_POLICY = ModelValidationPolicy(
    writable_fields=frozenset(orders_service.ORDER_MUTABLE_FIELDS),
    required_on_create=frozenset({"customer_id"}),
)

# Lines inside POST /api/orders; the order id comes from the new header
ORDER_LINE_POLICY = ModelValidationPolicy(
    writable_fields=frozenset(orders_service.ORDER_ITEM_MUTABLE_FIELDS),
    required_on_create=frozenset({"product_id", "quantity", "price"}),
)

ORDER_ITEM_POLICY = ModelValidationPolicy(
    writable_fields=frozenset(orders_service.ORDER_ITEM_MUTABLE_FIELDS | {"order_id"}),
    required_on_create=frozenset({"order_id", "product_id", "quantity", "price"}),
)

# Computed server-side; clients often echo them back
_DERIVED_ITEM_FIELDS = ("total", "orderId", "order_id", "product")

orders_bp = Blueprint("orders", __name__, url_prefix="/api/orders")
order_items_bp = Blueprint("order_items", __name__, url_prefix="/api/order-items")


def _parse_lines(raw_items) -> list[dict]:
    if raw_items is None:
        raw_items = []
    if not isinstance(raw_items, list):
        raise ValidationError("Validation failed", {"items": "must be a list"})

    lines, errors = [], {}
    for i, raw in enumerate(raw_items):
        if not isinstance(raw, dict):
            errors[f"items[{i}]"] = "must be an object"
            continue
        raw = {k: v for k, v in raw.items() if k not in _DERIVED_ITEM_FIELDS}
        try:
            line = validate_payload(model=OrderItem, payload=raw, policy=ORDER_LINE_POLICY, partial=False)
            enforce_rules_order_item(line)
        except ValidationError as e:
            errors.update({f"items[{i}].{field}": msg for field, msg in e.errors.items()})
            continue
        lines.append(line)

    if errors:
        raise ValidationError("Validation failed", errors)
    return lines


@orders_bp.get("")
@require_auth
@require_permission(PermissionCode.VIEW_ORDERS)
def list_orders():
    """Newest first. search matches orderNumber or notes."""
    return orders_service.list_orders(**list_args())


@orders_bp.get("/<int:order_id>")
@require_auth
@require_permission(PermissionCode.VIEW_ORDERS)
def get_order(order_id: int):
    return orders_service.get_order(order_id)


@orders_bp.post("")
@require_auth
@require_permission(PermissionCode.CREATE_ORDERS)
def create_order_route():
    payload = json_body()
    raw_header = payload.get("order")
    if raw_header is None:
        raw_header = {k: v for k, v in payload.items() if k != "items"}
    if not isinstance(raw_header, dict):
        raise ValidationError("Validation failed", {"order": "must be an object"})

    header = validate_payload(model=Order, payload=raw_header, policy=ORDER_POLICY, partial=False)
    enforce_rules_order(header)
    lines = _parse_lines(payload.get("items"))

    created = orders_service.create_order(header=header, items=lines)
    current_app.logger.info(
        "Order %s created by user %s with %d item(s)",
        created["orderNumber"], g.principal.id, len(lines),
    )
    return created, 201


@orders_bp.put("/<int:order_id>")
@require_auth
@require_permission(PermissionCode.EDIT_ORDERS)
def update_order_route(order_id: int):
    payload = json_body()
    raw_header = payload.get("order", payload)
    if not isinstance(raw_header, dict):
        raise ValidationError("Validation failed", {"order": "must be an object"})
    raw_header = {k: v for k, v in raw_header.items() if k not in ("items", "order")}

    patch = validate_payload(model=Order, payload=raw_header, policy=ORDER_POLICY, partial=True)
    enforce_rules_order(patch)
    return orders_service.update_order(order_id, patch=patch)


@orders_bp.delete("/<int:order_id>")
@require_auth
@require_permission(PermissionCode.DELETE_ORDERS)
def delete_order_route(order_id: int):
    orders_service.delete_order(order_id)
    return {"message": "Order deleted successfully"}


# -- Order items --


@order_items_bp.get("/<int:order_id>")
@require_auth
@require_permission(PermissionCode.VIEW_ORDERS)
def list_order_items(order_id: int):
    """Items of one order (the path id is the order id)."""
    return {"items": orders_service.list_order_items(order_id)}


@order_items_bp.post("")
@require_auth
@require_permission(PermissionCode.EDIT_ORDERS)
def create_order_item_route():
    raw = {k: v for k, v in json_body().items() if k not in ("total", "product")}
    patch = validate_payload(model=OrderItem, payload=raw, policy=ORDER_ITEM_POLICY, partial=False)
    enforce_rules_order_item(patch)
    return orders_service.create_order_item(patch=patch), 201


@order_items_bp.put("/<int:item_id>")
@require_auth
@require_permission(PermissionCode.EDIT_ORDERS)
def update_order_item_route(item_id: int):
    raw = {k: v for k, v in json_body().items() if k not in _DERIVED_ITEM_FIELDS}
    patch = validate_payload(model=OrderItem, payload=raw, policy=ORDER_LINE_POLICY, partial=True)
    enforce_rules_order_item(patch)
    return orders_service.update_order_item(item_id, patch=patch)


@order_items_bp.delete("/<int:item_id>")
@require_auth
@require_permission(PermissionCode.EDIT_ORDERS)
def delete_order_item_route(item_id: int):
    orders_service.delete_order_item(item_id)
    return {"message": "Order item deleted successfully"}
