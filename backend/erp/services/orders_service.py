# Overview: Service-layer operations for orders and order items.

"""
Order aggregate.

An order is created together with its items in a single transaction: the
header is flushed to obtain its id, the items are inserted, and the whole
unit is committed. Any failure rolls back both, so no header is ever left
without items.

Item totals are always computed here (quantity x unit price). The order's
totalAmount is taken from the client when supplied and otherwise derived
from the items, discount and shipping cost.
"""
from __future__ import annotations

import secrets
import string
import time
from decimal import Decimal

from sqlalchemy.exc import IntegrityError

from ..constants import OrderStatus
from ..extensions import db
from ..models import Customer, Order, OrderItem, Product
from ..validation import ConflictError, ValidationError, numeric_limit
from .common import apply_patch, commit, delete_record, ensure_unique, get_or_404, paginate, search_filter

ORDER_MUTABLE_FIELDS = {
    "customer_id",
    "order_number",
    "status",
    "total_amount",
    "discount",
    "shipping_cost",
    "payment_method",
    "notes",
    "ordered_at",
}
ORDER_ITEM_MUTABLE_FIELDS = {"product_id", "quantity", "price"}

ORDER_NUMBER_PREFIX = "ORD-"
ORDER_NUMBER_ALPHABET = string.ascii_uppercase + string.digits
ORDER_NUMBER_ATTEMPTS = 5

DUPLICATE_ORDER_NUMBER = "Order with this order number already exists"

_ZERO = Decimal("0.00")


def generate_order_number() -> str:
    """ORD- + last 6 digits of the epoch milliseconds + 3 random [A-Z0-9]."""
    stamp = str(int(time.time() * 1000))[-6:]
    suffix = "".join(secrets.choice(ORDER_NUMBER_ALPHABET) for _ in range(3))
    return f"{ORDER_NUMBER_PREFIX}{stamp}{suffix}"


def _next_order_number() -> str:
    for _ in range(ORDER_NUMBER_ATTEMPTS):
        candidate = generate_order_number()
        if db.session.query(Order.id).filter(Order.order_number == candidate).first() is None:
            return candidate
    raise ConflictError("Could not allocate a unique order number")


def line_total(quantity: int, price: Decimal) -> Decimal:
    return (Decimal(quantity) * Decimal(price)).quantize(Decimal("0.01"))


def _checked_line_total(quantity: int, price: Decimal, field: str = "quantity") -> Decimal:
    total = line_total(quantity, price)
    limit = numeric_limit(OrderItem.__table__.c.total.type)
    if total > limit:
        raise ValidationError("Validation failed", {field: f"line total exceeds {limit}"})
    return total


def _derived_order_total(header: dict, items: list[dict]) -> Decimal:
    items_total = _ZERO
    for i, line in enumerate(items):
        items_total += _checked_line_total(line["quantity"], line["price"], f"items[{i}].quantity")
    total = items_total - (header.get("discount") or _ZERO) + (header.get("shipping_cost") or _ZERO)

    if total < 0:
        raise ValidationError("Validation failed", {"discount": "cannot exceed the items total plus shipping"})
    limit = numeric_limit(Order.__table__.c.total_amount.type)
    if total > limit:
        raise ValidationError("Validation failed", {"totalAmount": f"exceeds {limit}"})
    return total


def _require_customer(customer_id: int) -> None:
    if db.session.get(Customer, customer_id) is None:
        raise ValidationError("Validation failed", {"customerId": "customer not found"})


def _missing_products(product_ids) -> set[int]:
    ids = set(product_ids)
    if not ids:
        return set()
    found = {pid for (pid,) in db.session.query(Product.id).filter(Product.id.in_(ids))}
    return ids - found


def _build_item(order: Order, line: dict) -> OrderItem:
    return OrderItem(
        order_id=order.id,
        product_id=line["product_id"],
        quantity=line["quantity"],
        price=line["price"],
        total=line_total(line["quantity"], line["price"]),
    )


def _serialize(order: Order) -> dict:
    return order.to_dict(include_relations=True)


# -- Orders --


def list_orders(page: int | None = None, limit: int | None = None, search: str | None = None) -> dict:
    """Newest first."""
    query = db.session.query(Order)
    if search:
        query = query.filter(search_filter((Order.order_number, Order.notes), search))
    query = query.order_by(Order.created_at.desc(), Order.id.desc())
    return paginate(query, key="orders", page=page, limit=limit, serialize=_serialize)


def get_order(order_id: int) -> dict:
    return _serialize(get_or_404(Order, order_id, "Order"))


def create_order(*, header: dict, items: list[dict]) -> dict:
    """
    Create an order header and its items atomically.

    `header` and each entry of `items` are validated patches (snake_case
    attribute keys). Raises ValidationError for an empty item list or
    unknown customer/product ids or totals the columns cannot hold, ConflictError for a taken order number.
    """
    if not items:
        raise ValidationError(
            "Order must contain at least one item",
            {"items": "at least one item is required"},
        )

    _require_customer(header["customer_id"])

    missing = _missing_products(line["product_id"] for line in items)
    if missing:
        errors = {
            f"items[{i}].productId": "product not found"
            for i, line in enumerate(items)
            if line["product_id"] in missing
        }
        raise ValidationError("Validation failed", errors)

    if header.get("order_number"):
        ensure_unique(Order, Order.order_number, header["order_number"], message=DUPLICATE_ORDER_NUMBER)
    else:
        header = {**header, "order_number": _next_order_number()}

    if header.get("total_amount") is None:
        header = {**header, "total_amount": _derived_order_total(header, items)}
    else:
        for i, line in enumerate(items):
            _checked_line_total(line["quantity"], line["price"], f"items[{i}].quantity")

    order = Order(status=OrderStatus.PENDING, discount=_ZERO, shipping_cost=_ZERO)
    apply_patch(order, header, ORDER_MUTABLE_FIELDS)

    try:
        db.session.add(order)
        db.session.flush()
        for line in items:
            db.session.add(_build_item(order, line))
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(DUPLICATE_ORDER_NUMBER)
    except Exception:
        db.session.rollback()
        raise

    return _serialize(order)


def update_order(order_id: int, *, patch: dict) -> dict:
    """Header fields only; items are managed through the order item operations."""
    order = get_or_404(Order, order_id, "Order")

    if "customer_id" in patch and patch["customer_id"] != order.customer_id:
        _require_customer(patch["customer_id"])
    if "order_number" in patch and patch["order_number"] != order.order_number:
        ensure_unique(
            Order, Order.order_number, patch["order_number"], exclude_id=order.id, message=DUPLICATE_ORDER_NUMBER
        )

    apply_patch(order, patch, ORDER_MUTABLE_FIELDS)
    commit(DUPLICATE_ORDER_NUMBER)
    return _serialize(order)


def delete_order(order_id: int) -> None:
    """Cascades to the order's items. Payments and shipping rows are kept."""
    delete_record(get_or_404(Order, order_id, "Order"))


# -- Order items --


def list_order_items(order_id: int) -> list[dict]:
    order = get_or_404(Order, order_id, "Order")
    return [item.to_dict() for item in order.items]


def create_order_item(*, patch: dict) -> dict:
    """Adds a line to an existing order. The order's totalAmount is left as is."""
    errors = {}
    if db.session.get(Order, patch["order_id"]) is None:
        errors["orderId"] = "order not found"
    if _missing_products([patch["product_id"]]):
        errors["productId"] = "product not found"
    if errors:
        raise ValidationError("Validation failed", errors)

    item = OrderItem(
        order_id=patch["order_id"],
        product_id=patch["product_id"],
        quantity=patch["quantity"],
        price=patch["price"],
        total=_checked_line_total(patch["quantity"], patch["price"]),
    )
    db.session.add(item)
    commit()
    return item.to_dict()


def update_order_item(item_id: int, *, patch: dict) -> dict:
    item = get_or_404(OrderItem, item_id, "Order item")

    if "product_id" in patch and patch["product_id"] != item.product_id:
        if _missing_products([patch["product_id"]]):
            raise ValidationError("Validation failed", {"productId": "product not found"})

    total = _checked_line_total(patch.get("quantity", item.quantity), patch.get("price", item.price))
    apply_patch(item, patch, ORDER_ITEM_MUTABLE_FIELDS)
    item.total = total
    commit()
    return item.to_dict()


def delete_order_item(item_id: int) -> None:
    delete_record(get_or_404(OrderItem, item_id, "Order item"))
