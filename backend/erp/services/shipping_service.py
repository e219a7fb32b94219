# Overview: Service-layer operations for shipments.

from __future__ import annotations

from ..extensions import db
from ..models import Order, Shipping
from ..validation import ValidationError
from .common import apply_patch, commit, delete_record, get_or_404, paginate, search_filter

SHIPPING_MUTABLE_FIELDS = {
    "order_id",
    "carrier",
    "tracking_code",
    "shipped_at",
    "delivered_at",
    "shipping_status",
}
SHIPPING_SEARCH_COLUMNS = (Shipping.carrier, Shipping.tracking_code, Shipping.shipping_status)


def _require_order(order_id: int) -> None:
    if db.session.get(Order, order_id) is None:
        raise ValidationError("Validation failed", {"orderId": "order not found"})


def list_shipping(
    page: int | None = None,
    limit: int | None = None,
    search: str | None = None,
    order_id: int | None = None,
) -> dict:
    query = db.session.query(Shipping)
    if order_id is not None:
        query = query.filter(Shipping.order_id == order_id)
    if search:
        query = query.filter(search_filter(SHIPPING_SEARCH_COLUMNS, search))
    query = query.order_by(Shipping.created_at.desc(), Shipping.id.desc())
    return paginate(query, key="shippings", page=page, limit=limit)


def get_shipping(shipping_id: int) -> dict:
    return get_or_404(Shipping, shipping_id, "Shipping").to_dict()


def create_shipping(*, patch: dict) -> dict:
    _require_order(patch["order_id"])

    shipping = Shipping()
    apply_patch(shipping, patch, SHIPPING_MUTABLE_FIELDS)
    db.session.add(shipping)
    commit()
    return shipping.to_dict()


def update_shipping(shipping_id: int, *, patch: dict) -> dict:
    shipping = get_or_404(Shipping, shipping_id, "Shipping")
    if "order_id" in patch and patch["order_id"] != shipping.order_id:
        _require_order(patch["order_id"])

    apply_patch(shipping, patch, SHIPPING_MUTABLE_FIELDS)
    commit()
    return shipping.to_dict()


def delete_shipping(shipping_id: int) -> None:
    delete_record(get_or_404(Shipping, shipping_id, "Shipping"))
