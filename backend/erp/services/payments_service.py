# Overview: Service-layer operations for order payments.

from __future__ import annotations

from ..extensions import db
from ..models import Order, Payment
from ..validation import ValidationError
from .common import apply_patch, commit, delete_record, get_or_404, paginate, search_filter

PAYMENT_MUTABLE_FIELDS = {"order_id", "payment_date", "payment_method", "amount", "transaction_code"}


def _require_order(order_id: int) -> None:
    if db.session.get(Order, order_id) is None:
        raise ValidationError("Validation failed", {"orderId": "order not found"})


def list_payments(
    page: int | None = None,
    limit: int | None = None,
    search: str | None = None,
    order_id: int | None = None,
) -> dict:
    """Most recent payment date first; optionally restricted to one order."""
    query = db.session.query(Payment)
    if order_id is not None:
        query = query.filter(Payment.order_id == order_id)
    if search:
        query = query.filter(search_filter((Payment.transaction_code, Payment.payment_method), search))
    query = query.order_by(Payment.payment_date.desc(), Payment.id.desc())
    return paginate(query, key="payments", page=page, limit=limit)


def get_payment(payment_id: int) -> dict:
    return get_or_404(Payment, payment_id, "Payment").to_dict()


def create_payment(*, patch: dict) -> dict:
    _require_order(patch["order_id"])

    payment = Payment()
    apply_patch(payment, patch, PAYMENT_MUTABLE_FIELDS)
    db.session.add(payment)
    commit()
    return payment.to_dict()


def update_payment(payment_id: int, *, patch: dict) -> dict:
    payment = get_or_404(Payment, payment_id, "Payment")
    if "order_id" in patch and patch["order_id"] != payment.order_id:
        _require_order(patch["order_id"])

    apply_patch(payment, patch, PAYMENT_MUTABLE_FIELDS)
    commit()
    return payment.to_dict()


def delete_payment(payment_id: int) -> None:
    delete_record(get_or_404(Payment, payment_id, "Payment"))
