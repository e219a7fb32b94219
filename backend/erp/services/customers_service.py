# Overview: Service-layer operations for customers.

from __future__ import annotations

from ..extensions import db
from ..models import Customer
from .common import (
    apply_patch,
    commit,
    delete_record,
    ensure_unique,
    get_or_404,
    paginate,
    search_filter,
)

CUSTOMER_MUTABLE_FIELDS = {"name", "email", "phone", "document", "address", "city", "state", "zip_code"}

CUSTOMER_SEARCH_COLUMNS = (
    Customer.name,
    Customer.email,
    Customer.phone,
    Customer.document,
    Customer.city,
    Customer.state,
)

DUPLICATE_EMAIL = "Customer with this email already exists"


def list_customers(page: int | None = None, limit: int | None = None, search: str | None = None) -> dict:
    query = db.session.query(Customer)
    if search:
        query = query.filter(search_filter(CUSTOMER_SEARCH_COLUMNS, search))
    query = query.order_by(Customer.name.asc(), Customer.id.asc())
    return paginate(query, key="customers", page=page, limit=limit)


def get_customer(customer_id: int) -> dict:
    return get_or_404(Customer, customer_id, "Customer").to_dict()


def create_customer(*, patch: dict) -> dict:
    ensure_unique(Customer, Customer.email, patch.get("email"), message=DUPLICATE_EMAIL)

    customer = Customer()
    apply_patch(customer, patch, CUSTOMER_MUTABLE_FIELDS)
    db.session.add(customer)
    commit(DUPLICATE_EMAIL)
    return customer.to_dict()


def update_customer(customer_id: int, *, patch: dict) -> dict:
    customer = get_or_404(Customer, customer_id, "Customer")

    if "email" in patch and patch["email"] != customer.email:
        ensure_unique(Customer, Customer.email, patch["email"], exclude_id=customer.id, message=DUPLICATE_EMAIL)

    apply_patch(customer, patch, CUSTOMER_MUTABLE_FIELDS)
    commit(DUPLICATE_EMAIL)
    return customer.to_dict()


def delete_customer(customer_id: int) -> None:
    """Orders keep their customerId after the customer is gone."""
    delete_record(get_or_404(Customer, customer_id, "Customer"))
