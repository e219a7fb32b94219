# Overview: Dashboard aggregates, recomputed on every request.

"""
Dashboard figures.

Cancelled orders never count towards revenue, top products, or sales by
category. Money aggregates are returned as floats for charting.
"""
from __future__ import annotations

from ..constants import OrderStatus
from ..extensions import db
from ..models import Category, Customer, Order, OrderItem, Product

DEFAULT_DASHBOARD_LIMIT = 5


def _not_cancelled():
    return Order.status != OrderStatus.CANCELLED


def get_stats() -> dict:
    revenue = (
        db.session.query(db.func.coalesce(db.func.sum(Order.total_amount), 0))
        .filter(_not_cancelled())
        .scalar()
    )
    return {
        "customers": db.session.query(db.func.count(Customer.id)).scalar(),
        "products": db.session.query(db.func.count(Product.id)).scalar(),
        "orders": db.session.query(db.func.count(Order.id)).scalar(),
        "revenue": float(revenue or 0),
    }


def get_recent_orders(limit: int = DEFAULT_DASHBOARD_LIMIT) -> list[dict]:
    orders = (
        db.session.query(Order)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .limit(limit)
        .all()
    )
    return [o.to_dict(include_relations=True) for o in orders]


def get_top_products(limit: int = DEFAULT_DASHBOARD_LIMIT) -> list[dict]:
    """Products by units sold, with the revenue those units brought in."""
    total_sold = db.func.sum(OrderItem.quantity).label("total_sold")
    revenue = db.func.sum(OrderItem.total).label("revenue")

    rows = (
        db.session.query(Product, total_sold, revenue)
        .join(OrderItem, OrderItem.product_id == Product.id)
        .join(Order, Order.id == OrderItem.order_id)
        .filter(_not_cancelled())
        .group_by(Product.id)
        .order_by(total_sold.desc(), Product.id.asc())
        .limit(limit)
        .all()
    )

    result = []
    for product, sold, amount in rows:
        data = product.to_dict()
        data["totalSold"] = int(sold or 0)
        data["revenue"] = float(amount or 0)
        result.append(data)
    return result


def get_sales_by_category() -> list[dict]:
    """
    Every category with its share of item sales.

    Categories without sales are listed with amount 0; percentages are of
    the summed category amounts (0 across the board when nothing sold).
    """
    sales = (
        db.session.query(
            OrderItem.product_id.label("product_id"),
            db.func.sum(OrderItem.total).label("amount"),
        )
        .join(Order, Order.id == OrderItem.order_id)
        .filter(_not_cancelled())
        .group_by(OrderItem.product_id)
        .subquery()
    )

    amount = db.func.coalesce(db.func.sum(sales.c.amount), 0).label("amount")
    rows = (
        db.session.query(Category.name, amount)
        .outerjoin(Product, Product.category_id == Category.id)
        .outerjoin(sales, sales.c.product_id == Product.id)
        .group_by(Category.id, Category.name)
        .order_by(amount.desc(), Category.name.asc())
        .all()
    )

    grand_total = sum(float(row.amount or 0) for row in rows)
    return [
        {
            "categoryName": name,
            "amount": float(value or 0),
            "percentage": (float(value or 0) * 100 / grand_total) if grand_total else 0.0,
        }
        for name, value in rows
    ]
