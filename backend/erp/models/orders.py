from __future__ import annotations

from ..constants import OrderStatus, ShippingStatus
from ..extensions import db
from ..time_utils import to_utc_z, utcnow
from .base import TimestampMixin, money_str


class Order(TimestampMixin, db.Model):
    """
    Order header.

    Items are owned by the order (created with it, deleted with it).
    Customer, payments and shipping rows are linked by id only: removing
    an order leaves its payments and shipments behind, and removing a
    customer leaves its orders behind.
    """
    __tablename__ = "orders"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, nullable=False, index=True)
    order_number = db.Column(db.String(32), nullable=False, unique=True, index=True)
    status = db.Column(db.String(16), nullable=False, default=OrderStatus.PENDING)
    total_amount = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    discount = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    shipping_cost = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    payment_method = db.Column(db.String(32), nullable=True)
    notes = db.Column(db.Text, nullable=True)
    ordered_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    customer = db.relationship(
        "Customer",
        primaryjoin="foreign(Order.customer_id) == Customer.id",
        viewonly=True,
    )
    items = db.relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderItem.id",
    )
    payments = db.relationship(
        "Payment",
        primaryjoin="Order.id == foreign(Payment.order_id)",
        viewonly=True,
        order_by="Payment.payment_date.desc()",
    )
    shipping = db.relationship(
        "Shipping",
        primaryjoin="Order.id == foreign(Shipping.order_id)",
        viewonly=True,
        order_by="Shipping.id",
    )

    def to_summary(self) -> dict:
        return {
            "id": self.id,
            "orderNumber": self.order_number,
            "status": self.status,
            "totalAmount": money_str(self.total_amount),
        }

    def to_dict(self, include_relations: bool = True) -> dict:
        data = {
            "id": self.id,
            "customerId": self.customer_id,
            "orderNumber": self.order_number,
            "status": self.status,
            "totalAmount": money_str(self.total_amount),
            "discount": money_str(self.discount),
            "shippingCost": money_str(self.shipping_cost),
            "paymentMethod": self.payment_method,
            "notes": self.notes,
            "orderedAt": to_utc_z(self.ordered_at),
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }
        if include_relations:
            data["customer"] = self.customer.to_summary() if self.customer else None
            data["items"] = [item.to_dict() for item in self.items]
            data["payments"] = [p.to_dict(include_order=False) for p in self.payments]
            data["shipping"] = [s.to_dict(include_order=False) for s in self.shipping]
        return data


class OrderItem(TimestampMixin, db.Model):
    """Order line. `price` is the unit price at the time of sale."""
    __tablename__ = "order_items"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(
        db.Integer, db.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id = db.Column(db.Integer, nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    total = db.Column(db.Numeric(12, 2), nullable=False)

    order = db.relationship("Order", back_populates="items")
    product = db.relationship(
        "Product",
        primaryjoin="foreign(OrderItem.product_id) == Product.id",
        viewonly=True,
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "orderId": self.order_id,
            "productId": self.product_id,
            "quantity": self.quantity,
            "price": money_str(self.price),
            "total": money_str(self.total),
            "product": self.product.to_summary() if self.product else None,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }


class Payment(TimestampMixin, db.Model):
    __tablename__ = "payments"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, nullable=False, index=True)
    payment_date = db.Column(db.DateTime, nullable=False, default=utcnow)
    payment_method = db.Column(db.String(32), nullable=False)
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    transaction_code = db.Column(db.String(100), nullable=True)

    order = db.relationship(
        "Order",
        primaryjoin="foreign(Payment.order_id) == Order.id",
        viewonly=True,
    )

    def to_dict(self, include_order: bool = True) -> dict:
        data = {
            "id": self.id,
            "orderId": self.order_id,
            "paymentDate": to_utc_z(self.payment_date),
            "paymentMethod": self.payment_method,
            "amount": money_str(self.amount),
            "transactionCode": self.transaction_code,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }
        if include_order:
            data["order"] = self.order.to_summary() if self.order else None
        return data


class Shipping(TimestampMixin, db.Model):
    __tablename__ = "shipping"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, nullable=False, index=True)
    carrier = db.Column(db.String(100), nullable=True)
    tracking_code = db.Column(db.String(100), nullable=True)
    shipped_at = db.Column(db.DateTime, nullable=True)
    delivered_at = db.Column(db.DateTime, nullable=True)
    shipping_status = db.Column(db.String(16), nullable=False, default=ShippingStatus.PENDING)

    order = db.relationship(
        "Order",
        primaryjoin="foreign(Shipping.order_id) == Order.id",
        viewonly=True,
    )

    def to_dict(self, include_order: bool = True) -> dict:
        data = {
            "id": self.id,
            "orderId": self.order_id,
            "carrier": self.carrier,
            "trackingCode": self.tracking_code,
            "shippedAt": to_utc_z(self.shipped_at),
            "deliveredAt": to_utc_z(self.delivered_at),
            "shippingStatus": self.shipping_status,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }
        if include_order:
            data["order"] = self.order.to_summary() if self.order else None
        return data
