from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z
from .base import TimestampMixin, money_str


class Brand(TimestampMixin, db.Model):
    __tablename__ = "brands"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False, unique=True)
    description = db.Column(db.Text, nullable=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }


class Category(TimestampMixin, db.Model):
    __tablename__ = "categories"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False, unique=True)
    description = db.Column(db.Text, nullable=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }


class Product(TimestampMixin, db.Model):
    """
    Sellable item.

    Brand and category are optional; deleting either leaves the product in
    place with the reference cleared.
    """
    __tablename__ = "products"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    sku = db.Column(db.String(64), nullable=False, unique=True, index=True)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    stock = db.Column(db.Integer, nullable=False, default=0)
    brand_id = db.Column(db.Integer, db.ForeignKey("brands.id", ondelete="SET NULL"), nullable=True)
    category_id = db.Column(
        db.Integer, db.ForeignKey("categories.id", ondelete="SET NULL"), nullable=True
    )
    description = db.Column(db.Text, nullable=True)

    brand = db.relationship("Brand", backref=db.backref("products", lazy=True, passive_deletes=True))
    category = db.relationship(
        "Category", backref=db.backref("products", lazy=True, passive_deletes=True)
    )

    def to_summary(self) -> dict:
        return {"id": self.id, "name": self.name, "sku": self.sku, "price": money_str(self.price)}

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "sku": self.sku,
            "price": money_str(self.price),
            "stock": self.stock,
            "brandId": self.brand_id,
            "categoryId": self.category_id,
            "description": self.description,
            "brand": {"id": self.brand.id, "name": self.brand.name} if self.brand else None,
            "category": {"id": self.category.id, "name": self.category.name} if self.category else None,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }
