# Overview: Re-exports all models so Alembic and services see one namespace.

from .auth import User, Role, Permission, UserRole, RolePermission
from .catalog import Brand, Category, Product
from .customers import Customer
from .orders import Order, OrderItem, Payment, Shipping

__all__ = [
    "User",
    "Role",
    "Permission",
    "UserRole",
    "RolePermission",
    "Brand",
    "Category",
    "Product",
    "Customer",
    "Order",
    "OrderItem",
    "Payment",
    "Shipping",
]
