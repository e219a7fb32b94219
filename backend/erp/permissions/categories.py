# Overview: Permission category constants for grouping related permissions.


class PermissionCategory:
    """Permission categories for organization and CLI display."""
    CUSTOMERS = "customers"
    BRANDS = "brands"
    CATEGORIES = "categories"
    PRODUCTS = "products"
    ORDERS = "orders"
    PAYMENTS = "payments"
    SHIPPING = "shipping"
    USERS = "users"
    ROLES = "roles"
    PERMISSIONS = "permissions"
