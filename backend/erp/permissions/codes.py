# Overview: The fixed catalog of permission strings checked by the API.

from enum import Enum


class PermissionCode(str, Enum):
    VIEW_CUSTOMERS = "view_customers"
    CREATE_CUSTOMERS = "create_customers"
    EDIT_CUSTOMERS = "edit_customers"
    DELETE_CUSTOMERS = "delete_customers"

    VIEW_BRANDS = "view_brands"
    CREATE_BRANDS = "create_brands"
    EDIT_BRANDS = "edit_brands"
    DELETE_BRANDS = "delete_brands"

    VIEW_CATEGORIES = "view_categories"
    CREATE_CATEGORIES = "create_categories"
    EDIT_CATEGORIES = "edit_categories"
    DELETE_CATEGORIES = "delete_categories"

    VIEW_PRODUCTS = "view_products"
    CREATE_PRODUCTS = "create_products"
    EDIT_PRODUCTS = "edit_products"
    DELETE_PRODUCTS = "delete_products"

    VIEW_ORDERS = "view_orders"
    CREATE_ORDERS = "create_orders"
    EDIT_ORDERS = "edit_orders"
    DELETE_ORDERS = "delete_orders"

    VIEW_PAYMENTS = "view_payments"
    CREATE_PAYMENTS = "create_payments"
    EDIT_PAYMENTS = "edit_payments"
    DELETE_PAYMENTS = "delete_payments"

    VIEW_SHIPPING = "view_shipping"
    CREATE_SHIPPING = "create_shipping"
    EDIT_SHIPPING = "edit_shipping"
    DELETE_SHIPPING = "delete_shipping"

    VIEW_USERS = "view_users"
    CREATE_USERS = "create_users"
    EDIT_USERS = "edit_users"
    DELETE_USERS = "delete_users"

    VIEW_ROLES = "view_roles"
    CREATE_ROLES = "create_roles"
    EDIT_ROLES = "edit_roles"
    DELETE_ROLES = "delete_roles"

    VIEW_PERMISSIONS = "view_permissions"
    ASSIGN_PERMISSIONS = "assign_permissions"

    def __str__(self) -> str:
        return self.value
