# Overview: All permission definitions organized by category.
# Each permission is defined as: (code, description, category)

from .categories import PermissionCategory
from .codes import PermissionCode as P


def _crud(category, plural, view, create, edit, delete):
    label = plural.replace("_", " ")
    return [
        (view, f"View {label}", category),
        (create, f"Create {label}", category),
        (edit, f"Edit {label}", category),
        (delete, f"Delete {label}", category),
    ]


CUSTOMER_PERMISSIONS = _crud(
    PermissionCategory.CUSTOMERS, "customers",
    P.VIEW_CUSTOMERS, P.CREATE_CUSTOMERS, P.EDIT_CUSTOMERS, P.DELETE_CUSTOMERS,
)

BRAND_PERMISSIONS = _crud(
    PermissionCategory.BRANDS, "brands",
    P.VIEW_BRANDS, P.CREATE_BRANDS, P.EDIT_BRANDS, P.DELETE_BRANDS,
)

CATEGORY_PERMISSIONS = _crud(
    PermissionCategory.CATEGORIES, "categories",
    P.VIEW_CATEGORIES, P.CREATE_CATEGORIES, P.EDIT_CATEGORIES, P.DELETE_CATEGORIES,
)

PRODUCT_PERMISSIONS = _crud(
    PermissionCategory.PRODUCTS, "products",
    P.VIEW_PRODUCTS, P.CREATE_PRODUCTS, P.EDIT_PRODUCTS, P.DELETE_PRODUCTS,
)

ORDER_PERMISSIONS = _crud(
    PermissionCategory.ORDERS, "orders",
    P.VIEW_ORDERS, P.CREATE_ORDERS, P.EDIT_ORDERS, P.DELETE_ORDERS,
)

PAYMENT_PERMISSIONS = _crud(
    PermissionCategory.PAYMENTS, "payments",
    P.VIEW_PAYMENTS, P.CREATE_PAYMENTS, P.EDIT_PAYMENTS, P.DELETE_PAYMENTS,
)

SHIPPING_PERMISSIONS = _crud(
    PermissionCategory.SHIPPING, "shipping records",
    P.VIEW_SHIPPING, P.CREATE_SHIPPING, P.EDIT_SHIPPING, P.DELETE_SHIPPING,
)

USER_PERMISSIONS = _crud(
    PermissionCategory.USERS, "users",
    P.VIEW_USERS, P.CREATE_USERS, P.EDIT_USERS, P.DELETE_USERS,
)

ROLE_PERMISSIONS = _crud(
    PermissionCategory.ROLES, "roles",
    P.VIEW_ROLES, P.CREATE_ROLES, P.EDIT_ROLES, P.DELETE_ROLES,
)

# -- PERMISSIONS --

PERMISSION_ADMIN_PERMISSIONS = [
    (P.VIEW_PERMISSIONS, "View the permission catalog", PermissionCategory.PERMISSIONS),
    (P.ASSIGN_PERMISSIONS, "Assign permissions to roles", PermissionCategory.PERMISSIONS),
]


PERMISSION_DEFINITIONS = (
    CUSTOMER_PERMISSIONS
    + BRAND_PERMISSIONS
    + CATEGORY_PERMISSIONS
    + PRODUCT_PERMISSIONS
    + ORDER_PERMISSIONS
    + PAYMENT_PERMISSIONS
    + SHIPPING_PERMISSIONS
    + USER_PERMISSIONS
    + ROLE_PERMISSIONS
    + PERMISSION_ADMIN_PERMISSIONS
)
