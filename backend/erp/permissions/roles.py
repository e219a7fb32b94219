# Overview: Default roles and the permissions each one starts with.

from .codes import PermissionCode as P


DEFAULT_ROLE_DESCRIPTIONS = {
    "admin": "Full access to every resource",
    "manager": "Manage records without deleting them",
    "sales": "Handle customers, orders, payments and shipping",
    "viewer": "Read-only access to business records",
}


_MASTER_AND_TRANSACTIONAL = ("customers", "brands", "categories", "products", "orders", "payments", "shipping")


def _codes(*actions, resources=_MASTER_AND_TRANSACTIONAL):
    return [P(f"{action}_{resource}") for resource in resources for action in actions]


DEFAULT_ROLE_PERMISSIONS = {
    "admin": list(P),
    "manager": (
        _codes("view", "create", "edit")
        + [P.VIEW_USERS, P.VIEW_ROLES, P.VIEW_PERMISSIONS]
    ),
    "sales": [
        P.VIEW_CUSTOMERS, P.CREATE_CUSTOMERS, P.EDIT_CUSTOMERS,
        P.VIEW_BRANDS, P.VIEW_CATEGORIES, P.VIEW_PRODUCTS,
        P.VIEW_ORDERS, P.CREATE_ORDERS, P.EDIT_ORDERS,
        P.VIEW_PAYMENTS, P.CREATE_PAYMENTS,
        P.VIEW_SHIPPING, P.CREATE_SHIPPING,
    ],
    "viewer": _codes("view"),
}
