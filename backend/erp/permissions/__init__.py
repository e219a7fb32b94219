# Overview: Permission system package.
# Re-exports the catalog and default role grants.

from .categories import PermissionCategory
from .codes import PermissionCode
from .definitions import PERMISSION_DEFINITIONS
from .roles import DEFAULT_ROLE_PERMISSIONS, DEFAULT_ROLE_DESCRIPTIONS

__all__ = [
    "PermissionCategory",
    "PermissionCode",
    "PERMISSION_DEFINITIONS",
    "DEFAULT_ROLE_PERMISSIONS",
    "DEFAULT_ROLE_DESCRIPTIONS",
]
