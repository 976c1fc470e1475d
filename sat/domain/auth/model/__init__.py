"""Auth domain models."""

from .access import AccessContext, TargetResource
from .employee import EmployeeSnapshot
from .permission import (
    DEFAULT_PERMISSION_CATALOG,
    Permission,
    PermissionCatalog,
    PermissionCategory,
)
from .principal import Principal
from .role import DEFAULT_ROLE_HIERARCHY, RoleHierarchy, RoleName

__all__ = [
    "AccessContext",
    "DEFAULT_PERMISSION_CATALOG",
    "DEFAULT_ROLE_HIERARCHY",
    "EmployeeSnapshot",
    "Permission",
    "PermissionCatalog",
    "PermissionCategory",
    "Principal",
    "RoleHierarchy",
    "RoleName",
    "TargetResource",
]
