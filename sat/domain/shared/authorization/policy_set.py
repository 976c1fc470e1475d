"""Named authorization policies that need no target resource.

Names follow the scheme handlers declare: ``HasPermission:<CODE>``,
``HasMinimumRole:<Role>`` and a handful of shortcuts for common gates.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING

from sat.domain.auth.model.permission import DEFAULT_PERMISSION_CATALOG, Permission, PermissionCatalog
from sat.domain.auth.model.role import DEFAULT_ROLE_HIERARCHY, RoleHierarchy, RoleName
from sat.domain.shared.authorization.policy import (
    Policy,
    department_access,
    requires_permission,
    requires_role,
)
from sat.domain.shared.error import AuthorizationError, ConfigurationError

if TYPE_CHECKING:
    from sat.domain.auth.model.access import AccessContext

logger = logging.getLogger(__name__)

DEPARTMENT_ACCESS = "DepartmentAccess"
EMPLOYEE_VIEW = "EmployeeView"
SCHEDULE_CREATE = "ScheduleCreate"
ADMIN_ONLY = "AdminOnly"
TEAM_LEADER_OR_ABOVE = "TeamLeaderOrAbove"
DIRECTOR_OR_ABOVE = "DirectorOrAbove"


def permission_policy_name(code: str) -> str:
    return f"HasPermission:{code}"


def role_policy_name(role: str) -> str:
    return f"HasMinimumRole:{role}"


def _describe(ctx: "AccessContext | None") -> str:
    if ctx is None:
        return "anonymous"
    if ctx.employee_id is not None:
        return f"employee:{ctx.employee_id}"
    return "roles:" + ",".join(sorted(ctx.roles))


class PolicySet:
    """Registry of named policies.

    Unknown names are configuration errors, never silent denies.
    """

    def __init__(self, policies: Mapping[str, Policy]) -> None:
        self._policies: dict[str, Policy] = dict(policies)

    def __contains__(self, name: object) -> bool:
        return name in self._policies

    def __iter__(self) -> Iterator[str]:
        return iter(self._policies)

    def __len__(self) -> int:
        return len(self._policies)

    def get(self, name: str) -> Policy:
        try:
            return self._policies[name]
        except KeyError:
            raise ConfigurationError(f"Unknown authorization policy: {name}") from None

    def evaluate(self, ctx: "AccessContext", name: str) -> bool:
        return self.get(name).evaluate(ctx)

    def guard(self, ctx: "AccessContext | None", name: str) -> None:
        """Raise AuthorizationError unless the named policy allows ctx."""
        policy = self.get(name)
        principal = _describe(ctx)

        if ctx is None:
            logger.warning("Authorization denied: principal=%s policy=%s", principal, name)
            raise AuthorizationError("Authentication required", code="missing_token")

        if policy.evaluate(ctx):
            logger.info("Authorization allowed: principal=%s policy=%s", principal, name)
            return

        logger.warning("Authorization denied: principal=%s policy=%s", principal, name)
        raise AuthorizationError(f"Access denied: {name}", code="access_denied")

    def validate_coverage(
        self,
        catalog: PermissionCatalog = DEFAULT_PERMISSION_CATALOG,
        hierarchy: RoleHierarchy = DEFAULT_ROLE_HIERARCHY,
    ) -> None:
        """Startup check: every permission code and role has a policy."""
        expected = {permission_policy_name(c) for c in catalog.codes()}
        expected |= {role_policy_name(r) for r in hierarchy.roles()}
        missing = expected - set(self._policies)
        if missing:
            raise ConfigurationError(f"Permissions/roles without policies: {sorted(missing)}")


def build_policy_set(
    hierarchy: RoleHierarchy = DEFAULT_ROLE_HIERARCHY,
    catalog: PermissionCatalog = DEFAULT_PERMISSION_CATALOG,
) -> PolicySet:
    policies: dict[str, Policy] = {}
    for code in catalog.codes():
        policies[permission_policy_name(code)] = requires_permission(code)
    for role in hierarchy.roles():
        policies[role_policy_name(role)] = requires_role(role, hierarchy)

    policies[DEPARTMENT_ACCESS] = department_access(hierarchy)
    policies[EMPLOYEE_VIEW] = requires_permission(Permission.EMPLOYEE_VIEW)
    policies[SCHEDULE_CREATE] = requires_permission(Permission.SCHEDULE_CREATE)
    policies[ADMIN_ONLY] = requires_role(RoleName.ADMIN, hierarchy)
    policies[TEAM_LEADER_OR_ABOVE] = requires_role(RoleName.TEAM_LEADER, hierarchy)
    policies[DIRECTOR_OR_ABOVE] = requires_role(RoleName.DIRECTOR, hierarchy)
    return PolicySet(policies)


POLICY_SET = build_policy_set()
