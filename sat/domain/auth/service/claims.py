"""Claims in and out of the authorization engine.

ClaimsExtractor turns the identity layer's stringly-typed claims into an
AccessContext. ClaimsIssuer decides which roles and claims a newly registered
account should carry, given its employee record.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from sat.domain.auth.model.access import AccessContext
from sat.domain.auth.model.employee import EmployeeSnapshot
from sat.domain.auth.model.permission import Permission
from sat.domain.auth.model.principal import (
    DEPARTMENT_ID_CLAIM,
    EMPLOYEE_ID_CLAIM,
    PERMISSION_CLAIM,
    POSITION_LEVEL_CLAIM,
    Principal,
)
from sat.domain.auth.model.role import RoleName

logger = logging.getLogger(__name__)

# Optional sign and ASCII digits only
_INT_CLAIM = re.compile(r"[+-]?[0-9]+")


class ClaimsExtractor:
    """Builds an AccessContext from a Principal.

    Never raises on bad claim values: an id that does not parse as an
    integer is treated as absent.
    """

    def extract(self, principal: Principal) -> AccessContext:
        return AccessContext(
            roles=frozenset(principal.roles),
            permissions=frozenset(principal.find_all(PERMISSION_CLAIM)),
            employee_id=self._int_claim(principal, EMPLOYEE_ID_CLAIM),
            department_id=self._int_claim(principal, DEPARTMENT_ID_CLAIM),
            position_level=self._int_claim(principal, POSITION_LEVEL_CLAIM),
        )

    @staticmethod
    def _int_claim(principal: Principal, key: str) -> int | None:
        raw = principal.find_first(key)
        if raw is None:
            return None
        value = raw.strip()
        if not _INT_CLAIM.fullmatch(value):
            logger.debug("Ignoring unparseable %s claim: %r", key, raw)
            return None
        return int(value)


_FULL_ADMIN_PERMISSIONS = (
    Permission.EMPLOYEE_VIEW,
    Permission.EMPLOYEE_CREATE,
    Permission.EMPLOYEE_UPDATE,
    Permission.EMPLOYEE_DELETE,
    Permission.DEPARTMENT_VIEW,
    Permission.DEPARTMENT_MANAGE_ALL,
    Permission.SCHEDULE_VIEW,
    Permission.SCHEDULE_CREATE,
    Permission.USER_MANAGEMENT,
    Permission.ROLE_MANAGEMENT,
)

_BASIC_PERMISSIONS = (Permission.EMPLOYEE_VIEW, Permission.SCHEDULE_VIEW)

DEFAULT_ROLE_PERMISSIONS: Mapping[str, tuple[Permission, ...]] = MappingProxyType(
    {
        RoleName.SUPER_ADMIN: _FULL_ADMIN_PERMISSIONS,
        RoleName.ADMIN: _FULL_ADMIN_PERMISSIONS,
        RoleName.DIRECTOR: (
            Permission.EMPLOYEE_VIEW,
            Permission.EMPLOYEE_CREATE,
            Permission.EMPLOYEE_UPDATE,
            Permission.DEPARTMENT_VIEW,
            Permission.SCHEDULE_VIEW,
            Permission.SCHEDULE_CREATE,
        ),
        RoleName.MANAGER: (
            Permission.EMPLOYEE_VIEW,
            Permission.EMPLOYEE_UPDATE,
            Permission.DEPARTMENT_VIEW,
            Permission.SCHEDULE_VIEW,
            Permission.SCHEDULE_CREATE,
        ),
        RoleName.TEAM_LEADER: (
            Permission.EMPLOYEE_VIEW,
            Permission.SCHEDULE_VIEW,
            Permission.SCHEDULE_CREATE,
        ),
        RoleName.HR: (
            Permission.EMPLOYEE_VIEW,
            Permission.EMPLOYEE_CREATE,
            Permission.EMPLOYEE_UPDATE,
            Permission.DEPARTMENT_VIEW,
            Permission.USER_MANAGEMENT,
        ),
        RoleName.EMPLOYEE: _BASIC_PERMISSIONS,
        RoleName.USER: _BASIC_PERMISSIONS,
    }
)

# Work-position level -> role for employees who do not lead a department
_ROLE_BY_POSITION_LEVEL: Mapping[int, RoleName] = MappingProxyType(
    {
        1: RoleName.EMPLOYEE,
        2: RoleName.EMPLOYEE,
        3: RoleName.TEAM_LEADER,
        4: RoleName.DIRECTOR,
        5: RoleName.MANAGER,
    }
)


class ClaimsIssuer:
    """Derives roles and claims for an account from its employee record."""

    def __init__(
        self,
        role_permissions: Mapping[str, Iterable[str]] = DEFAULT_ROLE_PERMISSIONS,
    ) -> None:
        self._role_permissions = {str(role): tuple(str(p) for p in perms) for role, perms in role_permissions.items()}

    def role_for_employee(self, employee: EmployeeSnapshot) -> str:
        if employee.is_department_leader:
            return RoleName.MANAGER
        if employee.position_level is None:
            return RoleName.EMPLOYEE
        return _ROLE_BY_POSITION_LEVEL.get(employee.position_level, RoleName.EMPLOYEE)

    def default_permissions(self, role: str) -> tuple[str, ...]:
        """Permissions granted to a role; unknown roles get the basic set."""
        basic = tuple(str(p) for p in _BASIC_PERMISSIONS)
        return self._role_permissions.get(str(role), basic)

    def issue(self, role: str, employee: EmployeeSnapshot | None = None) -> list[tuple[str, str]]:
        claims: list[tuple[str, str]] = []
        if employee is not None:
            claims.append((EMPLOYEE_ID_CLAIM, str(employee.employee_id)))
            if employee.department_id is not None:
                claims.append((DEPARTMENT_ID_CLAIM, str(employee.department_id)))
            if employee.position_level is not None:
                claims.append((POSITION_LEVEL_CLAIM, str(employee.position_level)))
        for permission in self.default_permissions(role):
            claims.append((PERMISSION_CLAIM, permission))
        return claims

    def principal_for(
        self,
        employee: EmployeeSnapshot | None = None,
        role: str | None = None,
    ) -> Principal:
        """Principal for a freshly registered account.

        Without an explicit role the role is derived from the employee record
        (or User when there is none). Every account also holds User.
        """
        if role is None:
            role = self.role_for_employee(employee) if employee is not None else RoleName.USER
        roles = {str(role), str(RoleName.USER)}
        logger.debug("Issuing claims: role=%s employee=%s", role, employee.employee_id if employee else None)
        return Principal.create(roles=roles, claims=self.issue(role, employee))
