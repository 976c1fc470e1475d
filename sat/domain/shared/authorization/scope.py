"""Scope resolution: how much of the staff data a principal may see or change.

Listing scope precedence:

1. any role ranked at or above Director -> ALL
2. HR -> ALL (lateral grant, not a rank comparison)
3. TeamLeader or Manager -> DEPARTMENT_ONLY(department_id), or DENIED when
   the context has no department id
4. linked employee id -> SELF_ONLY(employee_id)
5. otherwise DENIED

Write access is narrower than read access: managers may change anyone in
their department, team leaders only employees below the team-leader level.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from sat.domain.auth.model.role import DEFAULT_ROLE_HIERARCHY, RoleHierarchy, RoleName

if TYPE_CHECKING:
    from sat.domain.auth.model.access import AccessContext, TargetResource

logger = logging.getLogger(__name__)

TEAM_LEADER_POSITION_LEVEL = 3
DEFAULT_MISSING_POSITION_LEVEL = 1

_DEPARTMENT_SCOPED_ROLES = (RoleName.TEAM_LEADER, RoleName.MANAGER)


class ScopeKind(StrEnum):
    DENIED = "denied"
    SELF_ONLY = "self_only"
    DEPARTMENT_ONLY = "department_only"
    ALL = "all"


@dataclass(frozen=True)
class ScopeDecision:
    """Breadth of data a principal may see.

    SELF_ONLY carries the bound employee id, DEPARTMENT_ONLY the bound
    department id. Use the constructors; they keep the ids consistent with
    the kind.
    """

    kind: ScopeKind
    employee_id: int | None = None
    department_id: int | None = None

    @classmethod
    def denied(cls) -> "ScopeDecision":
        return cls(kind=ScopeKind.DENIED)

    @classmethod
    def self_only(cls, employee_id: int) -> "ScopeDecision":
        return cls(kind=ScopeKind.SELF_ONLY, employee_id=employee_id)

    @classmethod
    def department_only(cls, department_id: int) -> "ScopeDecision":
        return cls(kind=ScopeKind.DEPARTMENT_ONLY, department_id=department_id)

    @classmethod
    def all(cls) -> "ScopeDecision":
        return cls(kind=ScopeKind.ALL)

    @property
    def is_denied(self) -> bool:
        return self.kind is ScopeKind.DENIED

    def covers(self, target: "TargetResource") -> bool:
        """Whether a single target falls inside this scope. None never matches."""
        if self.kind is ScopeKind.ALL:
            return True
        if self.kind is ScopeKind.DEPARTMENT_ONLY:
            return target.department_id is not None and target.department_id == self.department_id
        if self.kind is ScopeKind.SELF_ONLY:
            return target.employee_id is not None and target.employee_id == self.employee_id
        return False


class ScopeResolver:
    """Row-level access rules on top of the role hierarchy.

    ``missing_position_level`` is the level assumed for a target whose work
    position is unknown.
    """

    __slots__ = ("_hierarchy", "_missing_position_level")

    def __init__(
        self,
        hierarchy: RoleHierarchy = DEFAULT_ROLE_HIERARCHY,
        missing_position_level: int = DEFAULT_MISSING_POSITION_LEVEL,
    ) -> None:
        self._hierarchy = hierarchy
        self._missing_position_level = missing_position_level

    @property
    def hierarchy(self) -> RoleHierarchy:
        return self._hierarchy

    def has_global_access(self, ctx: "AccessContext") -> bool:
        """Director rank or above, or the HR lateral grant."""
        if self._hierarchy.reaches(ctx.roles, RoleName.DIRECTOR):
            return True
        # HR ranks below Director but still sees everything
        return ctx.has_role(RoleName.HR)

    def listing_scope(self, ctx: "AccessContext") -> ScopeDecision:
        if self.has_global_access(ctx):
            return ScopeDecision.all()
        if ctx.has_any_role(*_DEPARTMENT_SCOPED_ROLES):
            if ctx.department_id is None:
                logger.debug("Department-scoped role without DepartmentId claim: roles=%s", sorted(ctx.roles))
                return ScopeDecision.denied()
            return ScopeDecision.department_only(ctx.department_id)
        if ctx.employee_id is not None:
            return ScopeDecision.self_only(ctx.employee_id)
        return ScopeDecision.denied()

    def can_access(self, ctx: "AccessContext", target: "TargetResource") -> bool:
        return self.listing_scope(ctx).covers(target)

    def can_modify(self, ctx: "AccessContext", target: "TargetResource") -> bool:
        if self.has_global_access(ctx):
            return True
        if not self._same_department(ctx, target):
            return False
        if ctx.has_role(RoleName.MANAGER):
            return True
        if ctx.has_role(RoleName.TEAM_LEADER):
            # Peers (level 3) and superiors are off limits
            return self._level_of(target) < TEAM_LEADER_POSITION_LEVEL
        return False

    def can_create_schedule_for(self, ctx: "AccessContext", target_employee: "TargetResource") -> bool:
        """Whether ctx may create a shift assignment for target_employee."""
        return self.can_modify(ctx, target_employee)

    def _level_of(self, target: "TargetResource") -> int:
        if target.position_level is None:
            return self._missing_position_level
        return target.position_level

    @staticmethod
    def _same_department(ctx: "AccessContext", target: "TargetResource") -> bool:
        return ctx.department_id is not None and ctx.department_id == target.department_id
