"""Composable policy types: target-free checks against an AccessContext."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sat.domain.auth.model.role import DEFAULT_ROLE_HIERARCHY, RoleHierarchy, RoleName

if TYPE_CHECKING:
    from sat.domain.auth.model.access import AccessContext


class Policy(ABC):
    """Base class for composable authorization policies.

    Policies answer questions that need no target resource: does the
    principal hold a permission, is their best role high enough.
    """

    @abstractmethod
    def evaluate(self, ctx: "AccessContext") -> bool:
        """Return True if the context satisfies this policy."""
        ...

    def __and__(self, other: Policy) -> AllOf:
        return AllOf(policies=(self, other))

    def __or__(self, other: Policy) -> AnyOf:
        return AnyOf(policies=(self, other))

    def __invert__(self) -> Not:
        return Not(policy=self)


@dataclass(frozen=True)
class RequiresPermission(Policy):
    """Pure set membership on the context's Permission claims."""

    permission: str

    def evaluate(self, ctx: "AccessContext") -> bool:
        return self.permission in ctx.permissions


@dataclass(frozen=True)
class RequiresMinimumRole(Policy):
    """Best role rank must meet or exceed the rank of ``role``.

    A context with no roles fails every comparison, including against an
    unknown minimum role (rank 0).
    """

    role: str
    hierarchy: RoleHierarchy = DEFAULT_ROLE_HIERARCHY

    def evaluate(self, ctx: "AccessContext") -> bool:
        best = self.hierarchy.highest_rank(ctx.roles)
        if best is None:
            return False
        return best >= self.hierarchy.rank_of(self.role)


@dataclass(frozen=True)
class DepartmentAccess(Policy):
    """Department-level gate.

    Director rank and above, or HR, pass outright. Managers and team leaders
    pass only when their context carries a department id.
    """

    hierarchy: RoleHierarchy = DEFAULT_ROLE_HIERARCHY

    def evaluate(self, ctx: "AccessContext") -> bool:
        if self.hierarchy.reaches(ctx.roles, RoleName.DIRECTOR):
            return True
        if ctx.has_role(RoleName.HR):
            return True
        if ctx.has_any_role(RoleName.MANAGER, RoleName.TEAM_LEADER):
            return ctx.department_id is not None
        return False


@dataclass(frozen=True)
class AllOf(Policy):
    """Policy that requires ALL sub-policies to pass."""

    policies: tuple[Policy, ...]

    def evaluate(self, ctx: "AccessContext") -> bool:
        return all(p.evaluate(ctx) for p in self.policies)


@dataclass(frozen=True)
class AnyOf(Policy):
    """Policy that requires at least ONE sub-policy to pass."""

    policies: tuple[Policy, ...]

    def evaluate(self, ctx: "AccessContext") -> bool:
        return any(p.evaluate(ctx) for p in self.policies)


@dataclass(frozen=True)
class Not(Policy):
    policy: Policy

    def evaluate(self, ctx: "AccessContext") -> bool:
        return not self.policy.evaluate(ctx)


def requires_permission(permission: str) -> RequiresPermission:
    return RequiresPermission(permission=str(permission))


def requires_role(
    role: str, hierarchy: RoleHierarchy = DEFAULT_ROLE_HIERARCHY
) -> RequiresMinimumRole:
    """Factory: policy requiring at least the given role."""
    return RequiresMinimumRole(role=str(role), hierarchy=hierarchy)


def requires_any_permission(*permissions: str) -> AnyOf:
    return AnyOf(policies=tuple(requires_permission(p) for p in permissions))


def department_access(hierarchy: RoleHierarchy = DEFAULT_ROLE_HIERARCHY) -> DepartmentAccess:
    return DepartmentAccess(hierarchy=hierarchy)
