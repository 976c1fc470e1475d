"""Tests for composable policies: permission, minimum role, department access."""

import pytest

from sat.domain.auth.model.access import AccessContext
from sat.domain.auth.model.role import RoleHierarchy
from sat.domain.shared.authorization.policy import (
    AllOf,
    AnyOf,
    Not,
    department_access,
    requires_any_permission,
    requires_permission,
    requires_role,
)


def _ctx(*roles: str, permissions: tuple[str, ...] = (), department_id: int | None = None) -> AccessContext:
    return AccessContext(
        roles=frozenset(roles),
        permissions=frozenset(permissions),
        department_id=department_id,
    )


class TestRequiresPermission:
    def test_membership(self) -> None:
        ctx = _ctx(permissions=("EMPLOYEE_VIEW",))
        assert requires_permission("EMPLOYEE_VIEW").evaluate(ctx) is True
        assert requires_permission("EMPLOYEE_DELETE").evaluate(ctx) is False

    def test_role_does_not_imply_permission(self) -> None:
        assert requires_permission("EMPLOYEE_VIEW").evaluate(_ctx("SuperAdmin")) is False

    def test_any_permission(self) -> None:
        policy = requires_any_permission("REPORT_VIEW", "REPORT_EXPORT")
        assert policy.evaluate(_ctx(permissions=("REPORT_EXPORT",))) is True
        assert policy.evaluate(_ctx(permissions=("EMPLOYEE_VIEW",))) is False


class TestRequiresMinimumRole:
    @pytest.mark.parametrize("role", ["SuperAdmin", "Admin", "Director"])
    def test_director_or_above(self, role: str) -> None:
        assert requires_role("Director").evaluate(_ctx(role)) is True

    @pytest.mark.parametrize("role", ["Manager", "HR", "TeamLeader", "Employee", "User", "Ghost"])
    def test_below_director(self, role: str) -> None:
        assert requires_role("Director").evaluate(_ctx(role)) is False

    def test_empty_roles_fail_every_minimum(self) -> None:
        assert requires_role("User").evaluate(_ctx()) is False
        # Unknown minimum ranks 0, still unreachable without roles
        assert requires_role("Nobody").evaluate(_ctx()) is False

    def test_unknown_role_meets_unknown_minimum(self) -> None:
        assert requires_role("Nobody").evaluate(_ctx("Ghost")) is True

    def test_best_role_counts(self) -> None:
        assert requires_role("Manager").evaluate(_ctx("User", "Manager")) is True

    def test_equal_rank_passes(self) -> None:
        assert requires_role("TeamLeader").evaluate(_ctx("TeamLeader")) is True

    def test_custom_hierarchy(self) -> None:
        hierarchy = RoleHierarchy({"Owner": 5, "Guest": 1})
        assert requires_role("Owner", hierarchy).evaluate(_ctx("Owner")) is True
        assert requires_role("Owner", hierarchy).evaluate(_ctx("SuperAdmin")) is False


class TestDepartmentAccess:
    @pytest.mark.parametrize("role", ["SuperAdmin", "Admin", "Director", "HR"])
    def test_global_roles(self, role: str) -> None:
        assert department_access().evaluate(_ctx(role)) is True

    @pytest.mark.parametrize("role", ["Manager", "TeamLeader"])
    def test_department_roles_need_department(self, role: str) -> None:
        assert department_access().evaluate(_ctx(role, department_id=3)) is True
        assert department_access().evaluate(_ctx(role)) is False

    def test_employee_denied(self) -> None:
        assert department_access().evaluate(_ctx("Employee", department_id=3)) is False

    def test_table_without_director_grants_nothing_outright(self) -> None:
        policy = department_access(RoleHierarchy({"Auditor": 3, "User": 1}))
        assert policy.evaluate(_ctx("User", department_id=3)) is False
        assert policy.evaluate(_ctx("HR")) is True


class TestComposition:
    def test_and(self) -> None:
        policy = requires_role("TeamLeader") & requires_permission("SCHEDULE_CREATE")
        assert isinstance(policy, AllOf)
        assert policy.evaluate(_ctx("TeamLeader", permissions=("SCHEDULE_CREATE",))) is True
        assert policy.evaluate(_ctx("TeamLeader")) is False

    def test_or(self) -> None:
        policy = requires_role("Admin") | requires_permission("USER_MANAGEMENT")
        assert isinstance(policy, AnyOf)
        assert policy.evaluate(_ctx("HR", permissions=("USER_MANAGEMENT",))) is True
        assert policy.evaluate(_ctx("HR")) is False

    def test_not(self) -> None:
        policy = ~requires_role("Admin")
        assert isinstance(policy, Not)
        assert policy.evaluate(_ctx("User")) is True
        assert policy.evaluate(_ctx("Admin")) is False
