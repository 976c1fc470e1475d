"""Translate a listing ScopeDecision into a SQL WHERE clause."""

from sqlalchemy import ColumnElement, false, select, true

from sat.domain.shared.authorization.scope import ScopeDecision, ScopeKind
from sat.infrastructure.persistence.tables import employees_table, shift_assignments_table


def scope_filter(
    decision: ScopeDecision,
    *,
    employee_id_column: ColumnElement,
    department_id_column: ColumnElement,
) -> ColumnElement[bool]:
    """Boolean expression restricting rows to what ``decision`` allows.

    DENIED yields a predicate that matches nothing, so a caller that forgets
    to short-circuit still returns an empty result.
    """
    if decision.kind is ScopeKind.ALL:
        return true()
    if decision.kind is ScopeKind.DEPARTMENT_ONLY:
        return department_id_column == decision.department_id
    if decision.kind is ScopeKind.SELF_ONLY:
        return employee_id_column == decision.employee_id
    return false()


def employee_scope_filter(decision: ScopeDecision) -> ColumnElement[bool]:
    return scope_filter(
        decision,
        employee_id_column=employees_table.c.id,
        department_id_column=employees_table.c.department_id,
    )


def shift_assignment_scope_filter(decision: ScopeDecision) -> ColumnElement[bool]:
    """Assignments carry no department; resolve it through the employee."""
    assignee = shift_assignments_table.c.employee_id
    if decision.kind is ScopeKind.DEPARTMENT_ONLY:
        members = select(employees_table.c.id).where(
            employees_table.c.department_id == decision.department_id
        )
        return assignee.in_(members)
    if decision.kind is ScopeKind.SELF_ONLY:
        return assignee == decision.employee_id
    if decision.kind is ScopeKind.ALL:
        return true()
    return false()
