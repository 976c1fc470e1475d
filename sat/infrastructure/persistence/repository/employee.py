"""SQL implementation of EmployeeDirectory."""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from sat.domain.auth.model.employee import EmployeeSnapshot
from sat.domain.auth.port.employee_directory import EmployeeDirectory
from sat.domain.shared.authorization.scope import ScopeDecision
from sat.infrastructure.persistence.scope_filter import employee_scope_filter
from sat.infrastructure.persistence.tables import (
    departments_table,
    employees_table,
    work_positions_table,
)


def _snapshot_query() -> Select:
    # Leading any department counts, not only the employee's own
    leads_department = (
        select(departments_table.c.id)
        .where(departments_table.c.leader_id == employees_table.c.id)
        .exists()
        .label("is_department_leader")
    )
    return (
        select(
            employees_table.c.id.label("employee_id"),
            employees_table.c.department_id,
            work_positions_table.c.level.label("position_level"),
            leads_department,
        )
        .select_from(employees_table)
        .outerjoin(
            work_positions_table,
            work_positions_table.c.id == employees_table.c.work_position_id,
        )
    )


def _row_to_snapshot(row: dict) -> EmployeeSnapshot:
    return EmployeeSnapshot(
        employee_id=row["employee_id"],
        department_id=row["department_id"],
        position_level=row["position_level"],
        is_department_leader=bool(row["is_department_leader"]),
    )


class SqlEmployeeDirectory(EmployeeDirectory):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, employee_id: int) -> EmployeeSnapshot | None:
        stmt = _snapshot_query().where(employees_table.c.id == employee_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_snapshot(dict(row)) if row else None

    async def list_in_scope(
        self,
        scope: ScopeDecision,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[EmployeeSnapshot]:
        if scope.is_denied:
            return []

        stmt = _snapshot_query().where(employee_scope_filter(scope)).order_by(employees_table.c.id)
        if offset is not None:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return [_row_to_snapshot(dict(r)) for r in result.mappings().all()]
