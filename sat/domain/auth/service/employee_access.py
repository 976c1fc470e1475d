"""Employee lookups that load targets and run them through the authorization service.

This is what request handlers call: they hold an AccessContext and an
employee id, and need either the record or a clear refusal.
"""

from sat.domain.auth.model.access import AccessContext, TargetResource
from sat.domain.auth.model.employee import EmployeeSnapshot
from sat.domain.auth.port.employee_directory import EmployeeDirectory
from sat.domain.auth.service.authorization import AuthorizationService
from sat.domain.shared.authorization.action import AccessMode
from sat.domain.shared.error import NotFoundError
from sat.domain.shared.service import Service


class EmployeeAccessService(Service):
    """Scope-checked employee lookups."""

    _directory: EmployeeDirectory
    _authorization: AuthorizationService

    async def get(self, ctx: AccessContext, employee_id: int) -> EmployeeSnapshot:
        """Load an employee the context may read.

        Raises NotFoundError if it does not exist, AuthorizationError if it is
        outside the context's scope.
        """
        return await self._load_checked(ctx, employee_id, AccessMode.READ)

    async def get_for_update(self, ctx: AccessContext, employee_id: int) -> EmployeeSnapshot:
        return await self._load_checked(ctx, employee_id, AccessMode.WRITE)

    async def get_for_scheduling(self, ctx: AccessContext, employee_id: int) -> EmployeeSnapshot:
        """Load the employee a shift assignment is being created for."""
        return await self._load_checked(ctx, employee_id, AccessMode.SCHEDULE)

    async def list_visible(
        self,
        ctx: AccessContext,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[EmployeeSnapshot]:
        scope = self._authorization.resolve_listing_scope(ctx)
        if scope.is_denied:
            return []
        return await self._directory.list_in_scope(scope, limit=limit, offset=offset)

    async def _load_checked(
        self, ctx: AccessContext, employee_id: int, mode: AccessMode
    ) -> EmployeeSnapshot:
        employee = await self._directory.get(employee_id)
        if employee is None:
            raise NotFoundError(f"Employee not found: {employee_id}", code="employee_not_found")
        self._authorization.require_scope(ctx, TargetResource.for_employee(employee), mode)
        return employee
