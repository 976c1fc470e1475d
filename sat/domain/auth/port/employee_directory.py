"""Port for loading the employee data authorization decisions depend on."""

from abc import abstractmethod
from typing import Protocol

from sat.domain.auth.model.employee import EmployeeSnapshot
from sat.domain.shared.authorization.scope import ScopeDecision


class EmployeeDirectory(Protocol):
    """Read-only access to employee records."""

    @abstractmethod
    async def get(self, employee_id: int) -> EmployeeSnapshot | None:
        """Get one employee, or None if it does not exist."""
        ...

    @abstractmethod
    async def list_in_scope(
        self,
        scope: ScopeDecision,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[EmployeeSnapshot]:
        """List employees visible under ``scope``, ordered by id."""
        ...
