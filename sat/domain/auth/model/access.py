"""Per-request authorization inputs: who is asking, and about what."""

from dataclasses import dataclass

from sat.domain.auth.model.employee import EmployeeSnapshot


@dataclass(frozen=True)
class AccessContext:
    """Typed snapshot of a principal's roles and claims.

    Built fresh for every check and discarded with the request. Absent ids
    and levels are None and always resolve to the narrowest scope.
    """

    roles: frozenset[str] = frozenset()
    permissions: frozenset[str] = frozenset()
    employee_id: int | None = None
    department_id: int | None = None
    position_level: int | None = None

    def has_role(self, role: str) -> bool:
        return role in self.roles

    def has_any_role(self, *roles: str) -> bool:
        return any(r in self.roles for r in roles)


@dataclass(frozen=True)
class TargetResource:
    """The employee record (or department) an operation is aimed at.

    Populated by the caller from its own lookup; the engine never loads it.
    """

    employee_id: int | None = None
    department_id: int | None = None
    position_level: int | None = None

    @classmethod
    def for_employee(cls, employee: EmployeeSnapshot) -> "TargetResource":
        return cls(
            employee_id=employee.employee_id,
            department_id=employee.department_id,
            position_level=employee.position_level,
        )
