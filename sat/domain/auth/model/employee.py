"""Employee data the authorization layer needs from persistence."""

from pydantic import BaseModel, ConfigDict, Field


class EmployeeSnapshot(BaseModel):
    """Read-only view of an employee record.

    ``position_level`` is the level of the employee's work position
    (1 staff, 2 senior, 3 team leader, 4 director, 5 manager) and is None
    when no position is linked.
    """

    model_config = ConfigDict(frozen=True)

    employee_id: int
    department_id: int | None = None
    position_level: int | None = Field(default=None, ge=1)
    is_department_leader: bool = False
