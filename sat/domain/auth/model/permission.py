"""Permission catalog: every capability code that may appear in a Permission claim."""

from collections.abc import Iterable, Mapping
from enum import StrEnum
from types import MappingProxyType


class PermissionCategory(StrEnum):
    """Grouping used for documentation and admin listings only."""

    HR = "HR"
    SCHEDULING = "Scheduling"
    ATTENDANCE = "Attendance"
    SYSTEM = "System"
    REPORTING = "Reporting"


class Permission(StrEnum):
    # Employees
    EMPLOYEE_VIEW = "EMPLOYEE_VIEW"
    EMPLOYEE_CREATE = "EMPLOYEE_CREATE"
    EMPLOYEE_UPDATE = "EMPLOYEE_UPDATE"
    EMPLOYEE_DELETE = "EMPLOYEE_DELETE"

    # Departments
    DEPARTMENT_VIEW = "DEPARTMENT_VIEW"
    DEPARTMENT_CREATE = "DEPARTMENT_CREATE"
    DEPARTMENT_UPDATE = "DEPARTMENT_UPDATE"
    DEPARTMENT_DELETE = "DEPARTMENT_DELETE"
    DEPARTMENT_MANAGE_ALL = "DEPARTMENT_MANAGE_ALL"

    # Scheduling
    SCHEDULE_VIEW = "SCHEDULE_VIEW"
    SCHEDULE_CREATE = "SCHEDULE_CREATE"
    SCHEDULE_UPDATE = "SCHEDULE_UPDATE"
    SCHEDULE_DELETE = "SCHEDULE_DELETE"

    # System
    USER_MANAGEMENT = "USER_MANAGEMENT"
    ROLE_MANAGEMENT = "ROLE_MANAGEMENT"
    SYSTEM_CONFIGURATION = "SYSTEM_CONFIGURATION"

    # Attendance
    ATTENDANCE_VIEW = "ATTENDANCE_VIEW"
    ATTENDANCE_CREATE = "ATTENDANCE_CREATE"
    ATTENDANCE_UPDATE = "ATTENDANCE_UPDATE"

    # Reporting
    REPORT_VIEW = "REPORT_VIEW"
    REPORT_EXPORT = "REPORT_EXPORT"


_CATEGORY_PREFIXES: dict[str, PermissionCategory] = {
    "EMPLOYEE_": PermissionCategory.HR,
    "DEPARTMENT_": PermissionCategory.HR,
    "SCHEDULE_": PermissionCategory.SCHEDULING,
    "ATTENDANCE_": PermissionCategory.ATTENDANCE,
    "REPORT_": PermissionCategory.REPORTING,
}


def _category_for(code: str) -> PermissionCategory:
    for prefix, category in _CATEGORY_PREFIXES.items():
        if code.startswith(prefix):
            return category
    return PermissionCategory.SYSTEM


class PermissionCatalog:
    """Fixed set of valid permission codes.

    Used to validate configuration and document capabilities. Claims are
    trusted once issued, so request-time checks never consult the catalog.
    """

    __slots__ = ("_categories",)

    def __init__(self, codes: Iterable[str] = tuple(Permission)) -> None:
        self._categories: Mapping[str, PermissionCategory] = MappingProxyType(
            {str(code): _category_for(str(code)) for code in codes}
        )

    def is_known(self, code: str) -> bool:
        return code in self._categories

    def category_of(self, code: str) -> PermissionCategory | None:
        return self._categories.get(code)

    def codes(self) -> tuple[str, ...]:
        return tuple(self._categories)

    def by_category(self) -> dict[PermissionCategory, tuple[str, ...]]:
        grouped: dict[PermissionCategory, list[str]] = {}
        for code, category in self._categories.items():
            grouped.setdefault(category, []).append(code)
        return {category: tuple(codes) for category, codes in grouped.items()}

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.is_known(code)

    def __len__(self) -> int:
        return len(self._categories)


DEFAULT_PERMISSION_CATALOG = PermissionCatalog()
