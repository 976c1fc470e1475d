from .employee_directory import EmployeeDirectory

__all__ = ["EmployeeDirectory"]
