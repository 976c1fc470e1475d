from .authorization import AuthorizationService
from .claims import ClaimsExtractor, ClaimsIssuer
from .employee_access import EmployeeAccessService

__all__ = ["AuthorizationService", "ClaimsExtractor", "ClaimsIssuer", "EmployeeAccessService"]
