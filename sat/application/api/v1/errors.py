"""HTTP translation of SAT errors.

Deny decisions become 401/403, missing employees 404. Configuration faults
and API misuse are bugs on our side and surface as 500.
"""

from fastapi import HTTPException

from sat.domain.shared.error import (
    AuthorizationError,
    DomainError,
    NotFoundError,
    SATError,
    ValidationError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    AuthorizationError: 403,
    NotFoundError: 404,
    ValidationError: 422,
}

_UNAUTHENTICATED_CODES = frozenset({"missing_token"})


def _status_for(error: SATError) -> int:
    if not isinstance(error, DomainError):
        return 500
    if isinstance(error, AuthorizationError) and error.code in _UNAUTHENTICATED_CODES:
        return 401
    for error_type, status in DOMAIN_ERROR_STATUS_MAP.items():
        if isinstance(error, error_type):
            return status
    return 400


def map_sat_error(error: SATError) -> HTTPException:
    """Build the HTTPException a route should raise for ``error``."""
    status = _status_for(error)
    body = {"code": error.code, "message": error.message}
    if isinstance(error, ValidationError) and error.field is not None:
        body["field"] = error.field

    headers = {"WWW-Authenticate": "Bearer"} if status == 401 else None
    return HTTPException(status_code=status, detail=body, headers=headers)
