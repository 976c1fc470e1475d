"""Error hierarchy for SAT.

Domain errors describe outcomes a caller can act on (access denied, not found).
The remaining errors signal that the code or its configuration is wrong and
should never be mapped to a normal deny.
"""


class SATError(Exception):
    """Base for all SAT errors."""

    def __init__(self, message: str, *, code: str = "error") -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class DomainError(SATError):
    """An expected failure of a domain operation."""


class AuthorizationError(DomainError):
    """The principal is not allowed to perform the requested operation.

    ``code`` is ``missing_token`` when no principal was supplied at all and
    ``access_denied`` when the principal was evaluated and refused.
    """

    def __init__(self, message: str, *, code: str = "access_denied") -> None:
        super().__init__(message, code=code)


class NotFoundError(DomainError):
    def __init__(self, message: str, *, code: str = "not_found") -> None:
        super().__init__(message, code=code)


class ValidationError(DomainError):
    def __init__(
        self,
        message: str,
        *,
        code: str = "validation_error",
        field: str | None = None,
    ) -> None:
        super().__init__(message, code=code)
        self.field = field


class ConfigurationError(SATError):
    """Authorization rules or settings are inconsistent."""

    def __init__(self, message: str, *, code: str = "configuration_error") -> None:
        super().__init__(message, code=code)


class AccessContextError(SATError):
    """An authorization check was called without an AccessContext.

    This is API misuse, never a deny decision.
    """

    def __init__(self, message: str, *, code: str = "missing_access_context") -> None:
        super().__init__(message, code=code)
