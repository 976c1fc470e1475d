"""FastAPI dependencies that gate routes on the authorization engine.

The identity layer (token verification middleware) is expected to put a
``Principal`` on ``request.state.principal``. Routes then declare what they
need:

    @router.get("/employees")
    async def list_employees(ctx: Annotated[AccessContext, Depends(require_permission("EMPLOYEE_VIEW"))]):
        ...

The AuthorizationService itself comes from the dishka container installed by
``setup_authorization``.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from dishka import AsyncContainer, FromDishka
from dishka.integrations.fastapi import inject, setup_dishka
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from sat.application.api.v1.errors import map_sat_error
from sat.domain.auth.model.access import AccessContext
from sat.domain.auth.model.principal import Principal
from sat.domain.auth.service.authorization import AuthorizationService
from sat.domain.shared.error import AuthorizationError, SATError


def setup_authorization(app: FastAPI, container: AsyncContainer) -> None:
    """Install the DI container and translate SAT errors raised by handlers."""
    setup_dishka(container, app)

    @app.exception_handler(SATError)
    async def _handle_sat_error(request: Request, exc: SATError) -> JSONResponse:
        http_exc = map_sat_error(exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content={"detail": http_exc.detail},
            headers=http_exc.headers,
        )


def get_principal(request: Request) -> Principal:
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise map_sat_error(AuthorizationError("Authentication required", code="missing_token"))
    return principal


@inject
async def get_access_context(
    principal: Annotated[Principal, Depends(get_principal)],
    service: FromDishka[AuthorizationService],
) -> AccessContext:
    return service.context_for(principal)


def _gate(
    check: Callable[[AuthorizationService, AccessContext], None],
) -> Callable[..., Awaitable[AccessContext]]:
    @inject
    async def dependency(
        ctx: Annotated[AccessContext, Depends(get_access_context)],
        service: FromDishka[AuthorizationService],
    ) -> AccessContext:
        try:
            check(service, ctx)
        except AuthorizationError as e:
            raise map_sat_error(e) from e
        return ctx

    return dependency


def require_permission(permission: str) -> Callable[..., Awaitable[AccessContext]]:
    return _gate(lambda service, ctx: service.require_permission(ctx, permission))


def require_role(minimum_role: str) -> Callable[..., Awaitable[AccessContext]]:
    return _gate(lambda service, ctx: service.require_role(ctx, minimum_role))


def require_policy(name: str) -> Callable[..., Awaitable[AccessContext]]:
    """Gate on a named policy, e.g. ``DepartmentAccess`` or ``HasPermission:SCHEDULE_CREATE``."""
    return _gate(lambda service, ctx: service.require_policy(ctx, name))
