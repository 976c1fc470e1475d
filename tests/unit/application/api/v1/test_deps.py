"""Tests for the FastAPI authorization dependencies."""

from typing import Annotated

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient

from sat.application.api.v1.deps import (
    get_access_context,
    require_permission,
    require_policy,
    require_role,
    setup_authorization,
)
from sat.application.di import create_async_container
from sat.config import AuthorizationConfig, Config
from sat.domain.auth.model.access import AccessContext
from sat.domain.auth.model.principal import Principal
from sat.domain.shared.authorization.policy_set import DEPARTMENT_ACCESS, DIRECTOR_OR_ABOVE
from sat.domain.shared.error import NotFoundError


def _build_app() -> FastAPI:
    app = FastAPI()
    setup_authorization(app, create_async_container(Config()))

    @app.middleware("http")
    async def fake_identity(request: Request, call_next):
        # Stand-in for token verification: roles and claims come from headers
        roles = request.headers.get("x-roles")
        if roles is not None:
            claims = []
            if "x-employee-id" in request.headers:
                claims.append(("EmployeeId", request.headers["x-employee-id"]))
            if "x-department-id" in request.headers:
                claims.append(("DepartmentId", request.headers["x-department-id"]))
            for permission in request.headers.get("x-permissions", "").split(","):
                if permission:
                    claims.append(("Permission", permission))
            request.state.principal = Principal.create(
                roles=[r for r in roles.split(",") if r], claims=claims
            )
        return await call_next(request)

    @app.get("/me")
    def me(ctx: Annotated[AccessContext, Depends(get_access_context)]) -> dict:
        return {"employee_id": ctx.employee_id, "roles": sorted(ctx.roles)}

    @app.get("/employees")
    def employees(ctx: Annotated[AccessContext, Depends(require_permission("EMPLOYEE_VIEW"))]) -> dict:
        return {"ok": True}

    @app.get("/reports")
    def reports(ctx: Annotated[AccessContext, Depends(require_role("Director"))]) -> dict:
        return {"ok": True}

    @app.get("/department")
    def department(ctx: Annotated[AccessContext, Depends(require_policy(DEPARTMENT_ACCESS))]) -> dict:
        return {"department_id": ctx.department_id}

    @app.get("/misconfigured")
    def misconfigured(ctx: Annotated[AccessContext, Depends(require_policy("NoSuchPolicy"))]) -> dict:
        return {"ok": True}

    @app.get("/missing/{employee_id}")
    def missing(employee_id: int) -> dict:
        raise NotFoundError(f"Employee not found: {employee_id}", code="employee_not_found")

    return app


@pytest.fixture
def client() -> TestClient:
    return TestClient(_build_app())


class TestAuthentication:
    def test_no_principal_is_401(self, client: TestClient) -> None:
        response = client.get("/employees")
        assert response.status_code == 401
        assert response.json()["detail"]["code"] == "missing_token"

    def test_context_from_principal(self, client: TestClient) -> None:
        response = client.get("/me", headers={"x-roles": "Employee,User", "x-employee-id": "7"})
        assert response.status_code == 200
        assert response.json() == {"employee_id": 7, "roles": ["Employee", "User"]}


class TestPermissionGate:
    def test_allows(self, client: TestClient) -> None:
        response = client.get("/employees", headers={"x-roles": "User", "x-permissions": "EMPLOYEE_VIEW"})
        assert response.status_code == 200

    def test_denies(self, client: TestClient) -> None:
        response = client.get("/employees", headers={"x-roles": "SuperAdmin"})
        assert response.status_code == 403
        assert response.json()["detail"]["code"] == "access_denied"


class TestRoleGate:
    def test_allows(self, client: TestClient) -> None:
        assert client.get("/reports", headers={"x-roles": "Admin"}).status_code == 200

    def test_denies(self, client: TestClient) -> None:
        assert client.get("/reports", headers={"x-roles": "HR"}).status_code == 403


class TestPolicyGate:
    def test_department_access(self, client: TestClient) -> None:
        response = client.get("/department", headers={"x-roles": "TeamLeader", "x-department-id": "5"})
        assert response.status_code == 200
        assert response.json() == {"department_id": 5}

    def test_department_access_without_department(self, client: TestClient) -> None:
        assert client.get("/department", headers={"x-roles": "TeamLeader"}).status_code == 403

    def test_unknown_policy_is_server_error(self, client: TestClient) -> None:
        response = client.get("/misconfigured", headers={"x-roles": "SuperAdmin"})
        assert response.status_code == 500
        assert response.json()["detail"]["code"] == "configuration_error"


class TestErrorHandler:
    def test_domain_error_from_handler(self, client: TestClient) -> None:
        response = client.get("/missing/9", headers={"x-roles": "User"})
        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "employee_not_found"


class TestContainerWiring:
    def test_gates_use_the_configured_service(self) -> None:
        app = FastAPI()
        config = Config(authorization=AuthorizationConfig(role_ranks={"Owner": 11}))
        setup_authorization(app, create_async_container(config))

        @app.middleware("http")
        async def owner_identity(request: Request, call_next):
            request.state.principal = Principal.create(roles=["Owner"])
            return await call_next(request)

        @app.get("/owners")
        def owners(ctx: Annotated[AccessContext, Depends(require_role("Owner"))]) -> dict:
            return {"roles": sorted(ctx.roles)}

        @app.get("/admins")
        def admins(ctx: Annotated[AccessContext, Depends(require_policy(DIRECTOR_OR_ABOVE))]) -> dict:
            return {"ok": True}

        client = TestClient(app)
        assert client.get("/owners").json() == {"roles": ["Owner"]}
        # Owner outranks SuperAdmin in this table
        assert client.get("/admins").status_code == 200
