"""Fixtures for persistence tests: an in-memory SQLite database with staff rows."""

from datetime import date

import pytest_asyncio
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from sat.infrastructure.persistence.tables import (
    departments_table,
    employees_table,
    metadata,
    shift_assignments_table,
    work_positions_table,
)

POSITIONS = [
    {"id": 1, "code": "STAFF", "name": "Staff", "level": 1},
    {"id": 2, "code": "TL", "name": "Team leader", "level": 3},
    {"id": 3, "code": "MGR", "name": "Manager", "level": 5},
]

DEPARTMENTS = [
    {"id": 5, "code": "OPS", "name": "Operations", "leader_id": 3},
    {"id": 6, "code": "FIN", "name": "Finance", "leader_id": None},
    # Led from outside: employee 4 belongs to Finance
    {"id": 7, "code": "AUD", "name": "Audit", "leader_id": 4},
]

# id -> (department, position)
EMPLOYEES = [
    {"id": 1, "code": "E001", "full_name": "Staff Five", "email": "e1@example.com", "department_id": 5, "work_position_id": 1},
    {"id": 2, "code": "E002", "full_name": "Lead Five", "email": "e2@example.com", "department_id": 5, "work_position_id": 2},
    {"id": 3, "code": "E003", "full_name": "Head Five", "email": "e3@example.com", "department_id": 5, "work_position_id": 3},
    {"id": 4, "code": "E004", "full_name": "Staff Six", "email": "e4@example.com", "department_id": 6, "work_position_id": 1},
    {"id": 5, "code": "E005", "full_name": "Unplaced", "email": "e5@example.com", "department_id": None, "work_position_id": None},
]

SHIFT_ASSIGNMENTS = [
    {"id": 10, "employee_id": 1, "shift_id": 1, "date": date(2024, 3, 1), "status_code": "X"},
    {"id": 11, "employee_id": 2, "shift_id": 1, "date": date(2024, 3, 1), "status_code": "X"},
    {"id": 12, "employee_id": 4, "shift_id": 2, "date": date(2024, 3, 1), "status_code": "RO"},
]


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        await conn.execute(insert(work_positions_table), POSITIONS)
        await conn.execute(insert(departments_table), DEPARTMENTS)
        await conn.execute(insert(employees_table), EMPLOYEES)
        await conn.execute(insert(shift_assignments_table), SHIFT_ASSIGNMENTS)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        yield session
