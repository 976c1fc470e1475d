"""SQLAlchemy table definitions for the staff data the authorization layer reads."""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
)

metadata = MetaData()

# ============================================================================
# WORK POSITIONS TABLE
# ============================================================================
work_positions_table = Table(
    "work_positions",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("code", String(15), nullable=False, unique=True),
    Column("name", String(255), nullable=False),
    Column("level", Integer, nullable=False, server_default="1"),  # 1 staff .. 5 manager
    Column("is_active", Boolean, nullable=False, server_default="1"),
)


# ============================================================================
# DEPARTMENTS TABLE
# ============================================================================
departments_table = Table(
    "departments",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("code", String(15), nullable=False, unique=True),
    Column("name", String(255), nullable=False),
    # No FK to employees: leader and members reference each other
    Column("leader_id", Integer, nullable=True),
)


# ============================================================================
# EMPLOYEES TABLE
# ============================================================================
employees_table = Table(
    "employees",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("code", String(15), nullable=False, unique=True),
    Column("full_name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("department_id", Integer, ForeignKey("departments.id"), nullable=True),
    Column("work_position_id", Integer, ForeignKey("work_positions.id"), nullable=True),
)

Index("idx_employees_department_id", employees_table.c.department_id)


# ============================================================================
# SHIFT ASSIGNMENTS TABLE
# ============================================================================
shift_assignments_table = Table(
    "shift_assignments",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("employee_id", Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False),
    Column("shift_id", Integer, nullable=False),
    Column("date", Date, nullable=False),
    Column("status_code", String(8), nullable=False),  # "X", "RO", "LE", ...
)

Index("idx_shift_assignments_employee_id", shift_assignments_table.c.employee_id)
