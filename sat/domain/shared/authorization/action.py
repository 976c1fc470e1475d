"""Access modes for resource-scoped checks."""

from enum import StrEnum


class AccessMode(StrEnum):
    """What the caller intends to do with a target resource."""

    READ = "read"
    WRITE = "write"
    # Creating a shift assignment for the target employee
    SCHEDULE = "schedule"
