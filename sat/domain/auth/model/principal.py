"""Verified identity handed over by the identity layer."""

from collections.abc import Iterable
from dataclasses import dataclass, field

# Claim keys understood by the authorization engine
EMPLOYEE_ID_CLAIM = "EmployeeId"
DEPARTMENT_ID_CLAIM = "DepartmentId"
POSITION_LEVEL_CLAIM = "PositionLevel"
PERMISSION_CLAIM = "Permission"


@dataclass(frozen=True)
class Principal:
    """The authenticated requester as the identity layer sees it.

    Claims are a multimap kept as ordered (key, value) pairs; ``Permission``
    is repeated once per granted capability. Values are raw strings and are
    only interpreted by the claims extractor.
    """

    roles: frozenset[str] = frozenset()
    claims: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    @classmethod
    def create(
        cls,
        roles: Iterable[str] = (),
        claims: Iterable[tuple[str, str]] = (),
    ) -> "Principal":
        return cls(
            roles=frozenset(str(r) for r in roles),
            claims=tuple((str(k), str(v)) for k, v in claims),
        )

    def find_all(self, key: str) -> list[str]:
        return [v for k, v in self.claims if k == key]

    def find_first(self, key: str) -> str | None:
        for k, v in self.claims:
            if k == key:
                return v
        return None
