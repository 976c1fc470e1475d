"""Role hierarchy for authorization."""

from collections.abc import Iterable, Mapping
from enum import StrEnum
from types import MappingProxyType


class RoleName(StrEnum):
    """Roles known to the system, as they appear in identity claims."""

    SUPER_ADMIN = "SuperAdmin"
    ADMIN = "Admin"
    DIRECTOR = "Director"
    MANAGER = "Manager"
    HR = "HR"
    TEAM_LEADER = "TeamLeader"
    EMPLOYEE = "Employee"
    USER = "User"


DEFAULT_ROLE_RANKS: Mapping[str, int] = MappingProxyType(
    {
        RoleName.SUPER_ADMIN: 10,
        RoleName.ADMIN: 9,
        RoleName.DIRECTOR: 8,
        RoleName.MANAGER: 7,
        RoleName.HR: 6,
        RoleName.TEAM_LEADER: 5,
        RoleName.EMPLOYEE: 4,
        RoleName.USER: 1,
    }
)

UNKNOWN_ROLE_RANK = 0


class RoleHierarchy:
    """Immutable role name -> rank table.

    Higher ranks satisfy every minimum-role requirement of lower ranks.
    Names missing from the table rank 0.
    """

    __slots__ = ("_ranks",)

    def __init__(self, ranks: Mapping[str, int] = DEFAULT_ROLE_RANKS) -> None:
        self._ranks: Mapping[str, int] = MappingProxyType(
            {str(name): int(rank) for name, rank in ranks.items()}
        )

    def rank_of(self, role_name: str) -> int:
        return self._ranks.get(str(role_name), UNKNOWN_ROLE_RANK)

    def highest_rank(self, role_names: Iterable[str]) -> int | None:
        """Return the best rank among role_names, or None when there are none."""
        ranks = [self.rank_of(r) for r in role_names]
        return max(ranks) if ranks else None

    def reaches(self, role_names: Iterable[str], threshold: str) -> bool:
        """Whether the best of role_names ranks at or above ``threshold``.

        A threshold missing from the table is unreachable rather than rank 0.
        """
        if str(threshold) not in self._ranks:
            return False
        best = self.highest_rank(role_names)
        return best is not None and best >= self._ranks[str(threshold)]

    def roles(self) -> tuple[str, ...]:
        """Known role names, highest rank first."""
        return tuple(sorted(self._ranks, key=self._ranks.__getitem__, reverse=True))

    def __contains__(self, role_name: object) -> bool:
        return isinstance(role_name, str) and role_name in self._ranks

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RoleHierarchy):
            return NotImplemented
        return dict(self._ranks) == dict(other._ranks)

    def __hash__(self) -> int:
        return hash(frozenset(self._ranks.items()))

    def __repr__(self) -> str:
        return f"RoleHierarchy({dict(self._ranks)!r})"


DEFAULT_ROLE_HIERARCHY = RoleHierarchy()
