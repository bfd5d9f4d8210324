"""
Role catalog
The stage roles a show needs and which of them are restricted to female performers
"""
from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, Tuple

from cast_scheduler.error_handlers.exceptions import ConfigurationException

# Pseudo-role: the performer is not on stage for this show
OFF = "OFF"

DEFAULT_ROLES = ("Sarge", "Potato", "Mozzie", "Ringo", "Particle", "Bin", "Cornish", "Who")
DEFAULT_FEMALE_ONLY_ROLES = frozenset({"Bin", "Cornish"})


@dataclass(frozen=True)
class RoleCatalog:
    """Every role is filled exactly once per show; headcount is the number of roles."""
    roles: Tuple[str, ...] = DEFAULT_ROLES
    female_only: FrozenSet[str] = field(default_factory=lambda: DEFAULT_FEMALE_ONLY_ROLES)

    def __post_init__(self):
        object.__setattr__(self, 'roles', tuple(self.roles))
        object.__setattr__(self, 'female_only', frozenset(self.female_only))
        if not self.roles:
            raise ConfigurationException('Role catalog must contain at least one role')
        if OFF in self.roles:
            raise ConfigurationException(f"'{OFF}' is reserved and cannot be a stage role")
        if len(set(self.roles)) != len(self.roles):
            raise ConfigurationException('Role catalog contains duplicate roles')
        unknown = self.female_only - set(self.roles)
        if unknown:
            raise ConfigurationException(
                f"Female-only roles not in catalog: {', '.join(sorted(unknown))}",
                details={'roles': sorted(unknown)}
            )

    @classmethod
    def default(cls) -> 'RoleCatalog':
        return cls()

    @property
    def headcount(self) -> int:
        return len(self.roles)

    def is_female_only(self, role: str) -> bool:
        return role in self.female_only

    def __contains__(self, role) -> bool:
        return role in self.roles

    def __iter__(self) -> Iterator[str]:
        return iter(self.roles)

    def __len__(self) -> int:
        return len(self.roles)
