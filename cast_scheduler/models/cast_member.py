"""
Cast Member Model
A performer on the company roster and the roles they are rehearsed in
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional

from cast_scheduler.error_handlers.exceptions import ValidationException
from cast_scheduler.utils.validators import first_present, validate_required_fields


class Gender(str, Enum):
    FEMALE = "female"
    MALE = "male"
    NONBINARY = "nonbinary"


class MemberStatus(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"


@dataclass(frozen=True)
class CastMember:
    """Performer identity is the name; it must be unique across the roster."""
    name: str
    eligible_roles: FrozenSet[str] = field(default_factory=frozenset)
    gender: Optional[Gender] = None
    status: MemberStatus = MemberStatus.ACTIVE

    def __post_init__(self):
        object.__setattr__(self, 'eligible_roles', frozenset(self.eligible_roles))

    @property
    def is_active(self) -> bool:
        return self.status == MemberStatus.ACTIVE

    @property
    def is_eligible_for_female_only_roles(self) -> bool:
        return self.gender == Gender.FEMALE

    def can_play(self, role: str) -> bool:
        return role in self.eligible_roles

    def to_dict(self):
        """Convert to dictionary for JSON serialization"""
        return {
            'name': self.name,
            'eligibleRoles': sorted(self.eligible_roles),
            'gender': self.gender.value if self.gender else None,
            'status': self.status.value,
        }

    @classmethod
    def from_dict(cls, data) -> 'CastMember':
        """
        Build a CastMember from a JSON-like record

        Args:
            data: dict with name, eligibleRoles/eligible_roles, gender and status keys

        Returns:
            CastMember instance

        Raises:
            ValidationException: If name is missing or gender/status is unknown
        """
        if isinstance(data, cls):
            return data
        validate_required_fields(data, ['name'])

        gender_value = data.get('gender')
        gender = None
        if gender_value not in (None, ''):
            try:
                gender = Gender(str(gender_value).lower())
            except ValueError:
                raise ValidationException(
                    f"Unknown gender '{gender_value}' for {data['name']}",
                    details={'field': 'gender', 'value': str(gender_value)}
                )

        status_value = str(data.get('status') or MemberStatus.ACTIVE.value).lower()
        try:
            status = MemberStatus(status_value)
        except ValueError:
            raise ValidationException(
                f"Unknown status '{status_value}' for {data['name']}",
                details={'field': 'status', 'value': status_value}
            )

        roles = first_present(data, 'eligibleRoles', 'eligible_roles', default=[])
        return cls(
            name=str(data['name']),
            eligible_roles=frozenset(roles),
            gender=gender,
            status=status,
        )
