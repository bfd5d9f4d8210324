"""
Assignment Model
One performer's status for one show: a stage role or OFF
"""
from dataclasses import dataclass

from cast_scheduler.utils.validators import first_present, validate_required_fields
from .role import OFF


@dataclass(frozen=True)
class Assignment:
    show_id: str
    role: str
    performer: str
    is_red_day: bool = False  # only meaningful on OFF rows

    @property
    def is_off(self) -> bool:
        return self.role == OFF

    def to_dict(self):
        """Convert to dictionary for JSON serialization"""
        return {
            'showId': self.show_id,
            'role': self.role,
            'performer': self.performer,
            'isRedDay': self.is_red_day,
        }

    @classmethod
    def from_dict(cls, data) -> 'Assignment':
        if isinstance(data, cls):
            return data
        show_id = first_present(data, 'showId', 'show_id')
        validate_required_fields(
            {'showId': show_id, 'role': data.get('role'), 'performer': data.get('performer')},
            ['showId', 'role', 'performer']
        )
        return cls(
            show_id=str(show_id),
            role=str(data['role']),
            performer=str(data['performer']),
            is_red_day=bool(first_present(data, 'isRedDay', 'is_red_day', default=False)),
        )
