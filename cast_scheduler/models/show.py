"""
Show Model
One entry in a week's running order: a performance, a travel day or a company day off
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Optional

from cast_scheduler.error_handlers.exceptions import ValidationException
from cast_scheduler.utils.validators import (
    first_present,
    validate_date_param,
    validate_required_fields,
    validate_time_param,
)


class ShowStatus(str, Enum):
    """What happens on a running-order entry"""
    SHOW = "show"
    TRAVEL = "travel"
    DAYOFF = "dayoff"


@dataclass(frozen=True)
class Show:
    """A running-order entry. Only SHOW entries need staffing."""
    id: str
    date: date
    time: Optional[time] = None
    call_time: Optional[time] = None
    status: ShowStatus = ShowStatus.SHOW

    @property
    def is_active(self) -> bool:
        return self.status == ShowStatus.SHOW

    @property
    def starts_at(self) -> datetime:
        """Curtain datetime; entries without a time sort at midnight"""
        return datetime.combine(self.date, self.time or time.min)

    @property
    def sort_key(self):
        return (self.date, self.time or time.min, self.id)

    def to_dict(self):
        """Convert to dictionary for JSON serialization"""
        return {
            'id': self.id,
            'date': self.date.isoformat(),
            'time': self.time.strftime('%H:%M') if self.time else None,
            'callTime': self.call_time.strftime('%H:%M') if self.call_time else None,
            'status': self.status.value,
        }

    @classmethod
    def from_dict(cls, data) -> 'Show':
        """
        Build a Show from a JSON-like record

        Args:
            data: dict with id, date, time, callTime/call_time and status keys

        Returns:
            Show instance

        Raises:
            ValidationException: If a required field is missing or malformed
        """
        if isinstance(data, cls):
            return data
        validate_required_fields(data, ['id', 'date'])
        status_value = str(data.get('status') or ShowStatus.SHOW.value).lower()
        try:
            status = ShowStatus(status_value)
        except ValueError:
            raise ValidationException(
                f"Unknown show status '{status_value}' for show {data['id']}",
                details={'field': 'status', 'value': status_value}
            )
        return cls(
            id=str(data['id']),
            date=validate_date_param(data['date'], 'date'),
            time=validate_time_param(data.get('time'), 'time'),
            call_time=validate_time_param(first_present(data, 'callTime', 'call_time'), 'callTime'),
            status=status,
        )
