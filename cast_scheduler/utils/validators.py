"""
Validation utilities for parsing caller-supplied records

All functions include type hints and raise ValidationException with a
message naming the offending field.
"""
from datetime import datetime, date, time
from typing import Any, Dict, List, Optional

from cast_scheduler.error_handlers.exceptions import ValidationException


def validate_date_param(value: Any, param_name: str = 'date') -> date:
    """
    Validate and parse a date value.

    Args:
        value: date, datetime or string in YYYY-MM-DD format
        param_name: Name of parameter for error messages (default: 'date')

    Returns:
        date: Parsed date object

    Raises:
        ValidationException: If date format is invalid

    Examples:
        >>> validate_date_param('2025-10-15')
        datetime.date(2025, 10, 15)
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value), '%Y-%m-%d').date()
    except ValueError:
        raise ValidationException(
            f"Invalid {param_name} format. Use YYYY-MM-DD (e.g., 2025-10-15)",
            details={'field': param_name, 'value': str(value)}
        )


def validate_time_param(value: Any, param_name: str = 'time') -> Optional[time]:
    """
    Validate and parse a time-of-day value.

    Empty values and non-time markers such as 'Travel' parse to None, since
    travel and day-off entries carry no curtain time.

    Args:
        value: time, or string in HH:MM or HH:MM:SS format
        param_name: Name of parameter for error messages (default: 'time')

    Returns:
        Optional[time]: Parsed time, or None for an absent time

    Raises:
        ValidationException: If the value looks like a time but cannot be parsed
    """
    if value is None or isinstance(value, time):
        return value
    text = str(value).strip()
    if not text or not text[0].isdigit():
        return None
    for fmt in ('%H:%M', '%H:%M:%S'):
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise ValidationException(
        f"Invalid {param_name} format. Use HH:MM (e.g., 19:30)",
        details={'field': param_name, 'value': text}
    )


def validate_required_fields(data: Dict[str, Any], required_fields: List[str]) -> None:
    """
    Validate that all required fields are present in a record.

    Args:
        data: Record dictionary
        required_fields: List of required field names

    Raises:
        ValidationException: If any required field is missing
    """
    if not isinstance(data, dict):
        raise ValidationException(f"Expected a record, got {type(data).__name__}")
    missing = [f for f in required_fields if data.get(f) in (None, '')]
    if missing:
        raise ValidationException(
            f"Missing required fields: {', '.join(missing)}",
            details={'missing_fields': missing}
        )


def first_present(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the value for the first key present in data (camelCase/snake_case aliases)"""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default
