"""
Utility modules for the cast scheduler
"""
from .validators import (
    validate_date_param,
    validate_time_param,
    validate_required_fields,
    first_present,
)
from .formatting import format_show_label

__all__ = [
    'validate_date_param',
    'validate_time_param',
    'validate_required_fields',
    'first_present',
    'format_show_label',
]
