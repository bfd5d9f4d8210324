"""
Cast scheduler.

Casts performers into the stage roles of every show in a touring week,
assigns each performer a RED day and validates the result.

Usage:
    from cast_scheduler import auto_generate, standard_week

    result = auto_generate(standard_week(date(2026, 10, 19)), roster)
"""

__version__ = '1.0.0'

from .models import Assignment, CastMember, Gender, MemberStatus, RoleCatalog, Show, ShowStatus, OFF
from .services import (
    AutoGenerateResult,
    ConstraintResult,
    SchedulingEngine,
    auto_generate,
    standard_week,
    validate_schedule,
)

__all__ = [
    'Assignment',
    'CastMember',
    'Gender',
    'MemberStatus',
    'RoleCatalog',
    'Show',
    'ShowStatus',
    'OFF',
    'AutoGenerateResult',
    'ConstraintResult',
    'SchedulingEngine',
    'auto_generate',
    'standard_week',
    'validate_schedule',
]
