"""
Services package for the scheduling logic
"""

from .validation_types import (
    ValidationResult,
    ConstraintViolation,
    ConstraintType,
    ConstraintSeverity,
    ConstraintResult,
    AutoGenerateResult,
)

from .show_index import ShowIndex
from .working_schedule import WorkingSchedule
from .constraint_checker import ConstraintChecker
from .off_selection import OffSelectionScorer
from .search_strategy import SearchStrategy, RandomizedGreedyStrategy
from .partial_schedule import PartialScheduleGenerator
from .red_day_assigner import RedDayAssigner, RedDayResult
from .schedule_validator import ScheduleValidator, validate_schedule
from .workload_analytics import WorkloadAnalytics
from .week_template import standard_week
from .scheduling_engine import SchedulingEngine, auto_generate

__all__ = [
    # Validation types
    'ValidationResult',
    'ConstraintViolation',
    'ConstraintType',
    'ConstraintSeverity',
    'ConstraintResult',
    'AutoGenerateResult',
    # Services
    'ShowIndex',
    'WorkingSchedule',
    'ConstraintChecker',
    'OffSelectionScorer',
    'SearchStrategy',
    'RandomizedGreedyStrategy',
    'PartialScheduleGenerator',
    'RedDayAssigner',
    'RedDayResult',
    'ScheduleValidator',
    'validate_schedule',
    'WorkloadAnalytics',
    'standard_week',
    'SchedulingEngine',
    'auto_generate',
]
