"""
Validation types and data classes for scheduler constraint checking
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from enum import Enum

from cast_scheduler.models import Assignment


class ConstraintType(str, Enum):
    """Types of scheduling constraints"""
    HEADCOUNT = "headcount"
    MISSING_ROLE = "missing_role"
    UNKNOWN_PERFORMER = "unknown_performer"
    ROLE_ELIGIBILITY = "role_eligibility"
    GENDER_ELIGIBILITY = "gender_eligibility"
    DUPLICATE_ROLE = "duplicate_role"
    ALREADY_ON_SHOW = "already_on_show"
    CONSECUTIVE_SHOWS = "consecutive_shows"
    WEEKEND_CAP = "weekend_cap"
    BACK_TO_BACK_DOUBLES = "back_to_back_doubles"
    WEEKLY_CAP = "weekly_cap"
    RED_DAY_CONFLICT = "red_day_conflict"
    RED_DAY_COUNT = "red_day_count"
    WORKLOAD = "workload"


class ConstraintSeverity(str, Enum):
    """Severity levels for constraint violations"""
    HARD = "hard"  # Cannot be violated
    SOFT = "soft"  # Reported for fairness, never blocks a schedule


# A constructive attempt is rejected if any of these show up
CRITICAL_CONSTRAINT_TYPES = frozenset({
    ConstraintType.HEADCOUNT,
    ConstraintType.MISSING_ROLE,
    ConstraintType.UNKNOWN_PERFORMER,
    ConstraintType.ROLE_ELIGIBILITY,
    ConstraintType.GENDER_ELIGIBILITY,
    ConstraintType.DUPLICATE_ROLE,
    ConstraintType.CONSECUTIVE_SHOWS,
    ConstraintType.WEEKEND_CAP,
    ConstraintType.BACK_TO_BACK_DOUBLES,
})


@dataclass
class ConstraintViolation:
    """Represents a single constraint violation"""
    constraint_type: ConstraintType
    message: str
    severity: ConstraintSeverity
    details: dict = field(default_factory=dict)

    def __str__(self):
        return f"[{self.severity.value.upper()}] {self.constraint_type.value}: {self.message}"


@dataclass
class ConstraintResult:
    """Plain result handed to callers of validate_schedule"""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self):
        return {'isValid': self.is_valid, 'errors': list(self.errors), 'warnings': list(self.warnings)}


@dataclass
class ValidationResult:
    """Result of validating a schedule"""
    is_valid: bool = True
    violations: List[ConstraintViolation] = field(default_factory=list)

    @property
    def hard_violations(self) -> List[ConstraintViolation]:
        """Get only hard constraint violations"""
        return [v for v in self.violations if v.severity == ConstraintSeverity.HARD]

    @property
    def soft_violations(self) -> List[ConstraintViolation]:
        """Get only soft constraint violations"""
        return [v for v in self.violations if v.severity == ConstraintSeverity.SOFT]

    @property
    def has_critical_violations(self) -> bool:
        """Check for violations that reject a constructive attempt"""
        return any(v.constraint_type in CRITICAL_CONSTRAINT_TYPES for v in self.hard_violations)

    @property
    def errors(self) -> List[str]:
        return [v.message for v in self.hard_violations]

    @property
    def warnings(self) -> List[str]:
        return [v.message for v in self.soft_violations]

    def add_violation(self, violation: ConstraintViolation):
        """Add a violation to the result"""
        self.violations.append(violation)
        if violation.severity == ConstraintSeverity.HARD:
            self.is_valid = False

    def add_error(self, constraint_type: ConstraintType, message: str, **details):
        self.add_violation(ConstraintViolation(
            constraint_type=constraint_type,
            message=message,
            severity=ConstraintSeverity.HARD,
            details=details,
        ))

    def add_warning(self, constraint_type: ConstraintType, message: str, **details):
        self.add_violation(ConstraintViolation(
            constraint_type=constraint_type,
            message=message,
            severity=ConstraintSeverity.SOFT,
            details=details,
        ))

    def to_constraint_result(self) -> ConstraintResult:
        return ConstraintResult(is_valid=self.is_valid, errors=self.errors, warnings=self.warnings)


@dataclass
class AutoGenerateResult:
    """Outcome of one auto_generate call"""
    success: bool
    assignments: List[Assignment] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    day_off_stats: Dict[str, int] = field(default_factory=dict)
    generation_id: Optional[str] = None
    generated_at: Optional[str] = None  # ISO format datetime string
    attempts: int = 0
    used_fallback: bool = False

    def to_dict(self):
        """Convert to dictionary for JSON serialization, omitting empty optional fields"""
        result = {
            'success': self.success,
            'assignments': [a.to_dict() for a in self.assignments],
        }
        if self.errors:
            result['errors'] = list(self.errors)
        if self.warnings:
            result['warnings'] = list(self.warnings)
        if self.day_off_stats:
            result['dayOffStats'] = dict(self.day_off_stats)
        if self.generation_id:
            result['generationId'] = self.generation_id
        if self.generated_at:
            result['generatedAt'] = self.generated_at
        return result
