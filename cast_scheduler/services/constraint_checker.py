"""
Constraint Checker Service
Decides whether a tentative assignment is legal against the current working schedule
"""
from collections import Counter
from datetime import timedelta
from typing import Iterable, Optional

from cast_scheduler.models import CastMember, RoleCatalog, Show
from .show_index import weekend_key
from .validation_types import (
    ValidationResult,
    ConstraintViolation,
    ConstraintType,
    ConstraintSeverity
)
from .working_schedule import WorkingSchedule


class ConstraintChecker:
    """
    Validates proposed role assignments against all hard rules

    Handles:
    - Already-on-show conflicts
    - Role eligibility and female-only roles
    - Consecutive-show cap
    - Friday-Sunday weekend cap
    - Back-to-back double days
    - Weekly show cap

    All checks are predicates over the working schedule; none of them
    mutate it.
    """

    def __init__(self, schedule: WorkingSchedule, catalog: RoleCatalog, config):
        """
        Initialize ConstraintChecker

        Args:
            schedule: Working schedule of the current attempt
            catalog: Role catalog in force for this run
            config: Config class supplying the rule limits
        """
        self.schedule = schedule
        self.index = schedule.index
        self.catalog = catalog
        self.max_consecutive = config.MAX_CONSECUTIVE_SHOWS
        self.max_weekend = config.MAX_WEEKEND_SHOWS
        self.max_weekly = config.MAX_WEEKLY_SHOWS

    def _shows_with(self, performer: str, show: Show) -> Iterable[Show]:
        shows = [self.index.get(sid) for sid in self.schedule.shows_for(performer)]
        shows = [s for s in shows if s is not None and s.id != show.id]
        shows.append(show)
        return shows

    def is_on_show(self, performer: str, show: Show) -> bool:
        return self.schedule.is_on_show(performer, show.id)

    def is_eligible(self, member: CastMember, role: str) -> bool:
        if not member.can_play(role):
            return False
        if self.catalog.is_female_only(role) and not member.is_eligible_for_female_only_roles:
            return False
        return True

    def has_reached_weekly_cap(self, performer: str) -> bool:
        return self.schedule.show_count(performer) >= self.max_weekly

    def would_exceed_consecutive(self, performer: str, show: Show) -> bool:
        target = self.index.position(show.id)
        if target is None:
            return False
        positions = [self.index.position(sid) for sid in self.schedule.shows_for(performer)]
        positions = [p for p in positions if p is not None]
        positions.append(target)
        return any(len(run) > self.max_consecutive for run in self.index.consecutive_runs(positions))

    def would_violate_weekend_cap(self, performer: str, show: Show) -> bool:
        if weekend_key(show.date) is None:
            return False
        per_weekend = Counter(
            weekend_key(s.date) for s in self._shows_with(performer, show)
        )
        per_weekend.pop(None, None)
        return any(count > self.max_weekend for count in per_weekend.values())

    def would_create_back_to_back_doubles(self, performer: str, show: Show) -> bool:
        per_date = Counter(s.date for s in self._shows_with(performer, show))
        day = show.date
        if per_date[day] < 2:
            return False
        return per_date[day - timedelta(days=1)] >= 2 or per_date[day + timedelta(days=1)] >= 2

    def rejection_reason(self, member: CastMember, role: str, show: Show) -> Optional[ConstraintType]:
        """
        First rule a tentative assignment breaks, cheapest checks first

        Returns:
            ConstraintType of the failing rule, or None when the assignment is legal
        """
        if self.is_on_show(member.name, show):
            return ConstraintType.ALREADY_ON_SHOW
        if not member.can_play(role):
            return ConstraintType.ROLE_ELIGIBILITY
        if self.catalog.is_female_only(role) and not member.is_eligible_for_female_only_roles:
            return ConstraintType.GENDER_ELIGIBILITY
        if self.has_reached_weekly_cap(member.name):
            return ConstraintType.WEEKLY_CAP
        if self.would_exceed_consecutive(member.name, show):
            return ConstraintType.CONSECUTIVE_SHOWS
        if self.would_violate_weekend_cap(member.name, show):
            return ConstraintType.WEEKEND_CAP
        if self.would_create_back_to_back_doubles(member.name, show):
            return ConstraintType.BACK_TO_BACK_DOUBLES
        return None

    def can_assign(self, member: CastMember, role: str, show: Show) -> bool:
        return self.rejection_reason(member, role, show) is None

    def validate_assignment(self, member: CastMember, role: str, show: Show) -> ValidationResult:
        """
        Validate a proposed assignment and describe the first broken rule

        Args:
            member: Performer being considered
            role: Stage role being filled
            show: Show the role belongs to

        Returns:
            ValidationResult with is_valid flag and at most one violation
        """
        result = ValidationResult(is_valid=True)
        reason = self.rejection_reason(member, role, show)
        if reason is not None:
            result.add_violation(ConstraintViolation(
                constraint_type=reason,
                message=f"{member.name} cannot play {role} on show {show.id}: {reason.value}",
                severity=ConstraintSeverity.HARD,
                details={'performer': member.name, 'role': role, 'show_id': show.id}
            ))
        return result
