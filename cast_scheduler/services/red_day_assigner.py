"""
RED Day Assigner
Gives every performer one guaranteed full day off and expands the week into final rows

A RED day is date-level: the performer is OFF for every show that date
and cannot be called in as cover.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence

from cast_scheduler.models import Assignment, CastMember, RoleCatalog, OFF
from cast_scheduler.utils.formatting import format_show_label
from .constraint_checker import ConstraintChecker
from .show_index import ShowIndex, is_weekend
from .working_schedule import WorkingSchedule

logger = logging.getLogger(__name__)

WEEKDAY_SCORE = 10
NO_BACK_TO_BACK_DOUBLE_SCORE = 5
MAX_LIGHT_DAY_SCORE = 3


@dataclass
class RedDayResult:
    assignments: List[Assignment]
    red_days: Dict[str, date] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    forced: List[str] = field(default_factory=list)


class RedDayAssigner:
    """
    Company day off: the earliest `dayoff` date is everybody's RED day.

    Otherwise each performer gets their best natural full day off, or, when
    they have none, a forced one. Forcing vacates their roles on the chosen
    date and back-fills each vacated role with a legal performer who is not
    on stage for that show, leaving the slot empty (and reporting it) only
    when nobody legal exists.
    """

    def __init__(self, index: ShowIndex, cast: Sequence[CastMember], catalog: RoleCatalog, config):
        self.index = index
        self.cast = list(cast)
        self.catalog = catalog
        self.config = config

    def assign(self, assignments: Sequence[Assignment]) -> RedDayResult:
        """
        Mark RED days and emit one row per performer per active show

        Args:
            assignments: Rows from an accepted or partial schedule; OFF rows mark preferred cover

        Returns:
            RedDayResult with the final rows, chosen dates, and any slots forcing left empty
        """
        schedule = WorkingSchedule.from_assignments(self.index, self.catalog, assignments)
        result = RedDayResult(assignments=[])

        if self.index.day_off_dates:
            company_day = self.index.day_off_dates[0]
            result.red_days = {m.name: company_day for m in self.cast}
        elif self.index.active_dates:
            needs_forcing = []
            for member in self.cast:
                natural = self.natural_days_off(schedule, member.name)
                if natural:
                    result.red_days[member.name] = self.best_natural_day(natural)
                else:
                    needs_forcing.append(member)

            checker = ConstraintChecker(schedule, self.catalog, self.config)
            for member in needs_forcing:
                day = self.best_forced_day(schedule, checker, member.name, result.red_days)
                result.red_days[member.name] = day
                result.forced.append(member.name)
                result.errors.extend(self._vacate(schedule, checker, member.name, day, result.red_days))
                logger.info(f"Forced RED day for {member.name} on {day.isoformat()}")

        result.assignments = self._build_rows(schedule, result.red_days)
        return result

    def natural_days_off(self, schedule: WorkingSchedule, performer: str) -> List[date]:
        working = {self.index.get(sid).date for sid in schedule.shows_for(performer)}
        return [day for day in self.index.active_dates if day not in working]

    def best_natural_day(self, days: Sequence[date]) -> date:
        """Weekdays before weekend days, then lighter days, then earliest"""
        return min(days, key=lambda d: (is_weekend(d), len(self.index.shows_on(d)), d))

    def forced_day_score(self, day: date) -> int:
        score = 0
        if not is_weekend(day):
            score += WEEKDAY_SCORE
        if not self.index.is_back_to_back_double_date(day):
            score += NO_BACK_TO_BACK_DOUBLE_SCORE
        score += min(MAX_LIGHT_DAY_SCORE, max(0, 4 - len(self.index.shows_on(day))))
        return score

    def best_forced_day(self, schedule: WorkingSchedule, checker: ConstraintChecker,
                        performer: str, red_days: Dict[str, date]) -> Optional[date]:
        """
        Highest scoring active date whose vacated roles can all be covered,
        earliest on ties. Falls back to the highest scoring date when no
        date can be fully covered.
        """
        dates = sorted(self.index.active_dates, key=lambda d: (-self.forced_day_score(d), d))
        if not dates:
            return None
        for day in dates:
            if self._can_cover_day(schedule, checker, performer, day, red_days):
                return day
        return dates[0]

    def _can_cover_day(self, schedule: WorkingSchedule, checker: ConstraintChecker,
                       performer: str, day: date, red_days: Dict[str, date]) -> bool:
        for show in self.index.shows_on(day):
            role = schedule.role_of(performer, show.id)
            if role and not self._cover_candidates(schedule, checker, performer, role, show, red_days):
                return False
        return True

    def _cover_candidates(self, schedule: WorkingSchedule, checker: ConstraintChecker, performer: str,
                          role: str, show, red_days: Dict[str, date]) -> List[CastMember]:
        on_stage = schedule.performers_on(show.id)
        return [
            m for m in self.cast
            if m.name != performer
            and m.name not in on_stage
            and red_days.get(m.name) != show.date
            and checker.can_assign(m, role, show)
        ]

    def _vacate(self, schedule: WorkingSchedule, checker: ConstraintChecker,
                performer: str, day: date, red_days: Dict[str, date]) -> List[str]:
        errors = []
        for show in self.index.shows_on(day):
            role = schedule.role_of(performer, show.id)
            if role is None:
                continue
            schedule.clear_role(show.id, role)

            designated = set(schedule.off_for(show.id))
            candidates = self._cover_candidates(schedule, checker, performer, role, show, red_days)
            if candidates:
                cover = min(candidates, key=lambda m: (m.name not in designated, schedule.show_count(m.name)))
                schedule.assign(show.id, role, cover.name)
                logger.debug(f"{cover.name} covers {role} on show {show.id} for {performer}'s RED day")
            else:
                errors.append(
                    f"RED day for {performer} on {day.isoformat()} left {role} unfilled for {format_show_label(show)}"
                )
        return errors

    def _build_rows(self, schedule: WorkingSchedule, red_days: Dict[str, date]) -> List[Assignment]:
        rows: List[Assignment] = []
        entries = sorted(self.index.active_shows + self.index.day_off_shows, key=lambda s: s.sort_key)
        for show in entries:
            on_stage = set()
            if self.index.is_active(show.id):
                for role, performer in schedule.roles_for(show.id).items():
                    if performer:
                        rows.append(Assignment(show_id=show.id, role=role, performer=performer))
                        on_stage.add(performer)
            for member in self.cast:
                if member.name in on_stage:
                    continue
                rows.append(Assignment(
                    show_id=show.id,
                    role=OFF,
                    performer=member.name,
                    is_red_day=red_days.get(member.name) == show.date,
                ))
        return rows
