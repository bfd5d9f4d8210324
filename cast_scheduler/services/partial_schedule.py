"""
Partial Schedule Generator
Best-effort fill used when no constructive attempt produced a legal week
"""
import logging
from typing import List, Sequence, Tuple

from cast_scheduler.models import Assignment, CastMember, RoleCatalog
from cast_scheduler.utils.formatting import format_show_label
from .constraint_checker import ConstraintChecker
from .search_strategy import roles_by_scarcity
from .working_schedule import WorkingSchedule

logger = logging.getLogger(__name__)


class PartialScheduleGenerator:
    """
    Relaxed, deterministic fill

    Only eligibility, female-only roles, one-role-per-show and the weekly
    cap are enforced. Consecutive, weekend and back-to-back rules are
    skipped so that some schedule always comes out.
    """

    def __init__(self, cast: Sequence[CastMember], catalog: RoleCatalog, config):
        self.cast = list(cast)
        self.catalog = catalog
        self.config = config

    def generate(self, schedule: WorkingSchedule) -> Tuple[List[Assignment], List[str]]:
        """
        Fill as many slots as possible

        Args:
            schedule: Fresh working schedule to fill in place

        Returns:
            (role assignments, one error string per slot left blank)
        """
        checker = ConstraintChecker(schedule, self.catalog, self.config)
        errors: List[str] = []

        for role in roles_by_scarcity(self.catalog.roles, self.cast):
            eligible = [m for m in self.cast if checker.is_eligible(m, role)]
            for show in schedule.index.active_shows:
                if schedule.performer_for(show.id, role):
                    continue
                available = [
                    m for m in eligible
                    if not checker.is_on_show(m.name, show)
                    and not checker.has_reached_weekly_cap(m.name)
                ]
                if available:
                    chosen = min(available, key=lambda m: schedule.show_count(m.name))
                    schedule.assign(show.id, role, chosen.name)
                else:
                    errors.append(
                        f"Could not assign {role} for show on {format_show_label(show)} - no available performers"
                    )

        if errors:
            logger.info(f"Partial schedule left {len(errors)} slot(s) unfilled")
        return schedule.to_assignments(include_off=False), errors
