"""
Search strategies for filling one week of shows

A strategy makes a single attempt against a fresh WorkingSchedule and
reports whether every role of every show was filled. Retrying is the
engine's job, not the strategy's.
"""
import logging
import random
from abc import ABC, abstractmethod
from functools import cmp_to_key
from typing import List, Sequence

from cast_scheduler.models import CastMember, RoleCatalog, Show
from .constraint_checker import ConstraintChecker
from .off_selection import OffSelectionScorer
from .working_schedule import WorkingSchedule

logger = logging.getLogger(__name__)


def shuffled(items: Sequence, rng: random.Random) -> list:
    """Fisher-Yates shuffle into a new list"""
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def roles_by_scarcity(roles: Sequence[str], cast: Sequence[CastMember]) -> List[str]:
    """Fewest eligible performers first; ties keep the incoming order"""
    return sorted(roles, key=lambda role: sum(1 for m in cast if m.can_play(role)))


class SearchStrategy(ABC):
    """attempt() -> bool contract used by the scheduling engine"""

    @abstractmethod
    def attempt(self, schedule: WorkingSchedule) -> bool:
        """Fill the schedule in place; False abandons the attempt"""


class RandomizedGreedyStrategy(SearchStrategy):
    """
    Randomized greedy fill with whole-attempt failure

    Shows are visited in a shuffled order and each show's roles are filled
    scarcest first. The first role with no legal candidate ends the attempt;
    there is no per-slot backtracking.
    """

    def __init__(self, cast: Sequence[CastMember], catalog: RoleCatalog, config, rng: random.Random):
        self.cast = list(cast)
        self.catalog = catalog
        self.config = config
        self.rng = rng

    def attempt(self, schedule: WorkingSchedule) -> bool:
        checker = ConstraintChecker(schedule, self.catalog, self.config)

        for show in shuffled(schedule.index.active_shows, self.rng):
            if not self._fill_show(schedule, checker, show):
                return False

        scorer = OffSelectionScorer(schedule, self.rng, self.config.OFF_PER_SHOW)
        for show in schedule.index.active_shows:
            on_stage = schedule.performers_on(show.id)
            candidates = [m.name for m in self.cast if m.name not in on_stage]
            schedule.set_off(show.id, scorer.select(show, candidates))
        return True

    def _fill_show(self, schedule: WorkingSchedule, checker: ConstraintChecker, show: Show) -> bool:
        roles = roles_by_scarcity(shuffled(self.catalog.roles, self.rng), self.cast)
        for role in roles:
            candidates = [m for m in self.cast if checker.can_assign(m, role, show)]
            if not candidates:
                logger.debug(f"No legal performer for {role} on show {show.id}")
                return False
            best = self.order_candidates(schedule, candidates)[0]
            schedule.assign(show.id, role, best.name)
        return True

    def order_candidates(self, schedule: WorkingSchedule, candidates: Sequence[CastMember]) -> List[CastMember]:
        """
        Least-loaded first. Candidates whose show counts are within one of
        each other compare randomly, so equal workloads do not always favour
        the same performer.
        """
        def compare(a: CastMember, b: CastMember) -> int:
            diff = schedule.show_count(a.name) - schedule.show_count(b.name)
            if abs(diff) <= 1:
                return -1 if self.rng.random() < 0.5 else 1
            return diff

        return sorted(candidates, key=cmp_to_key(compare))
