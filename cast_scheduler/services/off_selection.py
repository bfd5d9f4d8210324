"""
OFF Selection Service
Chooses which performers without a role sit a show out, spreading rest fairly
"""
import logging
import random
from datetime import timedelta
from typing import List, Sequence

from cast_scheduler.models import Show
from .working_schedule import WorkingSchedule

logger = logging.getLogger(__name__)


class OffSelectionScorer:
    """
    Ranks OFF candidates for a show

    Priority, highest first:
    1. performers with no full day off yet this week
    2. not creating two consecutive full days off
    3. more shows already played
    4. sitting inside a longer consecutive run
    5. random
    """

    def __init__(self, schedule: WorkingSchedule, rng: random.Random, off_per_show: int):
        self.schedule = schedule
        self.index = schedule.index
        self.rng = rng
        self.off_per_show = off_per_show

    def _working_dates(self, performer: str):
        return {self.index.get(sid).date for sid in self.schedule.shows_for(performer)}

    def full_days_off(self, performer: str):
        """Active dates on which the performer holds no role at all"""
        working = self._working_dates(performer)
        return [day for day in self.index.active_dates if day not in working]

    def _creates_double_rest(self, performer: str, show: Show) -> bool:
        days_off = set(self.full_days_off(performer))
        if show.date not in days_off:
            return False
        neighbours = (show.date - timedelta(days=1), show.date + timedelta(days=1))
        return any(day in days_off for day in neighbours)

    def _run_length_at(self, performer: str, show: Show) -> int:
        target = self.index.position(show.id)
        positions = [self.index.position(sid) for sid in self.schedule.shows_for(performer)]
        positions = [p for p in positions if p is not None] + [target]
        for run in self.index.consecutive_runs(positions):
            if target in run:
                return len(run)
        return 1

    def score(self, performer: str, show: Show):
        """Sort key; lower goes OFF first"""
        return (
            0 if not self.full_days_off(performer) else 1,
            1 if self._creates_double_rest(performer, show) else 0,
            -self.schedule.show_count(performer),
            -self._run_length_at(performer, show),
            self.rng.random(),
        )

    def rank(self, show: Show, candidates: Sequence[str]) -> List[str]:
        return sorted(candidates, key=lambda name: self.score(name, show))

    def select(self, show: Show, candidates: Sequence[str]) -> List[str]:
        """
        Pick the OFF performers for a show

        Never blocks schedule completion: any scoring failure, or a selection
        of the wrong size, falls back to a uniform random pick.
        """
        expected = min(self.off_per_show, len(candidates))
        try:
            selected = self.rank(show, candidates)[:expected]
            if len(selected) != expected:
                raise ValueError(f"expected {expected} OFF performers, scored {len(selected)}")
            return selected
        except Exception as e:
            logger.warning(f"OFF scoring failed for show {show.id}, choosing at random: {str(e)}")
            return self.rng.sample(list(candidates), expected)
