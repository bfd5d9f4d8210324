"""
Workload Analytics Service

Provides workload aggregation for a finished week: shows played per
performer, full days off, and whether a performer is under- or over-used.
"""
import math
from typing import Dict, List, Sequence

from cast_scheduler.models import Assignment, CastMember
from .show_index import ShowIndex


class WorkloadAnalytics:
    """
    Service for analyzing performer workload across one week.

    The thresholds here are the same ones the validator uses for its
    fairness warnings, so dashboards and warnings always agree.
    """

    def __init__(self, index: ShowIndex, cast: Sequence[CastMember], config):
        """
        Initialize WorkloadAnalytics service.

        Args:
            index: Show index for the week
            cast: Roster the week was generated for
            config: Config class supplying the fairness thresholds
        """
        self.index = index
        self.cast = list(cast)
        self.min_shows = config.UNDERUTILIZED_MIN_SHOWS
        self.overworked_factor = config.OVERWORKED_FACTOR

    def show_counts(self, assignments: Sequence[Assignment]) -> Dict[str, int]:
        """
        Distinct active shows each performer holds a real role in.

        Every roster member is present in the result, starting at 0.
        Performers not on the roster are counted too, so the validator can
        report on them.
        """
        counts = {member.name: 0 for member in self.cast}
        seen = set()
        for a in assignments:
            if a.is_off or not self.index.is_active(a.show_id):
                continue
            key = (a.performer, a.show_id)
            if key in seen:
                continue
            seen.add(key)
            counts[a.performer] = counts.get(a.performer, 0) + 1
        return counts

    def full_days_off(self, assignments: Sequence[Assignment]) -> Dict[str, List]:
        """
        Dates each performer is free of every show, sorted.

        Company day-off dates count as days off for everybody.
        """
        working: Dict[str, set] = {member.name: set() for member in self.cast}
        for a in assignments:
            if a.is_off or not self.index.is_active(a.show_id):
                continue
            working.setdefault(a.performer, set()).add(self.index.get(a.show_id).date)

        all_dates = sorted(set(self.index.active_dates) | set(self.index.day_off_dates))
        return {
            member.name: [d for d in all_dates if d not in working[member.name]]
            for member in self.cast
        }

    def day_off_stats(self, assignments: Sequence[Assignment]) -> Dict[str, int]:
        """Number of full days off per performer"""
        return {name: len(days) for name, days in self.full_days_off(assignments).items()}

    @staticmethod
    def average_shows(counts: Dict[str, int]) -> float:
        """Mean shows per performer across the week"""
        if not counts:
            return 0.0
        return sum(counts.values()) / len(counts)

    def overworked_threshold(self, average: float) -> int:
        return math.ceil(average * self.overworked_factor)

    def utilisation_status(self, count: int, average: float) -> str:
        """
        Calculate workload status from a show count.

        Thresholds:
        - underutilized: played, but fewer than UNDERUTILIZED_MIN_SHOWS in a week of 4+ shows
        - overworked: more than ceil(OVERWORKED_FACTOR x average) in a week of 5+ shows
        - normal: everything else

        Args:
            count (int): Shows played this week
            average (float): Mean shows per performer this week

        Returns:
            str: Status code ('underutilized', 'normal', or 'overworked')
        """
        active = len(self.index)
        if 0 < count < self.min_shows and active >= 4:
            return 'underutilized'
        elif count > self.overworked_threshold(average) and active > 4:
            return 'overworked'
        else:
            return 'normal'
