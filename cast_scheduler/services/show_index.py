"""
Show Index
Chronological view of a week's running order, built once per generation attempt
"""
from collections import OrderedDict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from cast_scheduler.models import Show, ShowStatus

# Friday, Saturday, Sunday
WEEKEND_WEEKDAYS = frozenset({4, 5, 6})


def weekend_key(day: date) -> Optional[date]:
    """
    Key a Friday-Sunday span by the Monday of its ISO week.

    Returns None for Monday-Thursday, which belong to no weekend span.
    """
    if day.weekday() not in WEEKEND_WEEKDAYS:
        return None
    return day - timedelta(days=day.weekday())


def is_weekend(day: date) -> bool:
    return weekend_key(day) is not None


class ShowIndex:
    """
    Sorted active shows plus the lookups derived from them

    "Show order" (the position of a show in active_shows) drives every
    adjacency and consecutive-run calculation in the scheduler.
    """

    def __init__(self, shows: Iterable[Show], gap_days: int = 2):
        self.shows: List[Show] = list(shows)
        self.gap_days = gap_days
        self.active_shows: List[Show] = sorted(
            (s for s in self.shows if s.status == ShowStatus.SHOW),
            key=lambda s: s.sort_key
        )
        self._positions: Dict[str, int] = {s.id: i for i, s in enumerate(self.active_shows)}
        self._by_id: Dict[str, Show] = {s.id: s for s in self.shows}

        grouped: Dict[date, List[Show]] = {}
        for show in self.active_shows:
            grouped.setdefault(show.date, []).append(show)
        self.shows_by_date: Dict[date, List[Show]] = OrderedDict(sorted(grouped.items()))

        self.day_off_shows: List[Show] = sorted(
            (s for s in self.shows if s.status == ShowStatus.DAYOFF),
            key=lambda s: s.sort_key
        )
        self.day_off_dates: List[date] = sorted({s.date for s in self.day_off_shows})

    def __len__(self):
        return len(self.active_shows)

    def get(self, show_id: str) -> Optional[Show]:
        return self._by_id.get(show_id)

    def position(self, show_id: str) -> Optional[int]:
        return self._positions.get(show_id)

    def is_active(self, show_id: str) -> bool:
        return show_id in self._positions

    @property
    def active_dates(self) -> List[date]:
        return list(self.shows_by_date.keys())

    def shows_on(self, day: date) -> List[Show]:
        return self.shows_by_date.get(day, [])

    def are_shows_consecutive(self, first: Show, second: Show) -> bool:
        """
        Two shows in sorted order are consecutive when the second starts no
        more than gap_days whole days after the first, so a single dark day
        does not break a run.
        """
        delta = second.starts_at - first.starts_at
        return delta // timedelta(days=1) <= self.gap_days

    def is_double_day(self, day: date) -> bool:
        return len(self.shows_on(day)) >= 2

    def is_back_to_back_double_date(self, day: date) -> bool:
        """A double-show date with a double-show date either side of it"""
        if not self.is_double_day(day):
            return False
        return (self.is_double_day(day - timedelta(days=1))
                or self.is_double_day(day + timedelta(days=1)))

    def consecutive_runs(self, positions: Iterable[int]) -> List[List[int]]:
        """Split sorted show positions into consecutive runs"""
        runs: List[List[int]] = []
        for pos in sorted(set(positions)):
            if runs and self.are_shows_consecutive(self.active_shows[runs[-1][-1]], self.active_shows[pos]):
                runs[-1].append(pos)
            else:
                runs.append([pos])
        return runs
