"""
Working Schedule
Mutable assignment state owned by a single generation attempt
"""
from collections import defaultdict
from typing import Dict, Iterable, List, Set

from cast_scheduler.models import Assignment, RoleCatalog, OFF
from .show_index import ShowIndex

UNFILLED = ""


class WorkingSchedule:
    """
    Role -> performer map for every active show of one attempt

    A fresh instance is built for each attempt, so the ShowIndex and the
    per-performer counters it carries can never go stale.
    """

    def __init__(self, index: ShowIndex, catalog: RoleCatalog):
        self.index = index
        self.catalog = catalog
        self._roles: Dict[str, Dict[str, str]] = {
            show.id: {role: UNFILLED for role in catalog.roles}
            for show in index.active_shows
        }
        self._off: Dict[str, List[str]] = {show.id: [] for show in index.active_shows}
        self._shows_by_performer: Dict[str, Set[str]] = defaultdict(set)

    def assign(self, show_id: str, role: str, performer: str) -> None:
        current = self._roles[show_id][role]
        if current:
            self._shows_by_performer[current].discard(show_id)
        self._roles[show_id][role] = performer
        self._shows_by_performer[performer].add(show_id)

    def clear_role(self, show_id: str, role: str) -> str:
        """Empty a slot and return who held it"""
        performer = self._roles[show_id][role]
        if performer:
            self._roles[show_id][role] = UNFILLED
            self._shows_by_performer[performer].discard(show_id)
        return performer

    def performer_for(self, show_id: str, role: str) -> str:
        return self._roles[show_id][role]

    def roles_for(self, show_id: str) -> Dict[str, str]:
        return dict(self._roles[show_id])

    def role_of(self, performer: str, show_id: str):
        for role, name in self._roles[show_id].items():
            if name == performer:
                return role
        return None

    def performers_on(self, show_id: str) -> Set[str]:
        return {name for name in self._roles[show_id].values() if name}

    def is_on_show(self, performer: str, show_id: str) -> bool:
        return show_id in self._shows_by_performer.get(performer, ())

    def shows_for(self, performer: str) -> Set[str]:
        """Show ids where the performer holds a real role"""
        return set(self._shows_by_performer.get(performer, ()))

    def show_count(self, performer: str) -> int:
        return len(self._shows_by_performer.get(performer, ()))

    def unfilled_roles(self, show_id: str) -> List[str]:
        return [role for role, name in self._roles[show_id].items() if not name]

    def is_fully_staffed(self) -> bool:
        return not any(self.unfilled_roles(show_id) for show_id in self._roles)

    def set_off(self, show_id: str, performers: Iterable[str]) -> None:
        self._off[show_id] = list(performers)

    def off_for(self, show_id: str) -> List[str]:
        return list(self._off[show_id])

    def to_assignments(self, include_off: bool = True) -> List[Assignment]:
        """Flatten into Assignment rows in show order, roles in catalog order"""
        rows: List[Assignment] = []
        for show in self.index.active_shows:
            for role in self.catalog.roles:
                performer = self._roles[show.id][role]
                if performer:
                    rows.append(Assignment(show_id=show.id, role=role, performer=performer))
            if include_off:
                rows.extend(
                    Assignment(show_id=show.id, role=OFF, performer=name)
                    for name in self._off[show.id]
                )
        return rows

    @classmethod
    def from_assignments(cls, index: ShowIndex, catalog: RoleCatalog,
                         assignments: Iterable[Assignment]) -> 'WorkingSchedule':
        """Rebuild working state from flat rows (unknown shows and roles are skipped)"""
        schedule = cls(index, catalog)
        for row in assignments:
            if not index.is_active(row.show_id):
                continue
            if row.is_off:
                schedule._off[row.show_id].append(row.performer)
            elif row.role in catalog:
                schedule.assign(row.show_id, row.role, row.performer)
        return schedule
