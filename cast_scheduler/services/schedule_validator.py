"""
Schedule Validator Service
Re-checks a finished (or hand-edited) week against every rule

Stateless and deterministic: the same assignments always produce the same
errors and warnings in the same order.
"""
from collections import Counter, defaultdict
from datetime import timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from cast_scheduler.config import get_config
from cast_scheduler.models import Assignment, CastMember, RoleCatalog, Show
from cast_scheduler.utils.formatting import format_show_label
from .show_index import ShowIndex, weekend_key
from .validation_types import ConstraintResult, ConstraintType, ValidationResult
from .workload_analytics import WorkloadAnalytics


class ScheduleValidator:
    """
    Validates a flat list of assignments for one week

    Hard errors cover headcount, roles, eligibility, duplicate roles, the
    consecutive/weekend/back-to-back/weekly caps and RED-day conflicts.
    Soft warnings cover RED-day counts and workload balance, with
    remediation suggestions attached.
    """

    def __init__(self, shows: Iterable[Show], cast: Sequence[CastMember],
                 catalog: Optional[RoleCatalog] = None, config=None):
        self.config = config or get_config()
        self.catalog = catalog or RoleCatalog.default()
        self.index = ShowIndex(shows, gap_days=self.config.CONSECUTIVE_GAP_DAYS)
        self.cast = list(cast)
        self.members: Dict[str, CastMember] = {m.name: m for m in self.cast}
        self.analytics = WorkloadAnalytics(self.index, self.cast, self.config)

    def validate(self, assignments: Iterable) -> ValidationResult:
        """
        Validate a week of assignments

        Args:
            assignments: Assignment objects or JSON-like records

        Returns:
            ValidationResult with typed violations
        """
        rows = [Assignment.from_dict(a) for a in assignments]
        result = ValidationResult(is_valid=True)

        by_show: Dict[str, List[Assignment]] = defaultdict(list)
        for row in rows:
            by_show[row.show_id].append(row)

        for show in self.index.active_shows:
            stage = [a for a in by_show.get(show.id, []) if not a.is_off]
            self._check_show(show, stage, rows, result)

        stage_rows = [a for a in rows if not a.is_off and self.index.is_active(a.show_id)]
        for performer in self._performers(stage_rows):
            shows = self._distinct_shows(performer, stage_rows)
            self._check_consecutive(performer, shows, rows, result)
            self._check_back_to_back(performer, shows, result)
            self._check_weekend(performer, shows, result)
            self._check_weekly(performer, shows, result)

        self._check_red_days(rows, stage_rows, result)
        self._check_workload(rows, result)
        return result

    # ------------------------------------------------------------------
    # Per-show checks
    # ------------------------------------------------------------------

    def _check_show(self, show: Show, stage: List[Assignment], rows, result: ValidationResult) -> None:
        label = format_show_label(show)
        headcount = self.catalog.headcount

        performers = {a.performer for a in stage}
        if len(performers) < headcount:
            missing = headcount - len(performers)
            result.add_error(
                ConstraintType.HEADCOUNT,
                f"Show {label}: Missing {missing} performer{'s' if missing > 1 else ''} "
                f"- must have exactly {headcount} on stage",
                show_id=show.id, count=len(performers)
            )
        elif len(performers) > headcount:
            result.add_error(
                ConstraintType.HEADCOUNT,
                f"Show {label}: Has {len(performers)} performers but can only have {headcount} "
                f"- remove duplicate assignments",
                show_id=show.id, count=len(performers)
            )

        filled = {a.role for a in stage}
        missing_roles = [role for role in self.catalog.roles if role not in filled]
        if missing_roles:
            result.add_error(
                ConstraintType.MISSING_ROLE,
                f"Show {label}: Missing roles: {', '.join(missing_roles)} - assign performers to these roles",
                show_id=show.id, roles=missing_roles
            )

        for a in stage:
            member = self.members.get(a.performer)
            if member is None:
                result.add_error(
                    ConstraintType.UNKNOWN_PERFORMER,
                    f'Show {label}: Unknown performer "{a.performer}" assigned to {a.role}',
                    show_id=show.id, performer=a.performer
                )
            elif a.role not in self.catalog:
                result.add_error(
                    ConstraintType.ROLE_ELIGIBILITY,
                    f"Show {label}: {a.role} is not a stage role (assigned to {a.performer})",
                    show_id=show.id, performer=a.performer, role=a.role
                )
            elif not member.can_play(a.role):
                result.add_error(
                    ConstraintType.ROLE_ELIGIBILITY,
                    f"Show {label}: {a.performer} cannot perform {a.role} - not in eligible roles",
                    show_id=show.id, performer=a.performer, role=a.role
                )
            elif self.catalog.is_female_only(a.role) and not member.is_eligible_for_female_only_roles:
                result.add_error(
                    ConstraintType.GENDER_ELIGIBILITY,
                    f"Show {label}: {a.performer} cannot perform {a.role} - role requires female performer",
                    show_id=show.id, performer=a.performer, role=a.role
                )

        roles_by_performer: Dict[str, List[str]] = defaultdict(list)
        for a in stage:
            roles_by_performer[a.performer].append(a.role)
        for performer, roles in roles_by_performer.items():
            if len(roles) > 1:
                result.add_error(
                    ConstraintType.DUPLICATE_ROLE,
                    f"Show {label}: {performer} assigned to multiple roles ({', '.join(roles)}) "
                    f"- each performer can only have one role per show",
                    show_id=show.id, performer=performer, roles=roles
                )

    # ------------------------------------------------------------------
    # Per-performer checks
    # ------------------------------------------------------------------

    def _performers(self, stage_rows: List[Assignment]) -> List[str]:
        """Roster order first, then anyone else on stage alphabetically"""
        names = [m.name for m in self.cast]
        extras = sorted({a.performer for a in stage_rows} - set(names))
        return names + extras

    def _distinct_shows(self, performer: str, stage_rows: List[Assignment]) -> List[Show]:
        ids = {a.show_id for a in stage_rows if a.performer == performer}
        return sorted((self.index.get(sid) for sid in ids), key=lambda s: s.sort_key)

    def _check_consecutive(self, performer: str, shows: List[Show], rows, result: ValidationResult) -> None:
        limit = self.config.MAX_CONSECUTIVE_SHOWS
        positions = [self.index.position(s.id) for s in shows]
        for run in self.index.consecutive_runs(positions):
            if len(run) <= limit:
                continue
            start = self.index.active_shows[run[0]]
            end = self.index.active_shows[run[-1]]
            suggestion = self._consecutive_suggestion(performer, run, rows)
            result.add_error(
                ConstraintType.CONSECUTIVE_SHOWS,
                f"{performer} has {len(run)} consecutive shows ({format_show_label(start)} to "
                f"{format_show_label(end)}) - exceeds maximum of {limit} consecutive shows. "
                f"Suggestion: {suggestion}",
                performer=performer, count=len(run)
            )

    def _check_back_to_back(self, performer: str, shows: List[Show], result: ValidationResult) -> None:
        per_date = Counter(s.date for s in shows)
        dates = sorted(per_date)
        for first, second in zip(dates, dates[1:]):
            if second - first != timedelta(days=1):
                continue
            if per_date[first] >= 2 and per_date[second] >= 2:
                total = per_date[first] + per_date[second]
                result.add_error(
                    ConstraintType.BACK_TO_BACK_DOUBLES,
                    f"{performer} has {total} shows across 2 consecutive days ({first.isoformat()} and "
                    f"{second.isoformat()}) - violates back-to-back double days rule",
                    performer=performer, dates=[first.isoformat(), second.isoformat()]
                )

    def _check_weekend(self, performer: str, shows: List[Show], result: ValidationResult) -> None:
        limit = self.config.MAX_WEEKEND_SHOWS
        per_weekend = Counter(weekend_key(s.date) for s in shows)
        per_weekend.pop(None, None)
        for key in sorted(per_weekend):
            if per_weekend[key] > limit:
                result.add_error(
                    ConstraintType.WEEKEND_CAP,
                    f"{performer} has {per_weekend[key]} shows over a weekend (Fri-Sun) - exceeds maximum of {limit}.",
                    performer=performer, weekend_of=key.isoformat()
                )

    def _check_weekly(self, performer: str, shows: List[Show], result: ValidationResult) -> None:
        limit = self.config.MAX_WEEKLY_SHOWS
        if len(shows) > limit:
            result.add_error(
                ConstraintType.WEEKLY_CAP,
                f"{performer} has {len(shows)} shows this week - exceeds maximum of {limit}",
                performer=performer, count=len(shows)
            )

    # ------------------------------------------------------------------
    # RED days and workload
    # ------------------------------------------------------------------

    def _check_red_days(self, rows: List[Assignment], stage_rows: List[Assignment],
                        result: ValidationResult) -> None:
        red_dates: Dict[str, set] = {m.name: set() for m in self.cast}
        for a in rows:
            show = self.index.get(a.show_id)
            if a.is_off and a.is_red_day and show is not None:
                red_dates.setdefault(a.performer, set()).add(show.date)

        working_dates: Dict[str, set] = defaultdict(set)
        for a in stage_rows:
            working_dates[a.performer].add(self.index.get(a.show_id).date)

        for performer, dates in red_dates.items():
            if len(dates) > 1:
                result.add_warning(
                    ConstraintType.RED_DAY_COUNT,
                    f"{performer} has more than one RED day assigned.",
                    performer=performer, dates=sorted(d.isoformat() for d in dates)
                )
            if not dates and performer in self.members:
                result.add_warning(
                    ConstraintType.RED_DAY_COUNT,
                    f"{performer} does not have a RED day assigned.",
                    performer=performer
                )
            for day in sorted(dates):
                if day in working_dates[performer]:
                    result.add_error(
                        ConstraintType.RED_DAY_CONFLICT,
                        f"{performer} has a RED day on {day.isoformat()} but is also assigned to a role on that day.",
                        performer=performer, date=day.isoformat()
                    )

    def _check_workload(self, rows: List[Assignment], result: ValidationResult) -> None:
        counts = self.analytics.show_counts(rows)
        roster_counts = {m.name: counts.get(m.name, 0) for m in self.cast}
        average = self.analytics.average_shows(roster_counts)
        for performer, count in roster_counts.items():
            status = self.analytics.utilisation_status(count, average)
            if status == 'underutilized':
                result.add_warning(
                    ConstraintType.WORKLOAD,
                    f"{performer} only has {count} show{'' if count == 1 else 's'} (underutilized) "
                    f"- suggestion: {self._underutilized_suggestion(performer, rows)}",
                    performer=performer, count=count
                )
            elif status == 'overworked':
                result.add_warning(
                    ConstraintType.WORKLOAD,
                    f"{performer} has {count} shows (potentially overworked) "
                    f"- suggestion: {self._overworked_suggestion(performer, rows)}",
                    performer=performer, count=count
                )

    # ------------------------------------------------------------------
    # Remediation suggestions
    # ------------------------------------------------------------------

    def alternative_performers(self, current: str, role: str, show_id: str, rows: List[Assignment]) -> List[str]:
        """Roster members who could take a role in a show they are not already in"""
        on_stage = {a.performer for a in rows if a.show_id == show_id and not a.is_off}
        alternatives = []
        for member in self.cast:
            if member.name == current or member.name in on_stage:
                continue
            if not member.can_play(role):
                continue
            if self.catalog.is_female_only(role) and not member.is_eligible_for_female_only_roles:
                continue
            alternatives.append(member.name)
        return alternatives

    def _role_in(self, performer: str, show_id: str, rows: List[Assignment]) -> Optional[str]:
        for a in rows:
            if a.show_id == show_id and a.performer == performer and not a.is_off:
                return a.role
        return None

    def _consecutive_suggestion(self, performer: str, run: List[int], rows: List[Assignment]) -> str:
        middle = self.index.active_shows[run[len(run) // 2]]
        role = self._role_in(performer, middle.id, rows)
        if role:
            alternatives = self.alternative_performers(performer, role, middle.id, rows)
            if alternatives:
                return f"Replace {performer} with {alternatives[0]} for {role} on {format_show_label(middle)}"
        return "Consider redistributing some shows to other cast members"

    def _underutilized_suggestion(self, performer: str, rows: List[Assignment]) -> str:
        member = self.members.get(performer)
        if member is None:
            return "verify performer availability"
        playing = {a.show_id for a in rows if a.performer == performer and not a.is_off}
        free_shows = [s for s in self.index.active_shows if s.id not in playing]
        for show in free_shows[:2]:
            filled = {a.role for a in rows if a.show_id == show.id and not a.is_off}
            open_roles = [r for r in self.catalog.roles if member.can_play(r) and r not in filled]
            if open_roles:
                return f"assign {open_roles[0]} role on {format_show_label(show)}"
        return "look for opportunities to assign additional roles"

    def _overworked_suggestion(self, performer: str, rows: List[Assignment]) -> str:
        playing = [
            a for a in rows
            if a.performer == performer and not a.is_off and self.index.is_active(a.show_id)
        ]
        if len(playing) > 2:
            last = max(playing, key=lambda a: self.index.position(a.show_id))
            show = self.index.get(last.show_id)
            alternatives = self.alternative_performers(performer, last.role, show.id, rows)
            if alternatives:
                return f"reassign {last.role} on {format_show_label(show)} to {alternatives[0]}"
        return "redistribute some assignments to other cast members"


def validate_schedule(assignments, shows, cast_members, catalog: Optional[RoleCatalog] = None,
                      config=None) -> ConstraintResult:
    """
    Validate an externally edited schedule without re-running generation

    Args:
        assignments: Assignment objects or JSON-like records
        shows: Show objects or JSON-like records for the week
        cast_members: CastMember objects or JSON-like records
        catalog: Role catalog (defaults to the standard eight roles)
        config: Config class (defaults to the environment's)

    Returns:
        ConstraintResult with is_valid, errors and warnings
    """
    validator = ScheduleValidator(
        [Show.from_dict(s) for s in shows],
        [CastMember.from_dict(m) for m in cast_members],
        catalog=catalog,
        config=config,
    )
    return validator.validate(assignments).to_constraint_result()
