"""
Scheduling Engine - Core Auto-Scheduler Logic
Orchestrates the automatic casting of one week
"""
import logging
import random
import secrets
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from cast_scheduler.config import get_config
from cast_scheduler.error_handlers import handle_generation_errors, generation_logger
from cast_scheduler.error_handlers.exceptions import SchedulingException, ValidationException
from cast_scheduler.integrations.company_directory import CompanyDirectory, get_default_directory
from cast_scheduler.models import Assignment, CastMember, RoleCatalog, Show
from .partial_schedule import PartialScheduleGenerator
from .red_day_assigner import RedDayAssigner
from .schedule_validator import ScheduleValidator
from .search_strategy import RandomizedGreedyStrategy, SearchStrategy
from .show_index import ShowIndex
from .validation_types import AutoGenerateResult
from .working_schedule import WorkingSchedule
from .workload_analytics import WorkloadAnalytics

logger = logging.getLogger(__name__)


class SchedulingEngine:
    """
    Core auto-scheduler orchestrator

    Process:
    1. Load the roster (from the company directory when none was passed in)
    2. Up to MAX_GENERATION_ATTEMPTS randomized constructive attempts, each on
       a fresh working schedule; the first attempt the validator finds no
       critical errors in is accepted
    3. If every attempt fails, a relaxed partial schedule
    4. RED-day pass, then a final validation of what will be returned
    """

    def __init__(self, shows: Iterable, cast_members: Optional[Iterable] = None, *,
                 catalog: Optional[RoleCatalog] = None, config=None,
                 rng: Optional[random.Random] = None,
                 directory: Optional[CompanyDirectory] = None,
                 strategy: Optional[SearchStrategy] = None):
        """
        Initialize SchedulingEngine

        Args:
            shows: Show objects or JSON-like records for the week
            cast_members: CastMember objects or records; empty loads the company directory
            catalog: Role catalog (defaults to the standard eight roles)
            config: Config class (defaults to the environment's)
            rng: Random source; seeded from RANDOM_SEED when omitted
            directory: Roster source used when no cast members are passed
            strategy: Search strategy; RandomizedGreedyStrategy when omitted
        """
        self.config = config or get_config()
        self.catalog = catalog or RoleCatalog.default()
        self.rng = rng or random.Random(self.config.RANDOM_SEED)
        self.directory = directory
        self.strategy = strategy
        self._show_records = list(shows)
        self._cast_records = list(cast_members) if cast_members else []

    def load_shows(self) -> List[Show]:
        shows = [Show.from_dict(s) for s in self._show_records]
        ids = [s.id for s in shows]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValidationException(
                f"Duplicate show ids: {', '.join(duplicates)}",
                details={'show_ids': duplicates}
            )
        return shows

    def load_cast(self) -> List[CastMember]:
        """
        Active roster for this run, in roster order

        Raises:
            ExternalAPIException: If the company directory cannot be read
            ConfigurationException: If no roster was passed and no directory is configured
            SchedulingException: If nobody active is left to cast
        """
        if self._cast_records:
            members = [CastMember.from_dict(m) for m in self._cast_records]
        else:
            directory = self.directory or get_default_directory(self.config)
            members = directory.get_cast_members()

        active = [m for m in members if m.is_active]
        names = [m.name for m in active]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValidationException(
                f"Duplicate cast member names: {', '.join(duplicates)}",
                details={'names': duplicates}
            )
        if not active:
            raise SchedulingException('No active cast members available for scheduling')
        return active

    @handle_generation_errors
    def auto_generate(self) -> AutoGenerateResult:
        """
        Generate a full week of assignments

        Returns:
            AutoGenerateResult; failures are reported in errors, never raised
        """
        shows = self.load_shows()
        cast = self.load_cast()
        gap_days = self.config.CONSECUTIVE_GAP_DAYS
        index = ShowIndex(shows, gap_days=gap_days)
        generation_logger.generation_started(len(index), len(cast))

        red_days = RedDayAssigner(index, cast, self.catalog, self.config)
        analytics = WorkloadAnalytics(index, cast, self.config)

        if not index.active_shows:
            outcome = red_days.assign([])
            return self._result(True, outcome.assignments, outcome.errors, [], analytics)

        strategy = self.strategy or RandomizedGreedyStrategy(cast, self.catalog, self.config, self.rng)
        validator = ScheduleValidator(shows, cast, self.catalog, self.config)
        max_attempts = self.config.MAX_GENERATION_ATTEMPTS

        accepted: Optional[List[Assignment]] = None
        attempts = 0
        for attempt in range(1, max_attempts + 1):
            attempts = attempt
            schedule = WorkingSchedule(ShowIndex(shows, gap_days=gap_days), self.catalog)
            if not strategy.attempt(schedule):
                generation_logger.attempt_failed(attempt, 'a role had no legal performer')
                continue
            if not schedule.is_fully_staffed():
                show = next(s for s in schedule.index.active_shows if schedule.unfilled_roles(s.id))
                generation_logger.attempt_failed(
                    attempt, f"{', '.join(schedule.unfilled_roles(show.id))} left unfilled on show {show.id}"
                )
                continue

            rows = schedule.to_assignments()
            check = validator.validate(rows)
            if check.has_critical_violations:
                generation_logger.attempt_failed(attempt, check.errors[0])
                continue

            accepted = rows
            break

        errors: List[str] = []
        used_fallback = accepted is None
        if used_fallback:
            schedule = WorkingSchedule(ShowIndex(shows, gap_days=gap_days), self.catalog)
            accepted, errors = PartialScheduleGenerator(cast, self.catalog, self.config).generate(schedule)
            generation_logger.fallback_used(attempts, len(errors))
            if not accepted:
                return AutoGenerateResult(
                    success=False,
                    errors=errors,
                    attempts=attempts,
                    used_fallback=True,
                )

        outcome = red_days.assign(accepted)
        final = validator.validate(outcome.assignments)
        errors = errors + outcome.errors + final.errors

        result = self._result(True, outcome.assignments, errors, final.warnings, analytics)
        result.attempts = attempts
        result.used_fallback = used_fallback

        if not used_fallback:
            generation_logger.generation_completed(attempts, {
                'assignments': len(result.assignments),
                'forced_red_days': len(outcome.forced),
                'warnings': len(result.warnings),
            })
        return result

    def _result(self, success: bool, assignments: List[Assignment], errors: List[str],
                warnings: List[str], analytics: WorkloadAnalytics) -> AutoGenerateResult:
        return AutoGenerateResult(
            success=success,
            assignments=assignments,
            errors=errors,
            warnings=warnings,
            day_off_stats=analytics.day_off_stats(assignments),
            generation_id=secrets.token_hex(8),
            generated_at=datetime.now(timezone.utc).isoformat(),
        )


def auto_generate(shows, cast_members=None, **kwargs) -> AutoGenerateResult:
    """
    Generate one week of assignments

    Args:
        shows: Show objects or JSON-like records
        cast_members: CastMember objects or records; empty loads the company directory
        **kwargs: Passed through to SchedulingEngine (catalog, config, rng, directory, strategy)

    Returns:
        AutoGenerateResult
    """
    return SchedulingEngine(shows, cast_members, **kwargs).auto_generate()
