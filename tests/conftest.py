"""
Pytest configuration and fixtures for cast scheduler tests.

This module provides shared fixtures for:
- Testing configuration and a seeded random source
- The default role catalog and standard test rosters
- A standard eight-show week
- Factories for building shows, cast members and assignments
"""
import random
from datetime import date

import pytest

from cast_scheduler.config import TestingConfig
from cast_scheduler.models import Assignment, CastMember, Gender, RoleCatalog, Show, ShowStatus, OFF
from cast_scheduler.services.show_index import ShowIndex
from cast_scheduler.services.week_template import standard_week
from cast_scheduler.services.working_schedule import WorkingSchedule

# Monday
WEEK_START = date(2026, 10, 19)

ENSEMBLE_ROLES = ("Sarge", "Potato", "Mozzie", "Ringo", "Particle", "Who")
FEMALE_ROLES = ("Bin", "Cornish")


@pytest.fixture
def config():
    """Testing configuration (fixed seed, console logging only)"""
    return TestingConfig


@pytest.fixture
def rng():
    """Seeded random source so generation runs are reproducible"""
    return random.Random(1234)


@pytest.fixture
def catalog():
    return RoleCatalog.default()


@pytest.fixture
def week():
    """Mon-Sat standard week: eight shows with Wednesday and Saturday doubles"""
    return standard_week(WEEK_START)


@pytest.fixture
def index(week):
    return ShowIndex(week)


@pytest.fixture
def schedule(index, catalog):
    return WorkingSchedule(index, catalog)


# =============================================================================
# Rosters
# =============================================================================

@pytest.fixture
def roster():
    """
    Twelve performers: nine ensemble members rehearsed in the six open
    roles and three women covering Bin and Cornish.
    """
    ensemble = [
        CastMember(name=f"ENSEMBLE{i}", eligible_roles=frozenset(ENSEMBLE_ROLES), gender=Gender.MALE)
        for i in range(1, 10)
    ]
    women = [
        CastMember(name=name, eligible_roles=frozenset(FEMALE_ROLES), gender=Gender.FEMALE)
        for name in ("MOLLY", "JASMINE", "SERENA")
    ]
    return ensemble + women


@pytest.fixture
def large_roster():
    """Sixteen performers, enough slack that nobody needs a forced RED day"""
    ensemble = [
        CastMember(name=f"SWING{i}", eligible_roles=frozenset(ENSEMBLE_ROLES), gender=Gender.MALE)
        for i in range(1, 13)
    ]
    women = [
        CastMember(name=f"WOMAN{i}", eligible_roles=frozenset(FEMALE_ROLES), gender=Gender.FEMALE)
        for i in range(1, 5)
    ]
    return ensemble + women


@pytest.fixture
def who_bottleneck_roster():
    """Only JACK can play Who, so Who cannot be covered in all eight shows"""
    others = [
        CastMember(name=f"ENSEMBLE{i}", eligible_roles=frozenset(ENSEMBLE_ROLES[:-1]), gender=Gender.MALE)
        for i in range(1, 10)
    ]
    women = [
        CastMember(name=name, eligible_roles=frozenset(FEMALE_ROLES), gender=Gender.FEMALE)
        for name in ("MOLLY", "JASMINE", "SERENA")
    ]
    jack = CastMember(name="JACK", eligible_roles=frozenset({"Who"}), gender=Gender.MALE)
    return [jack] + others + women


# =============================================================================
# Factories
# =============================================================================

@pytest.fixture
def show_factory():
    """
    Factory for creating Show instances.

    Usage:
        show = show_factory('2026-10-21', '14:30')
        day_off = show_factory('2026-10-21', status=ShowStatus.DAYOFF)
    """
    def _create_show(day, curtain=None, status=ShowStatus.SHOW, show_id=None):
        record = {
            'id': show_id or f"{day}-{(curtain or 'none').replace(':', '')}",
            'date': day,
            'time': curtain,
            'status': status.value,
        }
        return Show.from_dict(record)

    return _create_show


@pytest.fixture
def staffed_rows():
    """
    Factory turning a {show_id: {role: performer}} map into assignment rows,
    with OFF rows for every roster member not on stage. red_shows maps a
    performer to the show ids whose OFF row is flagged RED.
    """
    def _create_rows(staffing, roster, red_shows=None):
        red_shows = red_shows or {}
        rows = []
        for show_id, roles in staffing.items():
            on_stage = set(roles.values())
            rows.extend(Assignment(show_id=show_id, role=role, performer=p) for role, p in roles.items())
            rows.extend(
                Assignment(show_id=show_id, role=OFF, performer=m.name,
                           is_red_day=show_id in red_shows.get(m.name, ()))
                for m in roster if m.name not in on_stage
            )
        return rows

    return _create_rows
