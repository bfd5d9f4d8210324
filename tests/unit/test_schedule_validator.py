"""
Unit tests for the ScheduleValidator and validate_schedule.

Starts from a hand-built legal week and breaks one rule at a time.
"""
import pytest

from cast_scheduler.models import Assignment, CastMember, RoleCatalog, OFF
from cast_scheduler.services.schedule_validator import ScheduleValidator, validate_schedule
from cast_scheduler.services.validation_types import ConstraintResult, ConstraintType

from tests.conftest import ENSEMBLE_ROLES

WOMEN_ROTATION = [('MOLLY', 'JASMINE'), ('SERENA', 'MOLLY'), ('JASMINE', 'SERENA')]


def legal_staffing(week):
    """Eight legal shows: nobody over six shows, women rotate through Bin and Cornish"""
    staffing = {}
    for i, show in enumerate(week):
        bin_, cornish = WOMEN_ROTATION[i % 3]
        roles = {'Bin': bin_, 'Cornish': cornish}
        for k, role in enumerate(ENSEMBLE_ROLES):
            roles[role] = f"ENSEMBLE{(i * 6 + k) % 9 + 1}"
        staffing[show.id] = roles
    return staffing


def put(staffing, show_id, role, performer):
    """Give performer the role, swapping roles if they were already on the show"""
    roles = staffing[show_id]
    displaced = roles[role]
    for other_role, name in roles.items():
        if name == performer:
            roles[other_role] = displaced
    roles[role] = performer


def violation_types(result):
    return {v.constraint_type for v in result.violations}


class TestLegalWeek:

    @pytest.mark.unit
    def test_legal_week_has_no_errors(self, week, roster, staffed_rows, config):
        rows = staffed_rows(legal_staffing(week), roster)
        result = ScheduleValidator(week, roster, config=config).validate(rows)

        assert result.is_valid is True
        assert result.errors == []
        assert len(result.warnings) == len(roster)
        assert 'MOLLY does not have a RED day assigned.' in result.warnings

    @pytest.mark.unit
    def test_validation_is_deterministic(self, week, roster, staffed_rows, config):
        staffing = legal_staffing(week)
        put(staffing, week[0].id, 'Sarge', 'GHOST')
        rows = staffed_rows(staffing, roster)

        first = validate_schedule(rows, week, roster, config=config)
        second = validate_schedule(rows, week, roster, config=config)
        assert first == second


class TestShowErrors:
    """Errors reported per show."""

    @pytest.mark.unit
    def test_missing_performer_and_role(self, week, roster, staffed_rows, config):
        staffing = legal_staffing(week)
        del staffing[week[0].id]['Sarge']
        result = ScheduleValidator(week, roster, config=config).validate(staffed_rows(staffing, roster))

        assert result.errors == [
            'Show Mon Oct 19 7:30 PM: Missing 1 performer - must have exactly 8 on stage',
            'Show Mon Oct 19 7:30 PM: Missing roles: Sarge - assign performers to these roles',
        ]
        assert result.has_critical_violations is True

    @pytest.mark.unit
    def test_unknown_performer(self, week, roster, staffed_rows, config):
        staffing = legal_staffing(week)
        put(staffing, week[0].id, 'Sarge', 'GHOST')
        result = ScheduleValidator(week, roster, config=config).validate(staffed_rows(staffing, roster))

        assert 'Show Mon Oct 19 7:30 PM: Unknown performer "GHOST" assigned to Sarge' in result.errors
        assert ConstraintType.UNKNOWN_PERFORMER in violation_types(result)

    @pytest.mark.unit
    def test_role_not_rehearsed(self, week, roster, staffed_rows, config):
        staffing = legal_staffing(week)
        staffing[week[0].id]['Sarge'] = 'SERENA'
        result = ScheduleValidator(week, roster, config=config).validate(staffed_rows(staffing, roster))

        assert 'Show Mon Oct 19 7:30 PM: SERENA cannot perform Sarge - not in eligible roles' in result.errors

    @pytest.mark.unit
    def test_female_only_role(self, week, roster, staffed_rows, config):
        pat = CastMember(name='PAT', eligible_roles=frozenset({'Bin'}))
        cast = roster + [pat]
        staffing = legal_staffing(week)
        staffing[week[0].id]['Bin'] = 'PAT'
        result = ScheduleValidator(week, cast, config=config).validate(staffed_rows(staffing, cast))

        assert 'Show Mon Oct 19 7:30 PM: PAT cannot perform Bin - role requires female performer' in result.errors
        assert ConstraintType.GENDER_ELIGIBILITY in violation_types(result)

    @pytest.mark.unit
    def test_multiple_roles_in_one_show(self, week, roster, staffed_rows, config):
        staffing = legal_staffing(week)
        rows = staffed_rows(staffing, roster)
        holder = staffing[week[0].id]['Sarge']
        rows = [
            Assignment(show_id=a.show_id, role='Sarge', performer=staffing[week[0].id]['Potato'])
            if a.show_id == week[0].id and a.role == 'Sarge' else a
            for a in rows
        ]
        rows.append(Assignment(show_id=week[0].id, role=OFF, performer=holder))
        result = ScheduleValidator(week, roster, config=config).validate(rows)

        types = violation_types(result)
        assert ConstraintType.DUPLICATE_ROLE in types
        assert ConstraintType.HEADCOUNT in types
        assert any('assigned to multiple roles (Sarge, Potato)' in e or
                   'assigned to multiple roles (Potato, Sarge)' in e for e in result.errors)


class TestPerformerErrors:
    """Errors reported per performer across the week."""

    @pytest.mark.unit
    def test_seven_consecutive_shows(self, week, roster, staffed_rows, config):
        staffing = legal_staffing(week)
        for show in week[:7]:
            put(staffing, show.id, 'Sarge', 'ENSEMBLE4')
        result = ScheduleValidator(week, roster, config=config).validate(staffed_rows(staffing, roster))

        consecutive = [v.message for v in result.violations
                       if v.constraint_type == ConstraintType.CONSECUTIVE_SHOWS]
        assert len(consecutive) == 1
        assert consecutive[0].startswith(
            'ENSEMBLE4 has 7 consecutive shows (Mon Oct 19 7:30 PM to Sat Oct 24 2:30 PM) '
            '- exceeds maximum of 6 consecutive shows. Suggestion: Replace ENSEMBLE4 with '
        )
        assert consecutive[0].endswith('for Sarge on Wed Oct 21 7:30 PM')
        assert 'ENSEMBLE4 has 7 shows this week - exceeds maximum of 6' in result.errors

    @pytest.mark.unit
    def test_weekend_cap_and_back_to_back_doubles(self, show_factory, config):
        shows = [
            show_factory('2026-10-23', '14:30'),
            show_factory('2026-10-23', '19:30'),
            show_factory('2026-10-24', '14:30'),
            show_factory('2026-10-24', '19:30'),
            show_factory('2026-10-25', '14:30'),
        ]
        catalog = RoleCatalog(roles=('Who',), female_only=set())
        cast = [CastMember(name='ALEX', eligible_roles=frozenset({'Who'}))]
        rows = [Assignment(show_id=s.id, role='Who', performer='ALEX') for s in shows]
        result = ScheduleValidator(shows, cast, catalog=catalog, config=config).validate(rows)

        assert 'ALEX has 5 shows over a weekend (Fri-Sun) - exceeds maximum of 4.' in result.errors
        assert ('ALEX has 4 shows across 2 consecutive days (2026-10-23 and 2026-10-24) '
                '- violates back-to-back double days rule') in result.errors

    @pytest.mark.unit
    def test_red_day_conflict(self, week, roster, staffed_rows, config):
        # MOLLY sits out the Wednesday matinee but plays the evening
        rows = staffed_rows(legal_staffing(week), roster, red_shows={'MOLLY': {week[2].id}})
        result = ScheduleValidator(week, roster, config=config).validate(rows)

        assert result.errors == [
            'MOLLY has a RED day on 2026-10-21 but is also assigned to a role on that day.'
        ]

    @pytest.mark.unit
    def test_more_than_one_red_day_is_a_warning(self, week, roster, staffed_rows, config):
        rows = staffed_rows(legal_staffing(week), roster, red_shows={'JASMINE': {week[1].id, week[4].id}})
        result = ScheduleValidator(week, roster, config=config).validate(rows)

        assert result.is_valid is True
        assert 'JASMINE has more than one RED day assigned.' in result.warnings
        assert 'JASMINE does not have a RED day assigned.' not in result.warnings


class TestWorkloadWarnings:

    @pytest.mark.unit
    def test_underutilized_performer(self, week, roster, staffed_rows, config):
        rookie = CastMember(name='ROOKIE', eligible_roles=frozenset(ENSEMBLE_ROLES))
        cast = roster + [rookie]
        staffing = legal_staffing(week)
        put(staffing, week[0].id, 'Sarge', 'ROOKIE')
        result = ScheduleValidator(week, cast, config=config).validate(staffed_rows(staffing, cast))

        assert ('ROOKIE only has 1 show (underutilized) - suggestion: '
                'look for opportunities to assign additional roles') in result.warnings

    @pytest.mark.unit
    def test_underutilized_suggestion_names_an_open_role(self, week, roster, staffed_rows, config):
        rookie = CastMember(name='ROOKIE', eligible_roles=frozenset(ENSEMBLE_ROLES))
        cast = roster + [rookie]
        staffing = legal_staffing(week)
        put(staffing, week[0].id, 'Sarge', 'ROOKIE')
        del staffing[week[1].id]['Who']
        result = ScheduleValidator(week, cast, config=config).validate(staffed_rows(staffing, cast))

        assert ('ROOKIE only has 1 show (underutilized) - suggestion: '
                'assign Who role on Tue Oct 20 7:30 PM') in result.warnings

    @pytest.mark.unit
    def test_overworked_performer(self, week, roster, staffed_rows, config):
        idle = [CastMember(name=f'UNDERSTUDY{i}', eligible_roles=frozenset()) for i in range(10)]
        cast = roster + idle
        result = ScheduleValidator(week, cast, config=config).validate(staffed_rows(legal_staffing(week), cast))

        assert ('MOLLY has 6 shows (potentially overworked) - suggestion: '
                'reassign Cornish on Sat Oct 24 7:30 PM to JASMINE') in result.warnings
        assert not any(w.startswith('UNDERSTUDY0 ') and 'underutilized' in w for w in result.warnings)


class TestValidateSchedule:

    @pytest.mark.unit
    def test_accepts_plain_records(self, week, roster, staffed_rows, config):
        rows = [a.to_dict() for a in staffed_rows(legal_staffing(week), roster)]
        shows = [s.to_dict() for s in week]
        members = [m.to_dict() for m in roster]

        result = validate_schedule(rows, shows, members, config=config)

        assert isinstance(result, ConstraintResult)
        assert result.is_valid is True
        assert result.errors == []
        assert result.to_dict()['isValid'] is True
