"""
Unit tests for WorkloadAnalytics.
"""
from datetime import date

import pytest

from cast_scheduler.models import Assignment, CastMember, ShowStatus, OFF
from cast_scheduler.services.show_index import ShowIndex
from cast_scheduler.services.workload_analytics import WorkloadAnalytics

CAST = [
    CastMember(name='ALEX', eligible_roles=frozenset({'Who'})),
    CastMember(name='BEA', eligible_roles=frozenset({'Who'})),
]


class TestWorkloadAnalytics:

    @pytest.fixture
    def analytics(self, index, config):
        return WorkloadAnalytics(index, CAST, config)

    @pytest.mark.unit
    def test_show_counts_are_distinct_active_shows(self, analytics, week):
        rows = [
            Assignment(show_id=week[0].id, role='Who', performer='ALEX'),
            Assignment(show_id=week[0].id, role='Sarge', performer='ALEX'),
            Assignment(show_id=week[1].id, role='Who', performer='ALEX'),
            Assignment(show_id=week[1].id, role=OFF, performer='BEA'),
            Assignment(show_id=week[2].id, role='Who', performer='GHOST'),
            Assignment(show_id='not-a-show', role='Who', performer='BEA'),
        ]
        assert analytics.show_counts(rows) == {'ALEX': 2, 'BEA': 0, 'GHOST': 1}

    @pytest.mark.unit
    def test_full_days_off(self, analytics, week):
        # Wednesday is only partly worked, so it is not a full day off
        rows = [Assignment(show_id=s.id, role='Who', performer='ALEX') for s in week[:3]]
        days_off = analytics.full_days_off(rows)

        assert days_off['ALEX'] == [date(2026, 10, 22), date(2026, 10, 23), date(2026, 10, 24)]
        assert len(days_off['BEA']) == 6
        assert analytics.day_off_stats(rows) == {'ALEX': 3, 'BEA': 6}

    @pytest.mark.unit
    def test_company_day_off_counts_for_everyone(self, config, show_factory):
        shows = [
            show_factory('2026-10-19', '19:30'),
            show_factory('2026-10-20', status=ShowStatus.DAYOFF),
        ]
        analytics = WorkloadAnalytics(ShowIndex(shows), CAST, config)
        rows = [Assignment(show_id=shows[0].id, role='Who', performer='ALEX')]

        assert analytics.full_days_off(rows)['ALEX'] == [date(2026, 10, 20)]

    @pytest.mark.unit
    def test_average_and_threshold(self, analytics):
        average = WorkloadAnalytics.average_shows({'ALEX': 6, 'BEA': 2})
        assert average == 4.0
        assert analytics.overworked_threshold(average) == 6
        assert WorkloadAnalytics.average_shows({}) == 0.0

    @pytest.mark.unit
    def test_utilisation_status(self, analytics):
        assert analytics.utilisation_status(1, 4.0) == 'underutilized'
        assert analytics.utilisation_status(0, 4.0) == 'normal'
        assert analytics.utilisation_status(4, 4.0) == 'normal'
        assert analytics.utilisation_status(7, 4.0) == 'overworked'

    @pytest.mark.unit
    def test_short_weeks_are_never_flagged(self, config, show_factory):
        shows = [show_factory(f'2026-10-{d}', '19:30') for d in (19, 20, 21)]
        analytics = WorkloadAnalytics(ShowIndex(shows), CAST, config)

        assert analytics.utilisation_status(1, 1.0) == 'normal'
        assert analytics.utilisation_status(3, 1.0) == 'normal'
