import random
from datetime import date

import pytest

from complyeur.errors import InputTooLargeError, InvalidConfigError
from complyeur.services.compliance import calculate_compliance
from complyeur.services.safe_entry import (
    days_until_compliant,
    earliest_safe_entry,
    get_safe_entry_info,
    max_stay_days,
    project_expiring_days,
)
from tests.factories import REF, shift, trip, used_up_to


def test_no_history_is_safe_today():
    assert earliest_safe_entry([], REF) == REF
    info = get_safe_entry_info([], REF)
    assert info.can_enter_today
    assert info.earliest_safe_date == REF
    assert info.days_until_compliant == 0
    assert info.days_used_on_entry == 1


def test_full_allowance_waits_for_days_to_age_out():
    # 90 days used, ending yesterday
    trips = [used_up_to(shift(REF, -1), 90)]
    assert earliest_safe_entry(trips, REF) == shift(REF, 90)
    info = get_safe_entry_info(trips, REF)
    assert not info.can_enter_today
    assert info.earliest_safe_date == shift(REF, 90)
    assert info.days_until_compliant == 90
    assert info.days_used_on_entry == 90
    assert days_until_compliant(trips, REF) == 90


def test_safe_date_keeps_entry_day_within_limit():
    rng = random.Random(7)
    for _ in range(50):
        entry = shift(REF, -rng.randint(60, 200))
        trips = [trip(entry, shift(entry, rng.randint(60, 120)))]
        safe = earliest_safe_entry(trips, REF)
        assert safe is not None
        entry_day = trip(safe, safe, "DE")
        assert calculate_compliance(trips + [entry_day], safe).days_used <= 90
        if safe > REF:
            blocked = shift(safe, -1)
            probe = trip(blocked, blocked, "DE")
            assert calculate_compliance(trips + [probe], blocked).days_used > 90


def test_horizon_exhausted_returns_none():
    trips = [used_up_to(shift(REF, -1), 90)]
    assert earliest_safe_entry(trips, REF, horizon_days=30) is None
    assert days_until_compliant(trips, REF, horizon_days=30) is None
    info = get_safe_entry_info(trips, REF, horizon_days=30)
    assert not info.can_enter_today
    assert info.earliest_safe_date is None
    assert info.days_until_compliant is None
    assert info.days_used_on_entry == 90


def test_zero_horizon_checks_only_the_start_date():
    assert earliest_safe_entry([], REF, horizon_days=0) == REF
    assert earliest_safe_entry([used_up_to(shift(REF, -1), 90)], REF, horizon_days=0) is None


def test_horizon_validation():
    with pytest.raises(InvalidConfigError):
        earliest_safe_entry([], REF, horizon_days=-1)
    with pytest.raises(InputTooLargeError):
        earliest_safe_entry([], REF, horizon_days=731)


def test_ghosted_trips_do_not_block_entry():
    trips = [used_up_to(shift(REF, -1), 90, ghosted=True)]
    assert earliest_safe_entry(trips, REF) == REF


def test_compliance_start_floor_frees_days():
    trips = [used_up_to(shift(REF, -1), 90)]
    assert earliest_safe_entry(trips, REF, compliance_start=shift(REF, -10)) == REF


def test_max_stay_days():
    assert max_stay_days([], REF) == 90
    # 80 days used ending yesterday, none of them ageing out within ten days
    assert max_stay_days([used_up_to(shift(REF, -1), 80)], REF) == 10
    assert max_stay_days([used_up_to(shift(REF, -1), 90)], REF) == 0


def test_max_stay_counts_days_ageing_out():
    # 10 days right at the start of the window age out as the stay goes on
    old = trip(shift(REF, -179), shift(REF, -170))
    assert max_stay_days([old], REF) == 90


def test_project_expiring_days():
    old = trip(shift(REF, -179), shift(REF, -170))
    projection = project_expiring_days([old], REF, 3)
    assert [p.date for p in projection] == [REF, shift(REF, 1), shift(REF, 2), shift(REF, 3)]
    assert [p.days_used for p in projection] == [10, 9, 8, 7]
    assert [p.expiring_days for p in projection] == [0, 1, 1, 1]
    assert projection[-1].days_remaining == 83


def test_project_expiring_days_validation():
    with pytest.raises(InvalidConfigError):
        project_expiring_days([], REF, -1)
    with pytest.raises(InputTooLargeError):
        project_expiring_days([], REF, 3660)


def test_search_stops_at_last_representable_date():
    autumn = [trip(date(9999, 8, 1), date.max)]
    assert earliest_safe_entry(autumn, date.max) is None
    info = get_safe_entry_info(autumn, date(9999, 12, 20))
    assert info.earliest_safe_date is None
    assert earliest_safe_entry([], date.max) == date.max
    assert days_until_compliant([], date(9999, 12, 30)) == 0


def test_projection_stops_at_last_representable_date():
    projection = project_expiring_days([], date(9999, 12, 29), 30)
    assert [p.date for p in projection] == [date(9999, 12, 29), date(9999, 12, 30), date.max]
