import random
from datetime import date, datetime, timedelta

import pytest

from complyeur.errors import InputTooLargeError, InvalidConfigError, InvalidIntervalError, InvalidTripError
from complyeur.models import RiskLevel, RiskThresholds, Trip
from complyeur.services.compliance import (
    batch_calculate_compliance,
    calculate_compliance,
    compute_compliance_vector,
    compute_month_compliance,
    compute_year_compliance,
)
from complyeur.services.schengen import is_schengen_country
from tests.factories import REF, shift, trip, used_up_to

COUNTRIES = ["FR", "DE", "IT", "ES", "GB", "IE", "MC", "US"]


def oracle_days_used(trips, reference, compliance_start=None):
    """Brute force: the set of distinct counted dates inside the window."""
    start = reference - timedelta(days=179)
    if compliance_start is not None and compliance_start > start:
        start = compliance_start
    seen = set()
    for t in trips:
        if t.ghosted or not is_schengen_country(t.country):
            continue
        d = t.entry_date
        while d <= t.exit_date:
            if start <= d <= reference:
                seen.add(d)
            d += timedelta(days=1)
    return len(seen)


def random_trips(rng, n, around=REF):
    trips = []
    for _ in range(n):
        entry = shift(around, rng.randint(-400, 60))
        trips.append(
            trip(
                entry,
                shift(entry, rng.randint(0, 45)),
                rng.choice(COUNTRIES),
                ghosted=rng.random() < 0.1,
            )
        )
    return trips


@pytest.mark.parametrize(
    "used,remaining,level,compliant",
    [
        (0, 90, RiskLevel.green, True),
        (30, 60, RiskLevel.green, True),
        (70, 20, RiskLevel.amber, True),
        (82, 8, RiskLevel.red, True),
        (90, 0, RiskLevel.red, True),
        (91, -1, RiskLevel.breach, False),
        (95, -5, RiskLevel.breach, False),
    ],
)
def test_reference_scenarios(used, remaining, level, compliant):
    trips = [used_up_to(REF, used)] if used else []
    result = calculate_compliance(trips, REF)
    assert result.reference_date == REF
    assert result.days_used == used
    assert result.days_remaining == remaining
    assert result.risk_level is level
    assert result.is_compliant is compliant


def test_days_used_never_exceeds_window():
    result = calculate_compliance([used_up_to(REF, 400)], REF)
    assert result.days_used == 180
    assert result.days_remaining == -90
    assert result.risk_level is RiskLevel.breach


def test_trips_outside_window_do_not_change_result():
    base = [trip(shift(REF, -40), shift(REF, -11))]
    noisy = base + [
        trip(shift(REF, -500), shift(REF, -181)),
        trip(shift(REF, 1), shift(REF, 80)),
    ]
    assert calculate_compliance(noisy, REF) == calculate_compliance(base, REF)


def test_overlapping_trips_not_double_counted():
    trips = [
        trip(shift(REF, -20), shift(REF, -1)),
        trip(shift(REF, -10), REF, "DE"),
        trip(shift(REF, -20), shift(REF, -1)),
    ]
    assert calculate_compliance(trips, REF).days_used == 21


def test_ghosted_trips_ignored():
    trips = [used_up_to(REF, 30), trip(shift(REF, -100), shift(REF, -41), ghosted=True)]
    assert calculate_compliance(trips, REF).days_used == 30


def test_custom_thresholds_change_only_the_level():
    trips = [used_up_to(REF, 50)]
    strict = calculate_compliance(trips, REF, thresholds=RiskThresholds(green_min=45, amber_min=15))
    default = calculate_compliance(trips, REF)
    assert strict.days_remaining == default.days_remaining == 40
    assert default.risk_level is RiskLevel.green
    assert strict.risk_level is RiskLevel.amber


def test_compliance_start_floor():
    result = calculate_compliance([used_up_to(REF, 95)], REF, compliance_start=shift(REF, -59))
    assert result.days_used == 60
    assert result.is_compliant


def test_unknown_mode_rejected():
    with pytest.raises(InvalidConfigError):
        calculate_compliance([], REF, mode="planning")


def test_reference_date_must_be_a_date():
    with pytest.raises(InvalidConfigError):
        calculate_compliance([], datetime(2025, 6, 30, 12, 0))
    with pytest.raises(InvalidConfigError):
        calculate_compliance([], "2025-06-30")


def test_trip_validation():
    with pytest.raises(InvalidIntervalError) as exc:
        Trip(entry_date=date(2025, 5, 10), exit_date=date(2025, 5, 9), country="FR")
    assert exc.value.entry_date == date(2025, 5, 10)
    with pytest.raises(InvalidTripError):
        Trip(entry_date=datetime(2025, 5, 10, 9, 30), exit_date=date(2025, 5, 12), country="FR")
    with pytest.raises(InvalidTripError):
        Trip(entry_date=date(2025, 5, 10), exit_date=date(2025, 5, 12), country="  ")
    assert Trip(entry_date=date(2025, 5, 10), exit_date=date(2025, 5, 10), country="FR").duration_days == 1


def test_too_many_trips():
    trips = [trip(shift(REF, -i), shift(REF, -i)) for i in range(6)]
    with pytest.raises(InputTooLargeError):
        calculate_compliance(trips, REF, max_trips=5)


def test_matches_brute_force_on_random_histories():
    rng = random.Random(1809)
    for _ in range(200):
        trips = random_trips(rng, rng.randint(0, 12))
        reference = shift(REF, rng.randint(-30, 30))
        result = calculate_compliance(trips, reference)
        expected = oracle_days_used(trips, reference)
        assert result.days_used == expected
        assert 0 <= result.days_used <= 180
        assert result.days_remaining == 90 - expected
        assert (result.risk_level is RiskLevel.breach) == (result.days_remaining < 0)


def test_batch_evaluates_each_employee():
    results = batch_calculate_compliance(
        {"emp-1": [used_up_to(REF, 30)], "emp-2": [used_up_to(REF, 95)], "emp-3": []},
        REF,
    )
    assert set(results) == {"emp-1", "emp-2", "emp-3"}
    assert results["emp-1"].risk_level is RiskLevel.green
    assert results["emp-2"].risk_level is RiskLevel.breach
    assert results["emp-3"].days_used == 0


def test_vector_matches_point_evaluation():
    rng = random.Random(42)
    trips = random_trips(rng, 15)
    start, end = shift(REF, -200), shift(REF, 60)
    floor = shift(REF, -120)
    for compliance_start in (None, floor):
        vector = compute_compliance_vector(trips, start, end, compliance_start=compliance_start)
        assert len(vector) == (end - start).days + 1
        for day in vector:
            point = calculate_compliance(trips, day.date, compliance_start=compliance_start)
            assert (day.days_used, day.days_remaining, day.risk_level) == (
                point.days_used,
                point.days_remaining,
                point.risk_level,
            )


def test_vector_rejects_bad_ranges():
    with pytest.raises(InvalidConfigError):
        compute_compliance_vector([], REF, shift(REF, -1))
    with pytest.raises(InputTooLargeError):
        compute_compliance_vector([], REF, shift(REF, 3660))


def test_single_day_vector():
    [day] = compute_compliance_vector([used_up_to(REF, 70)], REF, REF)
    assert day.date == REF
    assert day.days_used == 70
    assert day.risk_level is RiskLevel.amber


def test_month_and_year_vectors():
    june = compute_month_compliance([], 2025, 6)
    assert [d.date for d in (june[0], june[-1])] == [date(2025, 6, 1), date(2025, 6, 30)]
    assert len(june) == 30
    assert len(compute_month_compliance([], 2024, 2)) == 29
    assert len(compute_year_compliance([], 2024)) == 366


def test_reference_dates_at_calendar_edges():
    assert calculate_compliance([], date(1, 3, 1)).days_used == 0
    early = [trip(date.min, date(1, 2, 9))]
    assert calculate_compliance(early, date(1, 3, 1)).days_used == 40
    vector = compute_compliance_vector(early, date.min, date(1, 1, 31))
    assert [d.days_used for d in vector] == list(range(1, 32))
    late = [trip(date(9999, 12, 1), date.max)]
    assert calculate_compliance(late, date.max).days_used == 31
