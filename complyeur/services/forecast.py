"""Module I: Forecasts for future or hypothetical trips (future job alerts, what-if planning).

A forecast needs two presence signals: the employee's other trips (days used
before entry) and the same trips plus the candidate (days used at exit, and
the safe-entry search). When every upcoming trip is forecast at once, the
candidate is already part of the list and none of its days fall before its
own entry, so one signal over the full list serves every forecast.
"""
import logging
import uuid
from collections import Counter
from collections.abc import Sequence
from datetime import date

from complyeur.constants import DEFAULT_SAFE_ENTRY_HORIZON_DAYS, MAX_TRIPS_PER_CALCULATION
from complyeur.errors import InvalidConfigError
from complyeur.models.results import ForecastResult
from complyeur.models.risk import DEFAULT_RISK_THRESHOLDS, RiskLevel, RiskThresholds
from complyeur.models.trip import Trip, active_trips, day_before
from complyeur.services.compliance import build_result, check_reference_date
from complyeur.services.presence import PresenceSignal, check_trip_count
from complyeur.services.risk import RISK_PRIORITY
from complyeur.services.safe_entry import check_horizon, safe_entry_on_signal
from complyeur.services.schengen import is_schengen_country

log = logging.getLogger(__name__)

SORT_FIELDS = ("date", "risk", "country")
RISK_FILTERS = ("all", "at-risk", "critical")


def _is_same_trip(trip: Trip, candidate: Trip) -> bool:
    if trip is candidate:
        return True
    return candidate.id is not None and trip.id == candidate.id


def _forecast(
    candidate: Trip,
    before: PresenceSignal,
    after: PresenceSignal,
    thresholds: RiskThresholds,
    compliance_start: date | None,
    horizon_days: int,
    is_scenario: bool,
) -> ForecastResult:
    eve = day_before(candidate.entry_date)
    used_before = 0 if eve is None else before.days_in_window(eve, compliance_start)
    result = build_result(
        candidate.exit_date,
        after.days_in_window(candidate.exit_date, compliance_start),
        thresholds,
    )

    compliant_from = None
    if not result.is_compliant:
        compliant_from = safe_entry_on_signal(after, candidate.exit_date, horizon_days, compliance_start)
        log.info(
            "trip %s to %s breaches at exit (%d days used); compliant from %s",
            candidate.id or "<unsaved>",
            candidate.country,
            result.days_used,
            compliant_from.isoformat() if compliant_from else "beyond horizon",
        )

    return ForecastResult(
        trip_id=candidate.id,
        country=candidate.country,
        entry_date=candidate.entry_date,
        exit_date=candidate.exit_date,
        trip_duration=candidate.duration_days,
        is_schengen=is_schengen_country(candidate.country),
        days_used_before_trip=used_before,
        days_after_trip=result.days_used,
        days_remaining_after_trip=result.days_remaining,
        risk_level=result.risk_level,
        is_compliant=result.is_compliant,
        compliant_from_date=compliant_from,
        is_scenario=is_scenario,
    )


def calculate_future_job_compliance(
    candidate: Trip,
    trips: Sequence[Trip],
    thresholds: RiskThresholds | None = None,
    compliance_start: date | None = None,
    horizon_days: int = DEFAULT_SAFE_ENTRY_HORIZON_DAYS,
    max_trips: int = MAX_TRIPS_PER_CALCULATION,
    is_scenario: bool = False,
) -> ForecastResult:
    """Impact of adding `candidate` to an employee's trips.

    `trips` may already contain the candidate (same id); that placeholder is
    dropped so the trip is never counted twice.
    """
    check_trip_count(trips, max_trips)
    check_horizon(horizon_days)
    others = active_trips(t for t in trips if not _is_same_trip(t, candidate))
    return _forecast(
        candidate,
        PresenceSignal.from_trips(others, max_trips=max_trips),
        PresenceSignal.from_trips(active_trips([*others, candidate]), max_trips=max_trips + 1),
        thresholds if thresholds is not None else DEFAULT_RISK_THRESHOLDS,
        compliance_start,
        horizon_days,
        is_scenario,
    )


def calculate_what_if_scenario(
    trips: Sequence[Trip],
    entry_date: date,
    exit_date: date,
    country: str,
    thresholds: RiskThresholds | None = None,
    compliance_start: date | None = None,
    horizon_days: int = DEFAULT_SAFE_ENTRY_HORIZON_DAYS,
    max_trips: int = MAX_TRIPS_PER_CALCULATION,
) -> ForecastResult:
    """Forecast a trip that is not scheduled anywhere yet."""
    check_trip_count(trips, max_trips)
    scenario = Trip(
        entry_date=entry_date,
        exit_date=exit_date,
        country=country.strip().upper() if isinstance(country, str) else country,
        id=f"scenario-{uuid.uuid4().hex[:12]}",
    )
    return calculate_future_job_compliance(
        scenario,
        trips,
        thresholds=thresholds,
        compliance_start=compliance_start,
        horizon_days=horizon_days,
        max_trips=max_trips,
        is_scenario=True,
    )


def calculate_all_future_forecasts(
    trips: Sequence[Trip],
    today: date,
    thresholds: RiskThresholds | None = None,
    compliance_start: date | None = None,
    horizon_days: int = DEFAULT_SAFE_ENTRY_HORIZON_DAYS,
    max_trips: int = MAX_TRIPS_PER_CALCULATION,
) -> list[ForecastResult]:
    """One forecast per non-ghosted trip entering on or after today."""
    check_reference_date("today", today)
    check_trip_count(trips, max_trips)
    check_horizon(horizon_days)
    thresholds = thresholds if thresholds is not None else DEFAULT_RISK_THRESHOLDS
    counted = active_trips(trips)
    shared = PresenceSignal.from_trips(counted, max_trips=max_trips)
    ids = Counter(t.id for t in counted if t.id is not None)

    forecasts = []
    for trip in counted:
        if trip.entry_date < today:
            continue
        if trip.id is not None and ids[trip.id] > 1:
            # other records under the same id are dropped with the candidate
            forecasts.append(
                calculate_future_job_compliance(
                    trip,
                    trips,
                    thresholds=thresholds,
                    compliance_start=compliance_start,
                    horizon_days=horizon_days,
                    max_trips=max_trips,
                )
            )
            continue
        forecasts.append(_forecast(trip, shared, shared, thresholds, compliance_start, horizon_days, False))
    return forecasts


def sort_forecasts(
    forecasts: Sequence[ForecastResult],
    field: str = "date",
    descending: bool = False,
) -> list[ForecastResult]:
    keys = {
        "date": lambda f: (f.entry_date, f.exit_date),
        "risk": lambda f: (RISK_PRIORITY[f.risk_level], f.days_remaining_after_trip, f.entry_date),
        "country": lambda f: (f.country, f.entry_date),
    }
    if field not in keys:
        raise InvalidConfigError("sort_field", f"expected one of {', '.join(SORT_FIELDS)}, got {field!r}")
    return sorted(forecasts, key=keys[field], reverse=descending)


def filter_forecasts_by_risk(forecasts: Sequence[ForecastResult], risk_filter: str = "all") -> list[ForecastResult]:
    """'at-risk' keeps anything not green; 'critical' keeps red and breach."""
    if risk_filter == "all":
        return list(forecasts)
    if risk_filter == "at-risk":
        return [f for f in forecasts if f.risk_level is not RiskLevel.green]
    if risk_filter == "critical":
        return [f for f in forecasts if f.risk_level in (RiskLevel.red, RiskLevel.breach)]
    raise InvalidConfigError("risk_filter", f"expected one of {', '.join(RISK_FILTERS)}, got {risk_filter!r}")
