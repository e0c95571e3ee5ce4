"""Module G: Compliance evaluation for one reference date, a batch of employees, or a date range."""
import calendar
import logging
from collections.abc import Mapping, Sequence
from datetime import date, datetime, timedelta

from complyeur.constants import (
    MAX_TRIPS_PER_CALCULATION,
    MAX_VECTOR_RANGE_DAYS,
    SCHENGEN_DAY_LIMIT,
    WINDOW_SIZE_DAYS,
)
from complyeur.errors import InputTooLargeError, InvalidConfigError
from complyeur.models.results import ComplianceResult, DailyCompliance
from complyeur.models.risk import DEFAULT_RISK_THRESHOLDS, CalculationMode, RiskThresholds, parse_mode
from complyeur.models.trip import Trip, active_trips, to_day_index
from complyeur.services.presence import PresenceSignal, check_trip_count, days_used_in_window
from complyeur.services.risk import get_risk_level

log = logging.getLogger(__name__)


def check_reference_date(name: str, value: object) -> None:
    if isinstance(value, datetime) or not isinstance(value, date):
        raise InvalidConfigError(name, f"must be a calendar date, got {value!r}")


def build_result(
    reference_date: date,
    days_used: int,
    thresholds: RiskThresholds = DEFAULT_RISK_THRESHOLDS,
) -> ComplianceResult:
    days_remaining = SCHENGEN_DAY_LIMIT - days_used
    return ComplianceResult(
        reference_date=reference_date,
        days_used=days_used,
        days_remaining=days_remaining,
        risk_level=get_risk_level(days_remaining, thresholds),
        is_compliant=days_used <= SCHENGEN_DAY_LIMIT,
    )


def calculate_compliance(
    trips: Sequence[Trip],
    reference_date: date,
    mode: CalculationMode | str = CalculationMode.audit,
    thresholds: RiskThresholds | None = None,
    compliance_start: date | None = None,
    max_trips: int = MAX_TRIPS_PER_CALCULATION,
) -> ComplianceResult:
    """Days used, days remaining and risk level as of reference_date.

    The trip list is treated as the closed record for one employee. Ghosted
    trips are dropped here even if the caller already filtered them.
    """
    parse_mode(mode)
    check_reference_date("reference_date", reference_date)
    thresholds = thresholds if thresholds is not None else DEFAULT_RISK_THRESHOLDS
    check_trip_count(trips, max_trips)

    counted = active_trips(trips)
    if len(counted) != len(trips):
        log.debug("ignoring %d ghosted trip(s)", len(trips) - len(counted))

    days_used = days_used_in_window(counted, reference_date, compliance_start, max_trips)
    return build_result(reference_date, days_used, thresholds)


def batch_calculate_compliance(
    employees: Mapping[str, Sequence[Trip]],
    reference_date: date,
    thresholds: RiskThresholds | None = None,
    compliance_start: date | None = None,
    max_trips: int = MAX_TRIPS_PER_CALCULATION,
) -> dict[str, ComplianceResult]:
    """Employee id -> compliance result, all against the same reference date."""
    return {
        employee_id: calculate_compliance(
            trips,
            reference_date,
            thresholds=thresholds,
            compliance_start=compliance_start,
            max_trips=max_trips,
        )
        for employee_id, trips in employees.items()
    }


def compute_compliance_vector(
    trips: Sequence[Trip],
    start_date: date,
    end_date: date,
    thresholds: RiskThresholds | None = None,
    compliance_start: date | None = None,
    max_trips: int = MAX_TRIPS_PER_CALCULATION,
) -> list[DailyCompliance]:
    """Daily status for every date in [start_date, end_date].

    The window slides one day at a time: the day falling out of the window is
    subtracted and the new reference day added, instead of recounting 180 days
    per date.
    """
    check_reference_date("start_date", start_date)
    check_reference_date("end_date", end_date)
    if end_date < start_date:
        raise InvalidConfigError("date_range", "start date must be on or before end date")
    span = (end_date - start_date).days + 1
    if span > MAX_VECTOR_RANGE_DAYS:
        raise InputTooLargeError("days in range", span, MAX_VECTOR_RANGE_DAYS)
    thresholds = thresholds if thresholds is not None else DEFAULT_RISK_THRESHOLDS
    check_trip_count(trips, max_trips)

    signal = PresenceSignal.from_trips(active_trips(trips), max_trips=max_trips)
    floor = to_day_index(compliance_start) if compliance_start is not None else None

    def counted(day: int) -> bool:
        return (floor is None or day >= floor) and signal.covers(day)

    first = to_day_index(start_date)
    days_used = signal.days_in_window(start_date, compliance_start)
    result = []
    for offset in range(span):
        day = first + offset
        if offset:
            if counted(day - WINDOW_SIZE_DAYS):
                days_used -= 1
            if counted(day):
                days_used += 1
        days_remaining = SCHENGEN_DAY_LIMIT - days_used
        result.append(
            DailyCompliance(
                date=start_date + timedelta(days=offset),
                days_used=days_used,
                days_remaining=days_remaining,
                risk_level=get_risk_level(days_remaining, thresholds),
            )
        )
    return result


def compute_month_compliance(
    trips: Sequence[Trip],
    year: int,
    month: int,
    thresholds: RiskThresholds | None = None,
    compliance_start: date | None = None,
) -> list[DailyCompliance]:
    last_day = calendar.monthrange(year, month)[1]
    return compute_compliance_vector(
        trips, date(year, month, 1), date(year, month, last_day), thresholds, compliance_start
    )


def compute_year_compliance(
    trips: Sequence[Trip],
    year: int,
    thresholds: RiskThresholds | None = None,
    compliance_start: date | None = None,
) -> list[DailyCompliance]:
    return compute_compliance_vector(trips, date(year, 1, 1), date(year, 12, 31), thresholds, compliance_start)
