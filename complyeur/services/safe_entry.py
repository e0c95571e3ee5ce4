"""Module H: Earliest safe entry and forward projections.

Presence days only ever age out of the window as it slides forward, so a
single forward pass finds the first safe day. The scan stops at a bounded
horizon instead of looping until something qualifies.
"""
import logging
from collections.abc import Sequence
from datetime import date, timedelta

from complyeur.constants import (
    DEFAULT_SAFE_ENTRY_HORIZON_DAYS,
    MAX_SAFE_ENTRY_HORIZON_DAYS,
    MAX_TRIPS_PER_CALCULATION,
    MAX_VECTOR_RANGE_DAYS,
    SCHENGEN_DAY_LIMIT,
    WINDOW_SIZE_DAYS,
)
from complyeur.errors import InputTooLargeError, InvalidConfigError
from complyeur.models.results import ExpiryProjection, SafeEntryResult
from complyeur.models.trip import DayIndex, Trip, active_trips, from_day_index, to_day_index
from complyeur.services.compliance import check_reference_date
from complyeur.services.presence import PresenceSignal

log = logging.getLogger(__name__)


def check_horizon(horizon_days: int) -> None:
    if isinstance(horizon_days, bool) or not isinstance(horizon_days, int) or horizon_days < 0:
        raise InvalidConfigError("horizon_days", f"must be a non-negative integer, got {horizon_days!r}")
    if horizon_days > MAX_SAFE_ENTRY_HORIZON_DAYS:
        raise InputTooLargeError("horizon days", horizon_days, MAX_SAFE_ENTRY_HORIZON_DAYS)


def _window_start(day: DayIndex, floor: DayIndex | None) -> DayIndex:
    start = day - (WINDOW_SIZE_DAYS - 1)
    return start if floor is None else max(start, floor)


def days_used_with_entry(signal: PresenceSignal, day: DayIndex, floor: DayIndex | None = None) -> int:
    """Presence in the window ending on `day` if the subject is also present on `day`."""
    start = _window_start(day, floor)
    used = signal.count(start, day)
    if day >= start and not signal.covers(day):
        used += 1
    return used


def _find_safe_day(
    signal: PresenceSignal,
    first: DayIndex,
    horizon_days: int,
    floor: DayIndex | None,
) -> DayIndex | None:
    # never past the last representable date
    last = min(first + horizon_days, to_day_index(date.max))
    for day in range(first, last + 1):
        if days_used_with_entry(signal, day, floor) <= SCHENGEN_DAY_LIMIT:
            return day
    return None


def earliest_safe_entry(
    trips: Sequence[Trip],
    from_date: date,
    horizon_days: int = DEFAULT_SAFE_ENTRY_HORIZON_DAYS,
    compliance_start: date | None = None,
    max_trips: int = MAX_TRIPS_PER_CALCULATION,
) -> date | None:
    """First date on or after from_date on which a one-day entry keeps days used at or under 90.

    Returns None when nothing qualifies within horizon_days.
    """
    check_reference_date("from_date", from_date)
    check_horizon(horizon_days)
    signal = PresenceSignal.from_trips(active_trips(trips), max_trips=max_trips)
    return safe_entry_on_signal(signal, from_date, horizon_days, compliance_start)


def safe_entry_on_signal(
    signal: PresenceSignal,
    from_date: date,
    horizon_days: int = DEFAULT_SAFE_ENTRY_HORIZON_DAYS,
    compliance_start: date | None = None,
) -> date | None:
    """earliest_safe_entry over a prebuilt signal, for callers evaluating many dates."""
    floor = to_day_index(compliance_start) if compliance_start is not None else None
    first = to_day_index(from_date)
    found = _find_safe_day(signal, first, horizon_days, floor)
    if found is None:
        log.warning("no safe entry date within %d days of %s", horizon_days, from_date.isoformat())
        return None
    return from_day_index(found)


def days_until_compliant(
    trips: Sequence[Trip],
    today: date,
    horizon_days: int = DEFAULT_SAFE_ENTRY_HORIZON_DAYS,
    compliance_start: date | None = None,
    max_trips: int = MAX_TRIPS_PER_CALCULATION,
) -> int | None:
    """0 when entry is safe today; None when the horizon is exhausted."""
    safe_date = earliest_safe_entry(trips, today, horizon_days, compliance_start, max_trips)
    if safe_date is None:
        return None
    return (safe_date - today).days


def get_safe_entry_info(
    trips: Sequence[Trip],
    today: date,
    horizon_days: int = DEFAULT_SAFE_ENTRY_HORIZON_DAYS,
    compliance_start: date | None = None,
    max_trips: int = MAX_TRIPS_PER_CALCULATION,
) -> SafeEntryResult:
    check_reference_date("today", today)
    check_horizon(horizon_days)
    signal = PresenceSignal.from_trips(active_trips(trips), max_trips=max_trips)
    floor = to_day_index(compliance_start) if compliance_start is not None else None

    first = to_day_index(today)
    found = _find_safe_day(signal, first, horizon_days, floor)
    if found is None:
        log.warning("no safe entry date within %d days of %s", horizon_days, today.isoformat())
        return SafeEntryResult(
            can_enter_today=False,
            earliest_safe_date=None,
            days_until_compliant=None,
            days_used_on_entry=signal.days_in_window(today, compliance_start),
        )
    return SafeEntryResult(
        can_enter_today=found == first,
        earliest_safe_date=today + timedelta(days=found - first),
        days_until_compliant=found - first,
        days_used_on_entry=days_used_with_entry(signal, found, floor),
    )


def max_stay_days(
    trips: Sequence[Trip],
    entry_date: date,
    compliance_start: date | None = None,
    max_trips: int = MAX_TRIPS_PER_CALCULATION,
) -> int:
    """Longest continuous stay from entry_date that stays within the limit on every day.

    Days already ageing out of the window during the stay are taken into account.
    """
    check_reference_date("entry_date", entry_date)
    signal = PresenceSignal.from_trips(active_trips(trips), max_trips=max_trips)
    floor = to_day_index(compliance_start) if compliance_start is not None else None

    entry = to_day_index(entry_date)
    # a stay longer than the limit always breaches
    for length in range(1, SCHENGEN_DAY_LIMIT + 1):
        day = entry + length - 1
        start = _window_start(day, floor)
        stay_start = max(entry, start)
        stay_days = day - stay_start + 1 if day >= stay_start else 0
        used = signal.count(start, day) + stay_days - signal.count(stay_start, day)
        if used > SCHENGEN_DAY_LIMIT:
            return length - 1
    return SCHENGEN_DAY_LIMIT


def project_expiring_days(
    trips: Sequence[Trip],
    from_date: date,
    days: int,
    compliance_start: date | None = None,
    max_trips: int = MAX_TRIPS_PER_CALCULATION,
) -> list[ExpiryProjection]:
    """Per-day view of presence days leaving the window over the next `days` days."""
    check_reference_date("from_date", from_date)
    if isinstance(days, bool) or not isinstance(days, int) or days < 0:
        raise InvalidConfigError("days", f"must be a non-negative integer, got {days!r}")
    if days + 1 > MAX_VECTOR_RANGE_DAYS:
        raise InputTooLargeError("days in range", days + 1, MAX_VECTOR_RANGE_DAYS)
    signal = PresenceSignal.from_trips(active_trips(trips), max_trips=max_trips)

    projection = []
    previous = None
    # the projection stops at the last representable date
    last = min(days, to_day_index(date.max) - to_day_index(from_date))
    for offset in range(last + 1):
        current = from_date + timedelta(days=offset)
        used = signal.days_in_window(current, compliance_start)
        expiring = 0 if previous is None else max(0, previous - used)
        projection.append(
            ExpiryProjection(
                date=current,
                expiring_days=expiring,
                days_used=used,
                days_remaining=SCHENGEN_DAY_LIMIT - used,
            )
        )
        previous = used
    return projection
