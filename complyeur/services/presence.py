"""Module E: Presence-day calculation over the rolling 180-day window.

Trips become +1/-1 events at day granularity. A sweep over the sorted events
yields the days with positive coverage as disjoint runs, so overlapping,
duplicate and back-to-back trips never count a day twice. Cumulative run
lengths (a prefix sum over the presence indicator) answer "how many presence
days between A and B" with one binary search per bound, which is what the
safe-entry search needs once per candidate day.
"""
import logging
from bisect import bisect_right
from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date

from complyeur.constants import MAX_TRIPS_PER_CALCULATION, WINDOW_SIZE_DAYS
from complyeur.errors import InputTooLargeError
from complyeur.models.trip import DayIndex, Trip, from_day_index, to_day_index
from complyeur.services.schengen import is_schengen_country

log = logging.getLogger(__name__)


def window_bounds(reference_date: date, compliance_start: date | None = None) -> tuple[date, date]:
    """[reference - 179, reference], never starting before compliance tracking began."""
    # clamped at the first representable date
    start = from_day_index(max(to_day_index(reference_date) - (WINDOW_SIZE_DAYS - 1), to_day_index(date.min)))
    if compliance_start is not None and start < compliance_start:
        start = compliance_start
    return start, reference_date


def check_trip_count(trips: Sequence[Trip], max_trips: int = MAX_TRIPS_PER_CALCULATION) -> None:
    if len(trips) > max_trips:
        raise InputTooLargeError("trips", len(trips), max_trips)


def presence_events(
    trips: Iterable[Trip],
    clip: tuple[DayIndex, DayIndex] | None = None,
) -> dict[DayIndex, int]:
    """+1 on each counted entry day, -1 on the day after each exit. Optionally clipped to [lo, hi]."""
    deltas: dict[DayIndex, int] = defaultdict(int)
    for trip in trips:
        if not is_schengen_country(trip.country):
            continue
        start, end = trip.entry_day, trip.exit_day
        if clip is not None:
            start, end = max(start, clip[0]), min(end, clip[1])
            if end < start:
                continue
        deltas[start] += 1
        deltas[end + 1] -= 1
    return deltas


def _runs_from_events(deltas: dict[DayIndex, int]) -> list[tuple[DayIndex, DayIndex]]:
    runs: list[tuple[DayIndex, DayIndex]] = []
    coverage = 0
    run_start: DayIndex | None = None
    for day in sorted(deltas):
        step = deltas[day]
        if step == 0:
            continue
        before = coverage
        coverage += step
        if before == 0 and coverage > 0:
            run_start = day
        elif before > 0 and coverage == 0:
            runs.append((run_start, day - 1))
            run_start = None
    return runs


class PresenceSignal:
    """Distinct Schengen presence days, stored as sorted disjoint runs of day indices."""

    def __init__(self, runs: list[tuple[DayIndex, DayIndex]]):
        self._runs = runs
        self._starts = [start for start, _ in runs]
        # _prefix[i] = presence days in runs[:i]
        self._prefix = [0]
        for start, end in runs:
            self._prefix.append(self._prefix[-1] + end - start + 1)

    @classmethod
    def from_trips(
        cls,
        trips: Sequence[Trip],
        clip: tuple[date, date] | None = None,
        max_trips: int = MAX_TRIPS_PER_CALCULATION,
    ) -> "PresenceSignal":
        check_trip_count(trips, max_trips)
        day_clip = None
        if clip is not None:
            day_clip = (to_day_index(clip[0]), to_day_index(clip[1]))
        return cls(_runs_from_events(presence_events(trips, day_clip)))

    @property
    def runs(self) -> list[tuple[DayIndex, DayIndex]]:
        return list(self._runs)

    @property
    def total_days(self) -> int:
        return self._prefix[-1]

    def _count_through(self, day: DayIndex) -> int:
        i = bisect_right(self._starts, day)
        if i == 0:
            return 0
        start, end = self._runs[i - 1]
        return self._prefix[i - 1] + min(end, day) - start + 1

    def count(self, start: DayIndex, end: DayIndex) -> int:
        """Presence days in [start, end], both inclusive."""
        if end < start:
            return 0
        return self._count_through(end) - self._count_through(start - 1)

    def covers(self, day: DayIndex) -> bool:
        return self.count(day, day) == 1

    def days_in_window(self, reference_date: date, compliance_start: date | None = None) -> int:
        start, end = window_bounds(reference_date, compliance_start)
        return self.count(to_day_index(start), to_day_index(end))

    def dates(self) -> list[date]:
        return [from_day_index(d) for start, end in self._runs for d in range(start, end + 1)]

    def bounds(self) -> tuple[date, date] | None:
        if not self._runs:
            return None
        return from_day_index(self._runs[0][0]), from_day_index(self._runs[-1][1])


def days_used_in_window(
    trips: Sequence[Trip],
    reference_date: date,
    compliance_start: date | None = None,
    max_trips: int = MAX_TRIPS_PER_CALCULATION,
) -> int:
    """Distinct presence days in the window ending on reference_date."""
    window = window_bounds(reference_date, compliance_start)
    if window[1] < window[0]:
        # reference date precedes compliance tracking
        return 0
    signal = PresenceSignal.from_trips(trips, clip=window, max_trips=max_trips)
    log.debug(
        "presence window %s..%s: %d trips, %d days",
        window[0].isoformat(), window[1].isoformat(), len(trips), signal.total_days,
    )
    return signal.total_days


def presence_dates(trips: Sequence[Trip], max_trips: int = MAX_TRIPS_PER_CALCULATION) -> list[date]:
    """Every distinct Schengen presence date, oldest first."""
    return PresenceSignal.from_trips(trips, max_trips=max_trips).dates()


def presence_bounds(trips: Sequence[Trip]) -> tuple[date, date] | None:
    return PresenceSignal.from_trips(trips).bounds()
