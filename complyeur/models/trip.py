"""Module A: Trip interval model."""
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from complyeur.errors import InvalidIntervalError, InvalidTripError

DayIndex = int


def to_day_index(value: date) -> DayIndex:
    """Calendar date -> timezone-free day index (proleptic ordinal)."""
    return value.toordinal()


def from_day_index(day: DayIndex) -> date:
    return date.fromordinal(day)


def _check_date(field: str, value: object) -> None:
    # datetime subclasses date; a time-of-day has no meaning here
    if isinstance(value, datetime) or not isinstance(value, date):
        raise InvalidTripError(field, value, "must be a calendar date (no time of day)")


@dataclass(frozen=True)
class Trip:
    """A stay in one country. Entry and exit days both count as full days."""

    entry_date: date
    exit_date: date
    country: str
    id: str | None = None
    ghosted: bool = False  # withdrawn / private: excluded from every calculation

    def __post_init__(self) -> None:
        _check_date("entry_date", self.entry_date)
        _check_date("exit_date", self.exit_date)
        if not isinstance(self.country, str) or not self.country.strip():
            raise InvalidTripError("country", self.country, "country code is required")
        if self.exit_date < self.entry_date:
            raise InvalidIntervalError(self.entry_date, self.exit_date)

    @property
    def entry_day(self) -> DayIndex:
        return to_day_index(self.entry_date)

    @property
    def exit_day(self) -> DayIndex:
        return to_day_index(self.exit_date)

    @property
    def duration_days(self) -> int:
        return (self.exit_date - self.entry_date).days + 1


def day_before(value: date) -> date | None:
    """None for the first representable date."""
    if value == date.min:
        return None
    return value - timedelta(days=1)


def active_trips(trips) -> list[Trip]:
    """Drop ghosted trips; a stale cache may still hand them in."""
    return [t for t in trips if not t.ghosted]
