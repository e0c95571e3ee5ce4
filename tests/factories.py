"""Trip builders shared by the test modules."""
from datetime import date, timedelta

from complyeur.models import Trip

REF = date(2025, 6, 30)


def shift(d: date, n: int) -> date:
    return d + timedelta(days=n)


def trip(entry: date, exit: date, country: str = "FR", **kwargs) -> Trip:
    return Trip(entry_date=entry, exit_date=exit, country=country, **kwargs)


def used_up_to(reference: date, n: int, country: str = "FR", **kwargs) -> Trip:
    """One continuous stay of n days ending on reference."""
    return trip(shift(reference, -(n - 1)), reference, country, **kwargs)


def trip_json(entry: date, exit: date, country: str = "FR", **kwargs) -> dict:
    return {"country": country, "entry_date": entry.isoformat(), "exit_date": exit.isoformat(), **kwargs}
