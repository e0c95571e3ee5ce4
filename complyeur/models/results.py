"""Module C: Calculation results (value types, recomputed per call)."""
from dataclasses import dataclass
from datetime import date

from complyeur.models.risk import RiskLevel


@dataclass(frozen=True)
class ComplianceResult:
    reference_date: date
    days_used: int
    days_remaining: int  # negative when over the limit
    risk_level: RiskLevel
    is_compliant: bool


@dataclass(frozen=True)
class DailyCompliance:
    date: date
    days_used: int
    days_remaining: int
    risk_level: RiskLevel


@dataclass(frozen=True)
class SafeEntryResult:
    can_enter_today: bool
    earliest_safe_date: date | None  # None only when the search horizon is exhausted
    days_until_compliant: int | None
    days_used_on_entry: int


@dataclass(frozen=True)
class ExpiryProjection:
    date: date
    expiring_days: int
    days_used: int
    days_remaining: int


@dataclass(frozen=True)
class ForecastResult:
    trip_id: str | None
    country: str
    entry_date: date
    exit_date: date
    trip_duration: int
    is_schengen: bool
    days_used_before_trip: int
    days_after_trip: int
    days_remaining_after_trip: int
    risk_level: RiskLevel
    is_compliant: bool
    compliant_from_date: date | None = None
    is_scenario: bool = False
