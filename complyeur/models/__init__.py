"""
Engine value types. Everything here is immutable and recomputed per call;
persisted trip records are owned by the storage layer, not by this package.
"""
from complyeur.models.trip import Trip, DayIndex, to_day_index, from_day_index, active_trips
from complyeur.models.risk import (
    RiskLevel,
    RiskThresholds,
    CalculationMode,
    AlertType,
    DEFAULT_RISK_THRESHOLDS,
    parse_mode,
)
from complyeur.models.results import (
    ComplianceResult,
    DailyCompliance,
    SafeEntryResult,
    ExpiryProjection,
    ForecastResult,
)

__all__ = [
    "Trip",
    "DayIndex",
    "to_day_index",
    "from_day_index",
    "active_trips",
    "RiskLevel",
    "RiskThresholds",
    "CalculationMode",
    "AlertType",
    "DEFAULT_RISK_THRESHOLDS",
    "parse_mode",
    "ComplianceResult",
    "DailyCompliance",
    "SafeEntryResult",
    "ExpiryProjection",
    "ForecastResult",
]
