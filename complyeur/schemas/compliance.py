"""Compliance request/response schemas."""
import datetime as dt
from datetime import date
from pydantic import BaseModel, Field
from complyeur.models.risk import AlertType, RiskLevel, RiskThresholds
from complyeur.models.trip import Trip


class TripIn(BaseModel):
    id: str | None = None
    country: str
    entry_date: date
    exit_date: date
    ghosted: bool = False

    def to_trip(self) -> Trip:
        return Trip(
            entry_date=self.entry_date,
            exit_date=self.exit_date,
            country=self.country,
            id=self.id,
            ghosted=self.ghosted,
        )


class ThresholdsIn(BaseModel):
    green_min: float
    amber_min: float

    def to_thresholds(self) -> RiskThresholds:
        return RiskThresholds(green_min=self.green_min, amber_min=self.amber_min)


class ComplianceRequest(BaseModel):
    trips: list[TripIn] = Field(default_factory=list)
    reference_date: date
    mode: str = "audit"
    thresholds: ThresholdsIn | None = None


class ComplianceResponse(BaseModel):
    reference_date: date
    window_start: date
    window_end: date
    days_used: int
    days_remaining: int
    risk_level: RiskLevel
    is_compliant: bool
    severity_score: float
    risk_description: str
    risk_action: str
    alerts: list[AlertType] = []


class BatchComplianceRequest(BaseModel):
    employees: dict[str, list[TripIn]]
    reference_date: date
    thresholds: ThresholdsIn | None = None


class BatchComplianceResponse(BaseModel):
    reference_date: date
    results: dict[str, ComplianceResponse]


class VectorRequest(BaseModel):
    trips: list[TripIn] = Field(default_factory=list)
    start_date: date
    end_date: date
    thresholds: ThresholdsIn | None = None


class DailyComplianceResponse(BaseModel):
    date: dt.date
    days_used: int
    days_remaining: int
    risk_level: RiskLevel

    class Config:
        from_attributes = True


class SafeEntryRequest(BaseModel):
    trips: list[TripIn] = Field(default_factory=list)
    from_date: date
    horizon_days: int | None = None  # server default when omitted


class SafeEntryResponse(BaseModel):
    can_enter_today: bool
    earliest_safe_date: date | None
    days_until_compliant: int | None
    days_used_on_entry: int
    max_stay_days: int

    class Config:
        from_attributes = True
