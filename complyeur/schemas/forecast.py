"""Forecast (future job alerts, what-if) schemas."""
from datetime import date
from pydantic import BaseModel, Field
from complyeur.models.risk import RiskLevel
from complyeur.schemas.compliance import ThresholdsIn, TripIn


class ForecastRequest(BaseModel):
    candidate: TripIn
    trips: list[TripIn] = Field(default_factory=list)
    thresholds: ThresholdsIn | None = None


class WhatIfRequest(BaseModel):
    trips: list[TripIn] = Field(default_factory=list)
    entry_date: date
    exit_date: date
    country: str
    thresholds: ThresholdsIn | None = None


class FutureForecastRequest(BaseModel):
    trips: list[TripIn] = Field(default_factory=list)
    today: date | None = None
    sort: str = "date"  # date | risk | country
    descending: bool = False
    risk_filter: str = "all"  # all | at-risk | critical
    thresholds: ThresholdsIn | None = None


class ForecastResponse(BaseModel):
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

    class Config:
        from_attributes = True
