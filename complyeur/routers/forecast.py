"""Future job alerts and what-if planning."""
from datetime import date
from fastapi import APIRouter, Depends
from complyeur.config import Settings
from complyeur.dependencies import engine_http_error, get_app_settings, resolve_thresholds, to_trips
from complyeur.errors import ComplianceError
from complyeur.schemas.forecast import ForecastRequest, ForecastResponse, FutureForecastRequest, WhatIfRequest
from complyeur.services.forecast import (
    calculate_all_future_forecasts,
    calculate_future_job_compliance,
    calculate_what_if_scenario,
    filter_forecasts_by_risk,
    sort_forecasts,
)

router = APIRouter(prefix="/forecast", tags=["forecast"])


@router.post("/", response_model=ForecastResponse)
def forecast_trip(data: ForecastRequest, settings: Settings = Depends(get_app_settings)):
    try:
        result = calculate_future_job_compliance(
            data.candidate.to_trip(),
            to_trips(data.trips),
            thresholds=resolve_thresholds(data.thresholds, settings),
            compliance_start=settings.compliance_start_date,
            horizon_days=settings.safe_entry_horizon_days,
            max_trips=settings.max_trips_per_request,
        )
    except ComplianceError as e:
        raise engine_http_error(e) from e
    return ForecastResponse.model_validate(result)


@router.post("/what-if", response_model=ForecastResponse)
def what_if(data: WhatIfRequest, settings: Settings = Depends(get_app_settings)):
    try:
        result = calculate_what_if_scenario(
            to_trips(data.trips),
            data.entry_date,
            data.exit_date,
            data.country,
            thresholds=resolve_thresholds(data.thresholds, settings),
            compliance_start=settings.compliance_start_date,
            horizon_days=settings.safe_entry_horizon_days,
            max_trips=settings.max_trips_per_request,
        )
    except ComplianceError as e:
        raise engine_http_error(e) from e
    return ForecastResponse.model_validate(result)


@router.post("/future", response_model=list[ForecastResponse])
def future_forecasts(data: FutureForecastRequest, settings: Settings = Depends(get_app_settings)):
    """Every upcoming trip, sorted and filtered for the alerts view."""
    try:
        forecasts = calculate_all_future_forecasts(
            to_trips(data.trips),
            data.today or date.today(),
            thresholds=resolve_thresholds(data.thresholds, settings),
            compliance_start=settings.compliance_start_date,
            horizon_days=settings.safe_entry_horizon_days,
            max_trips=settings.max_trips_per_request,
        )
        forecasts = filter_forecasts_by_risk(forecasts, data.risk_filter)
        forecasts = sort_forecasts(forecasts, data.sort, descending=data.descending)
    except ComplianceError as e:
        raise engine_http_error(e) from e
    return [ForecastResponse.model_validate(f) for f in forecasts]
