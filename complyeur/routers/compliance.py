"""Compliance status: single employee, batch (dashboard), calendar vector, safe entry."""
from fastapi import APIRouter, Depends
from complyeur.config import Settings
from complyeur.dependencies import engine_http_error, get_app_settings, resolve_thresholds, to_trips
from complyeur.errors import ComplianceError
from complyeur.models.results import ComplianceResult
from complyeur.models.risk import RiskThresholds
from complyeur.schemas.compliance import (
    BatchComplianceRequest,
    BatchComplianceResponse,
    ComplianceRequest,
    ComplianceResponse,
    DailyComplianceResponse,
    SafeEntryRequest,
    SafeEntryResponse,
    VectorRequest,
)
from complyeur.services.compliance import (
    batch_calculate_compliance,
    calculate_compliance,
    compute_compliance_vector,
)
from complyeur.services.presence import window_bounds
from complyeur.services.risk import (
    alert_types_crossed,
    get_risk_action,
    get_risk_description,
    get_severity_score,
)
from complyeur.services.safe_entry import get_safe_entry_info, max_stay_days

router = APIRouter(prefix="/compliance", tags=["compliance"])


def _status_response(result: ComplianceResult, thresholds: RiskThresholds, settings: Settings) -> ComplianceResponse:
    window_start, window_end = window_bounds(result.reference_date, settings.compliance_start_date)
    return ComplianceResponse(
        reference_date=result.reference_date,
        window_start=window_start,
        window_end=window_end,
        days_used=result.days_used,
        days_remaining=result.days_remaining,
        risk_level=result.risk_level,
        is_compliant=result.is_compliant,
        severity_score=get_severity_score(result.days_remaining, thresholds),
        risk_description=get_risk_description(result.risk_level),
        risk_action=get_risk_action(result.risk_level, result.days_remaining),
        alerts=alert_types_crossed(
            result.days_used,
            warning_threshold=settings.alert_warning_threshold,
            critical_threshold=settings.alert_critical_threshold,
        ),
    )


@router.post("/evaluate", response_model=ComplianceResponse)
def evaluate(data: ComplianceRequest, settings: Settings = Depends(get_app_settings)):
    try:
        thresholds = resolve_thresholds(data.thresholds, settings)
        result = calculate_compliance(
            to_trips(data.trips),
            data.reference_date,
            mode=data.mode,
            thresholds=thresholds,
            compliance_start=settings.compliance_start_date,
            max_trips=settings.max_trips_per_request,
        )
        return _status_response(result, thresholds, settings)
    except ComplianceError as e:
        raise engine_http_error(e) from e


@router.post("/batch", response_model=BatchComplianceResponse)
def evaluate_batch(data: BatchComplianceRequest, settings: Settings = Depends(get_app_settings)):
    try:
        thresholds = resolve_thresholds(data.thresholds, settings)
        results = batch_calculate_compliance(
            {employee_id: to_trips(trips) for employee_id, trips in data.employees.items()},
            data.reference_date,
            thresholds=thresholds,
            compliance_start=settings.compliance_start_date,
            max_trips=settings.max_trips_per_request,
        )
        return BatchComplianceResponse(
            reference_date=data.reference_date,
            results={
                employee_id: _status_response(result, thresholds, settings)
                for employee_id, result in results.items()
            },
        )
    except ComplianceError as e:
        raise engine_http_error(e) from e


@router.post("/vector", response_model=list[DailyComplianceResponse])
def compliance_vector(data: VectorRequest, settings: Settings = Depends(get_app_settings)):
    try:
        days = compute_compliance_vector(
            to_trips(data.trips),
            data.start_date,
            data.end_date,
            thresholds=resolve_thresholds(data.thresholds, settings),
            compliance_start=settings.compliance_start_date,
            max_trips=settings.max_trips_per_request,
        )
    except ComplianceError as e:
        raise engine_http_error(e) from e
    return [DailyComplianceResponse.model_validate(d) for d in days]


@router.post("/safe-entry", response_model=SafeEntryResponse)
def safe_entry(data: SafeEntryRequest, settings: Settings = Depends(get_app_settings)):
    horizon = data.horizon_days if data.horizon_days is not None else settings.safe_entry_horizon_days
    try:
        trips = to_trips(data.trips)
        info = get_safe_entry_info(
            trips,
            data.from_date,
            horizon_days=horizon,
            compliance_start=settings.compliance_start_date,
            max_trips=settings.max_trips_per_request,
        )
        stay = max_stay_days(
            trips,
            info.earliest_safe_date or data.from_date,
            compliance_start=settings.compliance_start_date,
            max_trips=settings.max_trips_per_request,
        )
    except ComplianceError as e:
        raise engine_http_error(e) from e
    return SafeEntryResponse(
        can_enter_today=info.can_enter_today,
        earliest_safe_date=info.earliest_safe_date,
        days_until_compliant=info.days_until_compliant,
        days_used_on_entry=info.days_used_on_entry,
        max_stay_days=stay,
    )
