"""
Function-level engine API. Inputs are trip lists already scoped to one
employee; every call is pure and returns a fresh value.
"""
from complyeur.services.schengen import (
    is_schengen_country,
    validate_country,
    normalize_country_code,
    schengen_country_codes,
    schengen_countries,
)
from complyeur.services.presence import (
    PresenceSignal,
    window_bounds,
    days_used_in_window,
    presence_dates,
    presence_bounds,
)
from complyeur.services.risk import (
    get_risk_level,
    get_severity_score,
    get_risk_description,
    get_risk_action,
    alert_types_crossed,
)
from complyeur.services.compliance import (
    calculate_compliance,
    batch_calculate_compliance,
    compute_compliance_vector,
    compute_month_compliance,
    compute_year_compliance,
)
from complyeur.services.safe_entry import (
    earliest_safe_entry,
    days_until_compliant,
    get_safe_entry_info,
    max_stay_days,
    project_expiring_days,
)
from complyeur.services.forecast import (
    calculate_future_job_compliance,
    calculate_what_if_scenario,
    calculate_all_future_forecasts,
    sort_forecasts,
    filter_forecasts_by_risk,
)

__all__ = [
    "is_schengen_country",
    "validate_country",
    "normalize_country_code",
    "schengen_country_codes",
    "schengen_countries",
    "PresenceSignal",
    "window_bounds",
    "days_used_in_window",
    "presence_dates",
    "presence_bounds",
    "get_risk_level",
    "get_severity_score",
    "get_risk_description",
    "get_risk_action",
    "alert_types_crossed",
    "calculate_compliance",
    "batch_calculate_compliance",
    "compute_compliance_vector",
    "compute_month_compliance",
    "compute_year_compliance",
    "earliest_safe_entry",
    "days_until_compliant",
    "get_safe_entry_info",
    "max_stay_days",
    "project_expiring_days",
    "calculate_future_job_compliance",
    "calculate_what_if_scenario",
    "calculate_all_future_forecasts",
    "sort_forecasts",
    "filter_forecasts_by_risk",
]
