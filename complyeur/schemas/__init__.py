from complyeur.schemas.compliance import (
    TripIn,
    ThresholdsIn,
    ComplianceRequest,
    ComplianceResponse,
    BatchComplianceRequest,
    BatchComplianceResponse,
    VectorRequest,
    DailyComplianceResponse,
    SafeEntryRequest,
    SafeEntryResponse,
)
from complyeur.schemas.forecast import ForecastRequest, WhatIfRequest, FutureForecastRequest, ForecastResponse
from complyeur.schemas.country import CountryResponse
