"""Shared dependencies: settings, request conversion, engine error translation."""
from fastapi import HTTPException
from complyeur.config import Settings, get_settings
from complyeur.errors import ComplianceError, InputTooLargeError
from complyeur.models.risk import RiskThresholds
from complyeur.models.trip import Trip
from complyeur.schemas.compliance import ThresholdsIn, TripIn


def get_app_settings() -> Settings:
    return get_settings()


def to_trips(items: list[TripIn]) -> list[Trip]:
    return [item.to_trip() for item in items]


def resolve_thresholds(body: ThresholdsIn | None, settings: Settings) -> RiskThresholds:
    """Per-request thresholds when given, otherwise the configured company defaults."""
    if body is not None:
        return body.to_thresholds()
    return settings.risk_thresholds()


def engine_http_error(exc: ComplianceError) -> HTTPException:
    if isinstance(exc, InputTooLargeError):
        return HTTPException(status_code=413, detail=str(exc))
    return HTTPException(status_code=422, detail=str(exc))
