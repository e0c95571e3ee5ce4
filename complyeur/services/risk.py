"""Module F: Risk classification, severity scoring and alert thresholds."""
from complyeur.constants import (
    DEFAULT_ALERT_CRITICAL_THRESHOLD,
    DEFAULT_ALERT_WARNING_THRESHOLD,
    SCHENGEN_DAY_LIMIT,
)
from complyeur.errors import InvalidConfigError
from complyeur.models.risk import DEFAULT_RISK_THRESHOLDS, AlertType, RiskLevel, RiskThresholds

# Lower sorts first (most urgent).
RISK_PRIORITY: dict[RiskLevel, int] = {
    RiskLevel.breach: 0,
    RiskLevel.red: 1,
    RiskLevel.amber: 2,
    RiskLevel.green: 3,
}


def get_risk_level(days_remaining: int, thresholds: RiskThresholds = DEFAULT_RISK_THRESHOLDS) -> RiskLevel:
    # breach first: negative values must never land in red
    if days_remaining < 0:
        return RiskLevel.breach
    if days_remaining < thresholds.amber_min:
        return RiskLevel.red
    if days_remaining < thresholds.green_min:
        return RiskLevel.amber
    return RiskLevel.green


def get_severity_score(
    days_remaining: int,
    thresholds: RiskThresholds = DEFAULT_RISK_THRESHOLDS,
    limit: int = SCHENGEN_DAY_LIMIT,
) -> float:
    """Urgency for sorting alerts, strictly increasing as days_remaining falls.

    green 0-33, amber 34-66, red 67-100; a breach scores above 100 and keeps
    growing with the overage, so ten days over ranks worse than one.
    """
    level = get_risk_level(days_remaining, thresholds)
    if level is RiskLevel.breach:
        return 100.0 + abs(days_remaining)
    if level is RiskLevel.red:
        return 67.0 + 33.0 * (thresholds.amber_min - days_remaining) / thresholds.amber_min
    if level is RiskLevel.amber:
        span = thresholds.green_min - thresholds.amber_min
        return 34.0 + 32.0 * (thresholds.green_min - days_remaining) / span
    green_span = max(limit - thresholds.green_min, 1)
    return max(0.0, 33.0 * (limit - days_remaining) / green_span)


def get_risk_description(level: RiskLevel) -> str:
    return {
        RiskLevel.green: "Low risk - plenty of days remaining",
        RiskLevel.amber: "Moderate risk - approaching limit",
        RiskLevel.red: "High risk - limit nearly reached",
        RiskLevel.breach: "Breach - over the 90-day limit",
    }[RiskLevel(level)]


def get_risk_action(level: RiskLevel, days_remaining: int) -> str:
    level = RiskLevel(level)
    if level is RiskLevel.green:
        return "Travel planning can proceed normally."
    if level is RiskLevel.amber:
        return "Plan upcoming travel carefully. Consider spreading out Schengen visits."
    if level is RiskLevel.red:
        return "Limit nearly reached. Avoid new Schengen travel unless absolutely necessary."
    over_by = abs(days_remaining)
    plural = "" if over_by == 1 else "s"
    return f"Over limit by {over_by} day{plural}. Employee must remain outside Schengen until compliant."


def alert_types_crossed(
    days_used: int,
    warning_threshold: int = DEFAULT_ALERT_WARNING_THRESHOLD,
    critical_threshold: int = DEFAULT_ALERT_CRITICAL_THRESHOLD,
    limit: int = SCHENGEN_DAY_LIMIT,
) -> list[AlertType]:
    """Alert types whose days-used threshold has been reached, most severe first."""
    if not 0 < warning_threshold < critical_threshold < limit:
        raise InvalidConfigError(
            "alert_thresholds",
            f"expected 0 < warning ({warning_threshold}) < critical ({critical_threshold}) < {limit}",
        )
    crossed = []
    if days_used > limit:
        crossed.append(AlertType.breach)
    if days_used >= critical_threshold:
        crossed.append(AlertType.urgent)
    if days_used >= warning_threshold:
        crossed.append(AlertType.warning)
    return crossed
