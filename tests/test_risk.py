import math

import pytest

from complyeur.errors import InvalidConfigError
from complyeur.models import AlertType, CalculationMode, RiskLevel, RiskThresholds, parse_mode
from complyeur.services.risk import (
    alert_types_crossed,
    get_risk_action,
    get_risk_description,
    get_risk_level,
    get_severity_score,
)


@pytest.mark.parametrize(
    "days_remaining,expected",
    [
        (90, RiskLevel.green),
        (30, RiskLevel.green),
        (29, RiskLevel.amber),
        (10, RiskLevel.amber),
        (9, RiskLevel.red),
        (0, RiskLevel.red),
        (-1, RiskLevel.breach),
        (-90, RiskLevel.breach),
    ],
)
def test_default_risk_levels(days_remaining, expected):
    assert get_risk_level(days_remaining) is expected


def test_custom_thresholds():
    strict = RiskThresholds(green_min=45, amber_min=15)
    assert get_risk_level(44, strict) is RiskLevel.amber
    assert get_risk_level(14, strict) is RiskLevel.red
    assert get_risk_level(45, strict) is RiskLevel.green


@pytest.mark.parametrize(
    "green_min,amber_min",
    [
        (10, 10),
        (10, 20),
        (math.nan, 10),
        (30, math.nan),
        (math.inf, 10),
        (30, -1),
        ("30", 10),
        (True, 0),
    ],
)
def test_invalid_thresholds_rejected(green_min, amber_min):
    with pytest.raises(InvalidConfigError):
        RiskThresholds(green_min=green_min, amber_min=amber_min)


def test_invalid_threshold_error_names_key():
    with pytest.raises(InvalidConfigError) as exc:
        RiskThresholds(green_min=10, amber_min=20)
    assert exc.value.config_key == "thresholds.amber_min"
    assert "must be less than green threshold" in str(exc.value)


@pytest.mark.parametrize(
    "thresholds",
    [RiskThresholds(), RiskThresholds(green_min=45, amber_min=15), RiskThresholds(green_min=30, amber_min=0)],
)
def test_severity_strictly_increases_as_days_remaining_fall(thresholds):
    scores = [get_severity_score(d, thresholds) for d in range(90, -30, -1)]
    assert all(a < b for a, b in zip(scores, scores[1:]))


def test_severity_bands():
    assert get_severity_score(90) == 0
    assert get_severity_score(30) == pytest.approx(33)
    assert get_severity_score(10) == pytest.approx(66)
    assert get_severity_score(0) == pytest.approx(100)
    assert get_severity_score(-10) > get_severity_score(-1) > 100


def test_descriptions_and_actions():
    assert "Low risk" in get_risk_description(RiskLevel.green)
    assert "Breach" in get_risk_description("breach")
    assert get_risk_action(RiskLevel.breach, -1).startswith("Over limit by 1 day.")
    assert get_risk_action(RiskLevel.breach, -5).startswith("Over limit by 5 days.")
    assert "proceed normally" in get_risk_action(RiskLevel.green, 60)


@pytest.mark.parametrize(
    "days_used,expected",
    [
        (0, []),
        (69, []),
        (70, [AlertType.warning]),
        (84, [AlertType.warning]),
        (85, [AlertType.urgent, AlertType.warning]),
        (90, [AlertType.urgent, AlertType.warning]),
        (91, [AlertType.breach, AlertType.urgent, AlertType.warning]),
    ],
)
def test_alert_types_crossed(days_used, expected):
    assert alert_types_crossed(days_used) == expected


def test_alert_thresholds_must_be_ordered():
    with pytest.raises(InvalidConfigError):
        alert_types_crossed(50, warning_threshold=85, critical_threshold=70)
    with pytest.raises(InvalidConfigError):
        alert_types_crossed(50, warning_threshold=70, critical_threshold=95)


def test_parse_mode():
    assert parse_mode("audit") is CalculationMode.audit
    with pytest.raises(InvalidConfigError) as exc:
        parse_mode("forecast")
    assert exc.value.config_key == "mode"


def test_green_severity_never_negative():
    assert get_severity_score(95) == 0
    wide_green = RiskThresholds(green_min=95, amber_min=10)
    assert get_severity_score(96, wide_green) == 0
    assert 0 <= get_severity_score(92, wide_green) < get_severity_score(80, wide_green)
