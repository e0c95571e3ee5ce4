"""Module B: Risk levels, thresholds and calculation modes."""
import enum
import math
from dataclasses import dataclass

from complyeur.errors import InvalidConfigError


class RiskLevel(str, enum.Enum):
    green = "green"
    amber = "amber"
    red = "red"
    breach = "breach"


class CalculationMode(str, enum.Enum):
    # Closed historical record as of the reference date. Forecast overlays
    # are handled by the forecast service, not by a second mode.
    audit = "audit"


class AlertType(str, enum.Enum):
    warning = "warning"
    urgent = "urgent"
    breach = "breach"


def _check_threshold(key: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfigError(key, f"must be a number, got {value!r}")
    if math.isnan(value):
        raise InvalidConfigError(key, "must not be NaN")
    if not math.isfinite(value):
        raise InvalidConfigError(key, "must be finite")
    if value < 0:
        raise InvalidConfigError(key, "cannot be negative")


@dataclass(frozen=True)
class RiskThresholds:
    """Days-remaining boundaries: green at or above green_min, amber at or above amber_min."""

    green_min: float = 30
    amber_min: float = 10

    def __post_init__(self) -> None:
        _check_threshold("thresholds.green_min", self.green_min)
        _check_threshold("thresholds.amber_min", self.amber_min)
        if self.amber_min >= self.green_min:
            raise InvalidConfigError(
                "thresholds.amber_min",
                f"amber threshold ({self.amber_min}) must be less than green threshold ({self.green_min})",
            )


DEFAULT_RISK_THRESHOLDS = RiskThresholds(green_min=30, amber_min=10)


def parse_mode(mode: "CalculationMode | str") -> CalculationMode:
    try:
        return CalculationMode(mode)
    except ValueError:
        allowed = ", ".join(m.value for m in CalculationMode)
        raise InvalidConfigError("mode", f"unsupported mode {mode!r} (allowed: {allowed})") from None
