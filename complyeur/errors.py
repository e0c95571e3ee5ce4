"""Errors raised by the compliance engine.

Every error is a deterministic validation failure: it is raised where the bad
input is first seen and never replaced by a default value.
"""
from datetime import date


class ComplianceError(Exception):
    """Base class for compliance engine failures."""


class InvalidConfigError(ComplianceError):
    """Malformed configuration (risk thresholds, mode, horizon)."""

    def __init__(self, config_key: str, reason: str):
        self.config_key = config_key
        self.reason = reason
        super().__init__(f'Invalid configuration "{config_key}": {reason}')


class InvalidIntervalError(ComplianceError):
    """A trip whose exit date precedes its entry date."""

    def __init__(self, entry_date: date, exit_date: date):
        self.entry_date = entry_date
        self.exit_date = exit_date
        super().__init__(
            f"Invalid date range: exit ({exit_date.isoformat()}) is before entry ({entry_date.isoformat()})"
        )


class InvalidTripError(ComplianceError):
    """A trip field with the wrong type or an empty value."""

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid trip {field}: {reason}")


class InputTooLargeError(ComplianceError):
    """Input exceeding the engine's resource bounds."""

    def __init__(self, what: str, size: int, limit: int):
        self.what = what
        self.size = size
        self.limit = limit
        super().__init__(f"Too many {what}: {size} (limit {limit})")
