"""Rule constants and engine resource bounds."""

# Maximum days allowed in Schengen within any rolling window.
SCHENGEN_DAY_LIMIT = 90

# Rolling window length, reference date included.
WINDOW_SIZE_DAYS = 180

DEFAULT_SAFE_ENTRY_HORIZON_DAYS = WINDOW_SIZE_DAYS
MAX_SAFE_ENTRY_HORIZON_DAYS = 730

MAX_TRIPS_PER_CALCULATION = 10_000
MAX_VECTOR_RANGE_DAYS = 3_660

# Days-used thresholds for alert detection (breach is always the day limit).
DEFAULT_ALERT_WARNING_THRESHOLD = 70
DEFAULT_ALERT_CRITICAL_THRESHOLD = 85
