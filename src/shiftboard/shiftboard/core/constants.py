"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60
MIN_SHIFT_HOURS = 4.0

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

DEFAULT_STORE_TIMEOUT_SECONDS = 5.0
DEFAULT_STORE_CONNECT_ATTEMPTS = 3
DEFAULT_STORE_RETRY_DELAY_SECONDS = 0.2
