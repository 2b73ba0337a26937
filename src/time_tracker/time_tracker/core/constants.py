"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time
from decimal import Decimal

DEFAULT_SHIFT_START = time(9, 0)
DEFAULT_SHIFT_END = time(18, 0)
# Sunday-first weekday indexes that are working days in a new schedule.
DEFAULT_ACTIVE_WEEKDAYS = (1, 2, 3, 4, 5)

WEEKS_PER_MONTH = Decimal("4.33")

DISPLAY_TIME_FORMAT = "%I:%M %p"
ISO_DATE_FORMAT = "%Y-%m-%d"

MIN_PIN_LENGTH = 4
