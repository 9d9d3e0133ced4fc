"""Status enum for reminder urgency levels."""

from enum import Enum


class Status(Enum):
    """Reminder status categories. Lower value = more urgent."""

    OVERDUE = 1
    DUE_SOON = 2
    OK = 3
    UNKNOWN = 4  # No usable odometer reading
