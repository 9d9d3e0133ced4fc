"""Reminder threshold calculation for the next oil change."""

from dataclasses import dataclass
from typing import Optional

from .parsing import parse_int_or_none
from .record import OilChangeRecord
from .status import Status

REMINDER_THRESHOLD = 500
NOTIFICATION_ID = 1
NOTIFICATION_TITLE = "Oil Change Reminder"


def calc_next_change_mileage(last_mileage: int, interval: int) -> int:
    """Next due mileage: last change + interval."""
    return last_mileage + interval


def check_status(current: int, due: int, soon_threshold: int) -> Status:
    """Determine status by comparing current mileage to the due mileage."""
    if current <= 0:
        return Status.UNKNOWN
    if current >= due:
        return Status.OVERDUE
    if current >= due - soon_threshold:
        return Status.DUE_SOON
    return Status.OK


@dataclass(frozen=True)
class Reminder:
    """Outcome of checking a reading against the next change."""

    current_mileage: int
    next_change_mileage: int
    remaining: int
    status: Status
    should_notify: bool

    @property
    def body(self) -> str:
        return (
            f"You have approximately {self.remaining} km "
            "until your next oil change"
        )


def evaluate_reminder(
    last_mileage: int,
    interval: int,
    candidate_text: Optional[str] = None,
    threshold: int = REMINDER_THRESHOLD,
) -> Reminder:
    """
    Check whether the next oil change is close enough to remind about.

    The candidate reading falls back to last_mileage when absent or not a
    number. remaining goes negative once the change is overdue.
    """
    candidate = parse_int_or_none(candidate_text)
    current = last_mileage if candidate is None else candidate
    next_change = calc_next_change_mileage(last_mileage, interval)
    remaining = next_change - current
    return Reminder(
        current_mileage=current,
        next_change_mileage=next_change,
        remaining=remaining,
        status=check_status(current, next_change, threshold),
        should_notify=current > 0 and remaining <= threshold,
    )


def evaluate_record(record: OilChangeRecord, candidate_text: Optional[str] = None) -> Reminder:
    """evaluate_reminder for a loaded record."""
    return evaluate_reminder(
        record.last_mileage, record.oil_change_interval, candidate_text
    )


def notify_if_due(reminder: Reminder, notifier) -> bool:
    """
    Post the reminder notification when it is due.

    Fires every time it is called for a due reminder; the fixed id lets the
    notification surface replace the previous one.
    """
    if not reminder.should_notify:
        return False
    notifier.notify(NOTIFICATION_ID, NOTIFICATION_TITLE, reminder.body)
    return True
