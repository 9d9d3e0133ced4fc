"""Event handling for the oil change screen."""

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from .collaborators import ImageHandle, LogNotifier, Permission, StaticPermissionGate
from .errors import BelowMinimum, InvalidInput, RecordError
from .parsing import parse_mileage
from .record import OilChangeRecord
from .reminder import Reminder, evaluate_record, notify_if_due
from .store import RecordStore, check_interval

DATE_FORMAT = "%b %d, %Y"

MSG_ENTER_MILEAGE = "Please enter the current mileage"
MSG_ENTER_INTERVAL = "Please enter an interval"
MSG_INVALID_NUMBER = "Please enter a valid number"
MSG_BELOW_MINIMUM = "Interval should be at least {minimum} km"
MSG_SAVED = "Oil change record saved successfully"
MSG_INTERVAL_UPDATED = "Oil change interval updated"
MSG_CAMERA_REQUIRED = "Camera permission is required"
MSG_ENTER_MANUALLY = "Please enter the odometer reading manually"


def format_last_change(record: OilChangeRecord) -> str:
    changed = record.last_change_date
    date_str = changed.strftime(DATE_FORMAT) if changed else "Never"
    return f"Last Oil Change: {record.last_mileage} km on {date_str}"


def format_next_change(record: OilChangeRecord) -> str:
    return f"Next Oil Change: {record.next_change_mileage} km"


def format_interval_hint(record: OilChangeRecord) -> str:
    return f"Current: {record.oil_change_interval} km"


def _mileage_error(mileage_text, error: InvalidInput) -> "Feedback":
    logger.warning(f"Rejected mileage {mileage_text!r}: {error.reason}")
    message = MSG_ENTER_MILEAGE if error.is_blank else MSG_INVALID_NUMBER
    return Feedback(ok=False, message=message, level="error")


def _interval_error(interval_text, error: RecordError) -> "Feedback":
    if isinstance(error, BelowMinimum):
        logger.warning(f"Rejected interval {error.value}: below {error.minimum}")
        message = MSG_BELOW_MINIMUM.format(minimum=error.minimum)
    else:
        logger.warning(f"Rejected interval {interval_text!r}: {error.reason}")
        message = MSG_ENTER_INTERVAL if error.is_blank else MSG_INVALID_NUMBER
    return Feedback(ok=False, message=message, level="error")


@dataclass(frozen=True)
class ScreenState:
    """What the screen shows after a refresh."""

    record: OilChangeRecord
    last_change_text: str
    next_change_text: str
    interval_hint: str
    reminder: Reminder


@dataclass(frozen=True)
class Feedback:
    """Result of a user action: a short message plus the refreshed screen."""

    ok: bool
    message: Optional[str] = None
    level: str = "info"
    state: Optional[ScreenState] = None
    image: Optional[ImageHandle] = None
    clear_input: bool = False


class OilChangeScreen:
    """
    Reads and writes through the store on every event; nothing is cached.

    Rejected input becomes an error Feedback, never an exception.
    """

    def __init__(
        self,
        store: RecordStore,
        notifier=None,
        permission_gate=None,
        capture_surface=None,
    ):
        self.store = store
        self.notifier = notifier or LogNotifier()
        self.permission_gate = permission_gate or StaticPermissionGate(True)
        self.capture_surface = capture_surface

    def render(self, mileage_text: Optional[str] = "") -> ScreenState:
        """Refresh the display and re-check the reminder."""
        record = self.store.load()
        reminder = evaluate_record(record, mileage_text)
        notify_if_due(reminder, self.notifier)
        return ScreenState(
            record=record,
            last_change_text=format_last_change(record),
            next_change_text=format_next_change(record),
            interval_hint=format_interval_hint(record),
            reminder=reminder,
        )

    def check_mileage(self, mileage_text: Optional[str]) -> Feedback:
        """Validate a mileage without saving it."""
        try:
            parse_mileage(mileage_text)
        except InvalidInput as e:
            return _mileage_error(mileage_text, e)
        return Feedback(ok=True)

    def check_interval(self, interval_text: Optional[str]) -> Feedback:
        """Validate an interval without saving it."""
        try:
            check_interval(interval_text)
        except RecordError as e:
            return _interval_error(interval_text, e)
        return Feedback(ok=True)

    def save_oil_change(self, mileage_text: Optional[str]) -> Feedback:
        try:
            self.store.record_change(mileage_text)
        except InvalidInput as e:
            return _mileage_error(mileage_text, e)

        # The field still holds the saved reading while the screen refreshes
        state = self.render(mileage_text)
        return Feedback(
            ok=True, message=MSG_SAVED, level="success", state=state, clear_input=True
        )

    def update_interval(
        self, interval_text: Optional[str], mileage_text: Optional[str] = ""
    ) -> Feedback:
        try:
            self.store.update_interval(interval_text)
        except RecordError as e:
            return _interval_error(interval_text, e)

        state = self.render(mileage_text)
        return Feedback(
            ok=True,
            message=MSG_INTERVAL_UPDATED,
            level="success",
            state=state,
            clear_input=True,
        )

    def capture_odometer(self) -> Feedback:
        """
        Take an odometer photo.

        The photo is handed back for display only; the reading still has to be typed in.
        """
        if self.permission_gate.request_camera_permission() != Permission.GRANTED:
            return Feedback(ok=False, message=MSG_CAMERA_REQUIRED, level="error")

        image = self.capture_surface.capture_image() if self.capture_surface else None
        if image is None:
            return Feedback(ok=False)

        logger.info(f"Received odometer photo {image.source} ({image.size} bytes)")
        return Feedback(ok=True, message=MSG_ENTER_MANUALLY, level="info", image=image)
