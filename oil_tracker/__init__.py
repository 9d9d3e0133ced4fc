"""
Oil change tracking.

This package provides the pieces behind the oil change screen:
- OilChangeRecord: Last change mileage/date and the change interval
- RecordStore: YAML-backed persistence of the record
- Reminder: Threshold check against the next change mileage
- OilChangeScreen: Event handling shared by the CLI and web front ends
- Collaborators: Camera permission, photo capture, notifications, clock
"""

from .status import Status
from .errors import RecordError, InvalidInput, BelowMinimum
from .parsing import parse_int, parse_mileage, parse_int_or_none
from .record import OilChangeRecord, DEFAULT_INTERVAL, MIN_INTERVAL
from .collaborators import (
    Permission,
    StaticPermissionGate,
    ImageHandle,
    FileCaptureSurface,
    Notification,
    LogNotifier,
    MemoryNotifier,
    system_clock,
)
from .store import RecordStore, default_prefs_path, PREFS_NAMESPACE
from .reminder import (
    Reminder,
    REMINDER_THRESHOLD,
    NOTIFICATION_ID,
    NOTIFICATION_TITLE,
    calc_next_change_mileage,
    check_status,
    evaluate_reminder,
    evaluate_record,
    notify_if_due,
)
from .screen import OilChangeScreen, ScreenState, Feedback

__all__ = [
    "Status",
    "RecordError",
    "InvalidInput",
    "BelowMinimum",
    "parse_int",
    "parse_mileage",
    "parse_int_or_none",
    "OilChangeRecord",
    "DEFAULT_INTERVAL",
    "MIN_INTERVAL",
    "Permission",
    "StaticPermissionGate",
    "ImageHandle",
    "FileCaptureSurface",
    "Notification",
    "LogNotifier",
    "MemoryNotifier",
    "system_clock",
    "RecordStore",
    "default_prefs_path",
    "PREFS_NAMESPACE",
    "Reminder",
    "REMINDER_THRESHOLD",
    "NOTIFICATION_ID",
    "NOTIFICATION_TITLE",
    "calc_next_change_mileage",
    "check_status",
    "evaluate_reminder",
    "evaluate_record",
    "notify_if_due",
    "OilChangeScreen",
    "ScreenState",
    "Feedback",
]
