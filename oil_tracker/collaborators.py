"""
Outside services the screen talks to.

- Permission gate: asks for camera access
- Capture surface: hands back an odometer photo
- Notification surface: shows the reminder
- Clock: current time in epoch milliseconds
"""

import base64
import mimetypes
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

from loguru import logger

CHANNEL_ID = "oil_change_channel"
CHANNEL_NAME = "Oil Change Reminders"
CHANNEL_DESCRIPTION = "Notifications for oil change reminders"


def system_clock() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


class Permission(Enum):
    GRANTED = "granted"
    DENIED = "denied"


class StaticPermissionGate:
    """Permission gate with a fixed answer."""

    def __init__(self, granted: bool = True):
        self.granted = granted

    def request_camera_permission(self) -> Permission:
        return Permission.GRANTED if self.granted else Permission.DENIED


@dataclass(frozen=True)
class ImageHandle:
    """An odometer photo. The bytes are kept but never looked at."""

    source: str
    data: bytes = b""
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def data_uri(self) -> str:
        """The photo inlined for an <img> tag."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"


class FileCaptureSurface:
    """Capture surface that 'takes' a photo by reading an image file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def capture_image(self) -> Optional[ImageHandle]:
        if not self.path.is_file():
            logger.info(f"No photo at {self.path}, capture cancelled")
            return None
        content_type, _ = mimetypes.guess_type(self.path.name)
        return ImageHandle(
            source=self.path.name,
            data=self.path.read_bytes(),
            content_type=content_type or "application/octet-stream",
        )


@dataclass(frozen=True)
class Notification:
    """A notification as handed to a notification surface."""

    notification_id: int
    title: str
    body: str
    channel_id: str = CHANNEL_ID


class LogNotifier:
    """Notification surface that writes reminders to the log."""

    def notify(self, notification_id: int, title: str, body: str) -> Notification:
        notification = Notification(notification_id, title, body)
        logger.info(f"[{CHANNEL_NAME} #{notification_id}] {title}: {body}")
        return notification


class MemoryNotifier:
    """
    Notification surface that keeps the latest notification per id.

    Posting again with the same id replaces the earlier notification;
    `sent` still records every post in order.
    """

    def __init__(self):
        self.active: Dict[int, Notification] = {}
        self.sent: List[Notification] = []

    def notify(self, notification_id: int, title: str, body: str) -> Notification:
        notification = Notification(notification_id, title, body)
        self.active[notification_id] = notification
        self.sent.append(notification)
        return notification

    @property
    def notifications(self) -> List[Notification]:
        return list(self.active.values())
