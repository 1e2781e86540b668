"""Status listener that tracks what a control panel would show."""

from typing import Optional

from ..logging_config import get_logger
from ..models.security import AlarmStatus
from .interfaces import StatusListener

logger = get_logger("status_display")

CAT_DETECTED_MESSAGE = "DANGER - CAT DETECTED"
CAT_FREE_MESSAGE = "Cat Free!"


class StatusDisplay(StatusListener):
    """Keeps the latest alarm status and camera message and logs changes."""

    def __init__(self, alarm_status: Optional[AlarmStatus] = None):
        self.alarm_status = alarm_status
        self.camera_message: Optional[str] = None
        self.notification_count = 0

    def notify(self, status: AlarmStatus) -> None:
        self.alarm_status = status
        self.notification_count += 1
        logger.info(f"System status: {status.description}")

    def cat_detected(self, cat_present: bool) -> None:
        self.camera_message = CAT_DETECTED_MESSAGE if cat_present else CAT_FREE_MESSAGE
        logger.info(f"Camera: {self.camera_message}")

    @property
    def status_message(self) -> str:
        if self.alarm_status is None:
            return "Unknown"
        return self.alarm_status.description
