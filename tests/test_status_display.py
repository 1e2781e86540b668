"""Unit tests for the status display listener."""

import unittest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from home_security.models.security import AlarmStatus
from home_security.services.status_display import (
    StatusDisplay, CAT_DETECTED_MESSAGE, CAT_FREE_MESSAGE
)


class TestStatusDisplay(unittest.TestCase):
    """Test cases for StatusDisplay."""

    def setUp(self):
        """Set up test fixtures."""
        self.display = StatusDisplay()

    def test_initial_state(self):
        """Test display before any callback."""
        self.assertIsNone(self.display.alarm_status)
        self.assertIsNone(self.display.camera_message)
        self.assertEqual(self.display.status_message, "Unknown")

    def test_notify_tracks_latest_status(self):
        """Test that the latest alarm status is shown."""
        self.display.notify(AlarmStatus.PENDING_ALARM)
        self.display.notify(AlarmStatus.ALARM)

        self.assertEqual(self.display.alarm_status, AlarmStatus.ALARM)
        self.assertEqual(self.display.status_message, "Awooga!")
        self.assertEqual(self.display.notification_count, 2)

    def test_cat_messages(self):
        """Test camera messages for both detection results."""
        self.display.cat_detected(True)
        self.assertEqual(self.display.camera_message, CAT_DETECTED_MESSAGE)

        self.display.cat_detected(False)
        self.assertEqual(self.display.camera_message, CAT_FREE_MESSAGE)

    def test_initial_status_from_store(self):
        """Test seeding the display with a stored status."""
        display = StatusDisplay(AlarmStatus.NO_ALARM)
        self.assertEqual(display.status_message, "Cool and Good")
        self.assertEqual(display.notification_count, 0)


if __name__ == '__main__':
    unittest.main()
