"""Integration tests for the security service over a real state store."""

import unittest
from unittest.mock import Mock, patch
import sys
import os
import threading

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np

from home_security.models.security import AlarmStatus, ArmingStatus, Sensor, SensorType
from home_security.services.cat_detector import FakeCatDetector
from home_security.services.interfaces import CatDetectorInterface
from home_security.services.security_service import SecurityService
from home_security.services.state_store import InMemoryStateStore
from home_security.services.status_display import (
    StatusDisplay, CAT_DETECTED_MESSAGE, CAT_FREE_MESSAGE
)


class TestSecurityScenarios(unittest.TestCase):
    """End-to-end alarm scenarios."""

    def setUp(self):
        """Set up test fixtures."""
        self.store = InMemoryStateStore()
        self.detector = Mock(spec=CatDetectorInterface)
        self.service = SecurityService(self.store, self.detector)
        self.display = StatusDisplay()
        self.service.add_status_listener(self.display)

        self.sensor_a = Sensor("A", SensorType.DOOR)
        self.sensor_b = Sensor("B", SensorType.WINDOW)
        self.service.add_sensor(self.sensor_a)
        self.service.add_sensor(self.sensor_b)

        self.image = np.zeros((48, 64, 3), dtype=np.uint8)

    def test_two_sensor_walkthrough(self):
        """Test the activate/activate/deactivate/deactivate sequence."""
        self.service.set_arming_status(ArmingStatus.ARMED_HOME)
        self.assertEqual(self.service.get_alarm_status(), AlarmStatus.NO_ALARM)

        with patch.object(self.store, 'update_sensor', wraps=self.store.update_sensor) as update:
            self.service.change_sensor_activation_status(self.sensor_a, True)
            self.assertEqual(self.service.get_alarm_status(), AlarmStatus.PENDING_ALARM)
            update.assert_called_once_with(self.sensor_a)

        self.service.change_sensor_activation_status(self.sensor_b, True)
        self.assertEqual(self.service.get_alarm_status(), AlarmStatus.ALARM)

        self.service.change_sensor_activation_status(self.sensor_a, False)
        self.assertEqual(self.service.get_alarm_status(), AlarmStatus.PENDING_ALARM)

        self.service.change_sensor_activation_status(self.sensor_b, False)
        self.assertEqual(self.service.get_alarm_status(), AlarmStatus.NO_ALARM)

        self.assertEqual(self.display.alarm_status, AlarmStatus.NO_ALARM)

    def test_disarm_is_escape_hatch_from_alarm(self):
        """Test that disarming returns to NO_ALARM from ALARM."""
        self.service.set_arming_status(ArmingStatus.ARMED_AWAY)
        self.service.change_sensor_activation_status(self.sensor_a, True)
        self.service.change_sensor_activation_status(self.sensor_b, True)
        self.assertEqual(self.service.get_alarm_status(), AlarmStatus.ALARM)

        self.service.set_arming_status(ArmingStatus.DISARMED)

        self.assertEqual(self.service.get_alarm_status(), AlarmStatus.NO_ALARM)
        self.assertEqual(self.service.get_arming_status(), ArmingStatus.DISARMED)

    def test_rearming_resets_sensors(self):
        """Test that arming clears sensors left active while disarmed."""
        self.service.change_sensor_activation_status(self.sensor_a, True)
        self.assertEqual(self.service.get_alarm_status(), AlarmStatus.NO_ALARM)

        self.service.set_arming_status(ArmingStatus.ARMED_HOME)

        self.assertTrue(all(not s.active for s in self.service.get_sensors()))
        self.assertEqual(self.service.get_alarm_status(), AlarmStatus.NO_ALARM)

    def test_stale_alarm_kept_on_deactivation_while_disarmed(self):
        """Test a store that starts disarmed with an alarm left over."""
        store = InMemoryStateStore(alarm_status=AlarmStatus.ALARM)
        sensor = Sensor("A", SensorType.DOOR, active=True)
        store.add_sensor(sensor)
        service = SecurityService(store, self.detector)

        service.change_sensor_activation_status(sensor, False)

        self.assertFalse(sensor.active)
        self.assertEqual(service.get_arming_status(), ArmingStatus.DISARMED)
        self.assertEqual(service.get_alarm_status(), AlarmStatus.ALARM)

    def test_cat_while_armed_home_then_clear_image(self):
        """Test camera-driven alarm raise and clear."""
        self.service.set_arming_status(ArmingStatus.ARMED_HOME)

        self.detector.image_contains_cat.return_value = True
        self.service.process_image(self.image)
        self.assertEqual(self.service.get_alarm_status(), AlarmStatus.ALARM)
        self.assertEqual(self.display.camera_message, CAT_DETECTED_MESSAGE)

        self.detector.image_contains_cat.return_value = False
        self.service.process_image(self.image)
        self.assertEqual(self.service.get_alarm_status(), AlarmStatus.NO_ALARM)
        self.assertEqual(self.display.camera_message, CAT_FREE_MESSAGE)

    def test_clear_image_keeps_alarm_while_sensor_active(self):
        """Test that a clear image does not override an active sensor."""
        self.service.set_arming_status(ArmingStatus.ARMED_HOME)
        self.service.change_sensor_activation_status(self.sensor_a, True)

        self.detector.image_contains_cat.return_value = False
        self.service.process_image(self.image)

        self.assertEqual(self.service.get_alarm_status(), AlarmStatus.PENDING_ALARM)

    def test_removed_sensor_no_longer_blocks_clearing(self):
        """Test that removed sensors do not count as active."""
        self.service.set_arming_status(ArmingStatus.ARMED_HOME)
        self.service.change_sensor_activation_status(self.sensor_a, True)
        self.service.remove_sensor(self.sensor_a)

        self.detector.image_contains_cat.return_value = False
        self.service.process_image(self.image)

        self.assertEqual(self.service.get_alarm_status(), AlarmStatus.NO_ALARM)
        self.assertNotIn(self.sensor_a, self.service.get_sensors())

    def test_concurrent_activations_reach_alarm(self):
        """Test that concurrent callers see serialized transitions."""
        self.service.set_arming_status(ArmingStatus.ARMED_HOME)
        sensors = [Sensor(f"Motion {i}", SensorType.MOTION) for i in range(8)]
        for sensor in sensors:
            self.service.add_sensor(sensor)

        threads = [
            threading.Thread(target=self.service.change_sensor_activation_status,
                             args=(sensor, True))
            for sensor in sensors
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(self.service.get_alarm_status(), AlarmStatus.ALARM)
        # NO_ALARM -> PENDING -> ALARM, then ALARM is a fixed point
        self.assertEqual(self.display.notification_count, 2)

    def test_fake_detector_drives_service(self):
        """Test the service with the random detector."""
        service = SecurityService(self.store, FakeCatDetector(seed=3))
        service.set_arming_status(ArmingStatus.ARMED_HOME)

        for _ in range(10):
            service.process_image(self.image)
            self.assertIn(service.get_alarm_status(), (AlarmStatus.ALARM, AlarmStatus.NO_ALARM))


if __name__ == '__main__':
    unittest.main()
