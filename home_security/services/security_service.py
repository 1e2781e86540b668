"""Alarm decision engine.

Derives the alarm status from sensor activity, the arming status and camera
images, persists every decision through the state store and fans the results
out to registered status listeners.
"""

import threading
from typing import List, Optional, Set

import numpy as np

from ..config.defaults import DEFAULT_CONFIG
from ..logging_config import get_logger
from ..models.security import AlarmStatus, ArmingStatus, Sensor
from .interfaces import CatDetectorInterface, StateStoreInterface, StatusListener

logger = get_logger("security_service")


class SecurityService:
    """Alarm state machine over a state store and a cat detector.

    Every public operation runs under one re-entrant lock, so the
    read-decide-write sequence of a transition is never interleaved with
    another caller. Listener callbacks run synchronously inside the lock.
    """

    def __init__(self,
                 state_store: StateStoreInterface,
                 cat_detector: CatDetectorInterface,
                 cat_confidence_threshold: float = DEFAULT_CONFIG["cat_confidence_threshold"]):
        """
        Initialize the security service.

        Args:
            state_store: Store holding sensors and both statuses
            cat_detector: Classifier used by ``process_image``
            cat_confidence_threshold: Minimum detector confidence, in percent
        """
        self.state_store = state_store
        self.cat_detector = cat_detector
        self.cat_confidence_threshold = cat_confidence_threshold

        self._status_listeners: List[StatusListener] = []
        self._lock = threading.RLock()

    # Listener management

    def add_status_listener(self, listener: StatusListener) -> None:
        """Register a listener; registering it twice has no effect."""
        with self._lock:
            if listener not in self._status_listeners:
                self._status_listeners.append(listener)

    def remove_status_listener(self, listener: StatusListener) -> None:
        """Unregister a listener; it receives no further callbacks."""
        with self._lock:
            if listener in self._status_listeners:
                self._status_listeners.remove(listener)

    # Arming

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """
        Change the arming status.

        Disarming forces the alarm back to NO_ALARM. Arming resets every
        active sensor to inactive without running the deactivation rules.
        """
        with self._lock:
            self.state_store.set_arming_status(arming_status)
            logger.info(f"Arming status set to {arming_status.name}")

            if arming_status == ArmingStatus.DISARMED:
                self._set_alarm_status(AlarmStatus.NO_ALARM)
                return

            for sensor in list(self.state_store.get_sensors()):
                if sensor.active:
                    sensor.active = False
                    self.state_store.update_sensor(sensor)
                    logger.debug(f"Reset sensor {sensor.name} to inactive on arming")

    # Sensors

    def change_sensor_activation_status(self, sensor: Sensor, active: bool) -> None:
        """Activate or deactivate a sensor and apply the alarm transition rules."""
        with self._lock:
            if sensor.active == active:
                logger.debug(f"Sensor {sensor.name} already {'active' if active else 'inactive'}")
                return

            sensor.active = active
            self.state_store.update_sensor(sensor)

            # A disarmed system records sensor changes but never transitions
            if self.state_store.get_arming_status() == ArmingStatus.DISARMED:
                return

            if active:
                self._handle_sensor_activated()
            else:
                self._handle_sensor_deactivated(sensor)

    def _handle_sensor_activated(self) -> None:
        alarm_status = self.state_store.get_alarm_status()
        if alarm_status == AlarmStatus.NO_ALARM:
            self._set_alarm_status(AlarmStatus.PENDING_ALARM)
        elif alarm_status == AlarmStatus.PENDING_ALARM:
            self._set_alarm_status(AlarmStatus.ALARM)

    def _handle_sensor_deactivated(self, sensor: Sensor) -> None:
        alarm_status = self.state_store.get_alarm_status()
        if alarm_status == AlarmStatus.ALARM:
            # Steps down one level even if other sensors are still active
            self._set_alarm_status(AlarmStatus.PENDING_ALARM)
        elif alarm_status == AlarmStatus.PENDING_ALARM:
            if not self._any_sensor_active(exclude=sensor):
                self._set_alarm_status(AlarmStatus.NO_ALARM)

    def _any_sensor_active(self, exclude: Optional[Sensor] = None) -> bool:
        return any(s.active for s in self.state_store.get_sensors() if s != exclude)

    # Camera

    def process_image(self, image: np.ndarray) -> None:
        """Classify a camera image and update the alarm status from the result."""
        with self._lock:
            cat_present = self.cat_detector.image_contains_cat(
                image, self.cat_confidence_threshold)
            logger.info(f"Processed camera image: cat {'detected' if cat_present else 'not detected'}")

            for listener in list(self._status_listeners):
                listener.cat_detected(cat_present)

            if cat_present:
                if self.state_store.get_arming_status() == ArmingStatus.ARMED_HOME:
                    self._set_alarm_status(AlarmStatus.ALARM)
            elif not self._any_sensor_active():
                self._set_alarm_status(AlarmStatus.NO_ALARM)

    # Alarm status

    def _set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        """Persist the alarm status and notify every listener."""
        self.state_store.set_alarm_status(alarm_status)
        logger.info(f"Alarm status set to {alarm_status.name}")

        for listener in list(self._status_listeners):
            listener.notify(alarm_status)

    def get_alarm_status(self) -> AlarmStatus:
        with self._lock:
            return self.state_store.get_alarm_status()

    def get_arming_status(self) -> ArmingStatus:
        with self._lock:
            return self.state_store.get_arming_status()

    # Pass-through sensor management

    def get_sensors(self) -> Set[Sensor]:
        with self._lock:
            return self.state_store.get_sensors()

    def add_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self.state_store.add_sensor(sensor)

    def remove_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self.state_store.remove_sensor(sensor)
