"""Service interfaces and abstract base classes."""

from abc import ABC, abstractmethod
from typing import Set

import numpy as np

from ..models.security import AlarmStatus, ArmingStatus, Sensor


class StateStoreInterface(ABC):
    """Interface for the store of sensors, alarm status and arming status."""

    @abstractmethod
    def get_arming_status(self) -> ArmingStatus:
        """Get the current arming status."""
        pass

    @abstractmethod
    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Persist the arming status."""
        pass

    @abstractmethod
    def get_alarm_status(self) -> AlarmStatus:
        """Get the current alarm status."""
        pass

    @abstractmethod
    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        """Persist the alarm status."""
        pass

    @abstractmethod
    def get_sensors(self) -> Set[Sensor]:
        """Get all known sensors."""
        pass

    @abstractmethod
    def add_sensor(self, sensor: Sensor) -> None:
        """Add a sensor."""
        pass

    @abstractmethod
    def remove_sensor(self, sensor: Sensor) -> None:
        """Remove a sensor."""
        pass

    @abstractmethod
    def update_sensor(self, sensor: Sensor) -> None:
        """Persist the sensor's current active flag."""
        pass


class CatDetectorInterface(ABC):
    """Interface for camera image classification."""

    @abstractmethod
    def image_contains_cat(self, image: np.ndarray, confidence_threshold: float) -> bool:
        """Return True if a cat is found with at least the given confidence (percent)."""
        pass


class StatusListener(ABC):
    """Receives alarm status changes and cat detection results."""

    @abstractmethod
    def notify(self, status: AlarmStatus) -> None:
        """Called with the new alarm status after every change."""
        pass

    @abstractmethod
    def cat_detected(self, cat_present: bool) -> None:
        """Called with the result of every processed image."""
        pass
