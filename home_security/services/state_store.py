"""State store implementations for sensors and system status."""

import json
import os
import threading
from typing import Dict, Set, Tuple

from ..config.defaults import SYSTEM_CONSTANTS
from ..exceptions import StateStoreError
from ..logging_config import get_logger
from ..models.security import AlarmStatus, ArmingStatus, Sensor, SensorType
from ..utils import ensure_directory_exists
from .error_decorators import retry_on_error
from .interfaces import StateStoreInterface

logger = get_logger("state_store")


class InMemoryStateStore(StateStoreInterface):
    """Process-local state store.

    Sensors are kept by (name, type); ``get_sensors`` hands out the stored
    instances so that changes made by the security service are visible to
    later reads.
    """

    def __init__(self,
                 alarm_status: AlarmStatus = AlarmStatus.NO_ALARM,
                 arming_status: ArmingStatus = ArmingStatus.DISARMED):
        self._sensors: Dict[Tuple[str, SensorType], Sensor] = {}
        self._alarm_status = alarm_status
        self._arming_status = arming_status

    def get_arming_status(self) -> ArmingStatus:
        return self._arming_status

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        self._arming_status = arming_status

    def get_alarm_status(self) -> AlarmStatus:
        return self._alarm_status

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        self._alarm_status = alarm_status

    def get_sensors(self) -> Set[Sensor]:
        return set(self._sensors.values())

    def add_sensor(self, sensor: Sensor) -> None:
        self._sensors[sensor.key] = sensor

    def remove_sensor(self, sensor: Sensor) -> None:
        self._sensors.pop(sensor.key, None)

    def update_sensor(self, sensor: Sensor) -> None:
        stored = self._sensors.get(sensor.key)
        if stored is None:
            self._sensors[sensor.key] = sensor
        else:
            stored.active = sensor.active


class JsonStateStore(StateStoreInterface):
    """State store persisted as a single JSON document.

    The document is loaded once at construction and rewritten after every
    mutating call. A missing file starts from the defaults.
    """

    def __init__(self, state_path: str):
        """
        Initialize the JSON state store.

        Args:
            state_path: Path of the JSON state file

        Raises:
            StateStoreError: If an existing file cannot be read or parsed
        """
        self.state_path = state_path
        self._lock = threading.Lock()
        self._memory = InMemoryStateStore()

        if os.path.exists(self.state_path):
            self._load()
        else:
            logger.info(f"No state file at {self.state_path}, starting from defaults")

    def _load(self) -> None:
        try:
            with open(self.state_path, 'r') as f:
                data = json.load(f)
            self._memory.set_alarm_status(AlarmStatus[data.get('alarm_status', 'NO_ALARM')])
            self._memory.set_arming_status(ArmingStatus[data.get('arming_status', 'DISARMED')])
            for sensor_data in data.get('sensors', []):
                self._memory.add_sensor(Sensor.from_dict(sensor_data))
        except (OSError, json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
            raise StateStoreError(f"Failed to load state from {self.state_path}: {e}") from e

        logger.debug(f"Loaded {len(self._memory.get_sensors())} sensors from {self.state_path}")

    def _save(self) -> None:
        document = {
            'alarm_status': self._memory.get_alarm_status().name,
            'arming_status': self._memory.get_arming_status().name,
            'sensors': [
                s.to_dict() for s in sorted(
                    self._memory.get_sensors(),
                    key=lambda s: (s.name, s.sensor_type.name))
            ]
        }
        try:
            self._write_document(document)
        except OSError as e:
            raise StateStoreError(f"Failed to save state to {self.state_path}: {e}") from e

    @retry_on_error(max_attempts=SYSTEM_CONSTANTS["STORE_WRITE_RETRY_ATTEMPTS"],
                    delay=SYSTEM_CONSTANTS["STORE_WRITE_RETRY_DELAY_SECONDS"],
                    exceptions=(OSError,))
    def _write_document(self, document: Dict) -> None:
        directory = os.path.dirname(self.state_path)
        if directory:
            ensure_directory_exists(directory)

        temp_path = f"{self.state_path}.tmp"
        with open(temp_path, 'w') as f:
            json.dump(document, f, indent=2)
        os.replace(temp_path, self.state_path)

    def get_arming_status(self) -> ArmingStatus:
        with self._lock:
            return self._memory.get_arming_status()

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        with self._lock:
            self._memory.set_arming_status(arming_status)
            self._save()

    def get_alarm_status(self) -> AlarmStatus:
        with self._lock:
            return self._memory.get_alarm_status()

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        with self._lock:
            self._memory.set_alarm_status(alarm_status)
            self._save()

    def get_sensors(self) -> Set[Sensor]:
        with self._lock:
            return self._memory.get_sensors()

    def add_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self._memory.add_sensor(sensor)
            self._save()
            logger.info(f"Added sensor {sensor.name} ({sensor.sensor_type.name})")

    def remove_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self._memory.remove_sensor(sensor)
            self._save()
            logger.info(f"Removed sensor {sensor.name} ({sensor.sensor_type.name})")

    def update_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self._memory.update_sensor(sensor)
            self._save()
