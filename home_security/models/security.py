"""Security state data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Tuple


class AlarmStatus(Enum):
    """Alarm threat levels, lowest to highest."""
    NO_ALARM = ("Cool and Good", (120, 200, 30))
    PENDING_ALARM = ("I'm in Danger...", (200, 150, 20))
    ALARM = ("Awooga!", (250, 80, 50))

    def __init__(self, description: str, color: Tuple[int, int, int]):
        self.description = description
        self.color = color


class ArmingStatus(Enum):
    """Monitoring modes of the system."""
    DISARMED = ("Disarmed", (120, 200, 30))
    ARMED_HOME = ("Armed - At Home", (190, 180, 50))
    ARMED_AWAY = ("Armed - Away", (170, 30, 150))

    def __init__(self, description: str, color: Tuple[int, int, int]):
        self.description = description
        self.color = color

    @property
    def is_armed(self) -> bool:
        return self is not ArmingStatus.DISARMED


class SensorType(Enum):
    """Kinds of binary input devices."""
    DOOR = "door"
    WINDOW = "window"
    MOTION = "motion"


@dataclass(eq=False)
class Sensor:
    """A door, window or motion sensor.

    Two sensors with the same name and type are the same sensor; the active
    flag does not take part in equality or hashing.
    """
    name: str
    sensor_type: SensorType
    active: bool = False

    @property
    def key(self) -> Tuple[str, SensorType]:
        return (self.name, self.sensor_type)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sensor):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            'name': self.name,
            'sensor_type': self.sensor_type.name,
            'active': self.active
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sensor":
        """Build a sensor from the output of ``to_dict``."""
        return cls(
            name=data['name'],
            sensor_type=SensorType[data['sensor_type']],
            active=bool(data.get('active', False))
        )
