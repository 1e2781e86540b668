"""Data models for the home security system."""

from .security import AlarmStatus, ArmingStatus, Sensor, SensorType
from .config import SecurityConfig

__all__ = ['AlarmStatus', 'ArmingStatus', 'Sensor', 'SensorType', 'SecurityConfig']
