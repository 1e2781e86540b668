"""
Home Security Monitor

Tracks arming status, door/window/motion sensors and camera cat detection,
and derives the alarm status from them.
"""

__version__ = "1.0.0"
__author__ = "Home Security Monitor"

from .config_manager import ConfigManager
from .exceptions import (
    SecurityServiceError,
    StateStoreError,
    CatDetectorError,
    ConfigurationError
)
from .models import (
    AlarmStatus,
    ArmingStatus,
    Sensor,
    SensorType,
    SecurityConfig
)
from .services import (
    StateStoreInterface,
    CatDetectorInterface,
    StatusListener,
    SecurityService,
    InMemoryStateStore,
    JsonStateStore,
    StatusDisplay
)

__all__ = [
    # Core management
    'ConfigManager',
    'SecurityService',

    # Data models
    'AlarmStatus',
    'ArmingStatus',
    'Sensor',
    'SensorType',
    'SecurityConfig',

    # Service interfaces and implementations
    'StateStoreInterface',
    'CatDetectorInterface',
    'StatusListener',
    'InMemoryStateStore',
    'JsonStateStore',
    'StatusDisplay',

    # Errors
    'SecurityServiceError',
    'StateStoreError',
    'CatDetectorError',
    'ConfigurationError'
]
