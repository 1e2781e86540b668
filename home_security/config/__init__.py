"""Configuration components for the home security system."""

from .defaults import (
    DEFAULT_CONFIG,
    SYSTEM_CONSTANTS,
    DEFAULT_PATHS,
    DETECTOR_SETTINGS,
    VALID_LOG_LEVELS
)

__all__ = [
    'DEFAULT_CONFIG',
    'SYSTEM_CONSTANTS',
    'DEFAULT_PATHS',
    'DETECTOR_SETTINGS',
    'VALID_LOG_LEVELS'
]
