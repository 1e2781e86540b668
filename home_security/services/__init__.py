"""Services for the home security system."""

from .interfaces import (
    StateStoreInterface,
    CatDetectorInterface,
    StatusListener
)
from .security_service import SecurityService
from .state_store import InMemoryStateStore, JsonStateStore
from .status_display import StatusDisplay

__all__ = [
    'StateStoreInterface',
    'CatDetectorInterface',
    'StatusListener',
    'SecurityService',
    'InMemoryStateStore',
    'JsonStateStore',
    'StatusDisplay'
]
