"""Exception types raised by the home security system."""


class SecurityServiceError(Exception):
    """Base class for home security errors."""


class StateStoreError(SecurityServiceError):
    """The state store could not be read or written."""


class CatDetectorError(SecurityServiceError):
    """The cat detector could not classify an image."""


class ConfigurationError(SecurityServiceError):
    """Configuration is missing, malformed or invalid."""
