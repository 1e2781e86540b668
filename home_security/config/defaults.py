"""Default configuration values and constants."""

from typing import Dict, Any

# Default system configuration
DEFAULT_CONFIG: Dict[str, Any] = {
    # Camera settings
    "cat_confidence_threshold": 50.0,
    "cascade_path": None,

    # Storage settings
    "state_file": "data/security_state.json",

    # Logging settings
    "log_level": "INFO",
    "log_dir": "logs"
}

# System constants
SYSTEM_CONSTANTS = {
    "STORE_WRITE_RETRY_ATTEMPTS": 3,
    "STORE_WRITE_RETRY_DELAY_SECONDS": 0.1,
    "LOG_ROTATION_SIZE_MB": 10,
    "LOG_BACKUP_COUNT": 5
}

# File paths and directories
DEFAULT_PATHS = {
    "config_file": "security_config.json"
}

# Haar cascade detection settings
DETECTOR_SETTINGS = {
    "cascade_file": "haarcascade_frontalcatface.xml",
    "scale_factor": 1.1,
    "min_neighbors": 3,
    "min_size": (30, 30),
    "max_size": (300, 300),
    "blur_kernel_size": 3
}

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
