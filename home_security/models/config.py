"""Configuration data models."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class SecurityConfig:
    """System configuration settings."""
    # Camera settings
    cat_confidence_threshold: float = 50.0  # Percent, 0-100
    cascade_path: Optional[str] = None  # None uses the OpenCV bundled cascade

    # Storage settings
    state_file: str = "data/security_state.json"

    # Logging settings
    log_level: str = "INFO"
    log_dir: str = "logs"
