"""Utility functions for the home security system."""

import os

import numpy as np
from PIL import Image

from .exceptions import CatDetectorError


def ensure_directory_exists(path: str) -> None:
    """Ensure a directory exists, create if it doesn't."""
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)


def load_image(image_path: str) -> np.ndarray:
    """Load an image file as an RGB numpy array."""
    try:
        with Image.open(image_path) as pil_image:
            return np.asarray(pil_image.convert('RGB'), dtype=np.uint8)
    except (OSError, ValueError) as e:
        raise CatDetectorError(f"Failed to load image {image_path}: {e}") from e
