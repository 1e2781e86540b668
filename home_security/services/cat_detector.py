"""Cat detector implementations."""

import os
import random
from typing import List, Optional, Tuple

import cv2
import numpy as np

from ..config.defaults import DETECTOR_SETTINGS
from ..exceptions import CatDetectorError
from ..logging_config import get_logger
from .error_decorators import log_execution_time
from .interfaces import CatDetectorInterface

logger = get_logger("cat_detector")


class FakeCatDetector(CatDetectorInterface):
    """Detector that answers at random, for running without a camera model."""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def image_contains_cat(self, image: np.ndarray, confidence_threshold: float) -> bool:
        return self._random.random() < 0.5


class OpenCVCatDetector(CatDetectorInterface):
    """Cat detector using an OpenCV Haar cascade for cat faces."""

    def __init__(self,
                 cascade_path: Optional[str] = None,
                 scale_factor: float = DETECTOR_SETTINGS["scale_factor"],
                 min_neighbors: int = DETECTOR_SETTINGS["min_neighbors"],
                 min_size: Tuple[int, int] = DETECTOR_SETTINGS["min_size"],
                 max_size: Tuple[int, int] = DETECTOR_SETTINGS["max_size"]):
        """
        Initialize the detector and load its cascade.

        Args:
            cascade_path: Cascade XML file; None uses the one bundled with OpenCV
            scale_factor: Image pyramid scale step
            min_neighbors: Neighbouring rectangles required to keep a detection
            min_size: Smallest face size in pixels
            max_size: Largest face size in pixels

        Raises:
            CatDetectorError: If the cascade cannot be loaded
        """
        self.cascade_path = cascade_path or os.path.join(
            cv2.data.haarcascades, DETECTOR_SETTINGS["cascade_file"])
        self.scale_factor = scale_factor
        self.min_neighbors = min_neighbors
        self.min_detection_size = min_size
        self.max_detection_size = max_size
        self.blur_kernel_size = DETECTOR_SETTINGS["blur_kernel_size"]

        if not os.path.exists(self.cascade_path):
            raise CatDetectorError(f"Cascade file not found: {self.cascade_path}")

        try:
            self.haar_cascade = cv2.CascadeClassifier(self.cascade_path)
        except cv2.error as e:
            raise CatDetectorError(f"Failed to load cascade from {self.cascade_path}: {e}") from e
        if self.haar_cascade.empty():
            raise CatDetectorError(f"Failed to load cascade from {self.cascade_path}")

        logger.info(f"Loaded Haar cascade from {self.cascade_path}")

    @log_execution_time("cat_detector")
    def image_contains_cat(self, image: np.ndarray, confidence_threshold: float) -> bool:
        if image is None:
            raise CatDetectorError("No image to classify")

        try:
            boxes = self._detect(self._preprocess_frame(image))
        except cv2.error as e:
            raise CatDetectorError(f"Haar cascade detection failed: {e}") from e

        scores = self.score_detections(boxes, image.shape)
        best = max(scores, default=0.0)
        logger.debug(f"{len(boxes)} candidate cat faces, best confidence {best:.1f}%")

        return best >= confidence_threshold

    def _preprocess_frame(self, frame: np.ndarray) -> np.ndarray:
        """Grayscale, denoise and equalize a frame."""
        if frame.ndim == 3:
            gray = cv2.cvtColor(frame, cv2.COLOR_RGB2GRAY)
        else:
            gray = frame

        if gray.dtype != np.uint8:
            gray = cv2.convertScaleAbs(gray)

        blurred = cv2.GaussianBlur(gray, (self.blur_kernel_size, self.blur_kernel_size), 0)
        return cv2.equalizeHist(blurred)

    def _detect(self, frame: np.ndarray) -> List[Tuple[int, int, int, int]]:
        detections = self.haar_cascade.detectMultiScale(
            frame,
            scaleFactor=self.scale_factor,
            minNeighbors=self.min_neighbors,
            minSize=self.min_detection_size,
            maxSize=self.max_detection_size,
            flags=cv2.CASCADE_SCALE_IMAGE
        )
        return [(int(x), int(y), int(w), int(h)) for x, y, w, h in detections]

    def score_detections(self, boxes: List[Tuple[int, int, int, int]],
                         frame_shape: Tuple[int, ...]) -> List[float]:
        """Score boxes in percent; larger boxes near the frame center score higher."""
        frame_h, frame_w = frame_shape[:2]
        max_dist = (frame_w ** 2 + frame_h ** 2) ** 0.5
        max_area = self.max_detection_size[0] * self.max_detection_size[1]

        scores = []
        for x, y, w, h in boxes:
            center_x = x + w // 2
            center_y = y + h // 2
            center_dist = ((center_x - frame_w // 2) ** 2 + (center_y - frame_h // 2) ** 2) ** 0.5
            center_factor = 1.0 - (center_dist / max_dist)
            size_factor = min(1.0, (w * h) / max_area)

            confidence = 0.6 + 0.2 * center_factor + 0.2 * size_factor
            scores.append(max(0.0, min(1.0, confidence)) * 100.0)

        return scores
