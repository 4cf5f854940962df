# weedtrack/detection/detector.py

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from weedtrack.tracking.objects import DetectedObject


class Detector(ABC):
    """
    Abstract base class for plant detection front-ends.

    A detector turns one input frame into a list of detected objects
    with a 3-D position and a size. What a frame is (an image, a point
    cloud, a recorded message) is up to the implementation; the tracker
    only ever sees the detections.
    """

    def __init__(self, config: Dict = None):
        """
        Initialize the detector with configuration.

        Args:
            config: Configuration dictionary
        """
        self.config = config or {}
        self.is_initialized = False

    @abstractmethod
    def initialize(self) -> None:
        """Initialize the detector."""
        pass

    @abstractmethod
    def detect(self, frame: Any) -> List[DetectedObject]:
        """
        Detect plants in a frame.

        Args:
            frame: Input frame

        Returns:
            List of detected objects, in no particular order
        """
        pass

    def filter_by_size(self, detections: List[DetectedObject]) -> List[DetectedObject]:
        """
        Drop detections outside the configured size window.

        Uses the optional config keys min_size and max_size.
        """
        min_size = self.config.get('min_size')
        max_size = self.config.get('max_size')
        return [
            d for d in detections
            if (min_size is None or d.size >= min_size)
            and (max_size is None or d.size <= max_size)
        ]
