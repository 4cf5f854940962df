# weedtrack/tracking/tracker.py

from abc import ABC, abstractmethod
from typing import Dict, List

from weedtrack.tracking.objects import DetectedObject


class Tracker(ABC):
    """
    Abstract base class for object trackers.

    All tracker implementations should inherit from this class and
    implement the update method.
    """

    def __init__(self, config: Dict = None):
        """
        Initialize the tracker with configuration.

        Args:
            config: Configuration dictionary
        """
        self.config = config or {}
        self.is_initialized = False

    @abstractmethod
    def initialize(self) -> None:
        """Initialize the tracker."""
        pass

    @abstractmethod
    def update(self, detections: List[DetectedObject]) -> None:
        """
        Feed the detections of one frame into the tracker.

        Args:
            detections: Unordered detections from the current frame
        """
        pass

    @abstractmethod
    def reset(self) -> None:
        """Reset tracker state."""
        pass
