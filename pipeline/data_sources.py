# pipeline/data_sources.py

import os
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import yaml

from weedtrack.tracking.objects import DetectedObject

logger = logging.getLogger(__name__)

Frame = List[DetectedObject]


class DetectionSource(ABC):
    """
    Abstract base class for sources of per-frame detections.

    All source implementations should inherit from this class and
    implement the required methods.
    """

    def __init__(self, config: Dict = None):
        """
        Initialize the detection source.

        Args:
            config: Configuration dictionary
        """
        self.config = config or {}
        self.is_initialized = False

    @abstractmethod
    def initialize(self) -> None:
        """Initialize the detection source."""
        pass

    @abstractmethod
    def get_frame(self) -> Tuple[bool, Optional[Frame], Optional[float]]:
        """
        Get the detections of the next frame.

        Returns:
            Tuple of (success, detections, timestamp)
        """
        pass

    def release(self) -> None:
        """Release resources."""
        pass

    def __iter__(self) -> Iterator[Tuple[Frame, Optional[float]]]:
        """
        Create an iterator that yields detections and timestamps.

        Yields:
            Tuple of (detections, timestamp)
        """
        if not self.is_initialized:
            self.initialize()
        while True:
            success, detections, timestamp = self.get_frame()
            if not success:
                break
            yield detections, timestamp

    def __enter__(self):
        """Context manager entry."""
        if not self.is_initialized:
            self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.release()


class ListSource(DetectionSource):
    """
    Data source over frames already held in memory.
    """

    def __init__(self,
                 frames: Sequence[Sequence[DetectedObject]],
                 timestamps: Optional[Sequence[float]] = None,
                 config: Dict = None):
        """
        Initialize the list source.

        Args:
            frames: One list of detections per frame
            timestamps: Optional timestamp per frame
            config: Configuration dictionary
        """
        super().__init__(config)
        if timestamps is not None and len(timestamps) != len(frames):
            raise ValueError("timestamps must have one entry per frame")
        self.frames = [list(frame) for frame in frames]
        self.timestamps = list(timestamps) if timestamps is not None else None
        self.current_idx = 0

    def initialize(self) -> None:
        """Initialize the list source."""
        self.current_idx = 0
        self.is_initialized = True

    def get_frame(self) -> Tuple[bool, Optional[Frame], Optional[float]]:
        if self.current_idx >= len(self.frames):
            return False, None, None

        detections = self.frames[self.current_idx]
        timestamp = self.timestamps[self.current_idx] if self.timestamps else None
        self.current_idx += 1
        return True, detections, timestamp

    def __len__(self) -> int:
        return len(self.frames)


class RecordedDetectionSource(ListSource):
    """
    Replays detections recorded to a YAML file.

    Expected layout::

        frames:
          - timestamp: 0.0
            detections:
              - {x: 1.0, y: 2.0, z: 0.0, size: 4.0}
          - detections: []
    """

    def __init__(self, path: str, config: Dict = None):
        """
        Initialize the recorded source.

        Args:
            path: Path to the YAML recording
            config: Configuration dictionary
        """
        super().__init__([], config=config)
        self.path = path

    def initialize(self) -> None:
        """Load the recording."""
        if not os.path.exists(self.path):
            raise FileNotFoundError(f"Detection recording not found: {self.path}")

        with open(self.path, "r") as f:
            data = yaml.safe_load(f) or {}

        self.frames, self.timestamps = self._parse(data)
        logger.info(f"Loaded {len(self.frames)} recorded frames from {self.path}")

        super().initialize()

    def _parse(self, data: Any) -> Tuple[List[Frame], Optional[List[float]]]:
        if not isinstance(data, dict) or not isinstance(data.get('frames', []), list):
            raise ValueError(f"{self.path}: expected a mapping with a 'frames' list")

        frames = []
        timestamps = []
        for idx, item in enumerate(data.get('frames', [])):
            item = item or {}
            try:
                detections = [DetectedObject.from_dict(d) for d in item.get('detections') or []]
            except (TypeError, ValueError, AttributeError) as e:
                raise ValueError(f"{self.path}: bad detection in frame {idx}: {e}") from e
            frames.append(detections)
            timestamps.append(item.get('timestamp'))

        if all(t is None for t in timestamps):
            return frames, None
        return frames, [float(t) if t is not None else None for t in timestamps]
