# pipeline/tracking_pipeline.py

import time
import logging
from typing import Any, Dict, List, Optional

from weedtrack.detection.detector import Detector
from weedtrack.tracking.object_tracker import ObjectTracker
from weedtrack.tracking.objects import DetectedObject, TrackedObject

logger = logging.getLogger(__name__)


class TrackingResult:
    """Container for tracking results from a single frame."""

    def __init__(self):
        self.frame_id: int = 0
        self.timestamp: float = 0.0
        self.detections: List[DetectedObject] = []  # Detections fed to the tracker
        self.tracks: List[TrackedObject] = []  # Tracked objects in priority order
        self.top: Optional[TrackedObject] = None  # Head of the priority list
        self.processing_time: float = 0.0  # Processing time in seconds

    def __repr__(self):
        return (f"TrackingResult(frame_id={self.frame_id}, "
                f"detections={len(self.detections)}, "
                f"tracks={len(self.tracks)}, "
                f"processing_time={self.processing_time:.3f}s)")


class TrackingPipeline:
    """
    Runs the detection front-end and the object tracker frame by frame.

    The pipeline owns the frame counter and timing statistics. Target
    selection stays with the caller through next_target().
    """

    def __init__(
        self,
        tracker: ObjectTracker,
        detector: Optional[Detector] = None,
        config: Dict = None
    ):
        """
        Initialize the tracking pipeline.

        Args:
            tracker: Object tracker
            detector: Detection front-end (optional, needed for process_frame)
            config: Configuration parameters with keys:
                - frames_log_interval: Log the frame rate every n frames (0 disables)
        """
        self.tracker = tracker
        self.detector = detector
        self.config = {
            'frames_log_interval': 20,
            **(config or {})
        }

        # Internal state
        self.frame_id = 0
        self.is_initialized = False
        self._interval_start = None

        # Performance metrics
        self.timing = {
            'detection': [],
            'tracking': [],
            'total': []
        }

    def initialize(self):
        """Initialize all modules in the pipeline."""
        logger.info("Initializing tracking pipeline...")

        if self.detector:
            self.detector.initialize()

        self.tracker.initialize()

        self.is_initialized = True
        self._interval_start = time.time()
        logger.info("Tracking pipeline initialized successfully")

    def process_frame(self, frame: Any, timestamp: float = None) -> TrackingResult:
        """
        Detect plants in a frame and update the tracker.

        Args:
            frame: Input frame for the detector
            timestamp: Frame timestamp (seconds)

        Returns:
            TrackingResult for this frame
        """
        if self.detector is None:
            raise RuntimeError("process_frame needs a detector, use process_detections instead")

        if not self.is_initialized:
            self.initialize()

        t0 = time.time()
        detections = self.detector.detect(frame)
        self.timing['detection'].append(time.time() - t0)

        return self._track(detections, timestamp, t0)

    def process_detections(self,
                           detections: List[DetectedObject],
                           timestamp: float = None) -> TrackingResult:
        """
        Update the tracker with detections produced elsewhere.

        Args:
            detections: Detections of the current frame
            timestamp: Frame timestamp (seconds)

        Returns:
            TrackingResult for this frame
        """
        if not self.is_initialized:
            self.initialize()

        return self._track(detections, timestamp, time.time())

    def _track(self, detections: List[DetectedObject], timestamp: Optional[float],
               start_time: float) -> TrackingResult:
        result = TrackingResult()
        result.frame_id = self.frame_id
        result.timestamp = timestamp if timestamp is not None else time.time()
        result.detections = list(detections)

        t0 = time.time()
        self.tracker.update(result.detections)
        result.tracks = self.tracker.tracks()
        result.top = result.tracks[0] if result.tracks else None
        t1 = time.time()
        self.timing['tracking'].append(t1 - t0)

        result.processing_time = t1 - start_time
        self.timing['total'].append(result.processing_time)

        self.frame_id += 1
        self._log_frame_rate()

        return result

    def _log_frame_rate(self) -> None:
        interval = self.config['frames_log_interval']
        if not interval or self.frame_id % interval != 0:
            return

        now = time.time()
        elapsed = now - self._interval_start if self._interval_start else 0.0
        fps = interval / elapsed if elapsed > 0 else 0.0
        logger.info(
            f"Frame {self.frame_id}: {fps:.2f} FPS, "
            f"tracking {self.tracker.object_count()} objects"
        )
        self._interval_start = now

    def next_target(self) -> Optional[TrackedObject]:
        """
        Select the next plant to uproot.

        Returns:
            The selected object, or None if no object is ready
        """
        target = self.tracker.top_valid()
        if target is not None:
            logger.info(
                f"Target {target.track_id} at "
                f"({target.x:.2f}, {target.y:.2f}, {target.z:.2f}) size {target.size:.2f}"
            )
        return target

    def report_performance(self) -> Dict[str, float]:
        """
        Report performance metrics for the pipeline.

        Returns:
            Dict with average timing for each component
        """
        performance = {}
        for key, times in self.timing.items():
            if times:
                performance[f"avg_{key}_time"] = sum(times) / len(times)
                performance[f"max_{key}_time"] = max(times)

        if self.timing['total']:
            avg_total = sum(self.timing['total']) / len(self.timing['total'])
            performance["fps"] = 1.0 / avg_total if avg_total > 0 else 0.0

        return performance

    def reset(self):
        """Reset the pipeline state."""
        self.frame_id = 0
        self._interval_start = time.time()
        self.tracker.reset()

        # Clear timing statistics
        for key in self.timing:
            self.timing[key] = []
