# weedtrack/tracking/object_tracker.py

import logging
import threading
from typing import Dict, List, Optional

from weedtrack.tracking.association import associate
from weedtrack.tracking.objects import DetectedObject, TrackedObject
from weedtrack.tracking.ordering import get_ordering
from weedtrack.tracking.tracker import Tracker

logger = logging.getLogger(__name__)


class ObjectTracker(Tracker):
    """
    Centroid tracker that keeps a priority-sorted list of active plants
    and hands out each one as a target at most once.

    Objects are matched frame to frame by greedy nearest-neighbour
    association in 3-D, dropped once they go missing for more than
    ``max_disappeared`` consecutive frames, and become eligible targets
    after ``min_valid_framecount`` consecutive matches.

    All public methods hold a single lock, so updates from a detection
    thread and queries from an actuation thread never see a half-applied
    frame.
    """

    def __init__(self, config: Dict = None):
        """
        Initialize the object tracker.

        Args:
            config: Configuration with keys:
                - distance_tolerance: Matches need a distance strictly below this
                - max_disappeared: Missed frames tolerated before removal
                - min_valid_framecount: Consecutive matches before an object
                  can be returned by top_valid
                - ordering: Priority ordering name ('size', 'x', 'y', 'z')
                  or a greater-than predicate
        """
        super().__init__(config)
        self.config = {
            'distance_tolerance': 7.0,
            'max_disappeared': 10,
            'min_valid_framecount': 3,
            'ordering': 'size',
            **(config or {})
        }
        self._validate_config()

        self.distance_tolerance = float(self.config['distance_tolerance'])
        self.max_disappeared = int(self.config['max_disappeared'])
        self.min_valid_framecount = int(self.config['min_valid_framecount'])
        self.is_greater = get_ordering(self.config['ordering'])

        self._lock = threading.RLock()
        self._objects: Dict[int, TrackedObject] = {}
        self._id_list: List[int] = []
        self._next_id = 0

    def _validate_config(self) -> None:
        tolerance = self.config['distance_tolerance']
        if isinstance(tolerance, bool) or not isinstance(tolerance, (int, float)) or not tolerance > 0:
            raise ValueError(f"distance_tolerance must be a positive number, got {tolerance!r}")
        for key in ('max_disappeared', 'min_valid_framecount'):
            value = self.config[key]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{key} must be a non-negative integer, got {value!r}")

    def initialize(self) -> None:
        """Initialize the object tracker."""
        logger.info(
            f"Initializing object tracker (distance_tolerance={self.distance_tolerance}, "
            f"max_disappeared={self.max_disappeared}, "
            f"min_valid_framecount={self.min_valid_framecount})"
        )
        self.is_initialized = True

    def update(self, detections: List[DetectedObject]) -> None:
        """
        Update the active objects with the detections of one frame.

        Args:
            detections: Unordered detections from the current frame
        """
        with self._lock:
            if not self.is_initialized:
                self.initialize()

            if len(detections) == 0:
                for obj in self._objects.values():
                    obj.mark_missed()

            elif len(self._objects) == 0:
                logger.debug("Tracker -- no current objects, registering all objects")
                for detection in detections:
                    self.register_object(detection)

            else:
                tracked = [self._objects[track_id] for track_id in self._id_list]
                result = associate(
                    [obj.detection for obj in tracked],
                    detections,
                    self.distance_tolerance
                )

                for row, col in result.matches:
                    self._apply_match(tracked[row], detections[col])

                for row in result.unmatched_tracks:
                    tracked[row].mark_missed()

                for col in result.unmatched_detections:
                    self.register_object(detections[col])

            self._cleanup_disappeared()

    def register_object(self, detection: DetectedObject) -> int:
        """
        Start tracking a detection.

        Args:
            detection: Detection that matched no tracked object

        Returns:
            The new track id
        """
        with self._lock:
            logger.info(
                "Tracking (x,y,z,size) = (%.2f,%.2f,%.2f,%.2f)",
                detection.x, detection.y, detection.z, detection.size
            )

            track_id = self._next_id
            self._next_id += 1

            self._insert_id(track_id, detection)
            self._objects[track_id] = TrackedObject(track_id=track_id, detection=detection)

            return track_id

    def _insert_id(self, track_id: int, detection: DetectedObject) -> None:
        # Insertion sort on ids, ahead of the first entry not greater than detection
        idx = 0
        while (idx < len(self._id_list)
               and self.is_greater(self._objects[self._id_list[idx]].detection, detection)):
            idx += 1
        self._id_list.insert(idx, track_id)

    def _apply_match(self, obj: TrackedObject, detection: DetectedObject) -> None:
        previous = obj.detection
        obj.mark_matched(detection)

        # Keep the id list sorted when the new snapshot moves in the ordering
        if self.is_greater(previous, detection) or self.is_greater(detection, previous):
            self._id_list.remove(obj.track_id)
            self._insert_id(obj.track_id, detection)

    def deregister_object(self, track_id: int) -> None:
        """
        Stop tracking an object. Ids are never handed out again.

        Args:
            track_id: Id of a currently tracked object
        """
        with self._lock:
            if track_id not in self._objects:
                raise KeyError(f"Track {track_id} is not registered")

            logger.debug(f"Removing track {track_id}")
            del self._objects[track_id]
            self._id_list.remove(track_id)

    def _cleanup_disappeared(self) -> None:
        expired = [
            track_id for track_id, obj in self._objects.items()
            if obj.disappeared > self.max_disappeared
        ]
        for track_id in expired:
            self.deregister_object(track_id)

    def top(self) -> Optional[TrackedObject]:
        """
        Returns the head of the priority list without consuming it.

        Under the default size ordering this is the largest tracked plant.

        Returns:
            Copy of the head of the priority list, or None if nothing is tracked
        """
        with self._lock:
            if not self._id_list:
                return None
            return self._objects[self._id_list[0]].copy()

    def top_valid(self) -> Optional[TrackedObject]:
        """
        Returns the largest object that is ready to be uprooted and marks it.

        An object qualifies when it has been matched for at least
        min_valid_framecount consecutive frames and has not been returned
        before. Each object is returned at most once during its lifetime.

        Returns:
            Copy of the selected object (uprooted already set), or None
        """
        with self._lock:
            for track_id in self._id_list:
                obj = self._objects[track_id]
                if obj.framecount >= self.min_valid_framecount and not obj.uprooted:
                    obj.uprooted = True
                    logger.debug(f"Selected track {track_id} as target")
                    return obj.copy()
            return None

    def active_objects(self) -> List[DetectedObject]:
        """Current detections of all tracked objects, in priority order."""
        with self._lock:
            return [self._objects[track_id].detection for track_id in self._id_list]

    def tracks(self) -> List[TrackedObject]:
        """Copies of all tracked objects, in priority order."""
        with self._lock:
            return [self._objects[track_id].copy() for track_id in self._id_list]

    def get(self, track_id: int) -> Optional[TrackedObject]:
        with self._lock:
            obj = self._objects.get(track_id)
            return obj.copy() if obj is not None else None

    def object_count(self) -> int:
        """Number of currently tracked objects."""
        with self._lock:
            return len(self._objects)

    def __len__(self) -> int:
        return self.object_count()

    def reset(self) -> None:
        """
        Drop all tracked objects.

        Ids keep increasing across resets so an old id can never refer to a
        different plant.
        """
        with self._lock:
            self._objects = {}
            self._id_list = []
