# weedtrack/tracking/objects.py

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Tuple

import numpy as np


@dataclass(frozen=True)
class DetectedObject:
    """
    A single detection handed over by the front-end for one frame.

    Coordinates are frame-local units (cm on the ground plane for the
    plant detector); size is the detected blob size in the same units.
    """

    x: float
    y: float
    z: float = 0.0
    size: float = 0.0

    @property
    def position(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def as_array(self) -> np.ndarray:
        """Position as a float array [x, y, z]."""
        return np.array(self.position, dtype=np.float64)

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y, 'z': self.z, 'size': self.size}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'DetectedObject':
        """
        Build a detection from a mapping with x, y and optional z/size keys.

        Args:
            data: Mapping such as {'x': 1.0, 'y': 2.0, 'z': 0.0, 'size': 4.0}

        Returns:
            DetectedObject
        """
        try:
            return cls(
                x=float(data['x']),
                y=float(data['y']),
                z=float(data.get('z', 0.0)),
                size=float(data.get('size', 0.0))
            )
        except KeyError as e:
            raise TypeError(f"Detection is missing coordinate {e}") from e


@dataclass
class TrackedObject:
    """
    Internal state of one tracked plant.

    framecount counts consecutive matched frames, disappeared counts
    consecutive missed frames. uprooted is set once the object has been
    handed out as a target and never cleared.
    """

    track_id: int
    detection: DetectedObject
    framecount: int = 1
    disappeared: int = 0
    uprooted: bool = field(default=False)

    @property
    def x(self) -> float:
        return self.detection.x

    @property
    def y(self) -> float:
        return self.detection.y

    @property
    def z(self) -> float:
        return self.detection.z

    @property
    def size(self) -> float:
        return self.detection.size

    def mark_matched(self, detection: DetectedObject) -> None:
        self.detection = detection
        self.framecount += 1
        self.disappeared = 0

    def mark_missed(self) -> None:
        self.disappeared += 1
        self.framecount = 0

    def copy(self) -> 'TrackedObject':
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'track_id': self.track_id,
            **self.detection.to_dict(),
            'framecount': self.framecount,
            'disappeared': self.disappeared,
            'uprooted': self.uprooted
        }


def euclidean_distance(a: DetectedObject, b: DetectedObject) -> float:
    """3-D distance between two objects. Size is not part of the metric."""
    return math.sqrt((a.x - b.x) ** 2 + (a.y - b.y) ** 2 + (a.z - b.z) ** 2)
