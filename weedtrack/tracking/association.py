# weedtrack/tracking/association.py

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from weedtrack.tracking.objects import DetectedObject

logger = logging.getLogger(__name__)


@dataclass
class AssociationResult:
    """
    Outcome of matching one frame of detections to the tracked objects.

    Indices refer to positions in the lists passed to ``associate``.
    """

    matches: List[Tuple[int, int]] = field(default_factory=list)  # (track_idx, det_idx)
    unmatched_tracks: List[int] = field(default_factory=list)
    unmatched_detections: List[int] = field(default_factory=list)


def _positions(objects: Sequence[DetectedObject]) -> np.ndarray:
    if len(objects) == 0:
        return np.empty((0, 3), dtype=np.float64)
    return np.array([obj.position for obj in objects], dtype=np.float64)


def distance_matrix(tracked: Sequence[DetectedObject],
                    detections: Sequence[DetectedObject]) -> np.ndarray:
    """
    Pairwise 3-D distances between tracked objects and new detections.

    Args:
        tracked: Current snapshots of the tracked objects (m rows)
        detections: Detections of the current frame (n columns)

    Returns:
        m x n array of euclidean distances
    """
    a = _positions(tracked)
    b = _positions(detections)
    return np.linalg.norm(a[:, np.newaxis, :] - b[np.newaxis, :, :], axis=2)


def associate(tracked: Sequence[DetectedObject],
              detections: Sequence[DetectedObject],
              distance_tolerance: float) -> AssociationResult:
    """
    Greedy nearest-neighbour association of detections to tracked objects.

    Each row of the distance matrix is ranked nearest first, then rows are
    resolved in order of their nearest distance. A row takes the first
    column in its ranking that no earlier row claimed and whose distance is
    strictly below the tolerance. This is not an optimal assignment.

    Unmatched detections are reported in the ranking order of the first
    tracked object, which is the order they get registered in.

    Args:
        tracked: Current snapshots of the tracked objects
        detections: Detections of the current frame
        distance_tolerance: Matches need a distance strictly below this

    Returns:
        AssociationResult
    """
    m, n = len(tracked), len(detections)

    if n == 0:
        return AssociationResult(unmatched_tracks=list(range(m)))
    if m == 0:
        return AssociationResult(unmatched_detections=list(range(n)))

    dist = distance_matrix(tracked, detections)

    # Per-row ranking of columns, nearest first
    ranking = np.argsort(dist, axis=1, kind='stable')

    # Rows ordered by the distance to their own nearest column
    nearest = dist[np.arange(m), ranking[:, 0]]
    row_order = np.argsort(nearest, kind='stable')

    result = AssociationResult()
    used_cols = set()

    for row in row_order:
        for col in ranking[row]:
            if col not in used_cols and dist[row, col] < distance_tolerance:
                used_cols.add(col)
                result.matches.append((int(row), int(col)))
                break
        else:
            result.unmatched_tracks.append(int(row))

    result.unmatched_detections = [int(col) for col in ranking[0] if col not in used_cols]

    logger.debug(
        f"Associated {len(result.matches)} of {m} tracks with {n} detections, "
        f"{len(result.unmatched_detections)} new"
    )

    return result
