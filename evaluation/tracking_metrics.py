# evaluation/tracking_metrics.py

import numpy as np
from typing import List, Dict, Tuple
from collections import defaultdict
from scipy.optimize import linear_sum_assignment

# Cost for pairs outside the gate; finite so the assignment stays feasible
_GATED_COST = 1e9


def point_of(track: Dict) -> Tuple[float, float, float]:
    """
    Extract the 3-D position of a track record.

    Accepts either a 'position' sequence or x/y/z keys (z defaults to 0).
    """
    if 'position' in track:
        x, y, z = (list(track['position']) + [0.0, 0.0, 0.0])[:3]
        return float(x), float(y), float(z)
    return float(track['x']), float(track['y']), float(track.get('z', 0.0))


def calculate_tracking_metrics(
    tracks_gt: List[Dict],
    tracks_pred: List[Dict],
    distance_threshold: float = 5.0
) -> Dict[str, float]:
    """
    Calculate multi-object tracking metrics (MOTA, MOTP, ID switches, etc.)
    for point tracks.

    Args:
        tracks_gt: List of ground truth tracks by frame
                  Each item is {frame_id, track_id, position} or {frame_id, track_id, x, y, z}
        tracks_pred: List of predicted tracks by frame, same layout
        distance_threshold: Maximum distance for a prediction to match ground truth

    Returns:
        Dictionary with tracking metrics. MOTP is the mean distance of matched pairs.
    """
    # Group tracks by frame
    gt_by_frame = defaultdict(list)
    pred_by_frame = defaultdict(list)

    for gt in tracks_gt:
        gt_by_frame[gt['frame_id']].append(gt)

    for pred in tracks_pred:
        pred_by_frame[pred['frame_id']].append(pred)

    all_frames = sorted(set(gt_by_frame.keys()) | set(pred_by_frame.keys()))

    total_gt = 0
    total_fp = 0
    total_fn = 0
    total_id_switches = 0
    total_matches = 0
    total_distance = 0.0

    # gt_id -> pred_id from the last frame the gt object was matched in
    last_match = {}

    for frame_id in all_frames:
        gt_tracks = gt_by_frame[frame_id]
        pred_tracks = pred_by_frame[frame_id]

        total_gt += len(gt_tracks)

        if not gt_tracks:
            total_fp += len(pred_tracks)
            continue

        if not pred_tracks:
            total_fn += len(gt_tracks)
            continue

        gt_points = np.array([point_of(t) for t in gt_tracks])
        pred_points = np.array([point_of(t) for t in pred_tracks])
        dist = np.linalg.norm(gt_points[:, np.newaxis, :] - pred_points[np.newaxis, :, :], axis=2)

        cost_matrix = np.where(dist <= distance_threshold, dist, _GATED_COST)
        gt_indices, pred_indices = linear_sum_assignment(cost_matrix)

        matches = [
            (i, j) for i, j in zip(gt_indices, pred_indices)
            if cost_matrix[i, j] < _GATED_COST
        ]

        total_matches += len(matches)
        total_distance += float(sum(dist[i, j] for i, j in matches))
        total_fp += len(pred_tracks) - len(matches)
        total_fn += len(gt_tracks) - len(matches)

        for i, j in matches:
            gt_id = gt_tracks[i]['track_id']
            pred_id = pred_tracks[j]['track_id']

            if gt_id in last_match and last_match[gt_id] != pred_id:
                total_id_switches += 1
            last_match[gt_id] = pred_id

    mota = 1.0 - (total_fp + total_fn + total_id_switches) / total_gt if total_gt > 0 else 0.0
    motp = total_distance / total_matches if total_matches > 0 else 0.0

    result = {
        'MOTA': mota,  # Multiple Object Tracking Accuracy
        'MOTP': motp,  # Mean matched distance
        'ID_Switches': total_id_switches,
        'Matches': total_matches,
        'FP': total_fp,  # False Positives
        'FN': total_fn,  # False Negatives
        'GT': total_gt,  # Total Ground Truth
        'Precision': total_matches / (total_matches + total_fp) if (total_matches + total_fp) > 0 else 0.0,
        'Recall': total_matches / (total_matches + total_fn) if (total_matches + total_fn) > 0 else 0.0
    }

    return result


def track_fragmentation(tracks: List[Dict]) -> Dict[int, int]:
    """
    Calculate track fragmentation (number of separate tracks per object).

    A plant that was dropped and re-registered shows up with more than one
    track id.

    Args:
        tracks: List of track dictionaries with object_id and track_id

    Returns:
        Dictionary mapping object_id to fragment count
    """
    fragments = defaultdict(set)

    for track in tracks:
        if 'object_id' in track and 'track_id' in track:
            fragments[track['object_id']].add(track['track_id'])

    return {obj_id: len(track_ids) for obj_id, track_ids in fragments.items()}
