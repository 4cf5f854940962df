# weedtrack/tracking/__init__.py
"""
Object tracking module for maintaining plant identity across frames.
"""

from weedtrack.tracking.tracker import Tracker
from weedtrack.tracking.object_tracker import ObjectTracker
from weedtrack.tracking.objects import DetectedObject, TrackedObject, euclidean_distance
from weedtrack.tracking.association import AssociationResult, associate, distance_matrix
from weedtrack.tracking.ordering import by_axis, by_size, get_ordering

__all__ = [
    'Tracker', 'ObjectTracker', 'DetectedObject', 'TrackedObject',
    'euclidean_distance', 'AssociationResult', 'associate', 'distance_matrix',
    'by_axis', 'by_size', 'get_ordering'
]
