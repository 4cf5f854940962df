# weedtrack/__init__.py
"""
Plant tracking and one-shot target selection across video frames.
"""

from weedtrack.tracking.objects import DetectedObject, TrackedObject
from weedtrack.tracking.object_tracker import ObjectTracker

__version__ = "0.1.0"

__all__ = ['DetectedObject', 'TrackedObject', 'ObjectTracker']
