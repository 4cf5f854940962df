# weedtrack/utils/__init__.py
"""
Utility functions for the tracking system.
"""

from weedtrack.utils.config import detector_config, load_config, tracker_config
from weedtrack.utils.visualization import TrackerVisualizer

__all__ = ['load_config', 'tracker_config', 'detector_config', 'TrackerVisualizer']
