# weedtrack/detection/__init__.py
"""
Detection front-end interface feeding the tracker.
"""

from weedtrack.detection.detector import Detector

__all__ = ['Detector']
