# pipeline/__init__.py
"""
Pipeline integration modules for the tracking system.
"""

from pipeline.tracking_pipeline import TrackingPipeline, TrackingResult
from pipeline.data_sources import DetectionSource, ListSource, RecordedDetectionSource

__all__ = ['TrackingPipeline', 'TrackingResult', 'DetectionSource', 'ListSource', 'RecordedDetectionSource']
