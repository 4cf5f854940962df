# evaluation/__init__.py
"""
Offline evaluation of tracker output against ground truth.
"""

from evaluation.tracking_metrics import calculate_tracking_metrics, track_fragmentation

__all__ = ['calculate_tracking_metrics', 'track_fragmentation']
