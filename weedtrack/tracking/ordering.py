# weedtrack/tracking/ordering.py
"""
Priority orderings for the tracked-object list.

An ordering is a predicate ``greater(a, b)`` over two detections. The
tracker keeps its id list sorted so that the head is the "largest" object
under the active ordering.
"""

from typing import Callable, Union

from weedtrack.tracking.objects import DetectedObject

Ordering = Callable[[DetectedObject, DetectedObject], bool]

_AXES = ('x', 'y', 'z')


def by_size(a: DetectedObject, b: DetectedObject) -> bool:
    """Larger plants first."""
    return a.size > b.size


def by_axis(axis: str) -> Ordering:
    """
    Order by one coordinate, largest first.

    Args:
        axis: One of 'x', 'y' or 'z'

    Returns:
        Ordering predicate
    """
    if axis not in _AXES:
        raise ValueError(f"Unknown axis '{axis}', expected one of {_AXES}")

    def greater(a: DetectedObject, b: DetectedObject) -> bool:
        return getattr(a, axis) > getattr(b, axis)

    greater.__name__ = f"by_{axis}"
    return greater


def get_ordering(ordering: Union[str, Ordering, None]) -> Ordering:
    """
    Resolve an ordering from configuration.

    Args:
        ordering: 'size', 'x', 'y', 'z', a callable predicate, or None for
            the default size ordering

    Returns:
        Ordering predicate
    """
    if ordering is None or ordering == 'size':
        return by_size
    if callable(ordering):
        return ordering
    if ordering in _AXES:
        return by_axis(ordering)
    raise ValueError(f"Unknown ordering '{ordering}'")
