"""Closest point and distance queries between points, lines and segments."""

from rigidgeom.metric.closest_point import closest_point, closest_point_t
from rigidgeom.metric.distance import (
    distance_line_point,
    distance_segment_point,
    distance_skew_lines,
)

__all__ = [
    "closest_point",
    "closest_point_t",
    "distance_line_point",
    "distance_segment_point",
    "distance_skew_lines",
]
