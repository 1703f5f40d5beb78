"""Affine math and bounds calculation for transformed rectangles."""

from .affine import DEGENERATE_EPSILON, apply, invert, to_local
from .bounds_calculator import absolute_bounds, node_bounds, union_bounds

__all__ = [
    "DEGENERATE_EPSILON",
    "apply",
    "invert",
    "to_local",
    "absolute_bounds",
    "node_bounds",
    "union_bounds",
]
