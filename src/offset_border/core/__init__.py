"""
Module: core

Purpose:
    Geometry core: affine matrix math, absolute bounds of transformed
    rectangles and the value types both build on.

Key Functions:
    - apply(), invert(), to_local(): Affine math
    - absolute_bounds(), node_bounds(), union_bounds(): Bounds

Key Classes:
    - AffineTransform, Point, AxisAlignedBounds, NodeRef
"""

from .models import AffineTransform, Point, AxisAlignedBounds, NodeRef
from .geometry import (
    apply,
    invert,
    to_local,
    absolute_bounds,
    node_bounds,
    union_bounds,
)

__all__ = [
    # Models
    "AffineTransform",
    "Point",
    "AxisAlignedBounds",
    "NodeRef",
    # Geometry
    "apply",
    "invert",
    "to_local",
    "absolute_bounds",
    "node_bounds",
    "union_bounds",
]
