"""
Module: core.geometry.bounds_calculator

Purpose:
    Compute the axis-aligned bounding box of a transformed rectangle in
    absolute (root) coordinates by transforming its four corners and taking
    the extrema. Reading x/y/width/height alone is wrong as soon as the
    node is rotated or skewed.

Key Functions:
    - absolute_bounds(): Bounds of a (transform, width, height) triple
    - node_bounds(): Bounds of a NodeRef
    - union_bounds(): Bounds enclosing several boxes
    - transformed_corners(): The four corners, in drawing order

Dependencies:
    - core.geometry.affine: apply
    - core.models: AffineTransform, AxisAlignedBounds, NodeRef, Point

Used By:
    - border.synthesizer: Node bounds before gap expansion
    - document.scene: Group extents in parent space
    - pipeline.controller: Selection anchor
"""

from __future__ import annotations

from typing import Iterable

from ..models.bounds import AxisAlignedBounds
from ..models.node import NodeRef
from ..models.transform import AffineTransform, Point
from .affine import apply


def transformed_corners(
    transform: AffineTransform,
    width: float,
    height: float,
) -> tuple[Point, Point, Point, Point]:
    """
    Transform the corners of a width x height rectangle.

    Returns:
        Corners in outline order: (0,0), (w,0), (w,h), (0,h)
    """
    return (
        apply(transform, 0, 0),
        apply(transform, width, 0),
        apply(transform, width, height),
        apply(transform, 0, height),
    )


def absolute_bounds(
    transform: AffineTransform,
    width: float,
    height: float,
) -> AxisAlignedBounds:
    """
    Axis-aligned bounds of a rectangle under ``transform``.

    A zero-size rectangle collapses to a point; that is not an error.

    Args:
        transform: Local -> absolute transform
        width: Local width (>= 0)
        height: Local height (>= 0)

    Returns:
        AxisAlignedBounds in the transform's target space

    Example:
        >>> absolute_bounds(AffineTransform.translation(10, 10), 100, 50)
        AxisAlignedBounds(x=10, y=10, width=100, height=50)
    """
    corners = transformed_corners(transform, width, height)
    xs = [p.x for p in corners]
    ys = [p.y for p in corners]
    min_x = min(xs)
    min_y = min(ys)
    return AxisAlignedBounds(
        x=min_x,
        y=min_y,
        width=max(xs) - min_x,
        height=max(ys) - min_y,
    )


def node_bounds(node: NodeRef) -> AxisAlignedBounds:
    """Absolute bounds of a scene node."""
    return absolute_bounds(node.absolute_transform, node.width, node.height)


def union_bounds(boxes: Iterable[AxisAlignedBounds]) -> AxisAlignedBounds:
    """
    Smallest box enclosing every box in ``boxes``.

    Raises:
        ValueError: If ``boxes`` is empty
    """
    result = None
    for box in boxes:
        result = box if result is None else result.union(box)
    if result is None:
        raise ValueError("union_bounds() requires at least one box")
    return result
