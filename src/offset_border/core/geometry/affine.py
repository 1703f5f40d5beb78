"""
Module: core.geometry.affine

Purpose:
    Affine matrix operations on 2x3 transforms: apply a matrix to a point,
    invert a matrix, and convert an absolute point into a parent's local
    coordinate space.

Key Functions:
    - apply(): Transform a point
    - invert(): Closed-form inverse (adjugate / determinant)
    - to_local(): Absolute point -> parent-local point

Dependencies:
    - core.models.transform: AffineTransform, Point

Used By:
    - core.geometry.bounds_calculator: Corner transformation
    - border.synthesizer: Parent-space conversion of the border origin
    - output.renderer / output.preview: Node outlines

Degenerate Policy:
    A zero determinant raises DegenerateTransformError instead of letting
    Infinity/NaN flow into placement coordinates. Batch callers skip the
    item that triggered it.
"""

from __future__ import annotations

from typing import Optional

from offset_border.errors import DegenerateTransformError

from ..models.transform import DEGENERATE_EPSILON, AffineTransform, Point


def apply(m: AffineTransform, x: float, y: float) -> Point:
    """
    Apply ``m`` to the point (x, y).

    Example:
        >>> apply(AffineTransform.translation(5, 5), 1, 2)
        Point(x=6, y=7)
    """
    return Point(
        m.a * x + m.c * y + m.e,
        m.b * x + m.d * y + m.f,
    )


def invert(m: AffineTransform) -> AffineTransform:
    """
    Invert a 2x3 affine matrix.

    Args:
        m: Transform to invert

    Returns:
        Transform such that apply(invert(m), *apply(m, x, y)) == (x, y)

    Raises:
        DegenerateTransformError: If |det| <= DEGENERATE_EPSILON
    """
    det = m.determinant
    if not m.is_invertible:
        raise DegenerateTransformError(det)

    a = m.d / det
    b = -m.b / det
    c = -m.c / det
    d = m.a / det
    return AffineTransform(
        a=a,
        b=b,
        c=c,
        d=d,
        e=-(a * m.e + c * m.f),
        f=-(b * m.e + d * m.f),
    )


def to_local(
    point: Point,
    parent_transform: AffineTransform,
    *,
    parent_is_root: bool = False,
    inverse: Optional[AffineTransform] = None,
) -> Point:
    """
    Convert an absolute point into a parent's local coordinate space.

    The root container has no meaningful transform of its own, so a root
    parent returns the point unchanged without inverting anything.

    Args:
        point: Point in absolute space
        parent_transform: Parent's absolute transform
        parent_is_root: True when the parent is the document root (page)
        inverse: Precomputed inverse of parent_transform (from a run cache)

    Returns:
        The same location expressed in the parent's local space

    Raises:
        DegenerateTransformError: If the parent transform is not invertible
    """
    if parent_is_root:
        return point
    if inverse is None:
        inverse = invert(parent_transform)
    return apply(inverse, point.x, point.y)
