"""
Module: transform

Purpose:
    Provides the AffineTransform and Point value types. An AffineTransform
    is the 2x3 matrix a scene node uses to map its local coordinates into
    its parent's (relative transform) or the document root's (absolute
    transform) coordinate space.

Key Functions:
    - AffineTransform.identity(): Identity matrix
    - AffineTransform.translation(tx, ty): Pure translation
    - AffineTransform.rotation(degrees): Rotation about the origin
    - AffineTransform.multiply(other): Composition
    - AffineTransform.from_matrix(m) / to_matrix(): [[a, c, e], [b, d, f]]

Dependencies:
    - dataclasses (std)
    - math (std)

Used By:
    - core.geometry.affine: apply / invert / to_local
    - core.geometry.bounds_calculator: Corner transformation
    - document.scene: Node relative/absolute transforms

Matrix Layout:
    [[a, c, e],
     [b, d, f]]

    x' = a*x + c*y + e
    y' = b*x + d*y + f
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

# |det| at or below this is treated as zero
DEGENERATE_EPSILON = 1e-12


@dataclass(frozen=True, slots=True)
class Point:
    """
    A 2D point.

    The point carries no coordinate space of its own; callers track whether
    it is absolute (document root) or local (parent-relative).

    Example:
        >>> Point(10, 20).translated(5, -5)
        Point(x=15, y=15)
    """

    x: float
    y: float

    def translated(self, dx: float, dy: float) -> Point:
        """Return a copy offset by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class AffineTransform:
    """
    2x3 affine matrix (immutable).

    Attributes:
        a: x scale / rotation cosine term
        b: y shear / rotation sine term
        c: x shear / negative rotation sine term
        d: y scale / rotation cosine term
        e: x translation
        f: y translation

    Invariants:
        - Inversion requires determinant != 0 (see core.geometry.affine.invert)

    Example:
        >>> t = AffineTransform.translation(10, 20)
        >>> t.to_matrix()
        [[1.0, 0.0, 10], [0.0, 1.0, 20]]
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    # ─────────────────────────────────────────────────────────────────────────
    # Constructors
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def identity(cls) -> AffineTransform:
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> AffineTransform:
        return cls(e=tx, f=ty)

    @classmethod
    def scaling(cls, sx: float, sy: float | None = None) -> AffineTransform:
        return cls(a=sx, d=sx if sy is None else sy)

    @classmethod
    def rotation(cls, degrees: float, tx: float = 0.0, ty: float = 0.0) -> AffineTransform:
        """
        Rotation about the origin followed by a translation.

        Positive angles turn the x axis towards the y axis.

        Args:
            degrees: Rotation angle in degrees
            tx: X translation applied after rotation
            ty: Y translation applied after rotation
        """
        radians = math.radians(degrees)
        cos_r = math.cos(radians)
        sin_r = math.sin(radians)
        return cls(a=cos_r, b=sin_r, c=-sin_r, d=cos_r, e=tx, f=ty)

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[float]]) -> AffineTransform:
        """
        Build from the row-major [[a, c, e], [b, d, f]] form.

        Raises:
            ValueError: If the matrix is not 2 rows of 3 numbers
        """
        if len(matrix) != 2 or any(len(row) != 3 for row in matrix):
            raise ValueError(f"Expected a 2x3 matrix, got {matrix!r}")
        (a, c, e), (b, d, f) = matrix
        return cls(a=float(a), b=float(b), c=float(c), d=float(d), e=float(e), f=float(f))

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def determinant(self) -> float:
        """a*d - b*c; zero means the transform collapses the plane."""
        return self.a * self.d - self.b * self.c

    @property
    def translation_part(self) -> Point:
        return Point(self.e, self.f)

    @property
    def is_identity(self) -> bool:
        return self == AffineTransform()

    @property
    def is_invertible(self) -> bool:
        return abs(self.determinant) > DEGENERATE_EPSILON

    # ─────────────────────────────────────────────────────────────────────────
    # Operations
    # ─────────────────────────────────────────────────────────────────────────

    def multiply(self, other: AffineTransform) -> AffineTransform:
        """
        Compose two transforms: the result applies ``other`` first, then ``self``.

        A child's absolute transform is ``parent_absolute.multiply(child_relative)``.
        """
        return AffineTransform(
            a=self.a * other.a + self.c * other.b,
            b=self.b * other.a + self.d * other.b,
            c=self.a * other.c + self.c * other.d,
            d=self.b * other.c + self.d * other.d,
            e=self.a * other.e + self.c * other.f + self.e,
            f=self.b * other.e + self.d * other.f + self.f,
        )

    def with_translation(self, tx: float, ty: float) -> AffineTransform:
        return AffineTransform(a=self.a, b=self.b, c=self.c, d=self.d, e=tx, f=ty)

    def to_matrix(self) -> list[list[float]]:
        """Row-major [[a, c, e], [b, d, f]] form used by the scene JSON."""
        return [[self.a, self.c, self.e], [self.b, self.d, self.f]]

    def __matmul__(self, other: AffineTransform) -> AffineTransform:
        return self.multiply(other)
