"""
Unit Tests for Affine Geometry

Tests for AffineTransform composition, inversion and local-space conversion.
"""

import pytest

from offset_border.core.geometry import DEGENERATE_EPSILON, apply, invert, to_local
from offset_border.core.models import AffineTransform, Point
from offset_border.errors import DegenerateTransformError


class TestAffineTransform:
    """Tests for the AffineTransform value type."""

    def test_multiply_when_composing_then_applies_other_first(self):
        """parent.multiply(child) maps child space straight to parent's parent."""
        parent = AffineTransform.translation(100, 0)
        child = AffineTransform.scaling(2)

        composed = parent.multiply(child)

        assert apply(composed, 10, 10) == Point(120, 20)

    def test_matmul_when_used_then_matches_multiply(self):
        """@ is an alias for multiply()."""
        m1 = AffineTransform.rotation(30, 5, 7)
        m2 = AffineTransform.translation(3, 4)
        assert m1 @ m2 == m1.multiply(m2)

    def test_from_matrix_when_row_major_then_reads_columns(self):
        """[[a, c, e], [b, d, f]] round-trips through to_matrix()."""
        m = AffineTransform.from_matrix([[1, 2, 3], [4, 5, 6]])
        assert (m.a, m.c, m.e, m.b, m.d, m.f) == (1, 2, 3, 4, 5, 6)
        assert m.to_matrix() == [[1, 2, 3], [4, 5, 6]]

    def test_from_matrix_when_wrong_shape_then_raises_error(self):
        """Anything but 2x3 is rejected."""
        with pytest.raises(ValueError, match="2x3"):
            AffineTransform.from_matrix([[1, 0], [0, 1]])

    def test_is_identity_when_default_then_true(self):
        assert AffineTransform().is_identity is True
        assert AffineTransform.translation(1, 0).is_identity is False

    def test_is_invertible_when_collapsed_then_false(self):
        assert AffineTransform.rotation(45).is_invertible is True
        assert AffineTransform(a=0, d=0).is_invertible is False


class TestInvert:
    """Tests for invert()."""

    @pytest.mark.parametrize("m", [
        AffineTransform.translation(40, -12),
        AffineTransform.rotation(37, 10, 20),
        AffineTransform(a=2, b=0.5, c=-0.3, d=1.5, e=7, f=-9),
    ])
    def test_invert_when_invertible_then_round_trips_points(self, m):
        """apply(invert(m), apply(m, p)) returns p."""
        # Arrange
        inverse = invert(m)

        # Act
        forward = apply(m, 13.0, -4.0)
        back = apply(inverse, forward.x, forward.y)

        # Assert
        assert back.x == pytest.approx(13.0)
        assert back.y == pytest.approx(-4.0)

    def test_invert_when_determinant_zero_then_raises_error(self):
        """A collapsed transform raises instead of producing NaN/inf."""
        m = AffineTransform(a=1, b=2, c=2, d=4)

        with pytest.raises(DegenerateTransformError) as exc_info:
            invert(m)

        assert exc_info.value.determinant == 0

    def test_invert_when_determinant_below_epsilon_then_raises_error(self):
        """Near-singular determinants count as degenerate."""
        tiny = DEGENERATE_EPSILON / 10
        with pytest.raises(DegenerateTransformError):
            invert(AffineTransform(a=tiny, d=1))


class TestToLocal:
    """Tests for to_local()."""

    def test_to_local_when_parent_is_root_then_returns_point_unchanged(self):
        """The root never goes through an inversion, even if singular."""
        singular = AffineTransform(a=0, d=0)
        point = Point(5, 6)

        assert to_local(point, singular, parent_is_root=True) == point

    def test_to_local_when_parent_translated_then_subtracts_origin(self):
        parent = AffineTransform.translation(200, 100)
        assert to_local(Point(250, 130), parent) == Point(50, 30)

    def test_to_local_when_inverse_given_then_uses_it(self):
        """A cached inverse is used as-is."""
        parent = AffineTransform.translation(200, 100)
        cached = AffineTransform.identity()

        assert to_local(Point(250, 130), parent, inverse=cached) == Point(250, 130)

    def test_to_local_when_parent_singular_then_raises_error(self):
        with pytest.raises(DegenerateTransformError):
            to_local(Point(0, 0), AffineTransform(a=0, d=0))
