"""
Unit Tests for Axis-Aligned Bounds (V2)

Tests for AxisAlignedBounds and the transformed-corner bounds calculator.
"""

import pytest

from offset_border.core.geometry import absolute_bounds, union_bounds
from offset_border.core.geometry.bounds_calculator import transformed_corners
from offset_border.core.models import AffineTransform, AxisAlignedBounds, Point


class TestAxisAlignedBounds:
    """Tests for AxisAlignedBounds dataclass."""

    # ─────────────────────────────────────────────────────────────────────────
    # Constructor Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_init_when_negative_width_then_raises_error(self):
        """Negative width should raise ValueError."""
        with pytest.raises(ValueError, match="width must be >= 0"):
            AxisAlignedBounds(0, 0, -1, 10)

    def test_init_when_zero_size_then_creates_bounds(self):
        """Zero-size boxes are valid."""
        b = AxisAlignedBounds(5, 5, 0, 0)
        assert b.area == 0

    # ─────────────────────────────────────────────────────────────────────────
    # Derivation Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_expanded_when_gap_given_then_grows_every_side(self):
        """expanded(10) on 100x50 at origin gives 120x70 at (-10, -10)."""
        b = AxisAlignedBounds(0, 0, 100, 50).expanded(10)
        assert b == AxisAlignedBounds(-10, -10, 120, 70)

    def test_union_when_disjoint_then_encloses_both(self):
        a = AxisAlignedBounds(0, 0, 10, 10)
        b = AxisAlignedBounds(20, 30, 5, 5)
        assert a.union(b) == AxisAlignedBounds(0, 0, 25, 35)

    def test_to_dict_when_serialized_then_round_trips(self):
        b = AxisAlignedBounds(1, 2, 3, 4)
        assert AxisAlignedBounds.from_dict(b.to_dict()) == b


class TestAbsoluteBounds:
    """Tests for absolute_bounds() and union_bounds()."""

    def test_transformed_corners_when_identity_then_clockwise_from_origin(self):
        corners = transformed_corners(AffineTransform.identity(), 100, 50)
        assert corners == (Point(0, 0), Point(100, 0), Point(100, 50), Point(0, 50))

    def test_absolute_bounds_when_identity_then_matches_size(self):
        """Identity transform gives (0, 0, w, h)."""
        assert absolute_bounds(AffineTransform.identity(), 100, 50) == AxisAlignedBounds(0, 0, 100, 50)

    def test_absolute_bounds_when_translated_then_offsets_origin(self):
        b = absolute_bounds(AffineTransform.translation(30, 40), 100, 50)
        assert b == AxisAlignedBounds(30, 40, 100, 50)

    def test_absolute_bounds_when_rotated_45_then_area_grows(self):
        """A rotated box's axis-aligned bounds enclose more area."""
        # Arrange
        rotated = AffineTransform.rotation(45)

        # Act
        b = absolute_bounds(rotated, 100, 50)

        # Assert
        assert b.area > 100 * 50
        assert b.width == pytest.approx(150 / 2 ** 0.5)
        assert b.height == pytest.approx(150 / 2 ** 0.5)

    @pytest.mark.parametrize("degrees", [0, 30, 45, 90, 135, 200, 315])
    def test_absolute_bounds_when_rotated_any_angle_then_area_never_shrinks(self, degrees):
        """Bounds area is at least w*h and every corner lies inside."""
        rotated = AffineTransform.rotation(degrees)

        b = absolute_bounds(rotated, 100, 50)

        assert b.area >= 100 * 50 - 1e-6
        for corner in transformed_corners(rotated, 100, 50):
            assert b.x - 1e-9 <= corner.x <= b.right + 1e-9
            assert b.y - 1e-9 <= corner.y <= b.bottom + 1e-9

    def test_absolute_bounds_when_rotated_90_then_swaps_extents(self):
        b = absolute_bounds(AffineTransform.rotation(90), 100, 50)
        assert b.width == pytest.approx(50)
        assert b.height == pytest.approx(100)

    def test_absolute_bounds_when_zero_size_then_degenerates_to_point(self):
        b = absolute_bounds(AffineTransform.translation(7, 8), 0, 0)
        assert b == AxisAlignedBounds(7, 8, 0, 0)

    def test_union_bounds_when_empty_then_raises_error(self):
        with pytest.raises(ValueError):
            union_bounds([])
