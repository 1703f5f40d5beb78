"""
Unit tests for the in-memory scene document.
"""

import pytest

from offset_border.core.geometry import node_bounds
from offset_border.core.models import AffineTransform, AxisAlignedBounds
from offset_border.document import NodeType, SceneDocument, SceneNode
from offset_border.errors import SceneError


class TestSceneNode:
    """Capabilities and geometry of single nodes."""

    def test_absolute_transform_when_nested_then_composes_parents(self, make_rect, make_frame):
        frame = make_frame(AffineTransform.translation(100, 200))
        rect = make_rect(x=10, y=20, parent=frame)

        assert rect.absolute_transform == AffineTransform.translation(110, 220)

    def test_absolute_transform_when_page_then_identity(self, document):
        assert document.current_page.absolute_transform.is_identity

    def test_has_geometry_when_no_size_then_false(self, document):
        text = SceneNode(NodeType.TEXT, "Caption")
        assert text.has_geometry is False
        with pytest.raises(AttributeError):
            text.width

    def test_resize_when_negative_then_raises_error(self, make_rect):
        with pytest.raises(SceneError, match="Invalid size"):
            make_rect().resize_without_constraints(-1, 10)

    def test_corner_radius_when_ellipse_then_none(self):
        assert SceneNode(NodeType.ELLIPSE, width=1, height=1).corner_radius is None
        assert SceneNode(NodeType.RECTANGLE, width=1, height=1).corner_radius == 0


class TestSceneTree:
    """Insert, append and remove."""

    def test_insert_child_when_leaf_parent_then_raises_error(self, make_rect):
        leaf = make_rect()
        with pytest.raises(SceneError, match="cannot contain children"):
            leaf.append_child(SceneNode(NodeType.RECTANGLE, width=1, height=1))

    def test_insert_child_when_cycle_then_raises_error(self, document, make_frame):
        outer = make_frame()
        inner = SceneNode(NodeType.FRAME, width=10, height=10)
        outer.append_child(inner)

        with pytest.raises(SceneError, match="own descendant"):
            inner.append_child(outer)

    def test_insert_child_when_same_parent_then_restacks(self, document, make_rect):
        a, b, c = make_rect(name="a"), make_rect(name="b"), make_rect(name="c")

        document.current_page.insert_child(0, c)

        assert document.current_page.children == [c, a, b]

    def test_remove_when_last_child_of_group_then_removes_group(self, document, make_rect):
        rect = make_rect()
        group = document.group([rect], document.current_page)

        rect.remove()

        assert group.parent is None
        assert document.current_page.children == []


class TestGroup:
    """Grouping keeps absolute positions and normalizes group origins."""

    def test_group_when_nodes_grouped_then_origin_is_children_top_left(self, document, make_rect):
        # Arrange
        a = make_rect(100, 50, x=30, y=40)
        b = make_rect(20, 20, x=200, y=10)

        # Act
        group = document.group([a, b], document.current_page)

        # Assert
        assert (group.x, group.y) == (30, 10)
        assert (group.width, group.height) == (190, 80)
        assert node_bounds(a) == AxisAlignedBounds(30, 40, 100, 50)
        assert node_bounds(b) == AxisAlignedBounds(200, 10, 20, 20)

    def test_group_when_nodes_out_of_order_then_keeps_stacking_order(self, document, make_rect):
        back = make_rect(name="back")
        front = make_rect(name="front")

        group = document.group([front, back], document.current_page)

        assert group.children == [back, front]

    def test_group_when_index_omitted_then_takes_lowest_slot(self, document, make_rect):
        first = make_rect(name="first")
        a = make_rect(name="a")
        b = make_rect(name="b")

        group = document.group([b, a], document.current_page)

        assert document.current_page.children == [first, group]

    def test_group_when_parent_rotated_then_positions_preserved(self, document, make_rect, make_frame):
        frame = make_frame(AffineTransform.rotation(30, 400, 0))
        rect = make_rect(100, 50, x=10, y=10, parent=frame)
        before = node_bounds(rect)

        document.group([rect], frame)

        after = node_bounds(rect)
        assert after.x == pytest.approx(before.x)
        assert after.y == pytest.approx(before.y)
        assert after.width == pytest.approx(before.width)

    def test_group_when_child_moved_then_group_renormalizes(self, document, make_rect):
        a = make_rect(10, 10, x=0, y=0)
        b = make_rect(10, 10, x=50, y=50)
        group = document.group([a, b], document.current_page)

        a.x = 20
        a.y = 60

        assert (group.x, group.y) == (20, 50)
        assert node_bounds(a) == AxisAlignedBounds(20, 60, 10, 10)
        assert node_bounds(b) == AxisAlignedBounds(50, 50, 10, 10)

    def test_group_when_empty_then_raises_error(self, document):
        with pytest.raises(SceneError, match="empty"):
            document.group([], document.current_page)


class TestSceneDocument:
    """Session state."""

    def test_selection_when_page_selected_then_filtered_out(self, document, make_rect):
        rect = make_rect()

        document.selection = [document.current_page, rect]

        assert document.selection == [rect]

    def test_create_frame_when_called_then_white_fixed_size(self, document):
        frame = document.create_frame(300, 200, "Page 1")

        assert frame.parent is document.current_page
        assert (frame.width, frame.height) == (300, 200)
        assert frame.fills[0]["color"] == {"r": 1.0, "g": 1.0, "b": 1.0}

    def test_notify_when_called_then_records_message(self, document):
        document.notify("Done")
        document.close()

        assert document.notifications == ["Done"]
        assert document.closed is True

    def test_find_when_missing_then_none(self, document):
        assert document.find("nope") is None
        assert SceneDocument().selection == []
