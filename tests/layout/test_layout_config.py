"""
Unit tests for layout configuration and photo orientation.
"""

import pytest

from offset_border.document.scene import NodeType, SceneNode
from offset_border.layout import (
    MasterConfig,
    Orientation,
    PackableItem,
    PackingConfig,
    PhotoSizes,
    classify,
    resize_to_orientation,
    target_size,
)


class TestPackingConfig:
    """Tests for PackingConfig validation."""

    def test_init_when_defaults_then_usable_area_excludes_margins(self):
        config = PackingConfig()
        assert config.usable_width == 1240 - 80
        assert config.usable_height == 1754 - 80

    def test_init_when_margins_exceed_width_then_raises_error(self):
        with pytest.raises(ValueError, match="Margins exceed page width"):
            PackingConfig(page_width=100, margin=50)

    def test_init_when_margins_exceed_height_then_raises_error(self):
        with pytest.raises(ValueError, match="Margins exceed page height"):
            PackingConfig(page_height=100, margin=60)

    def test_init_when_negative_gap_then_raises_error(self):
        with pytest.raises(ValueError, match="cell_gap"):
            PackingConfig(cell_gap=-1)

    def test_master_config_when_default_then_resizes_photos(self):
        config = MasterConfig()
        assert config.resize_photos is True
        assert config.page_name_prefix == "Page"


class TestPackableItem:

    def test_init_when_negative_size_then_raises_error(self):
        with pytest.raises(ValueError, match="negative size"):
            PackableItem("bad", -1, 10)


class TestOrientation:
    """Tests for classify() and resize_to_orientation()."""

    @pytest.mark.parametrize("width, height, expected", [
        (100, 200, Orientation.PORTRAIT),
        (200, 100, Orientation.LANDSCAPE),
        (150, 150, Orientation.PORTRAIT),
    ])
    def test_classify_when_sized_then_picks_orientation(self, width, height, expected):
        """Height >= width is portrait; squares count as portrait."""
        assert classify(width, height) is expected

    def test_target_size_when_defaults_then_uses_fixed_sizes(self):
        assert target_size(Orientation.PORTRAIT) == (400, 600)
        assert target_size(Orientation.LANDSCAPE) == (600, 400)

    def test_resize_when_landscape_node_then_resizes_to_landscape(self, make_rect):
        node = make_rect(1920, 1080)

        resized = resize_to_orientation(node)

        assert resized is True
        assert (node.width, node.height) == (600, 400)

    def test_resize_when_custom_sizes_then_uses_them(self, make_rect):
        node = make_rect(50, 50)

        resize_to_orientation(node, PhotoSizes(portrait=(30, 40), landscape=(40, 30)))

        assert (node.width, node.height) == (30, 40)

    def test_resize_when_node_not_resizable_then_skips(self, document):
        text = SceneNode(NodeType.TEXT, "Caption")
        document.current_page.append_child(text)

        assert resize_to_orientation(text) is False

    def test_photo_sizes_when_non_positive_then_raises_error(self):
        with pytest.raises(ValueError, match="portrait size must be positive"):
            PhotoSizes(portrait=(0, 10))
