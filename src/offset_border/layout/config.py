"""
Module: layout.config

Purpose:
    Configuration for the page packer and the master flow.
    Defines page dimensions, margins, spacing and photo target sizes.

Key Classes:
    - PackingConfig: Immutable page packing configuration
    - PhotoSizes: Target sizes per photo orientation
    - MasterConfig: Settings for the resize -> border -> pack flow

Dependencies:
    - dataclasses (std)

Used By:
    - layout.packer: Page arrangement
    - layout.orientation: Photo resizing
    - pipeline.controller: Master flow
"""

from __future__ import annotations

from dataclasses import dataclass, field


# A4 at 150 DPI
DEFAULT_PAGE_WIDTH = 1240.0
DEFAULT_PAGE_HEIGHT = 1754.0
DEFAULT_MARGIN = 40.0
DEFAULT_CELL_GAP = 20.0
DEFAULT_PAGE_ROW_GAP = 100.0

PORTRAIT_SIZE = (400.0, 600.0)
LANDSCAPE_SIZE = (600.0, 400.0)

# Pages start this far to the right of the selection
DEFAULT_SELECTION_CLEARANCE = 200.0

DEFAULT_CHUNK_SIZE = 50


@dataclass(frozen=True)
class PackingConfig:
    """
    Configuration for page packing (immutable).

    Attributes:
        page_width: Page container width
        page_height: Page container height
        margin: Margin on every page edge
        cell_gap: Spacing between items in a row and between rows
        page_row_gap: Horizontal spacing between consecutive pages
        page_offset_x: X offset of page 0 from the anchor
        page_offset_y: Y offset of every page from the anchor

    Example:
        >>> config = PackingConfig(page_width=1000, margin=50)
        >>> config.usable_width
        900.0
    """

    page_width: float = DEFAULT_PAGE_WIDTH
    page_height: float = DEFAULT_PAGE_HEIGHT
    margin: float = DEFAULT_MARGIN
    cell_gap: float = DEFAULT_CELL_GAP
    page_row_gap: float = DEFAULT_PAGE_ROW_GAP
    page_offset_x: float = 0.0
    page_offset_y: float = 0.0

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.margin < 0:
            raise ValueError(f"margin must be non-negative: {self.margin}")
        if self.cell_gap < 0:
            raise ValueError(f"cell_gap must be non-negative: {self.cell_gap}")
        if self.page_row_gap < 0:
            raise ValueError(f"page_row_gap must be non-negative: {self.page_row_gap}")
        if self.usable_width <= 0:
            raise ValueError("Margins exceed page width")
        if self.usable_height <= 0:
            raise ValueError("Margins exceed page height")

    @property
    def usable_width(self) -> float:
        """Width available for items (excluding margins)."""
        return float(self.page_width - 2 * self.margin)

    @property
    def usable_height(self) -> float:
        """Height available for items (excluding margins)."""
        return float(self.page_height - 2 * self.margin)


@dataclass(frozen=True)
class PhotoSizes:
    """Fixed target size per orientation."""

    portrait: tuple[float, float] = PORTRAIT_SIZE
    landscape: tuple[float, float] = LANDSCAPE_SIZE

    def __post_init__(self) -> None:
        for name in ("portrait", "landscape"):
            width, height = getattr(self, name)
            if width <= 0 or height <= 0:
                raise ValueError(f"{name} size must be positive: {width}x{height}")


@dataclass(frozen=True)
class MasterConfig:
    """
    Configuration for the master flow (immutable).

    Attributes:
        packing: Page packing configuration
        photo_sizes: Orientation target sizes
        resize_photos: Normalize node sizes before bordering
        selection_clearance: Gap between the selection and page 0
        page_name_prefix: Page frames are named "<prefix> <n>"
    """

    packing: PackingConfig = field(default_factory=PackingConfig)
    photo_sizes: PhotoSizes = field(default_factory=PhotoSizes)
    resize_photos: bool = True
    selection_clearance: float = DEFAULT_SELECTION_CLEARANCE
    page_name_prefix: str = "Page"
