"""
Module: layout.packer

Purpose:
    Pack items into a horizontal row of fixed-size pages using greedy
    row-major shelf packing. Single pass, input order, no sorting and no
    optimality guarantee; identical input always yields identical output.

Key Functions:
    - pack(): Main packing function

Algorithm:
    1. Cursor starts at (margin, margin) on page 0
    2. Row wrap: cursor is past the row start and the item would cross the
       usable width -> back to x=margin, down by row height + cell gap
    3. Page wrap: the item would cross the usable height -> next page,
       cursor reset
    4. Place at the cursor, advance x by width + cell gap
    5. Page N sits at anchor + (offset_x + N * (page_width + page_row_gap), offset_y)

    Items larger than the usable area are placed at the cursor anyway and
    overflow their page. An item taller than the usable height always
    triggers a page wrap, so it lands alone at (margin, margin) on a new page.

Dependencies:
    - layout.config: PackingConfig
    - layout.models: PackableItem, ItemPlacement, PagePlacement, PackingResult

Used By:
    - pipeline.controller: Master flow
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from offset_border.core.models import Point

from .config import PackingConfig
from .models import ItemPlacement, PackableItem, PackingResult, PagePlacement

logger = logging.getLogger(__name__)


def pack(
    items: Sequence[PackableItem],
    config: PackingConfig,
    anchor: Optional[Point] = None,
) -> PackingResult:
    """
    Assign every item a page and a position inside it.

    Args:
        items: Items in placement order
        config: Page size, margins and spacing
        anchor: Absolute point pages are laid out from (default origin)

    Returns:
        PackingResult with one placement per item (input order) and the
        absolute position of every page used. Page 0 always exists.

    Example:
        >>> config = PackingConfig(page_width=250, page_height=500, margin=0, cell_gap=0)
        >>> items = [PackableItem(i, 100, 50) for i in range(3)]
        >>> [(p.local_x, p.local_y) for p in pack(items, config).placements]
        [(0.0, 0.0), (100.0, 0.0), (0.0, 50.0)]
    """
    if anchor is None:
        anchor = Point(0.0, 0.0)

    margin = float(config.margin)
    right_limit = margin + config.usable_width
    bottom_limit = margin + config.usable_height

    placements: List[ItemPlacement] = []
    warnings: List[str] = []

    x = margin
    y = margin
    row_height = 0.0
    page_index = 0

    for item in items:
        # Row wrap
        if x > margin and x + item.width > right_limit:
            x = margin
            y += row_height + config.cell_gap
            row_height = 0.0

        # Page wrap
        if y + item.height > bottom_limit:
            page_index += 1
            x = margin
            y = margin
            row_height = 0.0

        if item.width > config.usable_width or item.height > config.usable_height:
            message = (
                f"Item {item.key!r} ({item.width}x{item.height}) overflows page {page_index} "
                f"(usable {config.usable_width}x{config.usable_height})"
            )
            logger.warning(message)
            warnings.append(message)

        placements.append(ItemPlacement(
            key=item.key,
            page_index=page_index,
            local_x=x,
            local_y=y,
            width=item.width,
            height=item.height,
        ))

        x += item.width + config.cell_gap
        row_height = max(row_height, item.height)

    pages = tuple(
        _page_placement(index, config, anchor) for index in range(page_index + 1)
    )

    logger.info(f"Packed {len(placements)} items onto {len(pages)} pages")

    return PackingResult(
        pages=pages,
        placements=tuple(placements),
        warnings=warnings,
    )


def _page_placement(index: int, config: PackingConfig, anchor: Point) -> PagePlacement:
    """Absolute position of page ``index`` in the horizontal page row."""
    return PagePlacement(
        index=index,
        absolute_x=anchor.x + config.page_offset_x + index * (config.page_width + config.page_row_gap),
        absolute_y=anchor.y + config.page_offset_y,
        width=config.page_width,
        height=config.page_height,
    )
