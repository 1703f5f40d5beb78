"""
Module: layout.models

Purpose:
    Data models for page packing.
    Immutable dataclasses representing items, placements and pages.

Key Classes:
    - PackableItem: Something with a width and height to place
    - ItemPlacement: Item positioned on a page
    - PagePlacement: Page container positioned in absolute space
    - PackingResult: Final packing output

Dependencies:
    - dataclasses (std)

Used By:
    - layout.packer: Creates placements
    - pipeline.controller: Moves groups into page frames
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable


@dataclass(frozen=True)
class PackableItem:
    """
    Item to pack (immutable).

    Attributes:
        key: Opaque identity (e.g. a group's node id)
        width: Item width
        height: Item height
    """

    key: Hashable
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Item {self.key!r} has negative size: {self.width}x{self.height}")


@dataclass(frozen=True)
class ItemPlacement:
    """
    An item positioned on a page.

    Attributes:
        key: The PackableItem's key
        page_index: Page number (0-indexed)
        local_x: X inside the page
        local_y: Y inside the page
        width: Item width
        height: Item height

    Example:
        >>> placement = ItemPlacement("a", page_index=0, local_x=40, local_y=40, width=100, height=50)
        >>> placement.bottom
        90
    """

    key: Hashable
    page_index: int
    local_x: float
    local_y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.local_x + self.width

    @property
    def bottom(self) -> float:
        return self.local_y + self.height


@dataclass(frozen=True)
class PagePlacement:
    """
    A page container in absolute space.

    Attributes:
        index: Page number (0-indexed)
        absolute_x: Page left edge
        absolute_y: Page top edge
        width: Page width
        height: Page height
    """

    index: int
    absolute_x: float
    absolute_y: float
    width: float
    height: float


@dataclass(frozen=True)
class PackingResult:
    """
    Final packing output with diagnostics.

    Attributes:
        pages: Tuple of PagePlacements, index order
        placements: Tuple of ItemPlacements in input order
        warnings: Overflow warnings

    Example:
        >>> result.page_count
        2
    """

    pages: tuple[PagePlacement, ...]
    placements: tuple[ItemPlacement, ...]
    warnings: list[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def placements_on(self, page_index: int) -> tuple[ItemPlacement, ...]:
        """Placements assigned to one page, in input order."""
        return tuple(p for p in self.placements if p.page_index == page_index)
