"""
Module: border.synthesizer

Purpose:
    Compute where a bordering rectangle goes: the node's absolute bounds
    grown by the gap on every side, with the top-left corner converted into
    the parent's local space. Pure geometry; the host commands that create
    and group the rectangle live in border.applier.

Key Functions:
    - synthesize(): Node + settings -> BorderPlacement

Key Classes:
    - BorderPlacement: Computed placement
    - InverseTransformCache: Per-run parent inverse cache

Algorithm:
    1. Resolve parent (NoParentError when missing)
    2. Parent inverse transform from the run cache (one inversion per parent)
    3. Node absolute bounds from its four transformed corners
    4. Expand by gap on all four sides
    5. Convert expanded top-left to parent-local space
    6. Size = expanded absolute width/height (not re-projected)
    7. Group order: border behind (0), node in front (1)

Known Limitation:
    Only the origin goes through the parent's inverse transform. The size
    is reused as measured in absolute space, which matches the parent's
    local space only while the parent has no anisotropic scale or skew
    relative to the node. Under such parents the border is over- or
    under-sized.

Dependencies:
    - core.geometry: invert, to_local, node_bounds
    - settings.model: BorderSettings

Used By:
    - border.applier.add_border_behind
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from offset_border.core.geometry import invert, node_bounds, to_local
from offset_border.core.models import AffineTransform, AxisAlignedBounds, NodeRef, Point
from offset_border.errors import NoParentError
from offset_border.settings.model import BorderSettings

logger = logging.getLogger(__name__)

BORDER_INDEX = 0
NODE_INDEX = 1


class InverseTransformCache:
    """
    Parent inverse transforms for one batch run.

    Keyed by the parent's stable id and filled lazily, so siblings sharing
    a parent cost a single inversion. An entry is recomputed when the
    parent's transform has changed since it was cached (groups move their
    origin as borders are added inside them). Create one per run and drop
    it afterwards; it must not outlive the batch that owns it.

    Example:
        >>> cache = InverseTransformCache()
        >>> inv = cache.get_or_invert(parent)
        >>> cache.get_or_invert(parent) is inv  # Cache hit
        True
    """

    def __init__(self) -> None:
        self._inverses: Dict[str, tuple[AffineTransform, AffineTransform]] = {}
        self.hits = 0
        self.misses = 0

    def get_or_invert(self, parent: NodeRef) -> AffineTransform:
        """
        Inverse of ``parent.absolute_transform``.

        Raises:
            DegenerateTransformError: If the parent transform is singular
                (nothing is cached in that case)
        """
        key = parent.id
        transform = parent.absolute_transform
        cached = self._inverses.get(key)
        if cached is not None and cached[0] == transform:
            self.hits += 1
            logger.debug(f"Inverse cache HIT: parent {key}")
            return cached[1]

        inverse = invert(transform)
        self._inverses[key] = (transform, inverse)
        self.misses += 1
        logger.debug(f"Inverse cache MISS: inverted parent {key}")
        return inverse

    def __len__(self) -> int:
        return len(self._inverses)

    def __contains__(self, parent_id: object) -> bool:
        return parent_id in self._inverses

    def clear(self) -> None:
        self._inverses.clear()


@dataclass(frozen=True)
class BorderPlacement:
    """
    Where the border rectangle goes (immutable).

    Attributes:
        parent_id: Id of the parent the border is inserted into
        local_position: Border top-left in parent-local space
        width: Border width (absolute-space magnitude)
        height: Border height (absolute-space magnitude)
        absolute_bounds: Expanded absolute bounds the placement came from
        group_order: Grouping order, index 0 is drawn behind

    Example:
        >>> placement.size
        (120, 70)
    """

    parent_id: str
    local_position: Point
    width: float
    height: float
    absolute_bounds: AxisAlignedBounds
    group_order: tuple[str, str] = ("border", "node")

    @property
    def size(self) -> tuple[float, float]:
        return (self.width, self.height)


def synthesize(
    node: NodeRef,
    settings: BorderSettings,
    cache: Optional[InverseTransformCache] = None,
) -> BorderPlacement:
    """
    Compute the border placement for ``node``.

    Args:
        node: Node to border
        settings: Resolved border settings (gap is read here)
        cache: Run-scoped inverse cache; a throwaway one is used if omitted

    Returns:
        BorderPlacement in the parent's space

    Raises:
        NoParentError: If node has no parent
        DegenerateTransformError: If the parent transform is singular
    """
    parent = node.parent
    if parent is None:
        raise NoParentError(node.id)
    if cache is None:
        cache = InverseTransformCache()

    inverse = None if parent.is_root else cache.get_or_invert(parent)

    expanded = node_bounds(node).expanded(settings.gap)
    local = to_local(
        expanded.top_left,
        parent.absolute_transform,
        parent_is_root=parent.is_root,
        inverse=inverse,
    )

    return BorderPlacement(
        parent_id=parent.id,
        local_position=local,
        width=expanded.width,
        height=expanded.height,
        absolute_bounds=expanded,
    )
