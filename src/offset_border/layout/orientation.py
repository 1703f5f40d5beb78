"""
Module: layout.orientation

Purpose:
    Normalize photo sizes before bordering: classify a node as portrait or
    landscape and resize it to that orientation's fixed target size.

Key Functions:
    - classify(): Portrait iff height >= width (square counts as portrait)
    - target_size(): Fixed size for an orientation
    - resize_to_orientation(): Resize a node when it is resizable

Dependencies:
    - layout.config: PhotoSizes

Used By:
    - pipeline.controller: Master flow
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional

from .config import PhotoSizes

logger = logging.getLogger(__name__)


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


def classify(width: float, height: float) -> Orientation:
    """
    Orientation of a width x height box. Ties favour portrait.

    Example:
        >>> classify(100, 100)
        <Orientation.PORTRAIT: 'portrait'>
    """
    return Orientation.PORTRAIT if height >= width else Orientation.LANDSCAPE


def target_size(
    orientation: Orientation,
    sizes: Optional[PhotoSizes] = None,
) -> tuple[float, float]:
    """Fixed (width, height) for ``orientation``."""
    sizes = sizes or PhotoSizes()
    if orientation is Orientation.PORTRAIT:
        return sizes.portrait
    return sizes.landscape


def resize_to_orientation(node: Any, sizes: Optional[PhotoSizes] = None) -> bool:
    """
    Resize ``node`` to its orientation's target size.

    Nodes without resizable geometry are skipped silently.

    Returns:
        True if the node was resized
    """
    if not getattr(node, "resizable", False):
        return False

    orientation = classify(node.width, node.height)
    width, height = target_size(orientation, sizes)
    node.resize_without_constraints(width, height)
    logger.debug(f"Resized {getattr(node, 'name', node)!r} to {orientation.value} {width}x{height}")
    return True
