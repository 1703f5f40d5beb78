"""
Module: border.applier

Purpose:
    Issue the host document commands for one border: create the rectangle,
    style it, place it behind the node in the same parent and group the
    pair. The numbers come from border.synthesizer; this module only
    drives the document API.

Key Functions:
    - add_border_behind(): Border + group for one node
    - solid_paint(): Solid paint dict for a colour

Dependencies:
    - border.synthesizer: synthesize, InverseTransformCache
    - document.scene: SceneDocument, SceneNode
    - settings.model: BorderSettings, RGBColor

Used By:
    - pipeline.controller: apply and master commands
"""

from __future__ import annotations

import logging
from typing import Optional

from offset_border.document.scene import NodeType, SceneDocument, SceneNode
from offset_border.errors import NoParentError
from offset_border.settings.model import BorderSettings, RGBColor

from .synthesizer import BORDER_INDEX, NODE_INDEX, InverseTransformCache, synthesize

logger = logging.getLogger(__name__)

BORDER_SUFFIX = " – border"
GROUP_SUFFIX = " + border"


def solid_paint(color: RGBColor) -> dict:
    return {"type": "SOLID", "color": color.to_dict(), "opacity": 1}


def add_border_behind(
    document: SceneDocument,
    node: SceneNode,
    settings: BorderSettings,
    cache: Optional[InverseTransformCache] = None,
) -> SceneNode:
    """
    Draw a sibling rectangle behind ``node`` and group the two.

    The node itself is not moved; the group keeps its visual position.

    Args:
        document: Host document
        node: Node to border (must have geometry)
        settings: Border settings
        cache: Run-scoped parent inverse cache

    Returns:
        The new group ("<name> + border"), border at index 0

    Raises:
        NoParentError: If node has no parent able to hold children
        DegenerateTransformError: If the parent transform is singular
    """
    parent = node.parent
    if parent is None or not parent.supports_children:
        raise NoParentError(node.id)

    placement = synthesize(node, settings, cache)

    rect = document.create_rectangle(node.name + BORDER_SUFFIX)
    rect.resize_without_constraints(placement.width, placement.height)
    rect.x = placement.local_position.x
    rect.y = placement.local_position.y
    rect.fills = []
    rect.strokes = [solid_paint(settings.stroke_color)]
    rect.stroke_weight = settings.stroke_width
    rect.stroke_align = settings.stroke_align.value

    parent.insert_child(node.index_in_parent, rect)

    group = document.group([rect, node], parent, name=node.name + GROUP_SUFFIX)
    group.insert_child(BORDER_INDEX, rect)
    group.insert_child(NODE_INDEX, node)

    _copy_corner_radius(node, rect)
    return group


def _copy_corner_radius(source: SceneNode, target: SceneNode) -> None:
    if source.type is not NodeType.RECTANGLE:
        return
    try:
        radius = source.corner_radius
        if isinstance(radius, (int, float)) and not isinstance(radius, bool):
            target.corner_radius = float(radius)
    except Exception as e:
        logger.debug(f"Corner radius not copied from {source.name!r}: {e}")
