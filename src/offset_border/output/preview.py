"""
Module: output.preview

Purpose:
    Raster preview of the whole scene using PIL. Every painted node is
    drawn as its transformed outline (a quadrilateral) over a white
    canvas covering the union of all node bounds.

Key Functions:
    - render_preview(): Scene -> PIL image (optionally saved)

Dependencies:
    - PIL: Image drawing
    - core.geometry: bounds of transformed corners

Used By:
    - cli: --preview option
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw

from offset_border.core.geometry import node_bounds, union_bounds
from offset_border.core.geometry.bounds_calculator import transformed_corners
from offset_border.document.scene import NodeType, SceneDocument, SceneNode

logger = logging.getLogger(__name__)

DEFAULT_SCALE = 0.25
DEFAULT_PADDING = 10
BACKGROUND_COLOR = "white"


def render_preview(
    document: SceneDocument,
    path: Optional[Path] = None,
    *,
    scale: float = DEFAULT_SCALE,
    padding: int = DEFAULT_PADDING,
) -> Image.Image:
    """
    Draw every node of the current page onto one RGB image.

    Args:
        document: Source document
        path: Save the image here when given (format from suffix)
        scale: Scene pixels -> preview pixels
        padding: Blank border around the content, in preview pixels

    Returns:
        The preview image

    Raises:
        ValueError: If scale is not positive
    """
    if scale <= 0:
        raise ValueError(f"scale must be positive: {scale}")

    nodes = [
        n for n in document.iter_nodes()
        if not n.is_root and n.type is not NodeType.GROUP and n.has_geometry
    ]
    if nodes:
        bounds = union_bounds(node_bounds(n) for n in nodes)
        origin_x, origin_y = bounds.x, bounds.y
        width = int(round(bounds.width * scale)) + 2 * padding
        height = int(round(bounds.height * scale)) + 2 * padding
    else:
        origin_x = origin_y = 0.0
        width = height = 2 * padding

    image = Image.new("RGB", (max(width, 1), max(height, 1)), BACKGROUND_COLOR)
    draw = ImageDraw.Draw(image)

    for node in nodes:
        corners = [
            ((p.x - origin_x) * scale + padding, (p.y - origin_y) * scale + padding)
            for p in transformed_corners(node.absolute_transform, node.width, node.height)
        ]
        fill = _rgb255(node.fills)
        outline = _rgb255(node.strokes)
        if fill is None and outline is None:
            continue
        stroke_width = max(1, int(round(node.stroke_weight * scale))) if outline else 0
        draw.polygon(corners, fill=fill, outline=outline, width=stroke_width)

    logger.debug(f"Preview {image.width}x{image.height} for {len(nodes)} node(s)")

    if path is not None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        image.save(path)
        logger.info(f"Saved preview to {path}")

    return image


def _rgb255(paints) -> Optional[tuple[int, int, int]]:
    for paint in paints:
        if paint.get("type") != "SOLID" or paint.get("visible", True) is False:
            continue
        color = paint.get("color") or {}
        return tuple(int(round(float(color.get(k, 0.0)) * 255)) for k in ("r", "g", "b"))
    return None
