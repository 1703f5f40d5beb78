"""
Module: output.renderer

Purpose:
    Render packed page frames to PDF using ReportLab.
    Each frame becomes one PDF page; every painted descendant is drawn
    through its transform relative to the frame, with its fill, stroke
    colour, stroke weight and corner radius.

Key Functions:
    - render_pages_to_pdf(): Main rendering function

Dependencies:
    - reportlab: PDF generation
    - core.geometry: invert (frame space)
    - document.scene: SceneDocument, SceneNode

Used By:
    - cli: --pdf option
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from reportlab.pdfgen import canvas

from offset_border.core.geometry import invert
from offset_border.core.models import AffineTransform
from offset_border.document.scene import NodeType, SceneDocument, SceneNode

logger = logging.getLogger(__name__)

# Scene units are pixels at this DPI (1240x1754 pages come out at A4)
DEFAULT_DPI = 150


def render_pages_to_pdf(
    document: SceneDocument,
    frames: Optional[Sequence[SceneNode]],
    output_path: Path,
    *,
    dpi: int = DEFAULT_DPI,
) -> int:
    """
    Render page frames to a PDF file.

    Args:
        document: Source document
        frames: Frames to render, one PDF page each. None renders every
            frame directly on the current page.
        output_path: Path to write PDF
        dpi: Scene pixels per inch

    Returns:
        Number of pages written

    Raises:
        DegenerateTransformError: If a frame's transform is singular
        OSError: If the PDF cannot be written

    Example:
        >>> render_pages_to_pdf(document, result.pages, Path("pages.pdf"))
        2
    """
    if frames is None:
        frames = [n for n in document.current_page.children if n.type is NodeType.FRAME]
    if not frames:
        logger.warning("No page frames, creating empty PDF")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    scale = 72.0 / dpi
    c = canvas.Canvas(str(output_path))

    for frame in frames:
        page_width_pt = frame.width * scale
        page_height_pt = frame.height * scale
        c.setPageSize((page_width_pt, page_height_pt))
        _render_frame(c, frame, scale, page_height_pt)
        c.showPage()

    c.save()
    logger.info(f"Rendered {len(frames)} pages to {output_path}")
    return len(frames)


def _render_frame(
    c: canvas.Canvas,
    frame: SceneNode,
    scale: float,
    page_height_pt: float,
) -> None:
    # Frame-local pixels (y down) -> PDF points (y up)
    page = AffineTransform(a=scale, b=0.0, c=0.0, d=-scale, e=0.0, f=page_height_pt)
    to_frame = invert(frame.absolute_transform)

    _draw_node(c, frame, page, fill_only=True)
    for node in frame.walk():
        if node is frame or node.type is NodeType.GROUP or not node.has_geometry:
            continue
        local = to_frame.multiply(node.absolute_transform)
        _draw_node(c, node, page.multiply(local))


def _draw_node(
    c: canvas.Canvas,
    node: SceneNode,
    transform: AffineTransform,
    *,
    fill_only: bool = False,
) -> None:
    """Draw one node's box in its own coordinate space."""
    fill = _solid_color(node.fills)
    stroke = None if fill_only else _solid_color(node.strokes)
    if fill is None and (stroke is None or node.stroke_weight <= 0):
        return

    c.saveState()
    c.transform(transform.a, transform.b, transform.c, transform.d, transform.e, transform.f)
    if fill is not None:
        c.setFillColorRGB(*fill)
    if stroke is not None:
        c.setStrokeColorRGB(*stroke)
        c.setLineWidth(node.stroke_weight)

    x, y, width, height = _stroke_box(node) if stroke is not None else (0.0, 0.0, node.width, node.height)
    radius = node.corner_radius or 0.0
    paint = {"fill": int(fill is not None), "stroke": int(stroke is not None and node.stroke_weight > 0)}
    if radius > 0:
        c.roundRect(x, y, width, height, radius, **paint)
    else:
        c.rect(x, y, width, height, **paint)
    c.restoreState()


def _stroke_box(node: SceneNode) -> tuple[float, float, float, float]:
    """Box the stroke centreline follows for the node's stroke alignment."""
    half = node.stroke_weight / 2.0
    if node.stroke_align == "INSIDE":
        inset = half
    elif node.stroke_align == "OUTSIDE":
        inset = -half
    else:
        inset = 0.0
    width = max(0.0, node.width - 2 * inset)
    height = max(0.0, node.height - 2 * inset)
    return inset, inset, width, height


def _solid_color(paints: Sequence[dict]) -> Optional[tuple[float, float, float]]:
    """First visible solid paint as an (r, g, b) tuple."""
    for paint in paints:
        if paint.get("type") != "SOLID" or paint.get("visible", True) is False:
            continue
        color = paint.get("color") or {}
        return (
            float(color.get("r", 0.0)),
            float(color.get("g", 0.0)),
            float(color.get("b", 0.0)),
        )
    return None
