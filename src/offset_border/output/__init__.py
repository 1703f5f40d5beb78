"""
Module: output

Purpose:
    Render a scene to files: PDF pages via ReportLab, raster preview via PIL.
"""

from .preview import render_preview
from .renderer import render_pages_to_pdf

__all__ = [
    "render_pages_to_pdf",
    "render_preview",
]
