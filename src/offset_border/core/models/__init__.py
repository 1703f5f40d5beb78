"""
Core Models Package

Immutable value types shared by the geometry core, the border synthesizer
and the page packer. All of them are frozen dataclasses so they can be
cached per run and compared in tests.
"""

from .transform import AffineTransform, Point
from .bounds import AxisAlignedBounds
from .node import NodeRef

__all__ = [
    "AffineTransform",
    "Point",
    "AxisAlignedBounds",
    "NodeRef",
]
