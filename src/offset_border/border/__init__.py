"""
Module: border

Purpose:
    Offset borders: compute a rectangle that sits behind a node with a fixed
    outward gap, then create, style and group it through the host document.

Key Functions:
    - synthesize(): Placement geometry
    - add_border_behind(): Host commands for one node

Key Classes:
    - BorderPlacement
    - InverseTransformCache: Per-run parent inverse cache
"""

from .synthesizer import BorderPlacement, InverseTransformCache, synthesize
from .applier import BORDER_SUFFIX, GROUP_SUFFIX, add_border_behind, solid_paint

__all__ = [
    "BorderPlacement",
    "InverseTransformCache",
    "synthesize",
    "BORDER_SUFFIX",
    "GROUP_SUFFIX",
    "add_border_behind",
    "solid_paint",
]
