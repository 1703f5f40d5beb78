"""
Module: node

Purpose:
    The NodeRef protocol: the slice of a scene node the geometry core reads.
    Any host object exposing these attributes can be bordered or packed;
    offset_border.document.SceneNode is the in-process implementation.

Dependencies:
    - typing (std)

Used By:
    - core.geometry.bounds_calculator.node_bounds
    - border.synthesizer.synthesize
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from .transform import AffineTransform


@runtime_checkable
class NodeRef(Protocol):
    """
    Read-only view of a scene node.

    ``parent`` is a back-reference; the scene graph owns the relation.
    A node whose ``is_root`` is True (the page) has the identity transform.
    """

    @property
    def id(self) -> str: ...

    @property
    def absolute_transform(self) -> AffineTransform: ...

    @property
    def width(self) -> float: ...

    @property
    def height(self) -> float: ...

    @property
    def parent(self) -> Optional["NodeRef"]: ...

    @property
    def is_root(self) -> bool: ...
