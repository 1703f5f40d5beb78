"""
Module: errors

Purpose:
    Exception taxonomy shared by the geometry core, the host document
    and the batch pipeline.

Key Classes:
    - OffsetBorderError: Base class for all toolkit errors
    - DegenerateTransformError: Zero-determinant matrix during inversion
    - NoParentError: Node has no parent able to hold a sibling border
    - PersistenceUnavailableError: Settings store cannot be read/written
    - SceneError: Invalid operation on the scene document

Used By:
    - core.geometry.affine: Raises DegenerateTransformError
    - border.synthesizer / border.applier: Raise NoParentError
    - settings.store: Raises/catches PersistenceUnavailableError
    - pipeline.controller: Converts per-item errors into skips
"""

from __future__ import annotations


class OffsetBorderError(Exception):
    """Base class for toolkit errors."""
    pass


class DegenerateTransformError(OffsetBorderError):
    """Matrix has a zero determinant and cannot be inverted."""

    def __init__(self, determinant: float) -> None:
        super().__init__(f"Transform is not invertible (determinant={determinant!r})")
        self.determinant = determinant


class NoParentError(OffsetBorderError):
    """Node has no parent that can receive a sibling border."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Node {node_id!r} has no parent that accepts children")
        self.node_id = node_id


class PersistenceUnavailableError(OffsetBorderError):
    """Settings storage could not be read or written."""
    pass


class SceneError(OffsetBorderError):
    """Invalid operation on the scene document."""
    pass


__all__ = [
    "OffsetBorderError",
    "DegenerateTransformError",
    "NoParentError",
    "PersistenceUnavailableError",
    "SceneError",
]
