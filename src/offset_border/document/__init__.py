"""
Module: document

Purpose:
    In-memory scene document implementing the host document API the
    border and packing commands drive, plus its JSON form.

Key Classes:
    - SceneDocument, SceneNode, NodeType

Key Functions:
    - load_document(), save_document()
"""

from .scene import CONTAINER_TYPES, NodeType, SceneDocument, SceneNode
from .serialization import (
    document_from_dict,
    document_to_dict,
    load_document,
    save_document,
)

__all__ = [
    "CONTAINER_TYPES",
    "NodeType",
    "SceneDocument",
    "SceneNode",
    "document_from_dict",
    "document_to_dict",
    "load_document",
    "save_document",
]
