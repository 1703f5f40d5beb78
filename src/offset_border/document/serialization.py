"""
Scene Document Serialization

Provides to/from JSON utilities for scene documents.

Document form:
    {
        "name": "Page 1",
        "selection": ["<node id>", ...],
        "children": [<node>, ...]
    }

Node form:
    {
        "id": "...", "type": "RECTANGLE", "name": "Photo",
        "transform": [[a, c, e], [b, d, f]]     # or "x", "y", "rotation"
        "width": 100, "height": 50,
        "fills": [...], "strokes": [...],
        "strokeWeight": 1, "strokeAlign": "CENTER", "cornerRadius": 4,
        "children": [...]
    }

Nodes without "width"/"height" load without geometry and are skipped by
the border and packing commands.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from offset_border.core.models import AffineTransform
from offset_border.errors import SceneError

from .scene import NodeType, SceneDocument, SceneNode

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Document
# ─────────────────────────────────────────────────────────────────────────────

def document_to_dict(document: SceneDocument) -> dict[str, Any]:
    return {
        "name": document.current_page.name,
        "selection": [node.id for node in document.selection],
        "children": [node_to_dict(child) for child in document.current_page.children],
    }


def document_from_dict(data: dict[str, Any]) -> SceneDocument:
    """
    Build a SceneDocument from its JSON form.

    Raises:
        SceneError: If the payload is malformed
    """
    if not isinstance(data, dict):
        raise SceneError("Scene document must be a JSON object")

    document = SceneDocument(page_name=str(data.get("name") or "Page 1"))
    for child_data in data.get("children", []):
        document.current_page.append_child(node_from_dict(child_data))

    selection = []
    for node_id in data.get("selection", []):
        node = document.find(str(node_id))
        if node is None:
            logger.warning(f"Selected node {node_id!r} not found in document, ignoring")
            continue
        selection.append(node)
    document.selection = selection
    return document


def load_document(path: Path) -> SceneDocument:
    """
    Load a scene document from a JSON file.

    Raises:
        SceneError: If the file cannot be read or parsed
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SceneError(f"Failed to load scene {path}: {e}") from e
    return document_from_dict(data)


def save_document(document: SceneDocument, path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document_to_dict(document), indent=2), encoding="utf-8")
    logger.info(f"Saved scene to {path}")


# ─────────────────────────────────────────────────────────────────────────────
# Nodes
# ─────────────────────────────────────────────────────────────────────────────

def node_to_dict(node: SceneNode) -> dict[str, Any]:
    d: dict[str, Any] = {
        "id": node.id,
        "type": node.type.value,
        "name": node.name,
        "transform": node.relative_transform.to_matrix(),
    }
    if node.has_geometry and node.type is not NodeType.GROUP:
        d["width"] = node.width
        d["height"] = node.height
    if node.fills:
        d["fills"] = node.fills
    if node.strokes:
        d["strokes"] = node.strokes
        d["strokeWeight"] = node.stroke_weight
        d["strokeAlign"] = node.stroke_align
    if node.corner_radius:
        d["cornerRadius"] = node.corner_radius
    if node.children:
        d["children"] = [node_to_dict(child) for child in node.children]
    return d


def node_from_dict(data: dict[str, Any]) -> SceneNode:
    """
    Deserialize one node (and its subtree).

    Raises:
        SceneError: If the type is unknown, a numeric field is not a number
            or the page appears as a child
    """
    if not isinstance(data, dict):
        raise SceneError(f"Node must be a JSON object, got {type(data).__name__}")
    try:
        node_type = NodeType(str(data.get("type", "RECTANGLE")).upper())
    except ValueError as e:
        raise SceneError(f"Unknown node type: {data.get('type')!r}") from e
    if node_type is NodeType.PAGE:
        raise SceneError("A PAGE node cannot be nested in a document")

    node = SceneNode(
        node_type,
        str(data.get("name") or ""),
        width=_optional_number(data, "width"),
        height=_optional_number(data, "height"),
        transform=_transform_from_dict(data),
        node_id=str(data["id"]) if data.get("id") else None,
    )
    node.fills = list(data.get("fills", []))
    node.strokes = list(data.get("strokes", []))
    node.stroke_weight = _number(data, "strokeWeight", 0.0)
    node.stroke_align = str(data.get("strokeAlign", "CENTER"))
    if node.corner_radius is not None and "cornerRadius" in data:
        node.corner_radius = _number(data, "cornerRadius", 0.0)

    for child_data in data.get("children", []):
        node.append_child(node_from_dict(child_data))
    return node


def _transform_from_dict(data: dict[str, Any]) -> AffineTransform:
    if "transform" in data:
        try:
            return AffineTransform.from_matrix(data["transform"])
        except (TypeError, ValueError) as e:
            raise SceneError(f"Invalid transform for node {data.get('id')!r}: {e}") from e
    x = _number(data, "x", 0.0)
    y = _number(data, "y", 0.0)
    rotation = _number(data, "rotation", 0.0)
    if rotation:
        return AffineTransform.rotation(rotation, x, y)
    return AffineTransform.translation(x, y)


def _number(data: dict[str, Any], key: str, default: float) -> float:
    """Read a numeric field, raising SceneError for non-numbers."""
    value = data.get(key, default)
    try:
        if isinstance(value, bool):
            raise TypeError("booleans are not numbers")
        return float(value)
    except (TypeError, ValueError) as e:
        raise SceneError(f"Field {key!r} of node {data.get('id')!r} must be a number, got {value!r}") from e


def _optional_number(data: dict[str, Any], key: str) -> float | None:
    if data.get(key) is None:
        return None
    return _number(data, key, 0.0)
