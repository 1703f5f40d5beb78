"""
Module: document.scene

Purpose:
    In-memory retained scene graph that plays the host document API:
    nodes with relative transforms and sizes, container nodes (page,
    frames, groups) and the mutation primitives the border and packing
    commands issue (create rectangle/frame, insert/append child, group,
    resize, style). Also carries the host-side session state: selection,
    notifications, UI messages and the closed flag.

Key Classes:
    - NodeType: Node kinds
    - SceneNode: A node (implements core.models.NodeRef)
    - SceneDocument: One page of nodes plus session state

Dependencies:
    - core.models: AffineTransform, AxisAlignedBounds
    - core.geometry: invert, absolute_bounds, union_bounds

Used By:
    - border.applier: Border creation and grouping
    - pipeline.controller: Commands
    - document.serialization: JSON load/save
    - output.renderer / output.preview

Group Semantics:
    A group has no size of its own. Its origin sits at the top-left of
    its children's extents and its width/height are those extents;
    grouping and regrouping keep every child's absolute position.
"""

from __future__ import annotations

import logging
import uuid
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Sequence

from offset_border.core.geometry import absolute_bounds, invert, union_bounds
from offset_border.core.models import AffineTransform, AxisAlignedBounds
from offset_border.errors import SceneError

logger = logging.getLogger(__name__)


class NodeType(str, Enum):
    PAGE = "PAGE"
    FRAME = "FRAME"
    GROUP = "GROUP"
    RECTANGLE = "RECTANGLE"
    ELLIPSE = "ELLIPSE"
    TEXT = "TEXT"
    VECTOR = "VECTOR"


CONTAINER_TYPES = frozenset({NodeType.PAGE, NodeType.FRAME, NodeType.GROUP})
CORNER_RADIUS_TYPES = frozenset({NodeType.RECTANGLE, NodeType.FRAME})


def _next_id() -> str:
    return uuid.uuid4().hex[:12]


class SceneNode:
    """
    A node in the scene graph.

    ``parent`` is a back-reference maintained by the document; only
    containers own children.

    Attributes:
        id: Stable identifier (used as cache key and in JSON)
        type: NodeType
        name: Layer name
        relative_transform: Local -> parent transform
        fills: Paint dicts ({"type": "SOLID", "color": {...}, "opacity": 1})
        strokes: Paint dicts
        stroke_weight: Stroke width
        stroke_align: "CENTER" / "INSIDE" / "OUTSIDE"
        corner_radius: Rectangles and frames only
    """

    def __init__(
        self,
        node_type: NodeType,
        name: str = "",
        *,
        width: Optional[float] = None,
        height: Optional[float] = None,
        transform: Optional[AffineTransform] = None,
        node_id: Optional[str] = None,
    ) -> None:
        self.id = node_id or _next_id()
        self.type = NodeType(node_type)
        self.name = name or self.type.value.title()
        self.relative_transform = transform or AffineTransform.identity()
        self._width = width
        self._height = height
        self.parent: Optional[SceneNode] = None
        self.children: List[SceneNode] = []
        self.fills: List[Dict[str, Any]] = []
        self.strokes: List[Dict[str, Any]] = []
        self.stroke_weight: float = 0.0
        self.stroke_align: str = "CENTER"
        self.corner_radius: Optional[float] = 0.0 if self.type in CORNER_RADIUS_TYPES else None

    def __repr__(self) -> str:
        return f"SceneNode({self.type.value}, {self.name!r}, id={self.id!r})"

    # ─────────────────────────────────────────────────────────────────────────
    # Capabilities
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_root(self) -> bool:
        return self.type is NodeType.PAGE

    @property
    def supports_children(self) -> bool:
        return self.type in CONTAINER_TYPES

    @property
    def has_geometry(self) -> bool:
        """True when the node exposes width and height."""
        if self.type is NodeType.GROUP:
            return bool(self.children)
        return self._width is not None and self._height is not None

    @property
    def resizable(self) -> bool:
        return self.has_geometry and self.type is not NodeType.GROUP

    # ─────────────────────────────────────────────────────────────────────────
    # Geometry
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def width(self) -> float:
        if self.type is NodeType.GROUP:
            return self._children_extent().width
        if self._width is None:
            raise AttributeError(f"{self!r} has no width")
        return self._width

    @property
    def height(self) -> float:
        if self.type is NodeType.GROUP:
            return self._children_extent().height
        if self._height is None:
            raise AttributeError(f"{self!r} has no height")
        return self._height

    @property
    def x(self) -> float:
        return self.relative_transform.e

    @x.setter
    def x(self, value: float) -> None:
        self.relative_transform = self.relative_transform.with_translation(value, self.y)
        self._renormalize_parent()

    @property
    def y(self) -> float:
        return self.relative_transform.f

    @y.setter
    def y(self, value: float) -> None:
        self.relative_transform = self.relative_transform.with_translation(self.x, value)
        self._renormalize_parent()

    @property
    def absolute_transform(self) -> AffineTransform:
        """Local -> document root transform. The page itself is identity."""
        if self.is_root:
            return AffineTransform.identity()
        if self.parent is None:
            return self.relative_transform
        return self.parent.absolute_transform.multiply(self.relative_transform)

    @property
    def local_bounds(self) -> AxisAlignedBounds:
        """Bounds in the parent's coordinate space."""
        return absolute_bounds(self.relative_transform, self.width, self.height)

    def resize_without_constraints(self, width: float, height: float) -> None:
        """
        Set width and height without touching children.

        Raises:
            SceneError: If the node cannot be resized or a size is negative
        """
        if not self.resizable:
            raise SceneError(f"{self!r} is not resizable")
        if width < 0 or height < 0:
            raise SceneError(f"Invalid size {width}x{height} for {self!r}")
        self._width = float(width)
        self._height = float(height)
        self._renormalize_parent()

    resize = resize_without_constraints

    # ─────────────────────────────────────────────────────────────────────────
    # Tree
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def index_in_parent(self) -> int:
        if self.parent is None:
            raise SceneError(f"{self!r} has no parent")
        return self.parent.children.index(self)

    def ancestors(self) -> Iterator[SceneNode]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def walk(self) -> Iterator[SceneNode]:
        """Depth-first iteration over this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.walk()

    def insert_child(self, index: int, child: SceneNode) -> None:
        """
        Insert ``child`` at ``index`` (0 = back-most).

        The child keeps its relative transform. A child already in this
        container is moved.

        Raises:
            SceneError: If this node cannot hold children or the insert
                would create a cycle
        """
        if not self.supports_children:
            raise SceneError(f"{self!r} cannot contain children")
        if child is self or child in self.ancestors():
            raise SceneError(f"Cannot insert {child!r} into its own descendant")
        if child.is_root:
            raise SceneError("The page cannot be reparented")

        if child.parent is self:
            # Restacking inside the same container leaves geometry untouched
            self.children.remove(child)
            self.children.insert(max(0, min(index, len(self.children))), child)
            return

        child._detach()
        index = max(0, min(index, len(self.children)))
        self.children.insert(index, child)
        child.parent = self
        self._normalize_group()

    def append_child(self, child: SceneNode) -> None:
        self.insert_child(len(self.children), child)

    def remove(self) -> None:
        """Detach from the parent; an emptied group is removed too."""
        parent = self.parent
        self._detach()
        if parent is not None and parent.type is NodeType.GROUP and not parent.children:
            parent.remove()

    def _detach(self) -> None:
        parent = self.parent
        if parent is None:
            return
        parent.children.remove(self)
        self.parent = None
        parent._normalize_group()

    # ─────────────────────────────────────────────────────────────────────────
    # Group extents
    # ─────────────────────────────────────────────────────────────────────────

    def _children_extent(self) -> AxisAlignedBounds:
        boxes = [child.local_bounds for child in self.children if child.has_geometry]
        if not boxes:
            return AxisAlignedBounds(0, 0, 0, 0)
        return union_bounds(boxes)

    def _normalize_group(self) -> None:
        """Move a group's origin onto its children's top-left extent."""
        if self.type is not NodeType.GROUP or not self.children:
            return
        extent = self._children_extent()
        if extent.x != 0 or extent.y != 0:
            shift = AffineTransform.translation(extent.x, extent.y)
            unshift = AffineTransform.translation(-extent.x, -extent.y)
            self.relative_transform = self.relative_transform.multiply(shift)
            for child in self.children:
                child.relative_transform = unshift.multiply(child.relative_transform)
        # Extent may have changed even without a shift
        self._renormalize_parent()

    def _renormalize_parent(self) -> None:
        if self.parent is not None:
            self.parent._normalize_group()


class SceneDocument:
    """
    One page of nodes plus the host session state.

    Attributes:
        current_page: Root PAGE node (identity transform)
        selection: Currently selected nodes
        notifications: Toast messages raised with notify()
        messages: Messages posted to the configuration UI
        closed: Set once a command finishes and closes the session

    Example:
        >>> doc = SceneDocument()
        >>> rect = doc.create_rectangle("Photo")
        >>> rect.resize_without_constraints(100, 50)
        >>> rect.parent is doc.current_page
        True
    """

    def __init__(self, page_name: str = "Page 1") -> None:
        self.current_page = SceneNode(NodeType.PAGE, page_name)
        self._selection: List[SceneNode] = []
        self.notifications: List[str] = []
        self.messages: List[dict] = []
        self.closed = False

    # ─────────────────────────────────────────────────────────────────────────
    # Lookup
    # ─────────────────────────────────────────────────────────────────────────

    def iter_nodes(self) -> Iterator[SceneNode]:
        return self.current_page.walk()

    def find(self, node_id: str) -> Optional[SceneNode]:
        for node in self.iter_nodes():
            if node.id == node_id:
                return node
        return None

    @property
    def selection(self) -> List[SceneNode]:
        return list(self._selection)

    @selection.setter
    def selection(self, nodes: Sequence[SceneNode]) -> None:
        self._selection = [n for n in nodes if not n.is_root]

    # ─────────────────────────────────────────────────────────────────────────
    # Creation
    # ─────────────────────────────────────────────────────────────────────────

    def create_rectangle(self, name: str = "Rectangle") -> SceneNode:
        """Create a 100x100 rectangle appended to the current page."""
        rect = SceneNode(NodeType.RECTANGLE, name, width=100.0, height=100.0)
        self.current_page.append_child(rect)
        return rect

    def create_frame(self, width: float, height: float, name: str = "Frame") -> SceneNode:
        """Create a fixed-size frame appended to the current page."""
        frame = SceneNode(NodeType.FRAME, name, width=float(width), height=float(height))
        frame.fills = [{"type": "SOLID", "color": {"r": 1.0, "g": 1.0, "b": 1.0}, "opacity": 1}]
        self.current_page.append_child(frame)
        return frame

    def group(
        self,
        nodes: Sequence[SceneNode],
        parent: SceneNode,
        index: Optional[int] = None,
        name: str = "Group",
    ) -> SceneNode:
        """
        Group ``nodes`` inside ``parent`` keeping their absolute positions.

        The group is inserted where the lowest of the grouped nodes sat in
        ``parent`` (or at ``index`` when given); nodes keep their stacking
        order.

        Raises:
            SceneError: If nodes is empty or parent cannot hold children
        """
        if not nodes:
            raise SceneError("Cannot group an empty list of nodes")
        if not parent.supports_children:
            raise SceneError(f"{parent!r} cannot contain a group")

        if index is None:
            indices = [n.index_in_parent for n in nodes if n.parent is parent]
            index = min(indices) if indices else len(parent.children)

        ordered = sorted(nodes, key=_stacking_key)
        absolute = {n.id: n.absolute_transform for n in ordered}

        group = SceneNode(NodeType.GROUP, name)
        parent.insert_child(index, group)
        group_inverse = (
            AffineTransform.identity()
            if group.absolute_transform.is_identity
            else invert(group.absolute_transform)
        )
        for node in ordered:
            node._detach()
            node.relative_transform = group_inverse.multiply(absolute[node.id])
            group.children.append(node)
            node.parent = group
        group._normalize_group()
        logger.debug(f"Grouped {len(ordered)} node(s) into {group!r}")
        return group

    # ─────────────────────────────────────────────────────────────────────────
    # Session
    # ─────────────────────────────────────────────────────────────────────────

    def notify(self, message: str) -> None:
        logger.info(message)
        self.notifications.append(message)

    def post_message(self, message: dict) -> None:
        self.messages.append(message)

    def close(self) -> None:
        self.closed = True


def _stacking_key(node: SceneNode) -> tuple:
    """Sort key giving document paint order (back to front)."""
    path = []
    current: Optional[SceneNode] = node
    while current is not None and current.parent is not None:
        path.append(current.index_in_parent)
        current = current.parent
    return tuple(reversed(path))
