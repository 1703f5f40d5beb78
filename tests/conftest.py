import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import offset_border
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from offset_border.core.models import AffineTransform  # noqa: E402
from offset_border.document.scene import NodeType, SceneDocument, SceneNode  # noqa: E402


# Common test fixtures
@pytest.fixture
def document():
    """Return an empty scene document."""
    return SceneDocument()


@pytest.fixture
def make_rect(document):
    """Factory adding a rectangle to the page (or a given parent)."""
    def _create(
        width: float = 100,
        height: float = 50,
        x: float = 0,
        y: float = 0,
        name: str = "Photo",
        parent: SceneNode = None,
    ) -> SceneNode:
        rect = SceneNode(
            NodeType.RECTANGLE,
            name,
            width=width,
            height=height,
            transform=AffineTransform.translation(x, y),
        )
        (parent or document.current_page).append_child(rect)
        return rect
    return _create


@pytest.fixture
def make_frame(document):
    """Factory adding a frame with an arbitrary transform to the page."""
    def _create(
        transform: AffineTransform = None,
        width: float = 500,
        height: float = 500,
        name: str = "Frame",
    ) -> SceneNode:
        frame = SceneNode(
            NodeType.FRAME,
            name,
            width=width,
            height=height,
            transform=transform or AffineTransform.identity(),
        )
        document.current_page.append_child(frame)
        return frame
    return _create
