import pytest

from netshape_mcp.body import Body
from netshape_mcp.label import LabelSize
from netshape_mcp.models import NodeColor, NodeOptions
from netshape_mcp.surface import DrawingSurface


class FakeLabel:
    """Label collaborator with fixed metrics that records draw calls."""

    LABEL_GAP = 3

    def __init__(self, width=40.0, height=10.0):
        self.width = width
        self.height = height
        self.drawn = []

    def measure(self, text, selected=False):
        if not text:
            return LabelSize()
        return LabelSize(width=self.width, height=self.height)

    def footprint(self, text):
        return self.measure(text)

    def draw(self, surface, x, y, text, selected=False, baseline="hanging"):
        if text:
            self.drawn.append((x, y, text, selected, baseline))


@pytest.fixture
def body():
    return Body()


@pytest.fixture
def label():
    return FakeLabel()


@pytest.fixture
def surface():
    return DrawingSurface(100, 100, background="#ffffff")


@pytest.fixture
def make_options():
    """Options with distinctive fill colors so painted pixels are easy to check."""
    def _make(**kwargs) -> NodeOptions:
        color = NodeColor(
            border="#0000ff",
            background="#ff0000",
            highlight={"border": "#0000ff", "background": "#00ff00"},
            hover={"border": "#0000ff", "background": "#ffff00"},
        )
        return NodeOptions(color=color, **kwargs)
    return _make
