"""
Concrete node shapes and the shape registry.

Every shape answers the same three calls:

    resize(x, y)                         — recompute geometry, never paints
    draw(surface, x, y, selected, hover) — paint, never recomputes geometry
    distance_to_border(angle)            — center-to-outline distance

``Dot`` knows its exact border distance (a circle is the same in every
direction).  The polygonal shapes use the generic ellipse approximation
from ``NodeBase``; it is close enough for edge routing but not exact for
pointed outlines such as triangles and stars.
"""

from __future__ import annotations

from typing import Mapping, Optional, Union

from .body import Body
from .label import Label
from .models import NodeOptions
from .shape_base import ShapeBase
from .surface import DrawingSurface


class Dot(ShapeBase):
    def resize(self, x: Optional[float] = None, y: Optional[float] = None):
        self._resize_shape(x, y)

    def draw(self, surface: DrawingSurface, x: float, y: float, selected: bool = False, hover: bool = False):
        self._draw_shape(surface, "circle", 2, x, y, selected, hover)

    def distance_to_border(self, angle: float) -> float:
        """Exact: independent of ``angle``."""
        self._require_geometry()
        return self.options.size + self.options.border_width


class Triangle(ShapeBase):
    def resize(self, x: Optional[float] = None, y: Optional[float] = None):
        self._resize_shape(x, y)

    def draw(self, surface: DrawingSurface, x: float, y: float, selected: bool = False, hover: bool = False):
        self._draw_shape(surface, "triangle", 3, x, y, selected, hover)

    def distance_to_border(self, angle: float) -> float:
        return self._distance_to_border(angle)


class TriangleDown(ShapeBase):
    def resize(self, x: Optional[float] = None, y: Optional[float] = None):
        self._resize_shape(x, y)

    def draw(self, surface: DrawingSurface, x: float, y: float, selected: bool = False, hover: bool = False):
        self._draw_shape(surface, "triangle_down", 3, x, y, selected, hover)

    def distance_to_border(self, angle: float) -> float:
        return self._distance_to_border(angle)


class Square(ShapeBase):
    def resize(self, x: Optional[float] = None, y: Optional[float] = None):
        self._resize_shape(x, y)

    def draw(self, surface: DrawingSurface, x: float, y: float, selected: bool = False, hover: bool = False):
        self._draw_shape(surface, "square", 4, x, y, selected, hover)

    def distance_to_border(self, angle: float) -> float:
        return self._distance_to_border(angle)


class Diamond(ShapeBase):
    def resize(self, x: Optional[float] = None, y: Optional[float] = None):
        self._resize_shape(x, y)

    def draw(self, surface: DrawingSurface, x: float, y: float, selected: bool = False, hover: bool = False):
        self._draw_shape(surface, "diamond", 4, x, y, selected, hover)

    def distance_to_border(self, angle: float) -> float:
        return self._distance_to_border(angle)


class Star(ShapeBase):
    def resize(self, x: Optional[float] = None, y: Optional[float] = None):
        self._resize_shape(x, y)

    def draw(self, surface: DrawingSurface, x: float, y: float, selected: bool = False, hover: bool = False):
        self._draw_shape(surface, "star", 4, x, y, selected, hover)

    def distance_to_border(self, angle: float) -> float:
        return self._distance_to_border(angle)


class Hexagon(ShapeBase):
    """Drawn through the surface's generic ``ngon`` primitive."""

    def resize(self, x: Optional[float] = None, y: Optional[float] = None):
        self._resize_shape(x, y)

    def draw(self, surface: DrawingSurface, x: float, y: float, selected: bool = False, hover: bool = False):
        self._draw_shape(surface, "hexagon", 6, x, y, selected, hover)

    def distance_to_border(self, angle: float) -> float:
        return self._distance_to_border(angle)


# Shape registry
SHAPES: dict[str, type[ShapeBase]] = {
    "dot": Dot,
    "triangle": Triangle,
    "triangleDown": TriangleDown,
    "square": Square,
    "diamond": Diamond,
    "star": Star,
    "hexagon": Hexagon,
}


def get_shape(name: str) -> type[ShapeBase]:
    """Get a shape class by its id.

    Raises:
        ValueError: If the shape id is not recognized
    """
    if name not in SHAPES:
        valid = ", ".join(SHAPES.keys())
        raise ValueError(f"Unknown shape '{name}'. Valid shapes: {valid}")
    return SHAPES[name]


def create_node(
    shape: str,
    options: Union[NodeOptions, Mapping],
    body: Body,
    label_module: Label,
) -> ShapeBase:
    """Build the render state for one graph node."""
    return get_shape(shape)(options, body, label_module)
