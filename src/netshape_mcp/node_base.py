"""Per-node render state shared by every node shape.

A node shape instance lives as long as its graph node.  Every frame the
renderer calls ``resize`` (geometry only) and then ``draw`` (paint only);
edge routing calls ``distance_to_border(angle)`` to find where a line
should stop at the glyph's outline.

``width`` / ``height`` / ``radius`` are ``None`` until the first resize.
Anything that needs them before that raises ``GeometryNotInitializedError``
instead of producing NaN geometry.
"""

from __future__ import annotations

import math
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Mapping, Optional, Union

from .body import Body
from .label import Label
from .models import NodeOptions
from .surface import DrawingSurface, TRANSPARENT


# Border allowance added by the generic border-distance formula.  Fixed,
# independent of ``options.border_width``.
DEFAULT_BORDER_WIDTH = 1

# rgba(0,0,0,0.5)
SHADOW_COLOR = (0, 0, 0, 128)


class GeometryNotInitializedError(RuntimeError):
    """Raised when a node's geometry is used before its first resize."""


@dataclass
class BoundingBox:
    """Screen-space rectangle occupied by a node glyph (and its label)."""
    top: float = 0.0
    left: float = 0.0
    right: float = 0.0
    bottom: float = 0.0


class NodeBase:
    """Common state and generic geometry for every node shape."""

    def __init__(
        self,
        options: Union[NodeOptions, Mapping],
        body: Body,
        label_module: Label,
    ):
        self.body = body
        self.label_module = label_module
        self.set_options(options)
        self.top: Optional[float] = None
        self.left: Optional[float] = None
        self.height: Optional[float] = None
        self.width: Optional[float] = None
        self.radius: Optional[float] = None
        self.bounding_box = BoundingBox()

    def set_options(self, options: Union[NodeOptions, Mapping]):
        """Replace the options bag wholesale.

        Does not resize: call ``resize`` afterwards if the change affects
        geometry.
        """
        if not isinstance(options, NodeOptions):
            options = NodeOptions.model_validate(options)
        self.options = options

    def _require_geometry(self):
        if self.width is None or self.height is None:
            raise GeometryNotInitializedError(
                f"{type(self).__name__} has no geometry yet: call resize() first"
            )

    def _distance_to_border(self, angle: float) -> float:
        """Approximate border distance, treating the node as an ellipse.

        Picks the smaller of the two axis-aligned projections of the ray at
        ``angle`` (radians, counter-clockwise from +x).  Exact for circles,
        close for boxes, only an approximation for other outlines.
        """
        self._require_geometry()
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        # A ray along an axis never meets the other pair of sides
        x_term = abs(self.width / 2 / cos_a) if cos_a != 0 else math.inf
        y_term = abs(self.height / 2 / sin_a) if sin_a != 0 else math.inf
        return min(x_term, y_term) + DEFAULT_BORDER_WIDTH

    def enable_shadow(self, surface: DrawingSurface):
        if self.options.shadow.enabled is True:
            surface.shadow_color = SHADOW_COLOR
            surface.shadow_blur = self.options.shadow.size
            surface.shadow_offset_x = self.options.shadow.x
            surface.shadow_offset_y = self.options.shadow.y

    def disable_shadow(self, surface: DrawingSurface):
        if self.options.shadow.enabled is True:
            surface.shadow_color = TRANSPARENT
            surface.shadow_blur = 0
            surface.shadow_offset_x = 0
            surface.shadow_offset_y = 0

    @contextmanager
    def shadow(self, surface: DrawingSurface) -> Iterator[DrawingSurface]:
        """Apply the node's shadow for the duration of the block.

        The shadow is reset on every exit path, so one node's styling never
        leaks onto elements drawn after it on the same surface.
        """
        self.enable_shadow(surface)
        try:
            yield surface
        finally:
            self.disable_shadow(surface)
