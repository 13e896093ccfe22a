"""Sizing and drawing scaffolding shared by the simple node shapes.

A concrete shape only has to name its surface primitive and vertex count;
``_resize_shape`` and ``_draw_shape`` do the rest.
"""

from __future__ import annotations

import logging
from typing import Optional

from .node_base import NodeBase
from .surface import DrawingSurface

logger = logging.getLogger(__name__)


class ShapeBase(NodeBase):
    """Base class for glyphs sized by ``options.size`` with the label below."""

    # Last center the geometry was computed for
    _center: tuple[float, float] = (0.0, 0.0)

    def _resize_shape(self, x: Optional[float] = None, y: Optional[float] = None):
        """Recompute width, height, radius and bounding box from scratch.

        ``x`` / ``y`` is the glyph center; it defaults to the center of the
        previous resize.
        """
        if x is None or y is None:
            x, y = self._center
        self._center = (x, y)

        size = 2 * self.options.size
        self.width = size
        self.height = size
        self.radius = 0.5 * self.width
        self.left = x - self.width / 2
        self.top = y - self.height / 2
        self._update_bounding_box(x, y)
        logger.debug(
            f"{type(self).__name__} resized at ({x}, {y}): "
            f"{self.width}x{self.height}, box={self.bounding_box}"
        )

    def _update_bounding_box(self, x: float, y: float):
        size = self.options.size
        box = self.bounding_box
        box.top = y - size
        box.left = x - size
        box.right = x + size
        box.bottom = y + size

        label = self.label_module.footprint(self.options.label)
        if label.width > 0:
            box.left = min(box.left, x - label.width / 2)
            box.right = max(box.right, x + label.width / 2)
            box.bottom = box.bottom + self.label_module.LABEL_GAP + label.height

    def _draw_shape(
        self,
        surface: DrawingSurface,
        shape: str,
        sides: int,
        x: float,
        y: float,
        selected: bool = False,
        hover: bool = False,
    ):
        """Paint the glyph centered at (x, y) using already-resized geometry.

        ``shape`` names the surface primitive; a surface without that
        primitive gets a regular polygon with ``sides`` vertices instead.
        """
        self._require_geometry()
        options = self.options
        color = options.color
        if color is None:
            raise ValueError(f"{type(self).__name__} has no colors: set options.color before drawing")

        border_width = options.border_width
        selection_line_width = options.border_width_selected or 2 * border_width
        line_width = selection_line_width if selected else border_width
        line_width /= self.body.view.scale
        surface.line_width = min(self.width, line_width)

        if selected:
            surface.stroke_style = color.highlight.border
            surface.fill_style = color.highlight.background
        elif hover:
            surface.stroke_style = color.hover.border
            surface.fill_style = color.hover.background
        else:
            surface.stroke_style = color.border
            surface.fill_style = color.background

        paint = getattr(surface, shape, None)
        if paint is None:
            surface.ngon(x, y, options.size, sides)
        else:
            paint(x, y, options.size)

        with self.shadow(surface):
            surface.fill()

        # Zero-width borders are skipped entirely rather than drawn 1px wide
        if border_width > 0:
            surface.save()
            try:
                surface.stroke()
            finally:
                surface.restore()

        if options.label:
            y_label = y + 0.5 * self.height + self.label_module.LABEL_GAP
            self.label_module.draw(surface, x, y_label, options.label, selected, "hanging")
