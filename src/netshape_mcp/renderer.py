"""Network renderer using Pillow — paints shaped nodes and their edges to PNG."""

from __future__ import annotations

import logging
import math
from typing import Optional

from .body import Body, View
from .label import Label, _load_bold_font
from .models import Network, NetworkEdge
from .shape_base import ShapeBase
from .shapes import create_node
from .surface import DrawingSurface
from .themes import get_theme, ThemePalette

logger = logging.getLogger(__name__)


# --- Drawing primitives ---

def _draw_arrow(
    surface: DrawingSurface,
    start: tuple[float, float],
    end: tuple[float, float],
    color: str,
    width: float = 2,
    arrow_size: float = 10,
):
    """Draw a line with an arrowhead whose tip sits exactly on ``end``."""
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    length = math.sqrt(dx * dx + dy * dy)
    if length == 0:
        return

    # Normalize
    udx = dx / length
    udy = dy / length

    # A short edge is all arrowhead; the shaft must not run back past start
    arrow_size = min(arrow_size, length)

    # Stop the shaft at the arrowhead base so the tip stays sharp
    base = (end[0] - arrow_size * udx, end[1] - arrow_size * udy)
    surface.line([start, base], color=color, width=width)

    # Arrowhead points
    ax = base[0] + (arrow_size / 2) * udy
    ay = base[1] - (arrow_size / 2) * udx
    bx = base[0] - (arrow_size / 2) * udy
    by = base[1] + (arrow_size / 2) * udx

    surface.save()
    surface.fill_style = color
    surface.polygon([end, (ax, ay), (bx, by)])
    surface.fill()
    surface.restore()


# --- Main renderer ---

class NetworkRenderer:
    """Renders a Network model to a PNG image."""

    # Layout constants
    PADDING = 60
    TITLE_HEIGHT = 50
    LABEL_FONT_SIZE = 14
    EDGE_WIDTH = 2
    ARROW_SIZE = 10

    def __init__(self, scale: float = 1.0):
        self.scale = scale
        self.font_title = _load_bold_font(int(28 * scale))
        self.theme: ThemePalette = get_theme("dark")  # Default theme
        self.body = Body(view=View(scale=scale))

    def build_nodes(self, network: Network) -> dict[str, ShapeBase]:
        """Create one shape instance per node, sharing one body and label module.

        The instances are registered in ``self.body.nodes`` by node id.
        """
        label_module = Label(
            font_size=self.LABEL_FONT_SIZE,
            color=self.theme.label_color,
            scale=self.scale,
        )
        self.body = Body(view=View(scale=self.scale))
        for node in network.nodes:
            self.body.nodes[node.id] = create_node(
                node.shape,
                node.get_options(self.theme),
                self.body,
                label_module,
            )
        return self.body.nodes

    def render(self, network: Network, output_path: Optional[str] = None) -> bytes:
        """Render the network to PNG bytes. Optionally save to file.

        Every node is resized at its position first; the image is sized to
        the union of the resulting bounding boxes.  Edges are drawn before
        nodes so glyphs sit on top of them.
        """
        # Set theme from network
        self.theme = get_theme(network.theme)

        shapes = self.build_nodes(network)
        for node in network.nodes:
            shapes[node.id].resize(node.x, node.y)

        bounds = self._calculate_bounds(shapes)
        img_width = int(bounds["width"] * self.scale)
        img_height = int(bounds["height"] * self.scale)
        logger.debug(f"Rendering '{network.title}': {len(shapes)} nodes on {img_width}x{img_height}")

        surface = DrawingSurface(
            img_width,
            img_height,
            background=network.background_color or self.theme.background,
            scale=self.scale,
            origin=(-bounds["min_x"], -bounds["min_y"]),
        )

        self._draw_title(surface, network.title, img_width)
        self._draw_edges(surface, network, shapes)

        for node in network.nodes:
            shapes[node.id].draw(surface, node.x, node.y, node.selected, node.hover)

        return surface.to_png(output_path)

    def _calculate_bounds(self, shapes: dict[str, ShapeBase]) -> dict:
        """Calculate the canvas region covering every node's bounding box."""
        if not shapes:
            return {"min_x": 0, "min_y": 0, "width": 400, "height": 300}

        boxes = [shape.bounding_box for shape in shapes.values()]
        min_x = min(b.left for b in boxes) - self.PADDING
        min_y = min(b.top for b in boxes) - self.PADDING - self.TITLE_HEIGHT
        max_x = max(b.right for b in boxes) + self.PADDING
        max_y = max(b.bottom for b in boxes) + self.PADDING

        return {
            "min_x": min_x,
            "min_y": min_y,
            "width": max_x - min_x,
            "height": max_y - min_y,
        }

    def _draw_title(self, surface: DrawingSurface, title: str, img_width: int):
        """Draw the network title centered at the top."""
        bbox = self.font_title.getbbox(title)
        tw = bbox[2] - bbox[0]
        x, y = surface.from_px((img_width - tw) / 2, 15 * self.scale)
        surface.text(x, y, title, font=self.font_title, fill=self.theme.title_color)

    @staticmethod
    def edge_endpoints(
        source: ShapeBase,
        target: ShapeBase,
        sx: float,
        sy: float,
        tx: float,
        ty: float,
    ) -> Optional[tuple[tuple[float, float], tuple[float, float]]]:
        """Clip the center-to-center segment to both glyph borders.

        Returns ``None`` when the glyphs touch or overlap, since there is
        no visible segment left to draw.
        """
        dx = tx - sx
        dy = ty - sy
        length = math.hypot(dx, dy)
        if length == 0:
            return None

        # Screen y grows downward; border distances take counter-clockwise angles
        angle = math.atan2(-dy, dx)
        start_gap = source.distance_to_border(angle)
        end_gap = target.distance_to_border(angle + math.pi)
        if start_gap + end_gap >= length:
            return None

        udx = dx / length
        udy = dy / length
        start = (sx + udx * start_gap, sy + udy * start_gap)
        end = (tx - udx * end_gap, ty - udy * end_gap)
        return start, end

    def _draw_edges(self, surface: DrawingSurface, network: Network, shapes: dict[str, ShapeBase]):
        """Draw every edge, stopping at the border of both of its nodes."""
        for edge in network.all_edges():
            source = network.get_node(edge.source)
            target = network.get_node(edge.target)
            if not source or not target:
                continue

            segment = self.edge_endpoints(
                shapes[source.id], shapes[target.id],
                source.x, source.y, target.x, target.y,
            )
            if segment is None:
                logger.debug(f"Skipping edge {edge.source} -> {edge.target}: nodes overlap")
                continue

            self._draw_edge(surface, edge, *segment)

    def _draw_edge(
        self,
        surface: DrawingSurface,
        edge: NetworkEdge,
        start: tuple[float, float],
        end: tuple[float, float],
    ):
        color = edge.color or self.theme.edge_color
        if edge.arrows:
            _draw_arrow(surface, start, end, color=color, width=self.EDGE_WIDTH, arrow_size=self.ARROW_SIZE)
        else:
            surface.line([start, end], color=color, width=self.EDGE_WIDTH)
