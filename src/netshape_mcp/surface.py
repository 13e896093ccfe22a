"""Pillow drawing surface — a small immediate-mode 2D paint API.

Shapes never talk to Pillow directly.  They trace a path on the surface
(``circle``, ``triangle``, ``ngon`` ...), set the style fields and call
``fill()`` / ``stroke()``, the way a browser canvas context is driven::

    surface.fill_style = "#97C2FC"
    surface.triangle(x, y, r)
    surface.fill()
    surface.stroke()

Coordinates, radii and line widths are in canvas units and go through the
surface transform (``origin`` then ``scale``).  Shadow blur and shadow
offsets are in pixels, like on a browser canvas.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw, ImageFilter, ImageFont


# Fully transparent black: the "no shadow" baseline.
TRANSPARENT = (0, 0, 0, 0)


# --- Color helpers ---

def _hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert hex color to RGB tuple. Supports both 3-char and 6-char hex."""
    hex_color = hex_color.lstrip("#")
    if len(hex_color) == 3:
        hex_color = hex_color[0]*2 + hex_color[1]*2 + hex_color[2]*2
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def _hex_to_rgba(hex_color: str, alpha: int = 255) -> tuple[int, int, int, int]:
    """Convert hex color to RGBA tuple."""
    r, g, b = _hex_to_rgb(hex_color)
    return (r, g, b, alpha)


# --- Paths ---

@dataclass
class _Path:
    """The current path, already in pixel coordinates.

    ``kind`` is ``"ellipse"`` (``coords`` is a bounding box) or
    ``"polygon"`` (``coords`` is a closed list of vertices).
    """
    kind: str
    coords: list

    def translated(self, dx: float, dy: float) -> "_Path":
        if self.kind == "ellipse":
            x0, y0, x1, y1 = self.coords
            return _Path("ellipse", [x0 + dx, y0 + dy, x1 + dx, y1 + dy])
        return _Path("polygon", [(px + dx, py + dy) for px, py in self.coords])


def _paint(
    draw: ImageDraw.ImageDraw,
    path: _Path,
    fill=None,
    outline=None,
    width: int = 1,
):
    """Fill and/or outline a path on a Pillow draw handle."""
    if path.kind == "ellipse":
        draw.ellipse(path.coords, fill=fill, outline=outline, width=width)
        return
    if fill is not None:
        draw.polygon(path.coords, fill=fill)
    if outline is not None:
        # Closed polyline; joint="curve" avoids notches at sharp vertices
        points = list(path.coords) + [path.coords[0]]
        draw.line(points, fill=outline, width=width, joint="curve")


# --- Surface ---

class DrawingSurface:
    """An RGBA image with a canvas-like paint API."""

    def __init__(
        self,
        width: int,
        height: int,
        background: str = "#11111b",
        scale: float = 1.0,
        origin: tuple[float, float] = (0.0, 0.0),
    ):
        self.image = Image.new("RGBA", (width, height), _hex_to_rgba(background))
        self._draw = ImageDraw.Draw(self.image)
        self.scale = scale
        self.origin = origin

        # Style state
        self.fill_style: str = "#000000"
        self.stroke_style: str = "#000000"
        self.line_width: float = 1.0

        # Shadow state
        self.shadow_color: tuple[int, int, int, int] = TRANSPARENT
        self.shadow_blur: float = 0.0
        self.shadow_offset_x: float = 0.0
        self.shadow_offset_y: float = 0.0

        self._path: Optional[_Path] = None
        self._saved: list[tuple] = []

    def to_px(self, x: float, y: float) -> tuple[float, float]:
        """Map canvas coordinates to pixel coordinates."""
        ox, oy = self.origin
        return ((x + ox) * self.scale, (y + oy) * self.scale)

    def from_px(self, px: float, py: float) -> tuple[float, float]:
        """Map pixel coordinates back to canvas coordinates."""
        ox, oy = self.origin
        return (px / self.scale - ox, py / self.scale - oy)

    # --- style stack ---

    def save(self):
        """Push the current style state."""
        self._saved.append((
            self.fill_style,
            self.stroke_style,
            self.line_width,
            self.shadow_color,
            self.shadow_blur,
            self.shadow_offset_x,
            self.shadow_offset_y,
        ))

    def restore(self):
        """Pop the style state pushed by the matching ``save()``."""
        (
            self.fill_style,
            self.stroke_style,
            self.line_width,
            self.shadow_color,
            self.shadow_blur,
            self.shadow_offset_x,
            self.shadow_offset_y,
        ) = self._saved.pop()

    # --- path primitives ---

    def _set_polygon(self, points: list[tuple[float, float]]):
        self._path = _Path("polygon", [self.to_px(px, py) for px, py in points])

    def polygon(self, points: list[tuple[float, float]]):
        """Trace an arbitrary closed polygon."""
        self._set_polygon(points)

    def circle(self, x: float, y: float, r: float):
        cx, cy = self.to_px(x, y)
        pr = r * self.scale
        self._path = _Path("ellipse", [cx - pr, cy - pr, cx + pr, cy + pr])

    def square(self, x: float, y: float, r: float):
        self._set_polygon([(x - r, y - r), (x + r, y - r), (x + r, y + r), (x - r, y + r)])

    def triangle(self, x: float, y: float, r: float):
        """Upward equilateral triangle, nudged down so it looks centered."""
        r *= 1.15
        y += 0.275 * r
        s = r * 2
        s2 = s / 2
        ir = math.sqrt(3) / 6 * s  # radius of the inner circle
        h = math.sqrt(s * s - s2 * s2)  # height
        self._set_polygon([(x, y - (h - ir)), (x + s2, y + ir), (x - s2, y + ir)])

    def triangle_down(self, x: float, y: float, r: float):
        """Downward equilateral triangle, nudged up so it looks centered."""
        r *= 1.15
        y -= 0.275 * r
        s = r * 2
        s2 = s / 2
        ir = math.sqrt(3) / 6 * s
        h = math.sqrt(s * s - s2 * s2)
        self._set_polygon([(x, y + (h - ir)), (x + s2, y - ir), (x - s2, y - ir)])

    def diamond(self, x: float, y: float, r: float):
        self._set_polygon([(x, y + r), (x + r, y), (x, y - r), (x - r, y)])

    def star(self, x: float, y: float, r: float):
        """Five-pointed star."""
        r *= 0.82
        y += 0.1 * r
        points = []
        for n in range(10):
            radius = r * 1.3 if n % 2 == 0 else r * 0.5
            angle = n * 2 * math.pi / 10
            points.append((x + radius * math.sin(angle), y - radius * math.cos(angle)))
        self._set_polygon(points)

    def ngon(self, x: float, y: float, r: float, sides: int):
        """Regular polygon with ``sides`` vertices, the first one at 3 o'clock."""
        a = 2 * math.pi / sides
        self._set_polygon([(x + r * math.cos(a * i), y + r * math.sin(a * i)) for i in range(sides)])

    # --- painting ---

    def _require_path(self) -> _Path:
        if self._path is None:
            raise RuntimeError("No current path: trace a shape before fill() or stroke()")
        return self._path

    def _shadow_active(self) -> bool:
        return self.shadow_color[3] > 0

    def _paint_shadow(self, path: _Path):
        """Composite a blurred, offset copy of the path under the next paint."""
        layer = Image.new("RGBA", self.image.size, TRANSPARENT)
        _paint(
            ImageDraw.Draw(layer),
            path.translated(self.shadow_offset_x, self.shadow_offset_y),
            fill=self.shadow_color,
        )
        if self.shadow_blur > 0:
            # A canvas shadowBlur of b corresponds to a gaussian sigma of b / 2
            layer = layer.filter(ImageFilter.GaussianBlur(self.shadow_blur / 2))
        self.image.alpha_composite(layer)

    def fill(self):
        """Fill the current path with ``fill_style``, casting the shadow if set."""
        path = self._require_path()
        if self._shadow_active():
            self._paint_shadow(path)
        _paint(self._draw, path, fill=self.fill_style)

    def stroke(self):
        """Outline the current path with ``stroke_style`` / ``line_width``."""
        path = self._require_path()
        width = max(1, round(self.line_width * self.scale))
        _paint(self._draw, path, outline=self.stroke_style, width=width)

    def line(self, points: list[tuple[float, float]], color: str, width: float = 1.0):
        """Draw an open polyline (not part of the path state)."""
        px = [self.to_px(x, y) for x, y in points]
        self._draw.line(px, fill=color, width=max(1, round(width * self.scale)))

    def text(
        self,
        x: float,
        y: float,
        text: str,
        font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
        fill: str,
    ):
        """Draw text with its top-left corner at canvas point (x, y)."""
        self._draw.text(self.to_px(x, y), text, fill=fill, font=font)

    # --- output ---

    def to_png(self, output_path: Optional[str] = None) -> bytes:
        """Encode the image as PNG bytes. Optionally save to file."""
        buf = BytesIO()
        self.image.save(buf, format="PNG", optimize=True)
        png_bytes = buf.getvalue()

        if output_path:
            Path(output_path).write_bytes(png_bytes)

        return png_bytes
