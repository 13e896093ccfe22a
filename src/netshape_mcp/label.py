"""Node label measurement and drawing using Pillow fonts.

One ``Label`` is shared by every node of a rendered network.  Shapes ask
it how much room a label needs (``measure``) when they size their bounding
box, and ask it to paint the label (``draw``) below the glyph.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import ImageFont

from .surface import DrawingSurface

logger = logging.getLogger(__name__)


# --- Font handling ---

def _load_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Load a font, falling back to default if none available."""
    font_paths = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
        "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
        "/usr/share/fonts/TTF/DejaVuSans.ttf",
    ]
    for fp in font_paths:
        if Path(fp).exists():
            return ImageFont.truetype(fp, size)
    logger.debug("No TrueType font found, using Pillow's default font")
    return ImageFont.load_default()


def _load_bold_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Load a bold font, falling back to regular."""
    font_paths = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
        "/usr/share/fonts/truetype/freefont/FreeSansBold.ttf",
        "/usr/share/fonts/TTF/DejaVuSans-Bold.ttf",
    ]
    for fp in font_paths:
        if Path(fp).exists():
            return ImageFont.truetype(fp, size)
    return _load_font(size)


@dataclass(frozen=True)
class LabelSize:
    """Text metrics in canvas units."""
    width: float = 0.0
    height: float = 0.0


class Label:
    """Measures and draws node labels.

    Fonts are loaded at ``font_size * scale`` pixels so text stays crisp on
    a scaled surface; measurements are converted back to canvas units.
    """

    # Gap between the bottom of a glyph and the top of its label
    LABEL_GAP = 3

    def __init__(self, font_size: int = 14, color: str = "#cdd6f4", scale: float = 1.0):
        self.font_size = font_size
        self.color = color
        self.scale = scale
        px = max(1, int(font_size * scale))
        self.font = _load_font(px)
        self.font_bold = _load_bold_font(px)

    def measure(self, text: Optional[str], selected: bool = False) -> LabelSize:
        """Return the size ``text`` occupies, zero for a missing/empty label."""
        if not text:
            return LabelSize()
        font = self.font_bold if selected else self.font
        left, top, right, bottom = font.getbbox(text)
        return LabelSize(width=(right - left) / self.scale, height=(bottom - top) / self.scale)

    def draw(
        self,
        surface: DrawingSurface,
        x: float,
        y: float,
        text: Optional[str],
        selected: bool = False,
        baseline: str = "hanging",
    ):
        """Draw ``text`` horizontally centered on ``x``.

        With the ``hanging`` baseline the text top sits at ``y``; with
        ``middle`` the text is vertically centered on ``y``.
        """
        if not text:
            return
        size = self.measure(text, selected)
        top = y if baseline == "hanging" else y - size.height / 2
        font = self.font_bold if selected else self.font
        # Pillow places the ascender line at the text origin; shift by the ink
        # offsets so the ink box lands exactly where measure() says it is
        ink_left, ink_top, _, _ = font.getbbox(text)
        surface.text(
            x - size.width / 2 - ink_left / self.scale,
            top - ink_top / self.scale,
            text,
            font=font,
            fill=self.color,
        )

    def footprint(self, text: Optional[str]) -> LabelSize:
        """Room ``text`` needs in either weight, so the box fits a selected label too."""
        regular = self.measure(text)
        bold = self.measure(text, selected=True)
        return LabelSize(width=max(regular.width, bold.width), height=max(regular.height, bold.height))
