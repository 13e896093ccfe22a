"""
Theme definitions for Netshape-MCP.

Provides dark and light color palettes for rendering networks.
Each theme defines colors for:
- Canvas background and title
- Node labels
- Edges
- Node glyphs in their normal, selected (highlight) and hover states
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class ThemePalette:
    """Color palette for a theme."""

    # Canvas
    background: str
    title_color: str

    # Text
    label_color: str

    # Edges
    edge_color: str

    # Node glyphs
    node_border: str
    node_background: str
    node_highlight_border: str
    node_highlight_background: str
    node_hover_border: str
    node_hover_background: str


# Catppuccin Mocha (dark theme) - current default
DARK_THEME = ThemePalette(
    background="#11111b",
    title_color="#cdd6f4",
    label_color="#cdd6f4",
    edge_color="#7f849c",
    node_border="#89b4fa",
    node_background="#1e1e2e",
    node_highlight_border="#f9e2af",
    node_highlight_background="#313244",
    node_hover_border="#b4befe",
    node_hover_background="#45475a",
)


# Light theme - the classic network palette on white
LIGHT_THEME = ThemePalette(
    background="#ffffff",
    title_color="#1e1e2e",
    label_color="#343434",
    edge_color="#848484",
    node_border="#2B7CE9",
    node_background="#97C2FC",
    node_highlight_border="#2B7CE9",
    node_highlight_background="#D2E5FF",
    node_hover_border="#2B7CE9",
    node_hover_background="#D2E5FF",
)


# Theme registry
THEMES: dict[str, ThemePalette] = {
    "dark": DARK_THEME,
    "light": LIGHT_THEME,
}


def get_theme(name: str) -> ThemePalette:
    """Get a theme palette by name.

    Args:
        name: Theme name ("dark" or "light")

    Returns:
        ThemePalette for the requested theme

    Raises:
        ValueError: If theme name is not recognized
    """
    if name not in THEMES:
        valid = ", ".join(THEMES.keys())
        raise ValueError(f"Unknown theme '{name}'. Valid themes: {valid}")
    return THEMES[name]
