"""
Data models for Netshape-MCP — node options and the network recipe.

Two groups of models live here:

**Node options** — the configuration bag handed to every node shape.
It controls how large the glyph is, how thick its border is drawn, which
colors it uses in its normal / selected / hover states, whether it casts a
drop shadow, and which label sits below it::

    NodeOptions
    ├── size            — radius-like extent of the glyph
    ├── border_width    — stroke width (also added to border distances)
    ├── shadow          — ShadowOptions (enabled, size, x, y)
    ├── color           — NodeColor (border, background, highlight, hover)
    └── label           — optional text drawn under the glyph

**Network recipe** — a positioned set of shaped nodes plus the edges
between them.  Positions are explicit; nothing in this package computes a
layout.

Every option key accepts both its snake_case name (``border_width``) and
its camelCase alias (``borderWidth``), so option bags written for a
browser-side network library validate unchanged.
"""

from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .themes import ThemePalette


# ---------------------------------------------------------------------------
# Node options
# ---------------------------------------------------------------------------

class _OptionModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ShadowOptions(_OptionModel):
    """Drop-shadow styling for a node glyph.

    Attributes:
        enabled: Whether the glyph casts a shadow at all.
        size:    Blur radius of the shadow in pixels.
        x:       Horizontal shadow offset in pixels.
        y:       Vertical shadow offset in pixels.
    """
    enabled: bool = False
    size: float = 10.0
    x: float = 5.0
    y: float = 5.0


class ColorState(_OptionModel):
    """Border and background color for one interaction state."""
    border: str
    background: str


class NodeColor(_OptionModel):
    """Glyph colors for the normal, selected (highlight) and hover states."""
    border: str = "#2B7CE9"
    background: str = "#97C2FC"
    highlight: ColorState = Field(
        default_factory=lambda: ColorState(border="#2B7CE9", background="#D2E5FF")
    )
    hover: ColorState = Field(
        default_factory=lambda: ColorState(border="#2B7CE9", background="#D2E5FF")
    )


class NodeOptions(_OptionModel):
    """The configuration bag a node shape renders from.

    Attributes:
        size:                  Radius-like glyph extent in canvas units.
        border_width:          Stroke width of the outline.
        border_width_selected: Stroke width while selected (defaults to
                               twice ``border_width``).
        shadow:                Drop-shadow styling (always present).
        color:                 Glyph colors; ``None`` means "take them from
                               the theme" (see ``NetworkNode.get_options``).
        label:                 Text drawn below the glyph.
    """
    size: float = 25.0
    border_width: float = 1.0
    border_width_selected: Optional[float] = None
    shadow: ShadowOptions = Field(default_factory=ShadowOptions)
    color: Optional[NodeColor] = None
    label: Optional[str] = None


def theme_node_color(theme: ThemePalette) -> NodeColor:
    """Build the default glyph colors for a theme."""
    return NodeColor(
        border=theme.node_border,
        background=theme.node_background,
        highlight=ColorState(
            border=theme.node_highlight_border,
            background=theme.node_highlight_background,
        ),
        hover=ColorState(
            border=theme.node_hover_border,
            background=theme.node_hover_background,
        ),
    )


# ---------------------------------------------------------------------------
# Network recipe
# ---------------------------------------------------------------------------

class NetworkNode(BaseModel):
    """A positioned node in a network recipe.

    ``x`` / ``y`` are the glyph *center* in canvas units.  ``shape`` selects
    the glyph from the shape registry (see ``shapes.SHAPES``).  The node's
    label is kept on the node itself so recipes stay short; it is copied
    into the options bag by ``get_options``.
    """
    id: str
    shape: str = "dot"
    label: Optional[str] = None
    x: float = 0.0
    y: float = 0.0
    selected: bool = False
    hover: bool = False
    options: NodeOptions = Field(default_factory=NodeOptions)

    def get_options(self, theme: ThemePalette) -> NodeOptions:
        """Get the effective options for this node.

        Fills in theme colors when the node has no custom colors and
        carries the node label into the options bag.
        """
        update = {}
        if self.options.color is None:
            update["color"] = theme_node_color(theme)
        if self.label is not None:
            update["label"] = self.label
        if not update:
            return self.options
        return self.options.model_copy(update=update)


class NetworkEdge(BaseModel):
    """A connection between two nodes, drawn from ``source`` to ``target``."""
    source: str
    target: str
    arrows: bool = True
    color: Optional[str] = None


class Network(BaseModel):
    """The root recipe model — a complete, positioned network.

    The network keeps a ``_node_map`` for O(1) node lookup by id.  Use
    ``get_node(id)`` for single lookups and ``all_edges()`` for the
    deduplicated edge list.
    """
    version: str = "1.0"
    title: str = "Untitled Network"
    theme: str = "dark"  # "dark" or "light"
    background_color: Optional[str] = None
    nodes: list[NetworkNode] = Field(default_factory=list)
    edges: list[NetworkEdge] = Field(default_factory=list)

    _node_map: dict[str, NetworkNode] = {}

    def model_post_init(self, __context):
        """Build the lookup map after initialization."""
        self._node_map = {node.id: node for node in self.nodes}

    def get_node(self, node_id: str) -> Optional[NetworkNode]:
        """Look up a node by its unique id."""
        return self._node_map.get(node_id)

    def all_edges(self) -> list[NetworkEdge]:
        """Return all edges with duplicate (source, target) pairs removed.

        The first declaration of a pair wins, so its styling is kept.
        """
        seen = set()
        edges = []
        for edge in self.edges:
            key = (edge.source, edge.target)
            if key in seen:
                continue
            seen.add(key)
            edges.append(edge)
        return edges
