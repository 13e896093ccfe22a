"""Shared rendering context handed to every node shape."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any


@dataclass
class View:
    """The current view transform.

    ``scale`` is the pixels-per-canvas-unit factor of the drawing surface.
    Shapes divide their stroke widths by it so borders keep a constant
    on-screen width regardless of zoom.
    """
    scale: float = 1.0


@dataclass
class Body:
    """Context shared by all nodes of one rendered network.

    Shapes hold a reference to the body but do not own it; the renderer
    registers every shape instance under its node id in ``nodes``.
    """
    view: View = field(default_factory=View)
    nodes: dict[str, Any] = field(default_factory=dict)
