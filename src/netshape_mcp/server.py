"""Netshape-MCP server — MCP tools for rendering shaped network nodes."""

from __future__ import annotations

import json
import logging
import math
import os
import uuid
from pathlib import Path

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .body import Body
from .label import Label
from .parser import parse_yaml
from .renderer import NetworkRenderer
from .shapes import SHAPES, create_node

logger = logging.getLogger(__name__)


# --- Constants ---
OUTPUT_DIR = Path(os.environ.get("NETSHAPE_OUTPUT_DIR", Path.home() / ".netshape" / "renders"))
LOG_LEVEL = os.environ.get("NETSHAPE_LOG_LEVEL", "INFO")

server = Server("netshape-mcp")


def _ensure_output_dir():
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)


# --- Tool definitions ---

@server.list_tools()
async def list_tools() -> list[Tool]:
    return [
        Tool(
            name="render_network",
            description=(
                "Render a network of shaped nodes from a YAML recipe string. "
                "Nodes carry explicit x/y centers; edges are clipped to the "
                "node borders. Returns the path to the rendered PNG file."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "yaml_recipe": {
                        "type": "string",
                        "description": (
                            "YAML string defining the network. Example:\n"
                            "title: My Network\n"
                            "nodes:\n"
                            "  - id: hub\n"
                            "    shape: dot\n"
                            "    label: Hub\n"
                            "    size: 20\n"
                            "  - id: leaf\n"
                            "    shape: triangle\n"
                            "    x: 200\n"
                            "    y: 80\n"
                            "edges:\n"
                            "  - from: hub\n"
                            "    to: leaf\n"
                            "\n"
                            f"Shapes: {', '.join(SHAPES.keys())}"
                        ),
                    },
                    "scale": {
                        "type": "number",
                        "description": "Render scale factor (default 2.0 for crisp, legible output)",
                        "default": 2.0,
                    },
                    "filename": {
                        "type": "string",
                        "description": "Output filename (without extension). Default: auto-generated UUID.",
                    },
                },
                "required": ["yaml_recipe"],
            },
        ),
        Tool(
            name="list_shapes",
            description="List the node shapes available to recipes.",
            inputSchema={
                "type": "object",
                "properties": {},
            },
        ),
        Tool(
            name="node_geometry",
            description=(
                "Size a single node and report its width, height, radius, "
                "bounding box and the distance from its center to its border "
                "along each requested angle (radians, counter-clockwise from +x)."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "shape": {
                        "type": "string",
                        "enum": list(SHAPES.keys()),
                        "description": "Node shape",
                    },
                    "options": {
                        "type": "object",
                        "description": "Node options (size, borderWidth, shadow, label)",
                    },
                    "angles": {
                        "type": "array",
                        "items": {"type": "number"},
                        "description": "Angles to query. Default: 0, pi/4, pi/2.",
                    },
                },
                "required": ["shape"],
            },
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    if name == "render_network":
        return await _render_network(arguments)
    elif name == "list_shapes":
        return await _list_shapes(arguments)
    elif name == "node_geometry":
        return await _node_geometry(arguments)
    else:
        return [TextContent(type="text", text=f"Unknown tool: {name}")]


async def _render_network(args: dict) -> list[TextContent]:
    """Render a YAML recipe to PNG."""
    scale = args.get("scale", 2.0)
    filename = args.get("filename", str(uuid.uuid4())[:8])

    try:
        network = parse_yaml(args["yaml_recipe"])
    except Exception as e:
        logger.warning(f"Rejected recipe: {e}")
        return [TextContent(type="text", text=f"Failed to parse YAML recipe: {e}")]

    output_path = str(OUTPUT_DIR / f"{filename}.png")

    try:
        if not scale or scale <= 0:
            raise ValueError(f"scale must be positive, got {scale}")
        _ensure_output_dir()
        renderer = NetworkRenderer(scale=scale)
        renderer.render(network, output_path=output_path)
    except Exception as e:
        logger.error(f"Render error: {e}")
        return [TextContent(type="text", text=f"Rendering failed: {e}")]

    logger.info(f"Rendered {network.title!r} to {output_path}")
    return [TextContent(
        type="text",
        text=json.dumps({
            "status": "success",
            "path": output_path,
            "title": network.title,
            "nodes": len(network.nodes),
            "edges": len(network.all_edges()),
        }),
    )]


async def _list_shapes(args: dict) -> list[TextContent]:
    """List available shape ids."""
    return [TextContent(
        type="text",
        text=json.dumps({"shapes": list(SHAPES.keys())}),
    )]


async def _node_geometry(args: dict) -> list[TextContent]:
    """Resize one node at the origin and report its geometry."""
    angles = args.get("angles") or [0.0, math.pi / 4, math.pi / 2]

    try:
        node = create_node(args["shape"], args.get("options") or {}, Body(), Label())
        node.resize(0.0, 0.0)
        distances = [
            {"angle": angle, "distance": node.distance_to_border(angle)}
            for angle in angles
        ]
    except Exception as e:
        return [TextContent(type="text", text=f"Geometry query failed: {e}")]

    box = node.bounding_box
    return [TextContent(
        type="text",
        text=json.dumps({
            "shape": args["shape"],
            "width": node.width,
            "height": node.height,
            "radius": node.radius,
            "bounding_box": {
                "top": box.top,
                "left": box.left,
                "right": box.right,
                "bottom": box.bottom,
            },
            "border_distances": distances,
        }),
    )]


def main():
    """Entry point for the MCP server."""
    import asyncio
    # stdout carries the MCP stream, so logs go to stderr
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(_run())


async def _run():
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


if __name__ == "__main__":
    main()
