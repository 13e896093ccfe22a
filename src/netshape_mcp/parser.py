"""YAML recipe parser for Netshape-MCP.

A recipe is a positioned list of shaped nodes plus the edges between them:

    title: My Network
    theme: light
    nodes:
      - id: hub
        shape: dot
        label: Hub
        x: 0
        y: 0
        size: 20
        borderWidth: 2
        shadow: {enabled: true}
      - id: leaf
        shape: triangle
        x: 200
        y: 80
    edges:
      - from: hub
        to: leaf

Any node key that is not one of the node's own fields (id, shape, label,
x, y, selected, hover) is treated as a node option.
"""

from __future__ import annotations
from pathlib import Path

import yaml

from .models import Network, NetworkEdge, NetworkNode, NodeOptions

_NODE_FIELDS = ("id", "shape", "label", "x", "y", "selected", "hover")


def parse_yaml(yaml_str: str) -> Network:
    """Parse a YAML string into a Network model."""
    data = yaml.safe_load(yaml_str)
    if not data:
        raise ValueError("Empty YAML input")
    if not isinstance(data, dict):
        raise ValueError(f"YAML recipe must be a mapping, got {type(data).__name__}")

    network = Network(
        title=data.get("title", "Untitled Network"),
        theme=data.get("theme", "dark"),
        background_color=data.get("background"),
        nodes=[_parse_node(node_data) for node_data in data.get("nodes", [])],
        edges=[_parse_edge(edge_data) for edge_data in data.get("edges", [])],
    )

    for edge in network.edges:
        for end in (edge.source, edge.target):
            if network.get_node(end) is None:
                raise ValueError(f"Edge {edge.source} -> {edge.target} references unknown node '{end}'")

    return network


def parse_file(path: str) -> Network:
    """Parse a YAML file into a Network model."""
    content = Path(path).read_text()
    return parse_yaml(content)


def _parse_node(data: dict) -> NetworkNode:
    """Parse a single node from YAML data."""
    option_data = {k: v for k, v in data.items() if k not in _NODE_FIELDS}
    return NetworkNode(
        id=str(data["id"]),
        shape=data.get("shape", "dot"),
        label=data.get("label"),
        x=float(data.get("x", 0)),
        y=float(data.get("y", 0)),
        selected=bool(data.get("selected", False)),
        hover=bool(data.get("hover", False)),
        options=NodeOptions.model_validate(option_data),
    )


def _parse_edge(data: dict) -> NetworkEdge:
    """Parse a single edge from YAML data."""
    return NetworkEdge(
        source=str(data["from"]),
        target=str(data["to"]),
        arrows=bool(data.get("arrows", True)),
        color=data.get("color"),
    )


def network_to_yaml(network: Network) -> str:
    """Serialize a Network model back to YAML."""
    data = {
        "title": network.title,
        "theme": network.theme,
        "nodes": [],
        "edges": [],
    }
    if network.background_color:
        data["background"] = network.background_color

    defaults = NodeOptions()
    for node in network.nodes:
        node_data = {
            "id": node.id,
            "shape": node.shape,
            "x": node.x,
            "y": node.y,
        }
        if node.label:
            node_data["label"] = node.label
        if node.selected:
            node_data["selected"] = True
        if node.hover:
            node_data["hover"] = True

        # Only keep options that differ from the defaults
        default_dump = defaults.model_dump(by_alias=True)
        for key, value in node.options.model_dump(by_alias=True).items():
            if value is not None and value != default_dump.get(key):
                node_data[key] = value

        data["nodes"].append(node_data)

    for edge in network.all_edges():
        edge_data = {"from": edge.source, "to": edge.target}
        if not edge.arrows:
            edge_data["arrows"] = False
        if edge.color:
            edge_data["color"] = edge.color
        data["edges"].append(edge_data)

    return yaml.dump(data, default_flow_style=False, sort_keys=False)
