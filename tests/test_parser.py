import pytest

from netshape_mcp.parser import network_to_yaml, parse_yaml
from netshape_mcp.themes import get_theme


RECIPE = """
title: Star Network
theme: light
nodes:
  - id: hub
    shape: dot
    label: Hub
    size: 20
    borderWidth: 2
    shadow: {enabled: true, size: 6}
  - id: leaf
    shape: triangle
    x: 200
    y: 80
    selected: true
  - id: other
    shape: square
    x: -150
    y: 40
edges:
  - from: hub
    to: leaf
  - from: hub
    to: other
    arrows: false
    color: "#ff0000"
  - from: hub
    to: leaf
"""


def test_parse_nodes_and_options():
    network = parse_yaml(RECIPE)

    assert network.title == "Star Network"
    assert network.theme == "light"
    assert [n.id for n in network.nodes] == ["hub", "leaf", "other"]

    hub = network.get_node("hub")
    assert hub.shape == "dot"
    assert hub.label == "Hub"
    assert (hub.x, hub.y) == (0.0, 0.0)
    assert hub.options.size == 20
    assert hub.options.border_width == 2
    assert hub.options.shadow.enabled is True
    assert hub.options.shadow.size == 6
    assert hub.options.shadow.x == 5

    leaf = network.get_node("leaf")
    assert leaf.shape == "triangle"
    assert leaf.selected is True
    assert leaf.options.size == 25


def test_parse_edges_are_deduplicated():
    network = parse_yaml(RECIPE)
    edges = network.all_edges()

    assert [(e.source, e.target) for e in edges] == [("hub", "leaf"), ("hub", "other")]
    assert edges[1].arrows is False
    assert edges[1].color == "#ff0000"


def test_effective_options_take_theme_colors_and_label():
    network = parse_yaml(RECIPE)
    theme = get_theme("light")

    options = network.get_node("hub").get_options(theme)
    assert options.label == "Hub"
    assert options.color.background == theme.node_background
    assert options.color.highlight.border == theme.node_highlight_border


def test_empty_recipe_rejected():
    with pytest.raises(ValueError, match="Empty YAML input"):
        parse_yaml("")


def test_edge_to_unknown_node_rejected():
    recipe = """
nodes:
  - id: a
edges:
  - from: a
    to: ghost
"""
    with pytest.raises(ValueError, match="ghost"):
        parse_yaml(recipe)


def test_network_to_yaml_keeps_non_default_options():
    network = parse_yaml(RECIPE)
    restored = parse_yaml(network_to_yaml(network))

    hub = restored.get_node("hub")
    assert hub.options.size == 20
    assert hub.options.border_width == 2
    assert hub.options.shadow.enabled is True
    assert restored.get_node("leaf").selected is True
    assert len(restored.all_edges()) == 2


@pytest.mark.parametrize("document", ["- a\n- b\n", "just text"])
def test_non_mapping_recipe_rejected(document):
    with pytest.raises(ValueError, match="must be a mapping"):
        parse_yaml(document)
