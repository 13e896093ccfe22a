import math

import pytest

from netshape_mcp.node_base import GeometryNotInitializedError
from netshape_mcp.shapes import (
    SHAPES,
    Diamond,
    Dot,
    Hexagon,
    Square,
    Star,
    Triangle,
    TriangleDown,
    create_node,
    get_shape,
)
from netshape_mcp.surface import TRANSPARENT


DOT_OPTIONS = {"size": 10, "borderWidth": 2, "shadow": {"enabled": False}}


def test_dot_border_distance_is_size_plus_border(body, label):
    dot = Dot(DOT_OPTIONS, body, label)
    dot.resize()

    assert dot.distance_to_border(0) == 12
    assert dot.distance_to_border(1.2) == 12


def test_dot_border_distance_is_angle_independent(body, label):
    dot = Dot({"size": 7.5, "borderWidth": 1.5}, body, label)
    dot.resize()
    for i in range(36):
        assert dot.distance_to_border(i * 2 * math.pi / 36) == 9


def test_triangle_uses_generic_approximation_with_fixed_border(body, label):
    triangle = Triangle({"size": 12, "borderWidth": 2, "shadow": {"enabled": False}}, body, label)
    triangle.resize()

    assert triangle.width == triangle.height == 24
    # The generic formula adds 1, not options.border_width
    assert triangle.distance_to_border(0) == pytest.approx(13)
    assert triangle.distance_to_border(math.pi / 2) == pytest.approx(13)


@pytest.mark.parametrize("shape_cls", [Dot, Triangle, Square, Hexagon])
def test_border_distance_before_resize_fails(shape_cls, body, label):
    node = shape_cls(DOT_OPTIONS, body, label)
    with pytest.raises(GeometryNotInitializedError):
        node.distance_to_border(0)


def test_draw_before_resize_fails(body, label, surface, make_options):
    dot = Dot(make_options(size=10), body, label)
    with pytest.raises(GeometryNotInitializedError):
        dot.draw(surface, 50, 50)


def test_resize_sets_geometry_and_box(body, label):
    dot = Dot({"size": 10}, body, label)
    dot.resize(100, 50)

    assert (dot.width, dot.height, dot.radius) == (20, 20, 10)
    assert (dot.left, dot.top) == (90, 40)
    box = dot.bounding_box
    assert (box.top, box.left, box.right, box.bottom) == (40, 90, 110, 60)


def test_resize_is_idempotent(body, label):
    dot = Dot({"size": 10, "label": "hub"}, body, label)
    dot.resize(5, 5)
    first = (dot.width, dot.height, dot.radius, dot.bounding_box.__dict__.copy())
    dot.resize(5, 5)
    second = (dot.width, dot.height, dot.radius, dot.bounding_box.__dict__.copy())

    assert first == second


def test_resize_defaults_to_previous_center(body, label):
    dot = Dot({"size": 10}, body, label)
    dot.resize(100, 50)
    dot.set_options({"size": 20})
    dot.resize()

    assert dot.width == 40
    assert dot.bounding_box.left == 80
    assert dot.bounding_box.bottom == 70


def test_resize_recomputes_after_set_options(body, label):
    square = Square({"size": 10}, body, label)
    square.resize()
    square.set_options({"size": 4})
    # Not resized yet: geometry still reflects the old options
    assert square.width == 20

    square.resize()
    assert square.width == 8
    assert square.distance_to_border(0) == pytest.approx(5)


def test_label_widens_and_extends_bounding_box(body, label):
    dot = Dot({"size": 10, "label": "hub"}, body, label)
    dot.resize(100, 50)

    box = dot.bounding_box
    assert box.left == 80  # label is 40 wide, centered on x
    assert box.right == 120
    assert box.top == 40
    assert box.bottom == 60 + 3 + 10


def test_draw_paints_background_and_keeps_bounding_box(body, label, surface, make_options):
    dot = Dot(make_options(size=10), body, label)
    dot.resize(50, 50)
    before = dot.bounding_box.__dict__.copy()

    dot.draw(surface, 50, 50)

    assert surface.image.getpixel((50, 50)) == (255, 0, 0, 255)
    assert surface.image.getpixel((5, 5)) == (255, 255, 255, 255)
    assert dot.bounding_box.__dict__ == before


def test_draw_selected_and_hover_colors(body, label, surface, make_options):
    dot = Dot(make_options(size=10), body, label)
    dot.resize(25, 25)
    dot.draw(surface, 25, 25, selected=True)
    assert surface.image.getpixel((25, 25)) == (0, 255, 0, 255)

    dot.resize(75, 75)
    dot.draw(surface, 75, 75, hover=True)
    assert surface.image.getpixel((75, 75)) == (255, 255, 0, 255)


def test_draw_selected_line_width(body, label, surface, make_options):
    dot = Dot(make_options(size=10, border_width=3), body, label)
    dot.resize(50, 50)

    dot.draw(surface, 50, 50, selected=True)
    assert surface.line_width == 6

    dot.set_options(make_options(size=10, border_width=3, border_width_selected=4))
    dot.resize()
    dot.draw(surface, 50, 50, selected=True)
    assert surface.line_width == 4


def test_draw_line_width_follows_view_scale(body, label, surface, make_options):
    body.view.scale = 2.0
    dot = Dot(make_options(size=10, border_width=3), body, label)
    dot.resize(50, 50)
    dot.draw(surface, 50, 50)
    assert surface.line_width == 1.5


def test_draw_resets_shadow_on_surface(body, label, surface, make_options):
    dot = Dot(make_options(size=10, shadow={"enabled": True, "size": 4, "x": 3, "y": 3}), body, label)
    dot.resize(50, 50)
    dot.draw(surface, 50, 50)

    assert surface.shadow_color == TRANSPARENT
    assert surface.shadow_blur == 0
    assert (surface.shadow_offset_x, surface.shadow_offset_y) == (0, 0)


def test_draw_places_label_below_glyph(body, label, surface, make_options):
    triangle = Triangle(make_options(size=10, label="leaf"), body, label)
    triangle.resize(50, 40)
    triangle.draw(surface, 50, 40, selected=True)

    assert label.drawn == [(50, 40 + 10 + 3, "leaf", True, "hanging")]


def test_draw_without_label_draws_no_text(body, label, surface, make_options):
    dot = Dot(make_options(size=10), body, label)
    dot.resize(50, 50)
    dot.draw(surface, 50, 50)
    assert label.drawn == []


def test_draw_without_colors_fails(body, label, surface):
    dot = Dot({"size": 10}, body, label)
    dot.resize(50, 50)
    with pytest.raises(ValueError):
        dot.draw(surface, 50, 50)


@pytest.mark.parametrize("shape_cls", [Triangle, TriangleDown, Square, Diamond, Star, Hexagon])
def test_polygon_shapes_paint_their_center(shape_cls, body, label, surface, make_options):
    node = shape_cls(make_options(size=20), body, label)
    node.resize(50, 50)
    node.draw(surface, 50, 50)
    assert surface.image.getpixel((50, 50)) == (255, 0, 0, 255)


def test_registry_lookup_and_creation(body, label):
    assert get_shape("dot") is Dot
    assert get_shape("triangle") is Triangle
    assert get_shape("hexagon") is Hexagon

    node = create_node("diamond", {"size": 3}, body, label)
    assert isinstance(node, Diamond)
    assert node.body is body
    assert node.label_module is label


def test_registry_rejects_unknown_shape():
    with pytest.raises(ValueError, match="Unknown shape 'blob'"):
        get_shape("blob")


def test_every_registered_shape_has_the_node_contract(body, label):
    for name, shape_cls in SHAPES.items():
        node = shape_cls({"size": 10}, body, label)
        node.resize(0, 0)
        assert node.width == node.height == 20, name
        assert node.distance_to_border(math.pi / 4) > 0, name
