from conftest import local_name, parse_svg, top_level_shapes

from svgbatch.core import GenerationPolicy
from svgbatch.decor.canvas import paint_ref_id
from svgbatch.decor.compose import compose_canvas, generate_one


def test_shape_count_in_range(base_svg, seeded):
    counts = {len(compose_canvas(base_svg).elements) for _ in range(100)}
    assert min(counts) >= 8
    assert max(counts) <= 15


def test_shape_count_follows_policy(base_svg):
    policy = GenerationPolicy(shape_count_min=3, shape_count_max=4)
    for _ in range(10):
        assert len(compose_canvas(base_svg, policy).elements) == 3


def test_shapes_are_placed_inside_canvas(base_svg, seeded):
    for _ in range(20):
        canvas = compose_canvas(base_svg)
        for shape in canvas.elements:
            x, y = shape.bbox_origin()
            assert 0 <= x <= 800
            assert 0 <= y <= 800


def test_generate_one_is_well_formed(base_svg, seeded):
    root = parse_svg(generate_one(base_svg))
    assert local_name(root.tag) == "svg"

    nested = [c for c in root if local_name(c.tag) == "svg"]
    assert len(nested) == 1
    assert any(el.get("id") == "logo-disc" for el in nested[0].iter())

    shapes = top_level_shapes(root)
    assert 8 <= len(shapes) <= 15


def test_generate_one_references_resolve_locally(base_svg, seeded):
    for _ in range(20):
        root = parse_svg(generate_one(base_svg))
        defs = [c for c in root if local_name(c.tag) == "defs"][0]
        defined = {el.get("id") for el in defs}
        for shape in top_level_shapes(root):
            ref = paint_ref_id(shape.get("fill"))
            if ref is not None:
                assert ref in defined


def test_every_shape_is_visible(base_svg, seeded):
    root = parse_svg(generate_one(base_svg))
    for shape in top_level_shapes(root):
        assert 0.4 <= float(shape.get("opacity")) <= 1.0


def test_calls_are_independent(base_svg):
    first = compose_canvas(base_svg)
    second = compose_canvas(base_svg)
    assert first.definitions is not second.definitions
    assert not set(map(id, first.elements)) & set(map(id, second.elements))


def test_placement_stays_below_canvas_edge(base_svg, monkeypatch):
    import random

    policy = GenerationPolicy(shape_count_min=3, shape_count_max=4)
    monkeypatch.setattr(random, "random", lambda: 0.999999)
    canvas = compose_canvas(base_svg, policy)
    for shape in canvas.elements:
        x, y = shape.bbox_origin()
        assert x < 800 and y < 800


def test_compose_accepts_parsed_base(base_svg, seeded):
    from svgbatch.decor.canvas import parse_base_image

    tree = parse_base_image(base_svg)
    canvas = compose_canvas(tree)
    assert canvas.base_layer is not tree
    assert any(el.get("id") == "logo-disc" for el in canvas.base_layer.iter())
