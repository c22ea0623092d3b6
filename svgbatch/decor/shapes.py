#!/usr/bin/env python3
"""
Procedural Shape Generators

Registry from shape kind to a constructor ``(canvas) -> Shape``. Every
constructor randomizes the geometry within the policy's per-kind limits,
paints the shape (``random_fill`` for filled kinds, a random stroke for lines),
picks an opacity, and applies the animation rule of its kind:

    circle    scale or rotate, 50/50
    rect      scale
    hexagon   50%: eased color change
    line      stroke-width pulse
    triangle  50%: opacity pulse
    ellipse   50%: radius pulse

Constructors do not add the shape to the canvas; ``create_shape`` does.
"""

import random
from typing import Callable, Dict, List, Tuple

from .anim_fx import (
    add_ellipse_path_animation,
    add_opacity_animation,
    add_rotate_animation,
    add_scale_animation,
    add_stroke_width_animation,
    add_svg_animation,
)
from .canvas import Canvas
from .fills import random_color, random_extent, random_fill, random_opacity
from .sdk import (
    HEXAGON_UNIT_POINTS,
    TRIANGLE_UNIT_POINTS,
    AnimType,
    Shape,
    ShapeKind,
)


def _coin(canvas: Canvas) -> bool:
    return random.random() < canvas.policy.animation_chance


def _scaled_points(unit_points: List[Tuple[int, int]], size: float) -> List[Tuple[float, float]]:
    """Scale a 100x100 unit outline to ``size``."""
    factor = size / 100.0
    return [(round(x * factor, 2), round(y * factor, 2)) for x, y in unit_points]


def _new_shape(canvas: Canvas, kind: ShapeKind, **fields) -> Shape:
    return Shape(id=canvas.next_id(kind.value), kind=kind, **fields)


def make_circle(canvas: Canvas) -> Shape:
    limits = canvas.policy.limits
    r = random_extent(limits.circle_radius)
    circle = _new_shape(
        canvas,
        ShapeKind.CIRCLE,
        geometry={"cx": r, "cy": r, "r": r},
        fill=random_fill(canvas),
    )
    circle.opacity = random_opacity(canvas.policy.opacity_floor)
    if random.random() < 0.5:
        add_scale_animation(circle, canvas.policy)
    else:
        add_rotate_animation(circle, canvas.policy)
    return circle


def make_rect(canvas: Canvas) -> Shape:
    limits = canvas.policy.limits
    rect = _new_shape(
        canvas,
        ShapeKind.RECT,
        geometry={
            "x": 0.0,
            "y": 0.0,
            "width": random_extent(limits.rect_width),
            "height": random_extent(limits.rect_height),
        },
        fill=random_fill(canvas),
    )
    rect.opacity = random_opacity(canvas.policy.opacity_floor)
    add_scale_animation(rect, canvas.policy)
    return rect


def make_hexagon(canvas: Canvas) -> Shape:
    size = random_extent(canvas.policy.limits.hexagon_size)
    hexagon = _new_shape(
        canvas,
        ShapeKind.HEXAGON,
        points=_scaled_points(HEXAGON_UNIT_POINTS, size),
        fill=random_fill(canvas),
    )
    hexagon.opacity = random_opacity(canvas.policy.opacity_floor)
    if _coin(canvas):
        add_svg_animation(hexagon, AnimType.COLOR_CHANGE, canvas.policy)
    return hexagon


def make_line(canvas: Canvas) -> Shape:
    limits = canvas.policy.limits
    line = _new_shape(
        canvas,
        ShapeKind.LINE,
        geometry={
            "x1": 0.0,
            "y1": 0.0,
            "x2": random_extent(limits.line_extent),
            "y2": random_extent(limits.line_extent),
        },
        stroke=random_color(),
        stroke_width=random_extent(limits.line_width),
    )
    line.opacity = random_opacity(canvas.policy.opacity_floor)
    add_stroke_width_animation(line, canvas.policy)
    return line


def make_triangle(canvas: Canvas) -> Shape:
    size = random_extent(canvas.policy.limits.triangle_size)
    triangle = _new_shape(
        canvas,
        ShapeKind.TRIANGLE,
        points=_scaled_points(TRIANGLE_UNIT_POINTS, size),
        fill=random_fill(canvas),
    )
    triangle.opacity = random_opacity(canvas.policy.opacity_floor)
    if _coin(canvas):
        add_opacity_animation(triangle, canvas.policy)
    return triangle


def make_ellipse(canvas: Canvas) -> Shape:
    limits = canvas.policy.limits
    rx = random_extent(limits.ellipse_rx)
    ry = random_extent(limits.ellipse_ry)
    ellipse = _new_shape(
        canvas,
        ShapeKind.ELLIPSE,
        geometry={"cx": rx, "cy": ry, "rx": rx, "ry": ry},
        fill=random_fill(canvas),
    )
    ellipse.opacity = random_opacity(canvas.policy.opacity_floor)
    if _coin(canvas):
        add_ellipse_path_animation(ellipse, canvas.policy)
    return ellipse


SHAPE_CREATORS: Dict[ShapeKind, Callable[[Canvas], Shape]] = {
    ShapeKind.CIRCLE: make_circle,
    ShapeKind.RECT: make_rect,
    ShapeKind.HEXAGON: make_hexagon,
    ShapeKind.LINE: make_line,
    ShapeKind.TRIANGLE: make_triangle,
    ShapeKind.ELLIPSE: make_ellipse,
}


def random_shape_kind() -> ShapeKind:
    return random.choice(list(SHAPE_CREATORS))


def create_shape(canvas: Canvas, kind) -> Shape:
    """Build one shape of ``kind`` and add it to the canvas."""
    creator = SHAPE_CREATORS[ShapeKind(kind)]
    return canvas.add(creator(canvas))
