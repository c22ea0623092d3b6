"""
SVG decoration package

Builds randomized, animated decorations on top of a base SVG image.
"""

from .anim_fx import (
    add_color_change_animation,
    add_ellipse_path_animation,
    add_movement_animation,
    add_opacity_animation,
    add_rotate_animation,
    add_scale_animation,
    add_stroke_width_animation,
    add_svg_animation,
)
from .canvas import BaseImageError, Canvas, paint_ref_id, parse_base_image
from .compose import compose_canvas, generate_one
from .fills import (
    create_gradient,
    create_pattern,
    create_stripe_pattern,
    create_wave_pattern,
    random_color,
    random_extent,
    random_fill,
    random_opacity,
    random_pivot,
)
from .sdk import (  # Constants; Enums; Path helpers; Models
    SEQUENCE_DIGITS,
    AnimType,
    Animation,
    FillKind,
    LinearGradient,
    Paths,
    PatternTile,
    Shape,
    ShapeKind,
)
from .shapes import SHAPE_CREATORS, create_shape

__all__ = [
    "SEQUENCE_DIGITS",
    "AnimType",
    "FillKind",
    "ShapeKind",
    "Paths",
    "Animation",
    "LinearGradient",
    "PatternTile",
    "Shape",
    "BaseImageError",
    "Canvas",
    "paint_ref_id",
    "parse_base_image",
    "random_color",
    "random_extent",
    "random_opacity",
    "random_pivot",
    "random_fill",
    "create_gradient",
    "create_pattern",
    "create_stripe_pattern",
    "create_wave_pattern",
    "add_scale_animation",
    "add_rotate_animation",
    "add_color_change_animation",
    "add_opacity_animation",
    "add_stroke_width_animation",
    "add_ellipse_path_animation",
    "add_movement_animation",
    "add_svg_animation",
    "SHAPE_CREATORS",
    "create_shape",
    "compose_canvas",
    "generate_one",
]
