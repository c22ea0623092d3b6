#!/usr/bin/env python3
"""
Animation Primitives for generated SVG shapes

Each decorator attaches exactly one declarative SMIL animation (two for the
radius and movement pulses) to an already-built shape. Nothing is executed
here; the viewer plays the animations.

Two flavours share the same Animation model:
- keyframe decorators cycle through fixed value lists at linear pace
- ``add_svg_animation`` swings from the current value to a random target and
  back with ease-in-out splines
"""

import random
from typing import Optional

from svgbatch.core import GenerationPolicy

from .fills import random_color, random_pivot
from .sdk import Animation, AnimType, Shape


def _duration(policy: Optional[GenerationPolicy]) -> float:
    return (policy or GenerationPolicy()).animation_duration_s


def _set_pivot(shape: Shape, policy: Optional[GenerationPolicy]) -> None:
    shape.pivot = random_pivot((policy or GenerationPolicy()).pivot_range)


def add_scale_animation(shape: Shape, policy: Optional[GenerationPolicy] = None) -> Animation:
    """Scale 1 -> 1.5 -> 1 around a random pivot."""
    _set_pivot(shape, policy)
    return shape.add_animation(
        Animation(
            tag="animateTransform",
            attribute="transform",
            transform_type="scale",
            values=[1, 1.5, 1],
            dur_s=_duration(policy),
        )
    )


def add_rotate_animation(shape: Shape, policy: Optional[GenerationPolicy] = None) -> Animation:
    """Full turn around a random pivot."""
    _set_pivot(shape, policy)
    return shape.add_animation(
        Animation(
            tag="animateTransform",
            attribute="transform",
            transform_type="rotate",
            from_value=0,
            to_value=360,
            dur_s=_duration(policy),
        )
    )


def add_color_change_animation(shape: Shape, policy: Optional[GenerationPolicy] = None) -> Animation:
    return shape.add_animation(
        Animation(
            attribute="fill",
            values=[random_color(), random_color(), random_color()],
            dur_s=_duration(policy),
        )
    )


def add_opacity_animation(shape: Shape, policy: Optional[GenerationPolicy] = None) -> Animation:
    return shape.add_animation(
        Animation(attribute="opacity", values=[0, 1, 0], dur_s=_duration(policy))
    )


def add_stroke_width_animation(shape: Shape, policy: Optional[GenerationPolicy] = None) -> Animation:
    return shape.add_animation(
        Animation(attribute="stroke-width", values=[1, 10, 1], dur_s=_duration(policy))
    )


def add_ellipse_path_animation(shape: Shape, policy: Optional[GenerationPolicy] = None):
    """Complementary rx/ry pulses so the ellipse seems to swap its aspect ratio."""
    dur = _duration(policy)
    rx = shape.add_animation(Animation(attribute="rx", values=[10, 50, 10], dur_s=dur))
    ry = shape.add_animation(Animation(attribute="ry", values=[50, 10, 50], dur_s=dur))
    return rx, ry


def add_movement_animation(shape: Shape, policy: Optional[GenerationPolicy] = None):
    dur = _duration(policy)
    ax = shape.add_animation(Animation(attribute="x", values=[50, 100, 50], dur_s=dur))
    ay = shape.add_animation(Animation(attribute="y", values=[50, 100, 50], dur_s=dur))
    return ax, ay


def add_svg_animation(
    shape: Shape, kind, policy: Optional[GenerationPolicy] = None
) -> Animation:
    """
    Eased swing animation: current value -> random target -> current value.

    Args:
        shape: Shape to animate
        kind: AnimType (or its string value) - scale, rotate or color_change
        policy: Generation policy supplying the duration

    Raises:
        ValueError: for an unknown animation kind
    """
    try:
        kind = AnimType(kind)
    except ValueError:
        raise ValueError(f"Unknown animation type: {kind}")

    dur = _duration(policy)
    if kind == AnimType.SCALE:
        target = round(0.5 + random.random(), 3)
        animation = Animation(
            tag="animateTransform",
            attribute="transform",
            transform_type="scale",
            values=[1, target, 1],
            dur_s=dur,
            easing="smooth",
        )
    elif kind == AnimType.ROTATE:
        target = round(random.random() * 360, 2)
        animation = Animation(
            tag="animateTransform",
            attribute="transform",
            transform_type="rotate",
            values=[0, target, 0],
            dur_s=dur,
            easing="smooth",
        )
    else:
        start = shape.fill if shape.fill and shape.fill.startswith("#") else random_color()
        animation = Animation(
            attribute="fill",
            values=[start, random_color(), start],
            dur_s=dur,
            easing="smooth",
        )
    return shape.add_animation(animation)
