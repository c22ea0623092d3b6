#!/usr/bin/env python3
"""
Color and Fill Engine

Random colors, opacities and pivots, plus the compound fills (gradient and the
three repeating pattern tiles) a shape can be painted with. Compound fills are
registered on the canvas that will reference them and returned as definitions;
``random_fill`` is the one fill-selection policy every filled shape uses.
"""

import math
import random
from typing import Callable, Dict, Optional, Tuple

from .canvas import Canvas
from .sdk import FillKind, LinearGradient, PatternTile

MAX_RGB = 0xFFFFFF


def random_color() -> str:
    """Uniform 24-bit color as ``#rrggbb``."""
    return "#{:06x}".format(random.randint(0, MAX_RGB))


def random_extent(limit: float) -> float:
    """Uniform value in [0, limit) truncated to two decimals."""
    cap = math.ceil(limit * 100) - 1
    return min(math.floor(random.random() * limit * 100), cap) / 100


def random_opacity(floor: float = 0.4) -> float:
    """Opacity in [floor, 1.0) so no shape is ever fully transparent."""
    return floor + random.random() * (1.0 - floor)


def random_pivot(pivot_range: int = 100) -> Tuple[int, int]:
    """Integer percentage pair used as a transform-origin."""
    return random.randrange(pivot_range), random.randrange(pivot_range)


def create_gradient(canvas: Canvas) -> LinearGradient:
    gradient = LinearGradient(
        id=canvas.next_id("grad"),
        stops=[(0.0, random_color()), (1.0, random_color())],
    )
    canvas.register(gradient)
    return gradient


def create_pattern(canvas: Canvas) -> PatternTile:
    """Dot tile: solid square with a circle in its corner."""
    tile = PatternTile(
        id=canvas.next_id("pat"),
        size=canvas.policy.tile_sizes.dot,
        background=random_color(),
        motif="dot",
        motif_color=random_color(),
    )
    canvas.register(tile)
    return tile


def create_stripe_pattern(canvas: Canvas) -> PatternTile:
    tile = PatternTile(
        id=canvas.next_id("pat"),
        size=canvas.policy.tile_sizes.stripe,
        background=random_color(),
        motif="stripe",
        motif_color=random_color(),
        stroke_width=5,
    )
    canvas.register(tile)
    return tile


def create_wave_pattern(canvas: Canvas) -> PatternTile:
    tile = PatternTile(
        id=canvas.next_id("pat"),
        size=canvas.policy.tile_sizes.wave,
        background=random_color(),
        motif="wave",
        motif_color=random_color(),
        stroke_width=4,
    )
    canvas.register(tile)
    return tile


FILL_CREATORS: Dict[FillKind, Callable[[Canvas], str]] = {
    FillKind.SOLID: lambda canvas: random_color(),
    FillKind.GRADIENT: lambda canvas: create_gradient(canvas).ref,
    FillKind.DOTS: lambda canvas: create_pattern(canvas).ref,
    FillKind.STRIPES: lambda canvas: create_stripe_pattern(canvas).ref,
    FillKind.WAVES: lambda canvas: create_wave_pattern(canvas).ref,
}


def random_fill(canvas: Canvas, kind: Optional[FillKind] = None) -> str:
    """
    Pick one fill strategy uniformly and return its paint value.

    Returns a ``#rrggbb`` color or a ``url(#id)`` reference to a definition
    that has just been registered on ``canvas``.
    """
    if kind is None:
        kind = random.choice(list(FILL_CREATORS))
    return FILL_CREATORS[kind](canvas)
