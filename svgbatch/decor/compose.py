#!/usr/bin/env python3
"""
Composition driver: one base image in, one decorated SVG document out.
"""

import random
import xml.etree.ElementTree as ET
from typing import Optional, Union

from svgbatch.core import GenerationPolicy, get_logger

from .canvas import Canvas
from .fills import random_extent
from .shapes import create_shape, random_shape_kind

log = get_logger("svgbatch.compose")


def compose_canvas(
    base_svg: Union[str, ET.Element], policy: Optional[GenerationPolicy] = None
) -> Canvas:
    """
    Build a populated canvas without serializing it.

    The base image (markup, or a tree from ``parse_base_image`` which is
    copied per canvas) becomes the foundation layer, then between
    ``shape_count_min`` and ``shape_count_max - 1`` random shapes are drawn on
    top at random positions inside the canvas bounds. Later shapes paint over
    earlier ones.
    """
    policy = policy or GenerationPolicy()
    canvas = Canvas(policy)
    canvas.embed_base(base_svg)

    count = random.randrange(policy.shape_count_min, policy.shape_count_max)
    for _ in range(count):
        shape = create_shape(canvas, random_shape_kind())
        shape.move(
            random_extent(policy.canvas_size),
            random_extent(policy.canvas_size),
        )

    log.debug(f"Composed {count} shapes with {len(canvas.definitions)} fill definitions")
    return canvas


def generate_one(base_svg: Union[str, ET.Element], policy: Optional[GenerationPolicy] = None) -> str:
    """Return the serialized SVG document for one randomized composition."""
    return compose_canvas(base_svg, policy).tostring()
