#!/usr/bin/env python3
"""
Core SDK for the SVG decoration pipeline

This module provides the single source of truth for types, constants, paths and
naming. The canvas, fills, animation and shape modules import from here.
"""

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, validator


# ============================================================================
# CONSTANTS
# ============================================================================

SEQUENCE_DIGITS = 9
OUTPUT_SUFFIX = ".svg"
REPEAT_INDEFINITE = "indefinite"

# cubic-bezier control points for an ease-in-out interval
EASE_IN_OUT_SPLINE = "0.42 0 0.58 1"

HEXAGON_UNIT_POINTS = [(50, 0), (100, 25), (100, 75), (50, 100), (0, 75), (0, 25)]
TRIANGLE_UNIT_POINTS = [(50, 15), (100, 100), (0, 100)]


class ShapeKind(str, Enum):
    CIRCLE = "circle"
    RECT = "rect"
    HEXAGON = "hexagon"
    LINE = "line"
    TRIANGLE = "triangle"
    ELLIPSE = "ellipse"


class FillKind(str, Enum):
    SOLID = "solid"
    GRADIENT = "gradient"
    DOTS = "dots"
    STRIPES = "stripes"
    WAVES = "waves"


class AnimType(str, Enum):
    SCALE = "scale"
    ROTATE = "rotate"
    COLOR_CHANGE = "color_change"


# Shapes that are drawn as <polygon> elements
POLYGON_KINDS = frozenset([ShapeKind.HEXAGON, ShapeKind.TRIANGLE])


def format_pivot(pivot: Tuple[int, int]) -> str:
    """CSS transform-origin value for a percentage pivot."""
    return f"{pivot[0]}% {pivot[1]}%"


# ============================================================================
# PATH HELPERS
# ============================================================================

class Paths:
    """Centralized path management for generated files."""

    @staticmethod
    def output_name(prefix: str, seq: int) -> str:
        """Zero-padded output filename for a sequence number."""
        return f"{prefix}_{seq:0{SEQUENCE_DIGITS}d}{OUTPUT_SUFFIX}"

    @staticmethod
    def output_file(output_dir: Union[str, Path], prefix: str, seq: int) -> Path:
        return Path(output_dir) / Paths.output_name(prefix, seq)


# ============================================================================
# PYDANTIC MODELS
# ============================================================================

AnimValue = Union[float, int, str]


class Animation(BaseModel):
    """Declarative time-driven mutation attached to a shape."""

    tag: str = Field("animate", description="animate | animateTransform")
    attribute: str = Field(..., description="Target attribute name")
    values: List[AnimValue] = Field(default_factory=list, description="Value sequence")
    from_value: Optional[AnimValue] = Field(None, description="Start value when no sequence")
    to_value: Optional[AnimValue] = Field(None, description="End value when no sequence")
    transform_type: Optional[str] = Field(None, description="scale | rotate for animateTransform")
    dur_s: float = Field(..., description="Duration in seconds")
    repeat: str = Field(REPEAT_INDEFINITE, description="repeatCount")
    easing: Optional[str] = Field(None, description="None for linear keyframes, 'smooth' for eased")

    @validator("tag")
    def validate_tag(cls, v):
        if v not in {"animate", "animateTransform"}:
            raise ValueError("tag must be 'animate' or 'animateTransform'")
        return v

    @validator("dur_s")
    def validate_duration(cls, v):
        if v <= 0:
            raise ValueError("Animation duration must be positive")
        return v


class LinearGradient(BaseModel):
    """Two-or-more stop linear gradient registered in a canvas' defs."""

    id: str
    stops: List[Tuple[float, str]] = Field(..., description="(offset, color) pairs")

    @property
    def ref(self) -> str:
        return f"url(#{self.id})"


class PatternTile(BaseModel):
    """Square repeating tile: solid background plus one motif overlay."""

    id: str
    size: int = Field(..., gt=0)
    background: str
    motif: str = Field(..., description="dot | stripe | wave")
    motif_color: str
    stroke_width: Optional[float] = None

    @validator("motif")
    def validate_motif(cls, v):
        if v not in {"dot", "stripe", "wave"}:
            raise ValueError("motif must be one of: dot, stripe, wave")
        return v

    @property
    def ref(self) -> str:
        return f"url(#{self.id})"


FillDefinition = Union[LinearGradient, PatternTile]


class Shape(BaseModel):
    """One drawn primitive with geometry, paint, opacity and animations."""

    id: str
    kind: ShapeKind
    geometry: Dict[str, float] = Field(default_factory=dict)
    points: List[Tuple[float, float]] = Field(default_factory=list)
    fill: Optional[str] = None
    stroke: Optional[str] = None
    stroke_width: Optional[float] = None
    opacity: float = 1.0
    pivot: Optional[Tuple[int, int]] = None
    animations: List[Animation] = Field(default_factory=list)

    @validator("opacity")
    def validate_opacity(cls, v):
        if v < 0.0 or v > 1.0:
            raise ValueError("Opacity must be between 0.0 and 1.0")
        return v

    def add_animation(self, animation: Animation) -> Animation:
        """Attach an animation; one animation per target attribute."""
        for existing in self.animations:
            if existing.attribute == animation.attribute:
                raise ValueError(
                    f"{self.kind.value} {self.id} already animates '{animation.attribute}'"
                )
        self.animations.append(animation)
        return animation

    def animated_attributes(self) -> List[str]:
        return [a.attribute for a in self.animations]

    def bbox_origin(self) -> Tuple[float, float]:
        """Top-left corner of the shape's bounding box."""
        g = self.geometry
        if self.kind == ShapeKind.CIRCLE:
            return g["cx"] - g["r"], g["cy"] - g["r"]
        if self.kind == ShapeKind.ELLIPSE:
            return g["cx"] - g["rx"], g["cy"] - g["ry"]
        if self.kind == ShapeKind.RECT:
            return g["x"], g["y"]
        if self.kind == ShapeKind.LINE:
            return min(g["x1"], g["x2"]), min(g["y1"], g["y2"])
        if not self.points:
            return 0.0, 0.0
        return min(p[0] for p in self.points), min(p[1] for p in self.points)

    def move(self, x: float, y: float) -> "Shape":
        """Place the bounding box's top-left corner at (x, y)."""
        ox, oy = self.bbox_origin()
        dx, dy = x - ox, y - oy
        g = self.geometry
        if self.kind in (ShapeKind.CIRCLE, ShapeKind.ELLIPSE):
            g["cx"] = round(g["cx"] + dx, 2)
            g["cy"] = round(g["cy"] + dy, 2)
        elif self.kind == ShapeKind.RECT:
            g["x"] = round(x, 2)
            g["y"] = round(y, 2)
        elif self.kind == ShapeKind.LINE:
            for key, delta in (("x1", dx), ("x2", dx), ("y1", dy), ("y2", dy)):
                g[key] = round(g[key] + delta, 2)
        else:
            self.points = [(round(px + dx, 2), round(py + dy, 2)) for px, py in self.points]
        return self


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    # Constants
    'SEQUENCE_DIGITS', 'OUTPUT_SUFFIX', 'REPEAT_INDEFINITE', 'EASE_IN_OUT_SPLINE',
    'HEXAGON_UNIT_POINTS', 'TRIANGLE_UNIT_POINTS', 'POLYGON_KINDS',

    # Enums
    'ShapeKind', 'FillKind', 'AnimType',

    # Path helpers
    'Paths', 'format_pivot',

    # Models
    'Animation', 'LinearGradient', 'PatternTile', 'FillDefinition', 'Shape',
]
