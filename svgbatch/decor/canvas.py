#!/usr/bin/env python3
"""
Canvas document builder

A Canvas owns everything one generated document is made of: the embedded base
image, the fill definitions (gradients and pattern tiles) keyed by id, and the
ordered list of shapes. Nothing is shared between canvases; ids are allocated
per canvas and every ``url(#id)`` paint must resolve on the canvas it is added to.

Serialization goes through svgwrite so attribute names and values are checked
against the SVG 1.1 full profile.
"""

import copy
import io
import re
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, Set, Union

import svgwrite
from svgwrite.base import BaseElement

from svgbatch.core import GenerationPolicy, get_logger

from .sdk import (
    EASE_IN_OUT_SPLINE,
    POLYGON_KINDS,
    Animation,
    FillDefinition,
    LinearGradient,
    PatternTile,
    Shape,
    ShapeKind,
    format_pivot,
)

log = get_logger("svgbatch.canvas")

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
XML_NS = "http://www.w3.org/XML/1998/namespace"

_PAINT_REF = re.compile(r"^url\(#([^)]+)\)$")


class BaseImageError(Exception):
    """Raised when the base image cannot be read or parsed."""


def paint_ref_id(paint: Optional[str]) -> Optional[str]:
    """Return the definition id of a ``url(#id)`` paint, or None for plain colors."""
    if not paint:
        return None
    m = _PAINT_REF.match(paint.strip())
    return m.group(1) if m else None


def _local_name(tag: str) -> Optional[str]:
    """Map a parsed tag/attribute name back to its serialized form.

    SVG elements lose their namespace (the drawing root declares it), xlink and
    xml attributes keep their prefixes, anything from a foreign namespace
    (editor metadata) is dropped.
    """
    if not tag.startswith("{"):
        return tag
    ns, local = tag[1:].split("}", 1)
    if ns == SVG_NS:
        return local
    if ns == XLINK_NS:
        return f"xlink:{local}"
    if ns == XML_NS:
        return f"xml:{local}"
    return None


def _strip_namespaces(node: ET.Element) -> Optional[ET.Element]:
    tag = _local_name(node.tag) if isinstance(node.tag, str) else None
    if tag is None:
        return None
    out = ET.Element(tag)
    for key, value in node.attrib.items():
        name = _local_name(key)
        if name is not None:
            out.set(name, value)
    out.text = node.text
    out.tail = node.tail
    for child in node:
        converted = _strip_namespaces(child)
        if converted is not None:
            out.append(converted)
    return out


def parse_base_image(svg_text: str) -> ET.Element:
    """Parse base image markup into a namespace-free element tree."""
    try:
        root = ET.fromstring(svg_text)
    except ET.ParseError as e:
        raise BaseImageError(f"Base image is not well-formed XML: {e}")
    tree = _strip_namespaces(root)
    if tree is None or tree.tag != "svg":
        raise BaseImageError("Base image root element must be <svg>")
    tree.tail = None
    return tree


class EmbeddedSVG(BaseElement):
    """Pre-parsed SVG fragment carried verbatim into a drawing."""

    elementname = "svg"

    def __init__(self, xml: ET.Element, **extra):
        super(EmbeddedSVG, self).__init__(**extra)
        self.xml = xml

    def get_xml(self):
        return copy.deepcopy(self.xml)


def _fmt(value) -> str:
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


class Canvas:
    """Mutable composition target for exactly one generated document."""

    def __init__(self, policy: Optional[GenerationPolicy] = None):
        self.policy = policy or GenerationPolicy()
        self.base_layer: Optional[ET.Element] = None
        self.elements: List[Shape] = []
        self.definitions: Dict[str, FillDefinition] = {}
        self._counters: Dict[str, int] = {}
        self._reserved_ids: Set[str] = set()

    # ---------------- ids ----------------

    def next_id(self, prefix: str) -> str:
        """Next free id for ``prefix``, skipping ids used by the base image."""
        n = self._counters.get(prefix, 0)
        while True:
            n += 1
            candidate = f"{prefix}{n}"
            if candidate not in self._reserved_ids:
                break
        self._counters[prefix] = n
        return candidate

    # ---------------- content ----------------

    def embed_base(self, base: Union[str, ET.Element]) -> ET.Element:
        """
        Use the base image as the foundation layer of this canvas.

        ``base`` is either markup or a tree from ``parse_base_image``; a tree is
        copied so one parsed image can back many canvases.
        """
        if isinstance(base, ET.Element):
            self.base_layer = copy.deepcopy(base)
        else:
            self.base_layer = parse_base_image(base)
        self._reserved_ids = {el.get("id") for el in self.base_layer.iter() if el.get("id")}
        return self.base_layer

    def register(self, definition: FillDefinition) -> FillDefinition:
        if definition.id in self.definitions or definition.id in self._reserved_ids:
            raise ValueError(f"Definition id already in use: {definition.id}")
        self.definitions[definition.id] = definition
        return definition

    def resolves(self, paint: Optional[str]) -> bool:
        ref = paint_ref_id(paint)
        return ref is None or ref in self.definitions

    def add(self, shape: Shape) -> Shape:
        if shape.id in self._reserved_ids:
            raise ValueError(f"Shape id {shape.id} is already used by the base image")
        for paint in (shape.fill, shape.stroke):
            if not self.resolves(paint):
                raise ValueError(
                    f"Shape {shape.id} references {paint}, which is not defined on this canvas"
                )
        self.elements.append(shape)
        return shape

    # ---------------- serialization ----------------

    def to_drawing(self) -> svgwrite.Drawing:
        size = self.policy.canvas_size
        dwg = svgwrite.Drawing(size=(size, size))
        for definition in self.definitions.values():
            dwg.defs.add(self._render_definition(dwg, definition))
        if self.base_layer is not None:
            dwg.add(EmbeddedSVG(self.base_layer))
        for shape in self.elements:
            dwg.add(self._render_shape(dwg, shape))
        return dwg

    def tostring(self) -> str:
        buf = io.StringIO()
        self.to_drawing().write(buf)
        return buf.getvalue()

    def _render_definition(self, dwg: svgwrite.Drawing, definition: FillDefinition):
        if isinstance(definition, LinearGradient):
            grad = dwg.linearGradient(id=definition.id)
            for offset, color in definition.stops:
                grad.add_stop_color(offset, color)
            return grad

        tile: PatternTile = definition
        s = tile.size
        pat = dwg.pattern(size=(s, s), id=tile.id, patternUnits="userSpaceOnUse")
        pat.add(dwg.rect(insert=(0, 0), size=(s, s), fill=tile.background))
        if tile.motif == "dot":
            r = s / 4
            pat.add(dwg.circle(center=(r, r), r=r, fill=tile.motif_color))
        elif tile.motif == "stripe":
            half = s / 2
            pat.add(
                dwg.line(
                    start=(0, half),
                    end=(s, half),
                    stroke=tile.motif_color,
                    stroke_width=tile.stroke_width,
                )
            )
        else:
            half = s / 2
            d = f"M 0 {_fmt(half)} Q {_fmt(half)} {_fmt(s)} {_fmt(s)} {_fmt(half)} T {_fmt(2 * s)} {_fmt(half)}"
            pat.add(
                dwg.path(
                    d=d,
                    fill="none",
                    stroke=tile.motif_color,
                    stroke_width=tile.stroke_width,
                )
            )
        return pat

    def _render_shape(self, dwg: svgwrite.Drawing, shape: Shape):
        g = shape.geometry
        if shape.kind == ShapeKind.CIRCLE:
            el = dwg.circle(center=(g["cx"], g["cy"]), r=g["r"])
        elif shape.kind == ShapeKind.RECT:
            el = dwg.rect(insert=(g["x"], g["y"]), size=(g["width"], g["height"]))
        elif shape.kind == ShapeKind.ELLIPSE:
            el = dwg.ellipse(center=(g["cx"], g["cy"]), r=(g["rx"], g["ry"]))
        elif shape.kind == ShapeKind.LINE:
            el = dwg.line(start=(g["x1"], g["y1"]), end=(g["x2"], g["y2"]))
        elif shape.kind in POLYGON_KINDS:
            el = dwg.polygon(points=shape.points)
        else:
            raise ValueError(f"Unsupported shape kind: {shape.kind}")

        el["id"] = shape.id
        if shape.fill is not None:
            el["fill"] = shape.fill
        if shape.stroke is not None:
            el["stroke"] = shape.stroke
        if shape.stroke_width is not None:
            el["stroke-width"] = shape.stroke_width
        el["opacity"] = round(shape.opacity, 3)
        if shape.pivot is not None:
            el["style"] = f"transform-origin: {format_pivot(shape.pivot)}"

        for animation in shape.animations:
            el.add(self._render_animation(dwg, animation))
        return el

    def _render_animation(self, dwg: svgwrite.Drawing, animation: Animation):
        if animation.tag == "animateTransform":
            anim = dwg.animateTransform(animation.transform_type)
            anim.set_target(animation.attribute, "XML")
        else:
            anim = dwg.animate()
            anim.set_target(animation.attribute)

        values = ";".join(_fmt(v) for v in animation.values) if animation.values else None
        calc_mode = key_times = key_splines = None
        if animation.easing == "smooth":
            calc_mode = "spline"
            steps = max(len(animation.values), 2) - 1
            key_times = ";".join(_fmt(round(i / steps, 4)) for i in range(steps + 1))
            key_splines = ";".join([EASE_IN_OUT_SPLINE] * steps)
        anim.set_value(
            values,
            calcMode=calc_mode,
            keyTimes=key_times,
            keySplines=key_splines,
            from_=_fmt(animation.from_value) if animation.from_value is not None else None,
            to=_fmt(animation.to_value) if animation.to_value is not None else None,
        )
        anim.set_timing(dur=f"{_fmt(animation.dur_s)}s", repeatCount=animation.repeat)
        return anim
