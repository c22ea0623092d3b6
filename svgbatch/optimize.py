#!/usr/bin/env python3
"""
SVG size reduction

Text in, smaller-or-equal equivalent text out. The heavy lifting is done by
scour; the enabled plugin names select which scour cleanups run, and
``multipass`` re-runs it until the output stops shrinking.

    removeDoctype      drop the <!DOCTYPE> declaration
    removeComments     strip <!-- --> comments
    removeXMLProcInst  strip the <?xml ?> prolog
    cleanupAttrs       serialize without indentation or line breaks
"""

import re
from typing import Iterable, List, Optional

from scour import scour

from svgbatch.core import get_logger

log = get_logger("svgbatch.optimize")

MAX_PASSES = 10

DEFAULT_PLUGINS = ("removeDoctype", "removeComments", "cleanupAttrs")
PLUGINS = frozenset(["removeDoctype", "removeComments", "removeXMLProcInst", "cleanupAttrs"])

# <!DOCTYPE svg PUBLIC "..." "..." [ <!ENTITY ...> ]>
_DOCTYPE = re.compile(r"<!DOCTYPE(?:[^\[>]|\[[^\]]*\])*>", re.IGNORECASE)
_XML_PROLOG = re.compile(r"^\s*<\?xml\b[^?]*\?>\s*")


def scour_options(plugins: Iterable[str]):
    """Translate plugin names into a scour options object."""
    enabled = set(plugins)
    options = scour.sanitizeOptions()
    options.quiet = True
    options.strip_comments = "removeComments" in enabled
    options.strip_xml_prolog = "removeXMLProcInst" in enabled
    if "cleanupAttrs" in enabled:
        options.indent_type = "none"
        options.newlines = False
    # generated ids are referenced by url(#id); never rename or drop them
    options.strip_ids = False
    options.shorten_ids = False
    return options


def _restore_doctype(original: str, optimized: str) -> str:
    """Re-insert the input's doctype after the prolog."""
    m = _DOCTYPE.search(original)
    if not m:
        return optimized
    prolog = _XML_PROLOG.match(optimized)
    if prolog:
        head = prolog.group(0).rstrip()
        return f"{head}\n{m.group(0)}\n{optimized[prolog.end():]}"
    return f"{m.group(0)}\n{optimized}"


def _single_pass(svg: str, plugins: List[str]) -> str:
    out = _DOCTYPE.sub("", scour.scourString(svg, scour_options(plugins)), count=1)
    out = re.sub(r"\A(<\?xml[^?]*\?>)\s*\n\s*", r"\1\n", out)
    if "removeDoctype" not in plugins:
        out = _restore_doctype(svg, out)
    return out


def optimize_svg(
    svg_content: str,
    multipass: bool = True,
    plugins: Optional[Iterable[str]] = None,
) -> str:
    """
    Run the enabled cleanups over serialized SVG text.

    Args:
        svg_content: SVG markup
        multipass: repeat until the size stops decreasing
        plugins: plugin names, defaults to DEFAULT_PLUGINS

    Returns:
        Optimized SVG markup, never longer than the input

    Raises:
        ValueError: If an unknown plugin is requested
    """
    plugins = list(plugins if plugins is not None else DEFAULT_PLUGINS)
    unknown = [p for p in plugins if p not in PLUGINS]
    if unknown:
        raise ValueError(f"Unknown optimizer plugin(s): {', '.join(unknown)}")

    log.info(f"Original Size: {len(svg_content)}")

    result = svg_content
    passes = MAX_PASSES if multipass else 1
    for _ in range(passes):
        candidate = _single_pass(result, plugins)
        if len(candidate) >= len(result):
            break
        result = candidate

    log.info(f"Optimized Size: {len(result)}")
    return result
