"""
Test configuration and fixtures for the SVG batch generator.

Provides a small base image, policies and canvases, and keeps tests isolated
from the developer's environment (SVGBATCH_* variables, local .env files).
"""

import os
import sys
import xml.etree.ElementTree as ET

import pytest

# Ensure repo root is on sys.path
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from svgbatch.core import GenerationPolicy
from svgbatch.decor.canvas import Canvas

SHAPE_TAGS = {"circle", "rect", "ellipse", "line", "polygon"}

BASE_SVG = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" "http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">
<!-- test logo -->
<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink"
     xmlns:sodipodi="http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd"
     width="200" height="200" viewBox="0 0 200 200">
  <sodipodi:namedview id="view1" pagecolor="#ffffff"/>
  <defs><path id="mark" d="M 10 10 L 90 90"/></defs>
  <circle id="logo-disc" cx="100" cy="100" r="80" fill="#1c4fa1"/>
  <use xlink:href="#mark" stroke="#f6be00"/>
</svg>
"""


def local_name(tag: str) -> str:
    return tag.split("}", 1)[-1]


def parse_svg(text: str) -> ET.Element:
    return ET.fromstring(text)


def top_level_shapes(root: ET.Element):
    return [child for child in root if local_name(child.tag) in SHAPE_TAGS]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Strip SVGBATCH_* overrides so config defaults are predictable."""
    for key in list(os.environ):
        if key.startswith("SVGBATCH_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def base_svg():
    return BASE_SVG


@pytest.fixture
def base_svg_file(tmp_path):
    path = tmp_path / "GCLogo.svg"
    path.write_text(BASE_SVG, encoding="utf-8")
    return path


@pytest.fixture
def policy():
    return GenerationPolicy()


@pytest.fixture
def canvas(policy):
    return Canvas(policy)


@pytest.fixture
def seeded():
    """Reseed the global generator for repeatable draws, then release it."""
    import random

    random.seed(1234)
    yield
    random.seed()
