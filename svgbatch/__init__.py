"""
svgbatch - randomized, animated SVG variants of a base image.
"""

__version__ = "0.1.0"
