"""Glyph buffer adaptation and the shaping entry point.

Package structure
-----------------
host.py    FontHost / HarfBuzzFontHost — glyph id and advance lookups.
buffer.py  Glyph, GlyphBuffer          — buffer records and conversions.
shaper.py  ShapingContext              — owns the model session and cache;
           ``shape()`` is the single public entry-point used by the host.
"""

from transglyph.shaping.buffer import Glyph, GlyphBuffer
from transglyph.shaping.shaper import SHAPE_FAILURE, SHAPE_SUCCESS, ShapingContext

__all__ = ["SHAPE_FAILURE", "SHAPE_SUCCESS", "Glyph", "GlyphBuffer", "ShapingContext"]
