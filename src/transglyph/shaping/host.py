"""Font host seam.

``FontHost`` is everything the shaper needs from the font: a nominal
glyph lookup and a horizontal advance.  ``HarfBuzzFontHost`` implements
it over a ``uharfbuzz.Font``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

import uharfbuzz as hb

# Glyph id HarfBuzz reports for characters the font cannot render.
NOTDEF_GLYPH = 0


class FontHost(Protocol):
    """Glyph lookups provided by the shaping host."""

    def glyph_for_codepoint(self, codepoint: int) -> int: ...

    def advance_for_glyph(self, glyph_id: int) -> int: ...


class HarfBuzzFontHost:
    """``FontHost`` backed by ``uharfbuzz``."""

    def __init__(self, font: hb.Font) -> None:
        self._font = font

    @classmethod
    def from_path(cls, path: str | Path) -> HarfBuzzFontHost:
        """Open a font file (first face) at its native scale."""
        blob = hb.Blob.from_file_path(str(path))
        face = hb.Face(blob)
        return cls(hb.Font(face))

    def glyph_for_codepoint(self, codepoint: int) -> int:
        glyph_id = self._font.get_nominal_glyph(codepoint)
        return NOTDEF_GLYPH if glyph_id is None else glyph_id

    def advance_for_glyph(self, glyph_id: int) -> int:
        return max(0, self._font.get_glyph_h_advance(glyph_id))
