"""Glyph buffer representation and conversions.

The host hands over a buffer whose glyph ``codepoint`` fields hold the
input bytes.  ``buffer_text`` reassembles them into a string, the
translation layer produces ``(character, cluster)`` pairs, and
``glyphs_from_pairs`` turns those back into glyph records.  Finally
``resolve_glyphs`` swaps each character for the font's glyph id and fills
in the horizontal advance.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from transglyph.shaping.host import FontHost


@dataclass
class Glyph:
    """One shaped glyph.

    ``codepoint`` holds a character value before ``resolve_glyphs`` and a
    font glyph id afterwards.
    """

    codepoint: int
    cluster: int
    x_advance: int = 0
    y_advance: int = 0
    x_offset: int = 0
    y_offset: int = 0
    flags: int = 0


@dataclass
class GlyphBuffer:
    """Mutable glyph sequence shared with the host."""

    glyphs: list[Glyph] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> GlyphBuffer:
        """Build an input buffer holding the UTF-8 bytes of ``text``."""
        data = text.encode("utf-8")
        return cls(glyphs=[Glyph(codepoint=byte, cluster=index) for index, byte in enumerate(data)])


def buffer_text(buffer: GlyphBuffer) -> str:
    """Decode the buffer's codepoints as UTF-8 bytes.

    Each codepoint is truncated to its low byte; invalid sequences become
    U+FFFD.
    """
    data = bytes(glyph.codepoint & 0xFF for glyph in buffer.glyphs)
    return data.decode("utf-8", errors="replace")


def glyphs_from_pairs(pairs: Iterable[tuple[str, int]]) -> list[Glyph]:
    """Build unresolved glyphs with zeroed metrics."""
    return [Glyph(codepoint=ord(char), cluster=cluster) for char, cluster in pairs]


def resolve_glyphs(glyphs: Iterable[Glyph], host: FontHost) -> None:
    """Map every glyph to a font glyph id and set its advance, in place."""
    for glyph in glyphs:
        glyph.codepoint = host.glyph_for_codepoint(glyph.codepoint)
        glyph.x_advance = host.advance_for_glyph(glyph.codepoint)
