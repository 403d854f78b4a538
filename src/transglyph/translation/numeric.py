"""Numeric fast-path detection.

A buffer that is a single integer or floating-point literal (page
numbers, counters, prices) is never sent to the model: each character
maps straight to a glyph.

Both checks are pure regular-expression predicates.  The integer form is
tried first, then the float form.  Neither accepts surrounding
whitespace, digit separators, or an empty string.
"""

from __future__ import annotations

import re

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

# Decimal with optional exponent, plus the inf/infinity/nan spellings.
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:"
    r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|(?i:inf|infinity|nan)"
    r")"
)


def is_integer_literal(text: str) -> bool:
    """Return ``True`` if ``text`` is a signed integer literal."""
    return _INTEGER_PATTERN.fullmatch(text) is not None


def is_float_literal(text: str) -> bool:
    """Return ``True`` if ``text`` is a floating-point literal."""
    return _FLOAT_PATTERN.fullmatch(text) is not None


def is_numeric(text: str) -> bool:
    """Return ``True`` if ``text`` is a single integer or float literal."""
    return is_integer_literal(text) or is_float_literal(text)


def numeric_pairs(text: str) -> list[tuple[str, int]]:
    """Map every character of ``text`` to its own position as cluster."""
    return [(char, index) for index, char in enumerate(text)]
