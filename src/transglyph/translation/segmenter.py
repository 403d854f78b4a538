"""Sentence segmentation.

The buffer is cut after every sentence-terminal mark (``.``, ``!``,
``?``), keeping the mark with the text before it.  Whatever follows the
last mark becomes the final unit.  Consecutive marks produce lone
punctuation units, e.g. ``"Wow!!"`` → ``["Wow!", "!"]``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

TERMINAL_PUNCTUATION = frozenset(".!?")

_UNIT_PATTERN = re.compile(r"[^.!?]*[.!?]|[^.!?]+")


@dataclass(frozen=True)
class SentenceUnit:
    """One segment of the buffer.

    Attributes:
        text:    The unit's characters, terminal mark included.
        is_last: ``True`` for the final unit of the buffer.
    """

    text: str
    is_last: bool

    @property
    def is_lone_punctuation(self) -> bool:
        """A single terminal mark standing on its own."""
        return len(self.text) == 1 and self.text in TERMINAL_PUNCTUATION

    @property
    def is_complete(self) -> bool:
        """The unit ends with a terminal mark."""
        return bool(self.text) and self.text[-1] in TERMINAL_PUNCTUATION


def split_sentences(text: str) -> list[str]:
    """Split ``text`` inclusively at terminal punctuation."""
    return _UNIT_PATTERN.findall(text)


def segment(text: str) -> list[SentenceUnit]:
    """Split ``text`` into units, flagging the final one."""
    pieces = split_sentences(text)
    last_index = len(pieces) - 1
    return [
        SentenceUnit(text=piece, is_last=index == last_index)
        for index, piece in enumerate(pieces)
    ]
