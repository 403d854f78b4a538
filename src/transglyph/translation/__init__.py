"""Sentence-level translation layer.

Package structure
-----------------
numeric.py       is_numeric            — fast path for number-only buffers.
segmenter.py     segment               — inclusive split at ``.``, ``!``, ``?``.
cache.py         TranslationCache      — sentence → translation memo that
                 never stores failures.
orchestrator.py  SentenceOrchestrator  — decides what to translate and
                 assigns clamped cluster indices.

On any generation failure the affected sentence is returned unchanged;
the layer never breaks shaping.
"""

from transglyph.translation.cache import TranslationCache
from transglyph.translation.orchestrator import SentenceOrchestrator

__all__ = ["SentenceOrchestrator", "TranslationCache"]
