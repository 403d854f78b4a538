"""Sentence-level translation orchestration.

``SentenceOrchestrator.translate_buffer`` turns the buffer text into a
list of ``(character, cluster)`` pairs ready to become glyphs.

Per-unit policy
---------------
- A lone terminal mark is emitted as-is and takes one cluster.
- Any other unit is translated when it is not the last unit, or when it
  is the last unit and ends with a terminal mark.  A trailing fragment
  without a mark is an unfinished sentence and passes through verbatim.
- Translation goes through the ``TranslationCache`` keyed by the unit
  text; the model sees ``prompt_prefix + unit``.  A generation failure
  yields the unit text unchanged.

Cluster assignment
------------------
Clusters count up from ``0`` across the whole buffer.  Translated text is
usually longer than its source, so once the counter reaches
``original_length`` every further glyph is pinned to
``original_length - 1``.  Excess glyphs therefore share the last valid
cluster, and no cluster ever points outside the original buffer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from transglyph.config import GenerationSettings
from transglyph.generation.params import GenerationParams
from transglyph.translation.cache import TranslationCache
from transglyph.translation.segmenter import SentenceUnit, segment

logger = logging.getLogger(__name__)

Generate = Callable[[GenerationParams], str]


class _ClusterCounter:
    """Hands out sequential cluster indices, clamped to the buffer."""

    def __init__(self, original_length: int) -> None:
        self._last_valid = max(0, original_length - 1)
        self._original_length = original_length
        self._next = 0

    def take(self) -> int:
        if self._next < self._original_length:
            cluster = self._next
            self._next += 1
            return cluster
        return self._last_valid


class SentenceOrchestrator:
    """Segments text, translates complete sentences, and assigns clusters.

    Attributes:
        _generate: Callable running one generation (usually
                   ``ModelSession.generate``).
        _cache:    Translation memo shared across calls.
        _settings: Prompt prefix and sampling defaults.
    """

    def __init__(
        self,
        *,
        generate: Generate,
        cache: TranslationCache,
        settings: GenerationSettings,
    ) -> None:
        self._generate = generate
        self._cache = cache
        self._settings = settings

    def translate_buffer(self, text: str, original_length: int) -> list[tuple[str, int]]:
        """Translate ``text`` and pair each output character with a cluster.

        Args:
            text:            Buffer contents.
            original_length: Character count of the pre-translation buffer;
                             bounds every cluster to ``[0, original_length)``.

        Returns:
            ``(character, cluster)`` pairs in output order.
        """
        counter = _ClusterCounter(original_length)
        pairs: list[tuple[str, int]] = []

        for unit in segment(text):
            if unit.is_lone_punctuation:
                pairs.append((unit.text, counter.take()))
                continue

            output = self._render_unit(unit)
            pairs.extend((char, counter.take()) for char in output)

        return pairs

    def translate_sentence(self, sentence: str) -> str:
        """Translate one sentence through the cache."""
        return self._cache.get_or_compute(sentence, lambda: self._run_model(sentence))

    # ── Internal helpers ──────────────────────────────────────────────────────

    def _render_unit(self, unit: SentenceUnit) -> str:
        if unit.is_last and not unit.is_complete:
            logger.debug("SentenceOrchestrator: leaving unfinished fragment %r", unit.text)
            return unit.text
        return self.translate_sentence(unit.text)

    def _run_model(self, sentence: str) -> str:
        params = self._settings.to_params(f"{self._settings.prompt_prefix}{sentence}")
        generation = self._generate(params)
        logger.debug("SentenceOrchestrator: %r -> %r", sentence, generation)
        return generation
