"""Translation memoization.

``TranslationCache`` maps the exact source sentence (terminal mark
included) to its translation for the lifetime of the owning context.

Failure policy
--------------
``get_or_compute`` never raises for a generation failure.  When the
compute callable raises ``GenerationError`` the failure is logged, the
source text is returned unchanged, and nothing is stored — so a later
occurrence of the same sentence retries the model.

Bounding
--------
With ``max_entries=0`` (the default) the cache grows without limit.  A
positive ``max_entries`` turns it into a least-recently-used cache.

The cache is not synchronised; ``ShapingContext`` holds its lock for the
whole shaping call.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Callable

from transglyph.errors import GenerationError

logger = logging.getLogger(__name__)


class TranslationCache:
    """Sentence → translation table.

    Attributes:
        hits:         Lookups answered from the table.
        misses:       Lookups that called ``compute``.
        _max_entries: LRU bound, ``0`` for unbounded.
        _entries:     Insertion/recency ordered storage.
    """

    def __init__(self, *, max_entries: int = 0) -> None:
        self._max_entries = max(0, max_entries)
        self._entries: OrderedDict[str, str] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get_or_compute(self, key: str, compute: Callable[[], str]) -> str:
        """Return the cached translation of ``key``, computing it on a miss.

        Args:
            key:     Exact source sentence.
            compute: Produces the translation; may raise ``GenerationError``.

        Returns:
            The translation, or ``key`` itself if ``compute`` failed.
        """
        if key in self._entries:
            self.hits += 1
            if self._max_entries:
                self._entries.move_to_end(key)
            logger.debug("TranslationCache: hit for %r", key)
            return self._entries[key]

        self.misses += 1
        try:
            value = compute()
        except GenerationError:
            logger.warning(
                "TranslationCache: generation failed for %r, passing it through untranslated.",
                key,
                exc_info=True,
            )
            return key

        self._entries[key] = value
        if self._max_entries and len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("TranslationCache: evicted %r", evicted)
        return value

    def clear(self) -> None:
        """Drop every entry and reset the counters."""
        self._entries.clear()
        self.hits = 0
        self.misses = 0
