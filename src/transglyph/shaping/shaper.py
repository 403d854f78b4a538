"""Shaping entry point.

``ShapingContext`` is created once by the host application and passed
into every shaping call.  It owns the two pieces of long-lived state:

- the ``ModelSession``, built lazily on the first buffer that needs
  translation;
- the ``TranslationCache``, shared by every call on this context.

Caller contract
---------------
``shape()`` returns ``1`` on success and ``0`` only when the model
session cannot be constructed — in that case the buffer is left exactly
as the host supplied it.  Every other failure degrades to pass-through
text for the affected sentence; nothing is raised into the host.

Model load failure policy
-------------------------
By default a failed load is remembered and every later call fails fast
without retrying (the load is attempted once per context).  Setting
``model.retry_failed_load = true`` makes each later call retry instead.

Locking
-------
A single ``threading.Lock`` is held for the whole call, covering the
lazy session construction and the cache.  Concurrent callers serialize.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from typing import Any

from transglyph.config import ShaperConfig
from transglyph.errors import ModelLoadError
from transglyph.generation.session import ModelSession
from transglyph.shaping.buffer import (
    GlyphBuffer,
    buffer_text,
    glyphs_from_pairs,
    resolve_glyphs,
)
from transglyph.shaping.host import FontHost
from transglyph.translation.cache import TranslationCache
from transglyph.translation.numeric import is_numeric, numeric_pairs
from transglyph.translation.orchestrator import SentenceOrchestrator

logger = logging.getLogger(__name__)

SHAPE_SUCCESS = 1
SHAPE_FAILURE = 0

SessionFactory = Callable[[], ModelSession]


class ShapingContext:
    """Long-lived state and entry point for translating shaping calls.

    Attributes:
        config:           Settings this context was built with.
        cache:            Translation memo shared across calls.
        _session_factory: Builds the model session on first use.
        _session:         The loaded session, ``None`` until first use.
        _load_error:      Remembered load failure (no-retry policy).
        _lock:            Serialises shaping calls.
    """

    def __init__(
        self,
        config: ShaperConfig,
        *,
        session_factory: SessionFactory | None = None,
    ) -> None:
        self.config = config
        self.cache = TranslationCache(max_entries=config.cache.max_entries)
        self._session_factory = session_factory or (
            lambda: ModelSession.from_settings(config.model)
        )
        self._session: ModelSession | None = None
        self._load_error: ModelLoadError | None = None
        self._lock = threading.Lock()

    # ── Public API ────────────────────────────────────────────────────────────

    def shape(
        self,
        shape_plan: Any,
        font: FontHost,
        buffer: GlyphBuffer,
        features: Sequence[Any] = (),
    ) -> int:
        """Translate and shape ``buffer`` in place.

        Args:
            shape_plan: Host shape plan; unused.
            font:       Glyph id and advance lookups.
            buffer:     Input buffer; replaced with the shaped glyphs.
            features:   Host feature list; unused.

        Returns:
            ``1`` on success, ``0`` if the model could not be loaded.
        """
        with self._lock:
            text = buffer_text(buffer)
            original_length = len(text)
            logger.debug("ShapingContext: buffer %r", text)

            if is_numeric(text):
                pairs = numeric_pairs(text)
            else:
                try:
                    session = self._ensure_session()
                except ModelLoadError:
                    return SHAPE_FAILURE
                orchestrator = SentenceOrchestrator(
                    generate=session.generate,
                    cache=self.cache,
                    settings=self.config.generation,
                )
                pairs = orchestrator.translate_buffer(text, original_length)

            buffer.glyphs = glyphs_from_pairs(pairs)
            resolve_glyphs(buffer.glyphs, font)
            return SHAPE_SUCCESS

    def translate_text(self, text: str) -> list[tuple[str, int]]:
        """Run the text stage only, returning ``(character, cluster)`` pairs.

        Raises:
            ModelLoadError: If translation is needed and the model cannot
                            be loaded.
        """
        with self._lock:
            if is_numeric(text):
                return numeric_pairs(text)
            orchestrator = SentenceOrchestrator(
                generate=self._ensure_session().generate,
                cache=self.cache,
                settings=self.config.generation,
            )
            return orchestrator.translate_buffer(text, len(text))

    @property
    def session_loaded(self) -> bool:
        """``True`` once the model session has been constructed."""
        return self._session is not None

    # ── Internal helpers ──────────────────────────────────────────────────────

    def _ensure_session(self) -> ModelSession:
        """Return the session, constructing it on first use.

        Raises:
            ModelLoadError: If construction fails now, or failed earlier
                            under the no-retry policy.
        """
        if self._session is not None:
            return self._session
        if self._load_error is not None and not self.config.model.retry_failed_load:
            raise self._load_error

        logger.info("ShapingContext: initializing model")
        try:
            self._session = self._session_factory()
        except ModelLoadError as exc:
            logger.error("ShapingContext: error loading model: %s", exc)
            self._load_error = exc
            raise
        self._load_error = None
        logger.info("ShapingContext: model initialized")
        return self._session
