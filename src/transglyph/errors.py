"""Exception hierarchy for transglyph.

Two families of failure exist and they are recovered at different layers:

``ModelLoadError``
    The weights, tokenizer, or model configuration could not be fetched or
    parsed.  No translation can happen at all, so the shaping entry point
    aborts the call and reports failure (``0``) to the host.

``GenerationError`` and its subclasses
    A single generation call failed.  These are scoped to one sentence:
    the translation cache catches them and the sentence passes through
    untranslated.  The rest of the buffer is unaffected.
"""

from __future__ import annotations


class TransglyphError(Exception):
    """Base exception for all custom errors."""


class ModelLoadError(TransglyphError):
    """Raised when the model session cannot be constructed."""


class GenerationError(TransglyphError):
    """Base class for failures scoped to one generation call."""


class TokenizeError(GenerationError):
    """Raised when the prompt cannot be tokenized."""


class EncodeError(GenerationError):
    """Raised when the encoder pass fails."""


class DecodeError(GenerationError):
    """Raised when a decoder step fails."""


class SampleError(GenerationError):
    """Raised when the next token cannot be sampled from the logits."""


class TensorConstructionError(GenerationError):
    """Raised when token ids or logits cannot be shaped into arrays."""
