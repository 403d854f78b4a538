"""Autoregressive generation engine.

``GenerationEngine`` drives an encoder-decoder model one token at a time.
It never touches tensors itself beyond building ``(1, n)`` ``int64`` id
arrays and reading back a 1-D logits vector; the network is supplied by a
``SequenceModel`` and the vocabulary by a ``TextTokenizer``.

Per-call flow
-------------
1. ``model.reset()`` — drop any decoder cache from the previous call.
2. Tokenize the prompt and run the encoder once.
3. Start the output with the pad token and loop while the output holds at
   most ``max_length`` tokens:

   - first step feeds the whole output, later steps only the last token
     (the model keeps its own incremental cache);
   - apply the repeat penalty over the last ``repeat_last_n`` tokens;
   - sample; the end-of-sequence token stops the loop without being kept;
   - otherwise keep the token and append its display text.

The loop therefore runs at most ``max_length + 1`` times whatever the
model returns.  Every failure is raised as a ``GenerationError`` subclass;
the caller decides how to degrade.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol

import numpy as np

from transglyph.errors import (
    DecodeError,
    EncodeError,
    GenerationError,
    TensorConstructionError,
    TokenizeError,
)
from transglyph.generation.params import GenerationParams
from transglyph.generation.sampling import LogitsSampler, apply_repeat_penalty

logger = logging.getLogger(__name__)

# SentencePiece word-boundary marker and byte-fallback newline token.
WORD_BOUNDARY_MARKER = "▁"
NEWLINE_MARKER = "<0x0A>"


class SequenceModel(Protocol):
    """Encoder-decoder network seen by the engine."""

    def reset(self) -> None: ...

    def encode(self, token_ids: np.ndarray) -> Any: ...

    def decode(self, decoder_token_ids: np.ndarray, encoder_state: Any) -> Any: ...


class TextTokenizer(Protocol):
    """Vocabulary seen by the engine."""

    def encode_text(self, text: str) -> list[int]: ...

    def id_to_text(self, token_id: int) -> str | None: ...


def token_display_text(fragment: str) -> str:
    """Map a raw vocabulary fragment to the text it renders as."""
    return fragment.replace(WORD_BOUNDARY_MARKER, " ").replace(NEWLINE_MARKER, "\n")


def _id_array(token_ids: Sequence[int]) -> np.ndarray:
    """Build a ``(1, n)`` int64 batch from token ids."""
    try:
        return np.asarray(token_ids, dtype=np.int64).reshape(1, -1)
    except (TypeError, ValueError) as exc:
        raise TensorConstructionError(f"Failed to create token tensor: {exc}") from exc


def _as_logits_vector(raw: Any) -> np.ndarray:
    """Squeeze decoder output down to a 1-D float vector."""
    try:
        logits = np.asarray(raw, dtype=np.float32)
    except (TypeError, ValueError) as exc:
        raise TensorConstructionError(f"Failed to read logits: {exc}") from exc
    # Models return (vocab,), (1, vocab) or (1, 1, vocab); keep the last step.
    while logits.ndim > 1 and logits.shape[0] == 1:
        logits = logits[0]
    if logits.ndim == 2:
        logits = logits[-1]
    if logits.ndim != 1:
        raise TensorConstructionError(f"Unexpected logits shape {logits.shape}")
    return logits


class GenerationEngine:
    """Token-by-token generator over a ``SequenceModel``.

    Attributes:
        _model:        Encoder-decoder network.
        _tokenizer:    Vocabulary used for the prompt and for display text.
        _pad_token_id: Token every output sequence starts with.
        _eos_token_id: Token that terminates generation.
    """

    def __init__(
        self,
        *,
        model: SequenceModel,
        tokenizer: TextTokenizer,
        pad_token_id: int,
        eos_token_id: int,
    ) -> None:
        self._model = model
        self._tokenizer = tokenizer
        self._pad_token_id = pad_token_id
        self._eos_token_id = eos_token_id

    def generate(self, params: GenerationParams) -> str:
        """Generate text for ``params.prompt``.

        Returns:
            The accumulated display text of every generated token.

        Raises:
            GenerationError: see ``generate_tokens``.
        """
        _, text = self.generate_tokens(params)
        return text

    def generate_tokens(self, params: GenerationParams) -> tuple[list[int], str]:
        """Generate for ``params.prompt``, returning the token ids as well.

        Returns:
            ``(token_ids, text)`` where ``token_ids`` starts with the pad
            token and excludes the end-of-sequence token.

        Raises:
            TokenizeError, EncodeError, DecodeError, SampleError,
            TensorConstructionError: on the corresponding failure.
        """
        try:
            self._model.reset()
        except Exception as exc:
            raise DecodeError(f"Failed to reset decoder state: {exc}") from exc

        try:
            prompt_ids = list(self._tokenizer.encode_text(params.prompt))
        except GenerationError:
            raise
        except Exception as exc:
            raise TokenizeError(f"Failed to tokenize prompt: {exc}") from exc

        input_ids = _id_array(prompt_ids)
        try:
            encoder_state = self._model.encode(input_ids)
        except Exception as exc:
            raise EncodeError(f"Failed to encode prompt: {exc}") from exc

        sampler = LogitsSampler(
            params.seed, params.effective_temperature, params.effective_top_p
        )
        max_length = params.effective_max_length
        output_ids: list[int] = [self._pad_token_id]
        decoded: list[str] = []

        step = 0
        while len(output_ids) <= max_length:
            if step == 0:
                decoder_input = _id_array(output_ids)
            else:
                decoder_input = _id_array(output_ids[-1:])
            step += 1

            try:
                raw_logits = self._model.decode(decoder_input, encoder_state)
            except Exception as exc:
                raise DecodeError(f"Failed to decode step {step}: {exc}") from exc
            logits = _as_logits_vector(raw_logits)

            if params.repeat_penalty != 1.0:
                start_at = max(0, len(output_ids) - params.repeat_last_n)
                logits = apply_repeat_penalty(
                    logits, params.repeat_penalty, output_ids[start_at:]
                )

            next_token = sampler.sample(logits)
            if next_token == self._eos_token_id:
                break

            output_ids.append(next_token)
            try:
                fragment = self._tokenizer.id_to_text(next_token)
            except Exception as exc:
                raise TokenizeError(f"Failed to look up token {next_token}: {exc}") from exc
            if fragment is not None:
                decoded.append(token_display_text(fragment))

        generation = "".join(decoded)
        logger.debug(
            "GenerationEngine: %d token(s) in %d step(s): %r",
            len(output_ids) - 1,
            step,
            generation,
        )
        return output_ids, generation
