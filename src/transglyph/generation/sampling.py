"""Logit post-processing and next-token sampling.

Both helpers operate on one-dimensional ``numpy`` arrays of logits (one
entry per vocabulary id) and never mutate their input.

Repeat penalty
--------------
Each *distinct* token in the lookback context is penalised once: a
non-negative logit is divided by the penalty, a negative logit is
multiplied by it.  Either way the token becomes less likely when
``penalty > 1``.

Sampling
--------
``LogitsSampler`` is created once per generation call with the call's
seed, so a given seed always yields the same token sequence.  Without a
temperature it is a pure arg-max.  With a temperature it draws from the
softmax of ``logits / temperature``, optionally restricted to the nucleus:
candidates are taken in descending probability order until their
cumulative mass reaches ``top_p``, everything after that is zeroed.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from transglyph.errors import SampleError


def apply_repeat_penalty(
    logits: np.ndarray, penalty: float, context: Sequence[int]
) -> np.ndarray:
    """Return a copy of ``logits`` with recently seen tokens penalised.

    Args:
        logits:  1-D logits vector.
        penalty: Penalty factor; ``1.0`` leaves the logits unchanged.
        context: Recent output token ids.  Ids outside the vocabulary are
                 ignored.

    Returns:
        A new ``float32`` array.
    """
    adjusted = np.array(logits, dtype=np.float32, copy=True)
    vocab_size = adjusted.shape[0]
    for token_id in set(context):
        if not 0 <= token_id < vocab_size:
            continue
        if adjusted[token_id] >= 0:
            adjusted[token_id] /= penalty
        else:
            adjusted[token_id] *= penalty
    return adjusted


def softmax(logits: np.ndarray) -> np.ndarray:
    """Numerically stable softmax over a 1-D array."""
    shifted = logits.astype(np.float64) - np.max(logits)
    exp = np.exp(shifted)
    return exp / np.sum(exp)


class LogitsSampler:
    """Seeded next-token selector.

    Attributes:
        _temperature: Sampling temperature, ``None`` for arg-max.
        _top_p:       Nucleus threshold, ``None`` to sample the full
                      distribution.
        _rng:         ``numpy`` generator seeded once per call.
    """

    def __init__(self, seed: int, temperature: float | None, top_p: float | None) -> None:
        self._temperature = temperature
        self._top_p = top_p
        self._rng = np.random.default_rng(seed)

    def sample(self, logits: np.ndarray) -> int:
        """Pick the next token id from a 1-D logits vector.

        Raises:
            SampleError: If the logits are empty or produce a
                         distribution that cannot be sampled (NaN/inf).
        """
        if logits.size == 0:
            raise SampleError("Cannot sample from an empty logits vector")

        if self._temperature is None:
            return int(np.argmax(logits))

        probs = softmax(logits / self._temperature)
        if not np.all(np.isfinite(probs)):
            raise SampleError("Logits produced a non-finite probability distribution")

        if self._top_p is not None:
            probs = self._restrict_to_nucleus(probs)

        total = probs.sum()
        if total <= 0:
            raise SampleError("Probability mass vanished after nucleus filtering")

        try:
            return int(self._rng.choice(probs.shape[0], p=probs / total))
        except ValueError as exc:
            raise SampleError(f"Failed to sample next token: {exc}") from exc

    def _restrict_to_nucleus(self, probs: np.ndarray) -> np.ndarray:
        """Zero every candidate outside the ``top_p`` nucleus."""
        order = np.argsort(-probs, kind="stable")
        sorted_probs = probs[order]
        # Mass accumulated before each candidate in descending order.
        mass_before = np.concatenate(([0.0], np.cumsum(sorted_probs)[:-1]))
        filtered = probs.copy()
        filtered[order[mass_before >= self._top_p]] = 0.0
        return filtered
