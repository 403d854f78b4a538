"""Generation parameters.

``GenerationParams`` is a frozen dataclass built once per generation call.
The raw knobs are stored exactly as supplied; the ``effective_*``
properties apply the normalisation rules the engine relies on:

- ``temperature <= 0`` means greedy arg-max decoding (no sampling).
- ``top_p`` outside the open interval ``(0, 1)`` disables nucleus sampling.
- ``max_length`` of ``None`` means the hard ceiling; any value is clamped
  to ``[0, MAX_LENGTH_CEILING]``.
"""

from __future__ import annotations

from dataclasses import dataclass

# Hard ceiling on the number of generated tokens per call.
MAX_LENGTH_CEILING = 512


@dataclass(frozen=True)
class GenerationParams:
    """Immutable per-call generation settings.

    Attributes:
        prompt:         Full prompt text (task prefix + source sentence).
        temperature:    Softmax temperature; ``<= 0`` selects arg-max.
        seed:           Seed for the per-call random generator.
        top_p:          Nucleus mass; disabled when ``<= 0`` or ``>= 1``.
        repeat_penalty: Logit penalty for recently emitted tokens;
                        ``1.0`` disables it.
        repeat_last_n:  How many of the most recent output tokens the
                        penalty looks back over.
        max_length:     Upper bound on generated tokens, ``None`` for the
                        ceiling.
    """

    prompt: str
    temperature: float = 0.0
    seed: int = 0
    top_p: float = 1.0
    repeat_penalty: float = 1.1
    repeat_last_n: int = 1
    max_length: int | None = MAX_LENGTH_CEILING

    @property
    def effective_temperature(self) -> float | None:
        """Temperature to sample with, or ``None`` for arg-max decoding."""
        if self.temperature <= 0.0:
            return None
        return float(self.temperature)

    @property
    def effective_top_p(self) -> float | None:
        """Nucleus threshold, or ``None`` when nucleus sampling is off."""
        if self.top_p <= 0.0 or self.top_p >= 1.0:
            return None
        return float(self.top_p)

    @property
    def effective_max_length(self) -> int:
        """``max_length`` clamped to ``[0, MAX_LENGTH_CEILING]``."""
        limit = MAX_LENGTH_CEILING if self.max_length is None else self.max_length
        return max(0, min(int(limit), MAX_LENGTH_CEILING))
