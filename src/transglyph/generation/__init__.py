"""Autoregressive translation generation.

Package structure
-----------------
params.py     GenerationParams   — immutable per-call sampling settings.
sampling.py   LogitsSampler      — repeat penalty, temperature, nucleus
              sampling over ``numpy`` logits.
engine.py     GenerationEngine   — the token loop over a ``SequenceModel``
              and ``TextTokenizer``.
tokenizer.py  HuggingFaceTokenizer — ``tokenizers`` adapter.
t5.py         T5SequenceModel    — ``transformers`` adapter (optional
              ``model`` extra, imported lazily).
assets.py     read_asset         — model bytes from a path or URL.
session.py    ModelSession       — loads the three assets and owns an engine.
"""

from transglyph.generation.engine import GenerationEngine
from transglyph.generation.params import GenerationParams

__all__ = ["GenerationEngine", "GenerationParams"]
