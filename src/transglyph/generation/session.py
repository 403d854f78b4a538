"""Model session: loaded weights, tokenizer, and configuration.

A ``ModelSession`` is built once (by ``ShapingContext``) and reused for
every generation for the lifetime of that context.  Construction parses
the three raw assets in a fixed order — configuration JSON, tokenizer,
then weights — so that a cheap failure is reported before the expensive
one is attempted.  Any failure surfaces as ``ModelLoadError``.

The torch-backed T5 adapter is imported inside ``load`` so that the rest
of the package (and its tests) never need torch installed.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from transglyph.config import ModelSettings
from transglyph.errors import ModelLoadError
from transglyph.generation.assets import read_asset
from transglyph.generation.engine import GenerationEngine, SequenceModel, TextTokenizer
from transglyph.generation.params import GenerationParams
from transglyph.generation.tokenizer import HuggingFaceTokenizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelConfig:
    """Special token ids read from the model's ``config.json``.

    Attributes:
        pad_token_id: First token of every decoder sequence.
        eos_token_id: Token that ends generation.
        raw:          The full parsed JSON object, handed to the network
                      constructor.
    """

    pad_token_id: int
    eos_token_id: int
    raw: dict

    @classmethod
    def from_json(cls, data: bytes) -> ModelConfig:
        """Parse configuration bytes.

        Raises:
            ModelLoadError: If the bytes are not a JSON object or the
                            token ids are not integers.
        """
        try:
            parsed = json.loads(data)
        except (UnicodeDecodeError, ValueError) as exc:
            raise ModelLoadError(f"Failed to parse config: {exc}") from exc
        if not isinstance(parsed, dict):
            raise ModelLoadError("Failed to parse config: expected a JSON object")

        try:
            pad_token_id = int(parsed.get("pad_token_id", 0))
            eos_token_id = int(parsed.get("eos_token_id", 1))
        except (TypeError, ValueError) as exc:
            raise ModelLoadError(f"Failed to parse config: {exc}") from exc

        return cls(pad_token_id=pad_token_id, eos_token_id=eos_token_id, raw=parsed)


class ModelSession:
    """A loaded translation model ready to generate.

    Attributes:
        config:  Parsed model configuration.
        _engine: Generation engine bound to the model and tokenizer.
    """

    def __init__(
        self,
        *,
        model: SequenceModel,
        tokenizer: TextTokenizer,
        config: ModelConfig,
    ) -> None:
        self.config = config
        self._engine = GenerationEngine(
            model=model,
            tokenizer=tokenizer,
            pad_token_id=config.pad_token_id,
            eos_token_id=config.eos_token_id,
        )

    @classmethod
    def load(cls, weights: bytes, tokenizer: bytes, config: bytes) -> ModelSession:
        """Build a session from raw asset bytes.

        Raises:
            ModelLoadError: If any of the three assets cannot be parsed.
        """
        model_config = ModelConfig.from_json(config)
        hf_tokenizer = HuggingFaceTokenizer.from_bytes(tokenizer)

        try:
            from transglyph.generation.t5 import T5SequenceModel
        except ImportError as exc:
            raise ModelLoadError(
                "The model backend is not installed (pip install 'transglyph[model]')"
            ) from exc

        model = T5SequenceModel.from_bytes(weights, model_config.raw)
        return cls(model=model, tokenizer=hf_tokenizer, config=model_config)

    @classmethod
    def from_settings(cls, settings: ModelSettings) -> ModelSession:
        """Read the configured assets and build a session.

        Raises:
            ModelLoadError: If an asset cannot be read or parsed.
        """
        timeout = settings.fetch_timeout_seconds
        config = read_asset(settings.config_path, timeout_seconds=timeout)
        tokenizer = read_asset(settings.tokenizer_path, timeout_seconds=timeout)
        weights = read_asset(settings.weights_path, timeout_seconds=timeout)
        logger.info(
            "ModelSession: loading model (%d weight byte(s), %d tokenizer byte(s))",
            len(weights),
            len(tokenizer),
        )
        return cls.load(weights, tokenizer, config)

    def generate(self, params: GenerationParams) -> str:
        """Run one generation call; see ``GenerationEngine.generate``."""
        return self._engine.generate(params)
