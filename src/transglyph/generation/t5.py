"""T5 encoder-decoder adapter built on ``transformers`` and ``torch``.

``T5SequenceModel`` satisfies the engine's ``SequenceModel`` protocol:

- ``encode`` runs the encoder once and returns its hidden states;
- ``decode`` runs one decoder step and keeps ``past_key_values`` so that
  later steps only need the newest token;
- ``reset`` drops that cache so independent calls never share state.

This module pulls in torch and is imported lazily by
``ModelSession.load``; nothing else in the package depends on it.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import torch
from safetensors.torch import load as load_safetensors
from transformers import T5Config, T5ForConditionalGeneration
from transformers.modeling_outputs import BaseModelOutput

from transglyph.errors import ModelLoadError

logger = logging.getLogger(__name__)


class T5SequenceModel:
    """Incremental-decoding wrapper around ``T5ForConditionalGeneration``.

    Attributes:
        _model: The network, in eval mode on the CPU.
        _past:  Decoder key/value cache from the previous step, ``None``
                at the start of a call.
    """

    def __init__(self, model: T5ForConditionalGeneration) -> None:
        self._model = model.eval()
        self._past: Any = None

    @classmethod
    def from_bytes(cls, weights: bytes, config: dict) -> T5SequenceModel:
        """Build the network from a safetensors blob and a config dict.

        Raises:
            ModelLoadError: If the config or weights do not describe a
                            loadable T5 model.
        """
        try:
            t5_config = T5Config(**config)
        except Exception as exc:
            raise ModelLoadError(f"Failed to parse config: {exc}") from exc
        try:
            state_dict = load_safetensors(weights)
        except Exception as exc:
            raise ModelLoadError(f"Failed to read weights: {exc}") from exc
        try:
            model = T5ForConditionalGeneration(t5_config)
            missing, unexpected = model.load_state_dict(state_dict, strict=False)
        except Exception as exc:
            raise ModelLoadError(f"Failed to load model: {exc}") from exc
        if unexpected:
            logger.warning("T5SequenceModel: ignored %d unexpected weight(s)", len(unexpected))
        if missing:
            logger.debug("T5SequenceModel: %d weight(s) left at init values", len(missing))
        return cls(model)

    def reset(self) -> None:
        self._past = None

    def encode(self, token_ids: np.ndarray) -> torch.Tensor:
        with torch.no_grad():
            output = self._model.get_encoder()(input_ids=torch.from_numpy(token_ids))
        return output.last_hidden_state

    def decode(self, decoder_token_ids: np.ndarray, encoder_state: torch.Tensor) -> np.ndarray:
        with torch.no_grad():
            output = self._model(
                encoder_outputs=BaseModelOutput(last_hidden_state=encoder_state),
                decoder_input_ids=torch.from_numpy(decoder_token_ids),
                past_key_values=self._past,
                use_cache=True,
            )
        self._past = output.past_key_values
        return output.logits[0, -1].float().numpy()
