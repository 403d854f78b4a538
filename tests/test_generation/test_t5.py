"""Tests for the torch-backed T5 adapter.

Skipped unless the ``model`` extra (torch, transformers, safetensors) is
installed.  A tiny randomly initialised T5 keeps the run fast.
"""

import numpy as np
import pytest

torch = pytest.importorskip("torch")
pytest.importorskip("transformers")
pytest.importorskip("safetensors")

from safetensors.torch import save as save_safetensors  # noqa: E402
from transformers import T5Config, T5ForConditionalGeneration  # noqa: E402

from transglyph.errors import ModelLoadError  # noqa: E402
from transglyph.generation.t5 import T5SequenceModel  # noqa: E402

TINY_CONFIG = {
    "vocab_size": 16,
    "d_model": 8,
    "d_kv": 4,
    "d_ff": 16,
    "num_layers": 1,
    "num_decoder_layers": 1,
    "num_heads": 2,
    "pad_token_id": 0,
    "eos_token_id": 1,
    "decoder_start_token_id": 0,
}


@pytest.fixture(scope="module")
def tiny_weights() -> bytes:
    torch.manual_seed(0)
    model = T5ForConditionalGeneration(T5Config(**TINY_CONFIG))
    # safetensors refuses shared storage, so every tensor gets its own copy
    state = {name: tensor.clone().contiguous() for name, tensor in model.state_dict().items()}
    return save_safetensors(state)


@pytest.fixture
def model(tiny_weights) -> T5SequenceModel:
    return T5SequenceModel.from_bytes(tiny_weights, dict(TINY_CONFIG))


@pytest.mark.integration
class TestFromBytes:
    def test_bad_weights_raise(self):
        with pytest.raises(ModelLoadError, match="Failed to read weights"):
            T5SequenceModel.from_bytes(b"not safetensors", dict(TINY_CONFIG))

    def test_bad_config_raises(self, tiny_weights):
        config = dict(TINY_CONFIG, feed_forward_proj="not-a-real-activation")
        with pytest.raises(ModelLoadError, match="Failed to parse config"):
            T5SequenceModel.from_bytes(tiny_weights, config)


@pytest.mark.integration
class TestIncrementalDecoding:
    def test_decode_returns_vocab_logits(self, model):
        encoder_state = model.encode(np.array([[3, 4, 1]], dtype=np.int64))
        logits = model.decode(np.array([[0]], dtype=np.int64), encoder_state)
        assert logits.shape == (TINY_CONFIG["vocab_size"],)
        assert np.all(np.isfinite(logits))

    def test_cached_step_matches_full_sequence(self, model):
        encoder_state = model.encode(np.array([[3, 4, 1]], dtype=np.int64))

        model.reset()
        model.decode(np.array([[0]], dtype=np.int64), encoder_state)
        incremental = model.decode(np.array([[5]], dtype=np.int64), encoder_state)

        model.reset()
        full = model.decode(np.array([[0, 5]], dtype=np.int64), encoder_state)

        np.testing.assert_allclose(incremental, full, rtol=1e-4, atol=1e-5)

    def test_reset_starts_fresh(self, model):
        encoder_state = model.encode(np.array([[3, 1]], dtype=np.int64))
        first = model.decode(np.array([[0]], dtype=np.int64), encoder_state)
        model.decode(np.array([[7]], dtype=np.int64), encoder_state)

        model.reset()
        again = model.decode(np.array([[0]], dtype=np.int64), encoder_state)
        np.testing.assert_allclose(first, again, rtol=1e-5, atol=1e-6)
