"""Unit tests for ModelConfig and ModelSession.

The torch-backed T5 adapter is replaced in ``sys.modules`` so these tests
run without torch; the adapter itself is covered by ``test_t5.py``.
"""

import sys
import types
from unittest.mock import MagicMock, patch

import pytest

from tests.fakes import EOS_ID, FakeTokenizer, ScriptedModel, tokenizer_json

from transglyph.config import ModelSettings
from transglyph.errors import ModelLoadError
from transglyph.generation.params import GenerationParams
from transglyph.generation.session import ModelConfig, ModelSession

CONFIG_JSON = b'{"pad_token_id": 0, "eos_token_id": 1, "d_model": 8}'


@pytest.fixture
def fake_t5_module():
    """Install a stand-in ``transglyph.generation.t5`` module."""
    module = types.ModuleType("transglyph.generation.t5")
    module.T5SequenceModel = MagicMock(name="T5SequenceModel")
    module.T5SequenceModel.from_bytes.return_value = ScriptedModel([EOS_ID])
    with patch.dict(sys.modules, {"transglyph.generation.t5": module}):
        yield module


@pytest.mark.unit
class TestModelConfig:
    def test_reads_token_ids(self):
        cfg = ModelConfig.from_json(b'{"pad_token_id": 3, "eos_token_id": 4}')
        assert (cfg.pad_token_id, cfg.eos_token_id) == (3, 4)

    def test_defaults_when_missing(self):
        cfg = ModelConfig.from_json(b"{}")
        assert (cfg.pad_token_id, cfg.eos_token_id) == (0, 1)

    def test_keeps_raw_object(self):
        assert ModelConfig.from_json(CONFIG_JSON).raw["d_model"] == 8

    def test_invalid_json_raises(self):
        with pytest.raises(ModelLoadError, match="Failed to parse config"):
            ModelConfig.from_json(b"{not json")

    def test_non_object_raises(self):
        with pytest.raises(ModelLoadError):
            ModelConfig.from_json(b"[1, 2, 3]")

    def test_non_integer_token_id_raises(self):
        with pytest.raises(ModelLoadError):
            ModelConfig.from_json(b'{"eos_token_id": "end"}')


@pytest.mark.unit
class TestModelSessionLoad:
    def test_bad_config_fails_before_tokenizer(self, fake_t5_module):
        with pytest.raises(ModelLoadError, match="config"):
            ModelSession.load(b"weights", b"not a tokenizer", b"{broken")
        fake_t5_module.T5SequenceModel.from_bytes.assert_not_called()

    def test_bad_tokenizer_fails_before_weights(self, fake_t5_module):
        with pytest.raises(ModelLoadError, match="tokenizer"):
            ModelSession.load(b"weights", b"not a tokenizer", CONFIG_JSON)
        fake_t5_module.T5SequenceModel.from_bytes.assert_not_called()

    def test_weights_handed_to_backend(self, fake_t5_module):
        session = ModelSession.load(b"weights", tokenizer_json(), CONFIG_JSON)
        fake_t5_module.T5SequenceModel.from_bytes.assert_called_once()
        weights, raw = fake_t5_module.T5SequenceModel.from_bytes.call_args[0]
        assert weights == b"weights"
        assert raw["d_model"] == 8
        assert session.config.eos_token_id == 1

    def test_backend_failure_propagates(self, fake_t5_module):
        fake_t5_module.T5SequenceModel.from_bytes.side_effect = ModelLoadError("bad weights")
        with pytest.raises(ModelLoadError, match="bad weights"):
            ModelSession.load(b"weights", tokenizer_json(), CONFIG_JSON)


@pytest.mark.unit
class TestModelSessionFromSettings:
    def test_reads_config_tokenizer_then_weights(self):
        settings = ModelSettings(
            weights_path="w.safetensors",
            tokenizer_path="tokenizer.json",
            config_path="config.json",
            fetch_timeout_seconds=2.0,
        )
        assets = {"config.json": b"c", "tokenizer.json": b"t", "w.safetensors": b"w"}
        with (
            patch(
                "transglyph.generation.session.read_asset",
                side_effect=lambda loc, timeout_seconds: assets[loc],
            ) as read,
            patch.object(ModelSession, "load", return_value="session") as load,
        ):
            assert ModelSession.from_settings(settings) == "session"

        assert [c.args[0] for c in read.call_args_list] == [
            "config.json",
            "tokenizer.json",
            "w.safetensors",
        ]
        load.assert_called_once_with(b"w", b"t", b"c")

    def test_missing_asset_raises(self, tmp_path):
        settings = ModelSettings(config_path=str(tmp_path / "absent.json"))
        with pytest.raises(ModelLoadError):
            ModelSession.from_settings(settings)


@pytest.mark.unit
class TestModelSessionGenerate:
    def test_generates_through_engine(self):
        session = ModelSession(
            model=ScriptedModel([2, 3, EOS_ID]),
            tokenizer=FakeTokenizer(),
            config=ModelConfig(pad_token_id=0, eos_token_id=1, raw={}),
        )
        assert session.generate(GenerationParams("translate:Hello world.")) == " Hallo Welt"
