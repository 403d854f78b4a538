"""Hugging Face ``tokenizers`` adapter.

Wraps a ``tokenizers.Tokenizer`` built from the raw ``tokenizer.json``
bytes so that it satisfies the engine's ``TextTokenizer`` protocol.
"""

from __future__ import annotations

from tokenizers import Tokenizer

from transglyph.errors import ModelLoadError, TokenizeError


class HuggingFaceTokenizer:
    """``TextTokenizer`` backed by a Hugging Face fast tokenizer."""

    def __init__(self, tokenizer: Tokenizer) -> None:
        self._tokenizer = tokenizer

    @classmethod
    def from_bytes(cls, data: bytes) -> HuggingFaceTokenizer:
        """Build the tokenizer from serialized ``tokenizer.json`` bytes.

        Raises:
            ModelLoadError: If the bytes are not a valid tokenizer definition.
        """
        try:
            return cls(Tokenizer.from_str(data.decode("utf-8")))
        except Exception as exc:
            raise ModelLoadError(f"Failed to load tokenizer: {exc}") from exc

    def encode_text(self, text: str) -> list[int]:
        try:
            return list(self._tokenizer.encode(text, add_special_tokens=True).ids)
        except Exception as exc:
            raise TokenizeError(f"Failed to tokenize {text[:40]!r}: {exc}") from exc

    def id_to_text(self, token_id: int) -> str | None:
        return self._tokenizer.id_to_token(token_id)
