"""BPE tokenization backed by tiktoken."""
from __future__ import annotations

import logging

import tiktoken

from tokenkit.catalog.types import ModelInfo
from tokenkit.engines.base import TokenizationEngine, TokenizationResult

log = logging.getLogger("tokenkit.engines")

DEFAULT_ENCODING = "cl100k_base"


class TiktokenEngine(TokenizationEngine):
    """Counts tokens with the model's BPE encoding.

    The encoding is chosen from, in order:

    1. ``ModelInfo.encoding`` when it names a known tiktoken encoding
    2. tiktoken's own model-name mapping applied to ``ModelInfo.id``
    3. ``default_encoding``

    Encodings are cached inside tiktoken and safe to share across threads.
    """

    name = "tiktoken"

    def __init__(self, default_encoding: str = DEFAULT_ENCODING, with_tokens: bool = True) -> None:
        self.default_encoding = default_encoding
        self.with_tokens = with_tokens

    def tokenize(self, text: str, model: ModelInfo | None = None) -> TokenizationResult:
        if not text:
            return TokenizationResult(token_count=0, tokens=() if self.with_tokens else None)
        enc = self.encoding_for(model)
        ids = enc.encode(text, disallowed_special=())
        tokens = None
        if self.with_tokens:
            tokens = tuple(
                enc.decode_single_token_bytes(t).decode("utf-8", errors="replace") for t in ids
            )
        return TokenizationResult(token_count=len(ids), tokens=tokens)

    def encoding_for(self, model: ModelInfo | None) -> tiktoken.Encoding:
        if model is not None and model.encoding:
            try:
                return tiktoken.get_encoding(model.encoding)
            except ValueError:
                log.warning("Unknown encoding %r for model %s", model.encoding, model.id)
        if model is not None:
            try:
                return tiktoken.encoding_for_model(model.id)
            except KeyError:
                pass
        return tiktoken.get_encoding(self.default_encoding)
