# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
WGSL tokenizer: lexing, vocabulary fitting, encoding and persistence.

The tokenizer is deliberately simple. Lexing is the fixed pattern-priority
scan from ``tokenizer.lexer``; the vocabulary is built by counting lexed
tokens over a corpus and keeping the ones that show up often enough.

Round-tripping is lossy on purpose:
  - encode() maps anything it doesn't know to <unk>
  - decode() drops ids that have no token
so decode(encode(tokens)) equals tokens only when every token is known.

Persistence writes a small JSON document with the vocabulary, max_length
and the lowercase flag. Compiled regexes are rebuilt on load.
"""

import json
import logging
from collections import Counter
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, Optional

from wgslformer.config.schema import TokenizerConfig
from wgslformer.logging.logger import get_logger
from wgslformer.tokenizer.lexer.core import compile_patterns, lex
from wgslformer.tokenizer.special import UNK_ID
from wgslformer.tokenizer.vocab.core import Vocabulary
from wgslformer.utils.filesystem import atomic_write, safe_read

logger: logging.Logger = get_logger(__name__)


class WGSLTokenizer:
    """
    Tokenizer specialised for WGSL syntax.

    Args:
        max_length: Maximum sequence length stored alongside the vocabulary.
            The tokenizer itself never truncates; the model does.
        lowercase: Lowercase text before lexing.
        min_frequency: Default corpus count a token needs in ``fit``.
    """

    def __init__(
        self, max_length: int = 512, lowercase: bool = False, min_frequency: int = 1
    ) -> None:
        self.max_length = max_length
        self.lowercase = lowercase
        self.min_frequency = min_frequency
        self.vocab = Vocabulary()
        self._patterns = compile_patterns()

    @classmethod
    def from_config(cls, config: TokenizerConfig) -> "WGSLTokenizer":
        if config.tokenizer_type.lower() != "wgsl":
            raise ValueError(
                f"Unsupported tokenizer_type '{config.tokenizer_type}'; only 'wgsl' is available"
            )
        return cls(
            max_length=config.max_length,
            lowercase=config.lowercase,
            min_frequency=config.min_frequency,
        )

    @property
    def vocab_size(self) -> int:
        return len(self.vocab)

    def tokenize(self, text: str) -> list[str]:
        """Split WGSL source into tokens. Never raises on odd input."""
        if self.lowercase:
            text = text.lower()
        return lex(text, self._patterns)

    def fit(self, texts: Iterable[str], min_frequency: Optional[int] = None) -> int:
        """
        Grow the vocabulary from a corpus.

        Every token that occurs at least ``min_frequency`` times across all
        texts and isn't in the vocabulary yet gets the next free id, in the
        order tokens were first seen. Without an explicit ``min_frequency``
        the tokenizer's own setting applies.

        Returns:
            Number of tokens added.
        """
        if min_frequency is None:
            min_frequency = self.min_frequency
        frequencies: Counter[str] = Counter()
        text_count = 0
        for text in texts:
            frequencies.update(self.tokenize(text))
            text_count += 1

        added = self.vocab.add_all(
            token for token, count in frequencies.items() if count >= min_frequency
        )

        logger.info(
            "tokenizer_fitted",
            extra={
                "texts": text_count,
                "distinct_tokens": len(frequencies),
                "added": added,
                "vocab_size": self.vocab_size,
                "min_frequency": min_frequency,
            },
        )
        return added

    def encode(self, tokens: Sequence[str]) -> list[int]:
        """Map tokens to ids, using the unknown id for anything unseen."""
        ids: list[int] = []
        for token in tokens:
            token_id = self.vocab.get_id(token)
            ids.append(UNK_ID if token_id is None else token_id)
        return ids

    def encode_text(self, text: str) -> list[int]:
        return self.encode(self.tokenize(text))

    def decode(self, ids: Iterable[int]) -> list[str]:
        """Map ids back to tokens, skipping ids the vocabulary doesn't have."""
        tokens: list[str] = []
        for token_id in ids:
            token = self.vocab.get_token(int(token_id))
            if token is not None:
                tokens.append(token)
        return tokens

    def decode_to_text(self, ids: Iterable[int]) -> str:
        """Decode and join with single spaces. Source spacing is not recoverable."""
        return " ".join(self.decode(ids))

    def to_dict(self) -> dict[str, Any]:
        return {
            "vocab": self.vocab.to_dict(),
            "max_length": self.max_length,
            "lowercase": self.lowercase,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WGSLTokenizer":
        """
        Restore a tokenizer from ``to_dict`` output.

        Raises:
            ValueError: If required fields are missing or have the wrong type.
        """
        missing = [key for key in ("vocab", "max_length", "lowercase") if key not in data]
        if missing:
            raise ValueError(f"Tokenizer document is missing fields: {missing}")
        if not isinstance(data["vocab"], dict):
            raise ValueError("Tokenizer 'vocab' must be a mapping of token to id")
        if not isinstance(data["max_length"], int) or isinstance(data["max_length"], bool):
            raise ValueError("Tokenizer 'max_length' must be an integer")
        if not isinstance(data["lowercase"], bool):
            raise ValueError("Tokenizer 'lowercase' must be a boolean")

        tokenizer = cls(max_length=data["max_length"], lowercase=data["lowercase"])
        tokenizer.vocab = Vocabulary.from_dict(data["vocab"])
        return tokenizer

    def save(self, path: Path) -> None:
        """Write the tokenizer as pretty-printed JSON, atomically."""
        content = json.dumps(self.to_dict(), indent=2, ensure_ascii=False) + "\n"
        atomic_write(path, content)
        logger.info(
            "tokenizer_saved",
            extra={"path": str(path), "vocab_size": self.vocab_size},
        )

    @classmethod
    def load(cls, path: Path) -> "WGSLTokenizer":
        """
        Load a tokenizer written by ``save``.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ValueError: If the file isn't valid JSON or isn't a tokenizer document.
        """
        raw = safe_read(path)
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as err:
            raise ValueError(f"Invalid tokenizer JSON in {path}: {err}") from err
        if not isinstance(data, dict):
            raise ValueError(f"Tokenizer file {path} must hold a JSON object")

        tokenizer = cls.from_dict(data)
        logger.info(
            "tokenizer_loaded",
            extra={"path": str(path), "vocab_size": tokenizer.vocab_size},
        )
        return tokenizer
