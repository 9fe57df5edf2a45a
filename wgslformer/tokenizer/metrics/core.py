# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Coverage numbers for a fitted WGSL tokenizer.

A fit over one set of shaders and an encode over another tells you how
well the vocabulary generalises. The unknown rate is the figure that
matters most: every <unk> is a token the model can never produce.
"""

from collections.abc import Sequence
from typing import NamedTuple

from wgslformer.logging.logger import get_logger
from wgslformer.tokenizer.special import UNK_ID
from wgslformer.tokenizer.wgsl import WGSLTokenizer


class TokenizerMetrics(NamedTuple):
    """Summary of how a tokenizer handles a sample of shader sources."""

    vocab_size: int
    avg_tokens_per_text: float
    unk_rate: float
    avg_token_length: float
    total_texts: int
    total_tokens: int


def compute_metrics(
    tokenizer: WGSLTokenizer,
    sample_texts: Sequence[str],
) -> TokenizerMetrics:
    """
    Encode every sample and aggregate coverage statistics.

    avg_token_length is measured on the lexed token strings, so skipped
    whitespace doesn't inflate it.
    """
    logger = get_logger("wgslformer.tokenizer.metrics")

    if not sample_texts:
        logger.warning("metrics_no_samples")
        return TokenizerMetrics(
            vocab_size=tokenizer.vocab_size,
            avg_tokens_per_text=0.0,
            unk_rate=0.0,
            avg_token_length=0.0,
            total_texts=0,
            total_tokens=0,
        )

    total_tokens = 0
    total_unk = 0
    total_chars = 0

    for text in sample_texts:
        tokens = tokenizer.tokenize(text)
        ids = tokenizer.encode(tokens)
        total_tokens += len(ids)
        total_unk += ids.count(UNK_ID)
        total_chars += sum(len(token) for token in tokens)

    total_texts = len(sample_texts)

    metrics = TokenizerMetrics(
        vocab_size=tokenizer.vocab_size,
        avg_tokens_per_text=round(total_tokens / total_texts, 4),
        unk_rate=round(total_unk / total_tokens, 6) if total_tokens else 0.0,
        avg_token_length=round(total_chars / total_tokens, 4) if total_tokens else 0.0,
        total_texts=total_texts,
        total_tokens=total_tokens,
    )

    logger.info(
        "metrics_computed",
        extra={
            "vocab_size": metrics.vocab_size,
            "avg_tokens_per_text": metrics.avg_tokens_per_text,
            "unk_rate": metrics.unk_rate,
            "avg_token_length": metrics.avg_token_length,
        },
    )
    return metrics
