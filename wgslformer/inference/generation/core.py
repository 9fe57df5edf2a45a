# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Next-token selection.

Three modes, picked by the config:

  1. Greedy (temperature=0.0): argmax of the logits. Deterministic.
  2. Temperature sampling: divide logits by temperature, then sample.
  3. Top-k: before sampling, drop everything outside the k best tokens.

Temperature and top-k combine. Probabilities come from the same guarded
softmax the attention layers use, so a logits row full of -inf still gives
a valid distribution.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import torch

from wgslformer.config.schema import RuntimeConfig
from wgslformer.logging.logger import get_logger
from wgslformer.model.functional import stable_softmax
from wgslformer.tokenizer.special import EOS_ID

logger: logging.Logger = get_logger(__name__)

_GREEDY_THRESHOLD = 1e-8


@dataclass(frozen=True)
class GenerationConfig:
    """
    How many tokens to produce and how to pick each one.

    The defaults give greedy decoding, which is reproducible without a seed.
    """

    max_tokens: int = 64
    temperature: float = 0.0
    top_k: int = 0
    seed: int = 42
    eos_token_id: int = EOS_ID

    @classmethod
    def from_runtime(cls, runtime: RuntimeConfig) -> "GenerationConfig":
        return cls(
            max_tokens=runtime.max_new_tokens,
            temperature=runtime.temperature,
            top_k=runtime.top_k,
            seed=runtime.seed,
        )

    @property
    def is_greedy(self) -> bool:
        return self.temperature <= _GREEDY_THRESHOLD


def sample_next_token(
    logits: torch.Tensor,
    config: GenerationConfig,
    generator: Optional[torch.Generator] = None,
) -> int:
    """
    Pick the next token id from a logits vector.

    Args:
        logits: Shape (vocab_size,). A 2D input uses its last row.
        config: Temperature and top_k settings.
        generator: RNG for sampling. Ignored in greedy mode.

    Returns:
        The selected token id.
    """
    if logits.dim() > 1:
        logits = logits[-1]

    if config.is_greedy:
        return int(logits.argmax(dim=-1).item())

    scaled = logits / config.temperature

    if config.top_k > 0:
        top_values, _ = torch.topk(scaled, min(config.top_k, scaled.size(-1)))
        threshold = top_values[-1]
        scaled = scaled.masked_fill(scaled < threshold, float("-inf"))

    probs = stable_softmax(scaled)
    selected = torch.multinomial(probs, num_samples=1, generator=generator)
    return int(selected.item())
