# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Autoregressive WGSL generation.

WGSLGenerator ties the tokenizer, the model and the sampling strategy
together. generate("fn main") tokenizes the prompt, calls the model once
per new token with the running context, and decodes what came out.

The model re-reads the whole context on every step; there is no cache.
The context fed to the model is capped at max_seq_len - 1 ids, the most
recent ones, so the decoder stream (<sos> + context) still fits the
positional table without wrapping.
"""

import logging
import time
from collections.abc import Sequence
from typing import NamedTuple, Optional

import torch

from wgslformer.inference.generation.core import GenerationConfig, sample_next_token
from wgslformer.logging.logger import get_logger
from wgslformer.model.code_model import CodeGenerationModel
from wgslformer.tokenizer.wgsl import WGSLTokenizer

logger: logging.Logger = get_logger(__name__)


class GenerationResult(NamedTuple):
    """Output of one generate() call. ``token_ids`` excludes the prompt and any <eos>."""

    text: str
    token_ids: list[int]
    prompt_length: int
    stopped_on_eos: bool


class WGSLGenerator:
    """
    Prompt in, continuation out.

    Holds no per-request state: every call gets its own context list and RNG.
    """

    def __init__(self, model: CodeGenerationModel, tokenizer: WGSLTokenizer) -> None:
        self._model = model
        self._tokenizer = tokenizer

    @property
    def context_window(self) -> int:
        return max(self._model.max_seq_len - 1, 1)

    def generate_ids(
        self,
        prompt_ids: Sequence[int],
        config: GenerationConfig,
    ) -> tuple[list[int], bool]:
        """
        Extend ``prompt_ids`` one token at a time.

        Stops after ``config.max_tokens`` new tokens or as soon as the
        end-of-sequence id is picked. The end id itself is not returned.

        Returns:
            (new token ids, whether generation stopped on end-of-sequence)
        """
        generator: Optional[torch.Generator] = None
        if not config.is_greedy:
            generator = torch.Generator()
            generator.manual_seed(config.seed)

        context = list(prompt_ids)
        generated: list[int] = []

        for _ in range(config.max_tokens):
            logits = self._model(context[-self.context_window:])
            next_token = sample_next_token(logits, config, generator)

            if next_token == config.eos_token_id:
                return generated, True

            generated.append(next_token)
            context.append(next_token)

        return generated, False

    def generate(self, prompt: str, config: Optional[GenerationConfig] = None) -> GenerationResult:
        """Tokenize ``prompt``, generate, and decode the new tokens to space-joined text."""
        config = config or GenerationConfig()

        start = time.monotonic()
        prompt_ids = self._tokenizer.encode_text(prompt)
        generated, stopped_on_eos = self.generate_ids(prompt_ids, config)
        elapsed_ms = (time.monotonic() - start) * 1000.0

        logger.info(
            "generation_finished",
            extra={
                "prompt_tokens": len(prompt_ids),
                "generated_tokens": len(generated),
                "stopped_on_eos": stopped_on_eos,
                "total_time_ms": round(elapsed_ms, 2),
            },
        )

        return GenerationResult(
            text=self._tokenizer.decode_to_text(generated),
            token_ids=generated,
            prompt_length=len(prompt_ids),
            stopped_on_eos=stopped_on_eos,
        )
