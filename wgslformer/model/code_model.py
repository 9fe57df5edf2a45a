# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CodeGenerationModel: the facade callers actually use.

It picks the architecture from the config and exposes next-token
prediction: ids in, one row of vocab-sized logits out.

The LSTM architecture is a stub. It owns no parameters, reports 0 from
num_parameters() and always returns all-zero logits. A warning is logged
when one is built so nobody mistakes it for a trained recurrent model.
"""

from typing import Optional

import torch
import torch.nn as nn

from wgslformer.config.schema import ModelConfig
from wgslformer.logging.logger import get_logger
from wgslformer.model.config import ModelArchitecture, TransformerModelConfig
from wgslformer.model.transformer import Seq2SeqTransformer, TokenIds

logger = get_logger(__name__)


class CodeGenerationModel(nn.Module):
    """
    Next-token predictor over WGSL token ids.

    Args:
        config: Architecture dimensions and the architecture choice.
    """

    def __init__(self, config: TransformerModelConfig) -> None:
        super().__init__()
        self.config = config
        self.architecture = config.architecture
        self.transformer: Optional[Seq2SeqTransformer] = None

        if self.architecture is ModelArchitecture.TRANSFORMER:
            self.transformer = Seq2SeqTransformer(config)
        else:
            logger.warning(
                "architecture_not_implemented",
                extra={
                    "architecture": self.architecture.value,
                    "behavior": "zero logits, no parameters",
                },
            )

    @classmethod
    def from_model_config(cls, vocab_size: int, model_config: ModelConfig) -> "CodeGenerationModel":
        """Build from the validated ``model`` section of a YAML config."""
        return cls(TransformerModelConfig.from_schema(model_config, vocab_size))

    @property
    def vocab_size(self) -> int:
        return self.config.vocab_size

    @property
    def max_seq_len(self) -> int:
        return self.config.max_seq_len

    @torch.no_grad()
    def forward(self, token_ids: TokenIds) -> torch.Tensor:
        """
        Predict the token that follows ``token_ids``.

        Returns:
            1D tensor of vocab_size finite logits (pre-softmax).
        """
        if self.transformer is None:
            return torch.zeros(self.config.vocab_size)
        return self.transformer(token_ids)[-1]

    def num_parameters(self) -> int:
        if self.transformer is None:
            return 0
        return self.transformer.num_parameters()
