# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Encoder-decoder transformer for WGSL next-token prediction.

Topology:
  encoder ids -> embedding + PE -> Encoder ----------------+
                                                           | memory
  <sos> + ids -> embedding + PE -> Decoder (self + cross) <+
              -> output Linear -> logits (one row per decoder position)

The decoder input is the encoder input shifted right by one <sos> and cut
back to max_seq_len. For shorter inputs the last decoder row predicts the
token that follows the input.

Inputs are unbatched 1D id sequences. Before anything else they are
sanitized: cut to max_seq_len, and every id outside [0, vocab_size) is
replaced by <unk>. Nothing about the ids can make forward raise.
"""

from collections.abc import Sequence
from typing import Union

import torch
import torch.nn as nn

from wgslformer.model.config import TransformerModelConfig
from wgslformer.model.decoder import Decoder
from wgslformer.model.encoder import Encoder
from wgslformer.model.init.weights import init_weights
from wgslformer.model.layers.linear import Linear
from wgslformer.model.layers.positional import PositionalEncoding
from wgslformer.model.masks import build_masks
from wgslformer.tokenizer.special import SOS_ID, UNK_ID

TokenIds = Union[Sequence[int], torch.Tensor]


class Seq2SeqTransformer(nn.Module):
    """
    Inference-only encoder-decoder transformer.

    Parameters are initialized deterministically from ``config.seed`` and
    then frozen. Token embeddings are shared by both streams and are not
    scaled by sqrt(d_model).

    Args:
        config: TransformerModelConfig with all architecture dimensions.
    """

    def __init__(self, config: TransformerModelConfig) -> None:
        super().__init__()
        self.config = config

        self.embedding = nn.Embedding(config.vocab_size, config.d_model)
        self.positional = PositionalEncoding(config.max_seq_len, config.d_model)
        self.encoder = Encoder(
            config.num_layers,
            config.d_model,
            config.nhead,
            config.dim_feedforward,
            config.norm_eps,
        )
        self.decoder = Decoder(
            config.num_layers,
            config.d_model,
            config.nhead,
            config.dim_feedforward,
            config.norm_eps,
        )
        self.output = Linear(config.d_model, config.vocab_size)

        init_weights(self, seed=config.seed, init_range=config.init_range)
        self.requires_grad_(False)
        self.eval()

    def sanitize_ids(self, token_ids: TokenIds) -> torch.Tensor:
        """
        Truncate to max_seq_len and map out-of-range ids to <unk>.

        Python ints are remapped before the tensor is built, so ids too
        large for int64 become <unk> as well.

        Returns:
            1D int64 tensor of length <= max_seq_len.
        """
        limit = self.config.max_seq_len
        vocab_size = self.config.vocab_size
        if isinstance(token_ids, torch.Tensor):
            ids = token_ids.to(torch.long).reshape(-1)[:limit]
            in_range = (ids >= 0) & (ids < vocab_size)
            return torch.where(in_range, ids, torch.full_like(ids, UNK_ID))

        kept = [int(i) for i in list(token_ids)[:limit]]
        return torch.tensor(
            [i if 0 <= i < vocab_size else UNK_ID for i in kept], dtype=torch.long
        )

    def embed(self, ids: torch.Tensor) -> torch.Tensor:
        """Token embedding plus positional rows, shape (len, d_model)."""
        return self.positional(self.embedding(ids))

    @torch.no_grad()
    def forward(self, token_ids: TokenIds) -> torch.Tensor:
        """
        Run both stacks over one input sequence.

        Args:
            token_ids: Encoder input ids, any integers.

        Returns:
            Logits of shape (decoder_len, vocab_size), where decoder_len is
            the sanitized input length plus one, capped at max_seq_len.
        """
        encoder_ids = self.sanitize_ids(token_ids)
        decoder_ids = torch.cat([torch.tensor([SOS_ID], dtype=torch.long), encoder_ids])
        decoder_ids = decoder_ids[: self.config.max_seq_len]

        encoder_mask, decoder_mask, cross_mask = build_masks(encoder_ids, decoder_ids)

        memory = self.encoder(self.embed(encoder_ids), encoder_mask)
        hidden = self.decoder(self.embed(decoder_ids), memory, decoder_mask, cross_mask)
        return self.output(hidden)

    def num_parameters(self) -> int:
        """Total element count of every parameter. The positional table is a buffer and isn't counted."""
        return sum(p.numel() for p in self.parameters())
