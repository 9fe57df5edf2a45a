# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Multi-head scaled dot-product attention.

The computation, for unbatched inputs of shape (seq_len, d_model):
  1. Project query, key and value inputs through their own Linear
  2. Split the width into nhead contiguous chunks of head_dim channels
  3. Per head: scores = Q K^T / sqrt(head_dim), plus the additive mask
  4. Turn each score row into weights with stable_softmax
  5. Weighted sum of value rows, heads concatenated back to d_model
  6. Output Linear

The same module serves encoder self-attention, masked decoder
self-attention and cross-attention; only the inputs and mask differ.
The module keeps no per-call state.
"""

import math
from typing import Optional, Union

import torch
import torch.nn as nn

from wgslformer.model.functional import stable_softmax
from wgslformer.model.layers.linear import Linear


class MultiHeadAttention(nn.Module):
    """
    Multi-head attention with additive masking.

    Args:
        d_model: Model width.
        nhead: Number of heads. Must divide d_model.

    Raises:
        ValueError: If nhead is not positive or doesn't divide d_model.
    """

    def __init__(self, d_model: int, nhead: int) -> None:
        super().__init__()
        if nhead < 1 or d_model % nhead != 0:
            raise ValueError(
                f"d_model ({d_model}) must be divisible by nhead ({nhead})"
            )

        self.d_model = d_model
        self.nhead = nhead
        self.head_dim = d_model // nhead
        self.scale = 1.0 / math.sqrt(self.head_dim)

        self.w_q = Linear(d_model, d_model)
        self.w_k = Linear(d_model, d_model)
        self.w_v = Linear(d_model, d_model)
        self.w_o = Linear(d_model, d_model)

    def _split_heads(self, x: torch.Tensor) -> torch.Tensor:
        """(seq_len, d_model) -> (nhead, seq_len, head_dim)"""
        return x.reshape(x.shape[0], self.nhead, self.head_dim).transpose(0, 1)

    def forward(
        self,
        query: torch.Tensor,
        key: torch.Tensor,
        value: torch.Tensor,
        mask: Optional[torch.Tensor] = None,
        return_weights: bool = False,
    ) -> Union[torch.Tensor, tuple[torch.Tensor, torch.Tensor]]:
        """
        Attend from ``query`` rows to ``key``/``value`` rows.

        Args:
            query: (query_len, d_model).
            key: (key_len, d_model).
            value: (key_len, d_model).
            mask: Optional additive mask of shape (query_len, key_len) with
                entries 0 or -inf. Shared by all heads.
            return_weights: Also return the attention weights.

        Returns:
            Output of shape (query_len, d_model), and when ``return_weights``
            is set, the weights of shape (nhead, query_len, key_len).
        """
        query_len = query.shape[0]

        q = self._split_heads(self.w_q(query))
        k = self._split_heads(self.w_k(key))
        v = self._split_heads(self.w_v(value))

        scores = (q @ k.transpose(-2, -1)) * self.scale
        if mask is not None:
            scores = scores + mask

        weights = stable_softmax(scores)
        context = weights @ v

        context = context.transpose(0, 1).reshape(query_len, self.d_model)
        output = self.w_o(context)

        if return_weights:
            return output, weights
        return output
