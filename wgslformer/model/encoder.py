# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Encoder stack.

Each layer is post-norm:
    x = norm1(x + self_attn(x, x, x, mask))
    x = norm2(x + ffn(x))
Layers run strictly in order.
"""

from typing import Optional

import torch
import torch.nn as nn

from wgslformer.model.attention import MultiHeadAttention
from wgslformer.model.layers.feedforward import FeedForward
from wgslformer.model.layers.norm import LayerNorm


class EncoderLayer(nn.Module):
    """Self-attention and feedforward, each followed by residual add and LayerNorm."""

    def __init__(self, d_model: int, nhead: int, dim_feedforward: int, norm_eps: float = 1e-5) -> None:
        super().__init__()
        self.self_attn = MultiHeadAttention(d_model, nhead)
        self.feed_forward = FeedForward(d_model, dim_feedforward)
        self.norm1 = LayerNorm(d_model, eps=norm_eps)
        self.norm2 = LayerNorm(d_model, eps=norm_eps)

    def forward(self, x: torch.Tensor, mask: Optional[torch.Tensor] = None) -> torch.Tensor:
        x = self.norm1(x + self.self_attn(x, x, x, mask))
        return self.norm2(x + self.feed_forward(x))


class Encoder(nn.Module):
    """A stack of ``num_layers`` identical encoder layers."""

    def __init__(
        self,
        num_layers: int,
        d_model: int,
        nhead: int,
        dim_feedforward: int,
        norm_eps: float = 1e-5,
    ) -> None:
        super().__init__()
        self.layers = nn.ModuleList([
            EncoderLayer(d_model, nhead, dim_feedforward, norm_eps)
            for _ in range(num_layers)
        ])

    def forward(self, x: torch.Tensor, mask: Optional[torch.Tensor] = None) -> torch.Tensor:
        for layer in self.layers:
            x = layer(x, mask)
        return x
