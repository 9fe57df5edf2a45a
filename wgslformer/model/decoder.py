# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Decoder stack.

Each layer is post-norm with three sublayers:
    x = norm1(x + self_attn(x, x, x, self_mask))
    x = norm2(x + cross_attn(x, memory, memory, cross_mask))
    x = norm3(x + ffn(x))

``memory`` is the output of the last encoder layer. The self mask combines
decoder padding with the look-ahead mask; the cross mask only blocks
encoder padding.
"""

from typing import Optional

import torch
import torch.nn as nn

from wgslformer.model.attention import MultiHeadAttention
from wgslformer.model.layers.feedforward import FeedForward
from wgslformer.model.layers.norm import LayerNorm


class DecoderLayer(nn.Module):
    """Masked self-attention, cross-attention and feedforward, each with residual and norm."""

    def __init__(self, d_model: int, nhead: int, dim_feedforward: int, norm_eps: float = 1e-5) -> None:
        super().__init__()
        self.self_attn = MultiHeadAttention(d_model, nhead)
        self.cross_attn = MultiHeadAttention(d_model, nhead)
        self.feed_forward = FeedForward(d_model, dim_feedforward)
        self.norm1 = LayerNorm(d_model, eps=norm_eps)
        self.norm2 = LayerNorm(d_model, eps=norm_eps)
        self.norm3 = LayerNorm(d_model, eps=norm_eps)

    def forward(
        self,
        x: torch.Tensor,
        memory: torch.Tensor,
        self_mask: Optional[torch.Tensor] = None,
        cross_mask: Optional[torch.Tensor] = None,
    ) -> torch.Tensor:
        x = self.norm1(x + self.self_attn(x, x, x, self_mask))
        x = self.norm2(x + self.cross_attn(x, memory, memory, cross_mask))
        return self.norm3(x + self.feed_forward(x))


class Decoder(nn.Module):
    """A stack of ``num_layers`` identical decoder layers sharing one encoder memory."""

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
            DecoderLayer(d_model, nhead, dim_feedforward, norm_eps)
            for _ in range(num_layers)
        ])

    def forward(
        self,
        x: torch.Tensor,
        memory: torch.Tensor,
        self_mask: Optional[torch.Tensor] = None,
        cross_mask: Optional[torch.Tensor] = None,
    ) -> torch.Tensor:
        for layer in self.layers:
            x = layer(x, memory, self_mask, cross_mask)
        return x
