# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Position-wise feedforward network.

Structure: Linear -> ReLU -> Linear, applied to each row independently.
"""

import torch
import torch.nn as nn

from wgslformer.model.layers.linear import Linear


class FeedForward(nn.Module):
    """
    Two affine layers with a ReLU in between.

    Args:
        d_model: Model width (input and output).
        dim_feedforward: Hidden width.
    """

    def __init__(self, d_model: int, dim_feedforward: int) -> None:
        super().__init__()
        self.linear1 = Linear(d_model, dim_feedforward)
        self.linear2 = Linear(dim_feedforward, d_model)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return self.linear2(torch.relu(self.linear1(x)))
