# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Affine projection with the weight stored as (in_features, out_features).

nn.Linear keeps its weight transposed, (out, in). Storing it the other way
round makes ``x @ weight + bias`` the literal computation and keeps the
parameter shapes matching the row-vector convention used everywhere else
in this package.
"""

import torch
import torch.nn as nn


class Linear(nn.Module):
    """
    y = x W + b.

    Parameters are allocated empty; init_weights fills them.

    Args:
        in_features: Width of each input row.
        out_features: Width of each output row.
    """

    def __init__(self, in_features: int, out_features: int) -> None:
        super().__init__()
        self.in_features = in_features
        self.out_features = out_features
        self.weight = nn.Parameter(torch.empty(in_features, out_features))
        self.bias = nn.Parameter(torch.empty(out_features))

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return x @ self.weight + self.bias

    def extra_repr(self) -> str:
        return f"in_features={self.in_features}, out_features={self.out_features}"
