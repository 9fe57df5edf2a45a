# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Layer normalization.

Each row is centered on its mean and divided by sqrt(variance + eps),
then scaled by ``gamma`` and shifted by ``beta``. The variance is the
population variance (divide by n, not n - 1), so a normalized row has
mean 0 and variance 1 before the affine step.
"""

import torch
import torch.nn as nn


class LayerNorm(nn.Module):
    """
    Per-row LayerNorm with learned scale and shift.

    Args:
        dim: Feature dimension to normalize over.
        eps: Small constant added to the variance.
    """

    def __init__(self, dim: int, eps: float = 1e-5) -> None:
        super().__init__()
        self.eps = eps
        self.gamma = nn.Parameter(torch.ones(dim))
        self.beta = nn.Parameter(torch.zeros(dim))

    def normalize(self, x: torch.Tensor) -> torch.Tensor:
        """Normalization without the affine step."""
        mean = x.mean(dim=-1, keepdim=True)
        variance = (x - mean).pow(2).mean(dim=-1, keepdim=True)
        return (x - mean) / torch.sqrt(variance + self.eps)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return self.normalize(x) * self.gamma + self.beta
