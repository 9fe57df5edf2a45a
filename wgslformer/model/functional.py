# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Numerically guarded softmax.

torch.softmax returns NaN for a row that is entirely -inf, which is exactly
what a fully masked attention row looks like. This version never does:

  - the row max is taken over finite entries only
  - non-finite entries (masked -inf, stray +inf or NaN) get weight 0
  - a row with no finite entry, or whose exponentials sum to 0, becomes
    uniform over the row

Every row of the result therefore sums to 1.
"""

import torch


def stable_softmax(scores: torch.Tensor) -> torch.Tensor:
    """
    Softmax over the last dimension with a uniform fallback.

    Args:
        scores: Tensor of shape (..., n).

    Returns:
        Probabilities with the same shape and dtype as ``scores``.
    """
    if scores.shape[-1] == 0:
        return scores.clone()

    finite = torch.isfinite(scores)
    masked = torch.where(finite, scores, torch.full_like(scores, float("-inf")))
    row_max = masked.amax(dim=-1, keepdim=True)
    row_has_finite = torch.isfinite(row_max)

    shifted = torch.where(finite, scores - torch.where(row_has_finite, row_max, 0.0), 0.0)
    exps = torch.where(finite, torch.exp(shifted), torch.zeros_like(scores))
    total = exps.sum(dim=-1, keepdim=True)

    uniform = torch.full_like(scores, 1.0 / scores.shape[-1])
    use_uniform = (~row_has_finite) | (total <= 0.0)
    safe_total = torch.where(use_uniform, torch.ones_like(total), total)

    return torch.where(use_uniform, uniform, exps / safe_total)
