# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Sinusoidal positional encoding.

For position p and channel i of a width-d model:

    angle(p, i) = p / 10000 ** (2 * (i // 2) / d)
    PE[p, i]    = sin(angle) if i is even else cos(angle)

The table is computed once and registered as a buffer, so it has no
parameters and never shows up in the parameter count.

Positions past the end of the table wrap around (row = p % max_seq_len)
instead of raising. The transformer cuts both of its streams to
max_seq_len, so it only ever reads rows inside the table; the wrap
applies to direct callers.
"""

import torch
import torch.nn as nn


def sinusoidal_table(max_seq_len: int, d_model: int) -> torch.Tensor:
    """
    Build the (max_seq_len, d_model) positional table.

    Works for odd widths too; the last channel is then a sine.
    """
    positions = torch.arange(max_seq_len, dtype=torch.float64).unsqueeze(1)
    channels = torch.arange(d_model)
    exponents = (2 * (channels // 2)).to(torch.float64) / d_model
    angles = positions / torch.pow(10000.0, exponents).unsqueeze(0)

    table = torch.where(channels % 2 == 0, torch.sin(angles), torch.cos(angles))
    return table.to(torch.float32)


class PositionalEncoding(nn.Module):
    """
    Holds the fixed table and hands out rows for a sequence.

    Args:
        max_seq_len: Number of rows in the table.
        d_model: Model width.
    """

    table: torch.Tensor

    def __init__(self, max_seq_len: int, d_model: int) -> None:
        super().__init__()
        self.max_seq_len = max_seq_len
        self.register_buffer("table", sinusoidal_table(max_seq_len, d_model), persistent=False)

    def rows(self, seq_len: int) -> torch.Tensor:
        """Rows for positions 0..seq_len-1, wrapping modulo the table length."""
        positions = torch.arange(seq_len) % self.max_seq_len
        return self.table[positions]

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        """Add positional rows to embeddings of shape (seq_len, d_model)."""
        return x + self.rows(x.shape[0])
