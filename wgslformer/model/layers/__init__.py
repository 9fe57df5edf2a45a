# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Building blocks shared by the encoder and decoder stacks.

All layers operate on unbatched 2D activations of shape (seq_len, d_model)
and work row by row, except attention, which mixes rows.
"""

from wgslformer.model.layers.feedforward import FeedForward
from wgslformer.model.layers.linear import Linear
from wgslformer.model.layers.norm import LayerNorm
from wgslformer.model.layers.positional import PositionalEncoding, sinusoidal_table

__all__ = [
    "FeedForward",
    "LayerNorm",
    "Linear",
    "PositionalEncoding",
    "sinusoidal_table",
]
