# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
WGSLFormer model package.

Encoder-decoder transformer that maps a tokenized WGSL source to logits
for the next token:
  - sinusoidal positional encoding (fixed table, no parameters)
  - multi-head scaled dot-product attention with additive masks
  - post-norm residual blocks with LayerNorm
  - ReLU position-wise feedforward
  - separate output projection (no weight tying)

Everything is inference-only. Parameters are initialized once from a seed
and frozen.
"""
