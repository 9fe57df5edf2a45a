# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Additive attention masks.

Every mask is a float matrix of shape (query_len, key_len) holding 0 where
attention is allowed and -inf where it isn't. Masks are added to the raw
scores before the softmax, so a -inf entry ends up with weight exactly 0.

Masks are built per forward call and never cached.
"""

import torch

from wgslformer.tokenizer.special import PAD_ID


def padding_mask(key_ids: torch.Tensor, query_len: int, pad_id: int = PAD_ID) -> torch.Tensor:
    """-inf in every column whose key id is the padding id."""
    row = torch.zeros(key_ids.shape[0], dtype=torch.float32)
    row = row.masked_fill(key_ids == pad_id, float("-inf"))
    return row.unsqueeze(0).expand(query_len, -1).clone()


def look_ahead_mask(size: int) -> torch.Tensor:
    """-inf strictly above the diagonal, so row i only sees columns j <= i."""
    blocked = torch.ones(size, size, dtype=torch.bool).triu(diagonal=1)
    return torch.zeros(size, size).masked_fill(blocked, float("-inf"))


def combine_masks(*masks: torch.Tensor) -> torch.Tensor:
    """Element-wise sum. -inf anywhere stays -inf."""
    if not masks:
        raise ValueError("combine_masks needs at least one mask")
    combined = masks[0].clone()
    for mask in masks[1:]:
        combined = combined + mask
    return combined


def build_masks(
    encoder_ids: torch.Tensor,
    decoder_ids: torch.Tensor,
    pad_id: int = PAD_ID,
) -> tuple[torch.Tensor, torch.Tensor, torch.Tensor]:
    """
    Build the three masks a forward pass needs.

    Returns:
        (encoder self mask, decoder self mask, cross mask). The decoder
        self mask is the decoder padding mask plus the look-ahead mask; the
        cross mask blocks encoder padding positions.
    """
    enc_len = encoder_ids.shape[0]
    dec_len = decoder_ids.shape[0]

    encoder_mask = padding_mask(encoder_ids, enc_len, pad_id)
    decoder_mask = combine_masks(
        padding_mask(decoder_ids, dec_len, pad_id),
        look_ahead_mask(dec_len),
    )
    cross_mask = padding_mask(encoder_ids, dec_len, pad_id)
    return encoder_mask, decoder_mask, cross_mask
