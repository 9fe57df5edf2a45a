# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Reserved vocabulary entries.

The four special tokens always occupy ids 0 to 3, in this order, and are
present in every vocabulary before any fitting happens.
"""

from enum import Enum


class SpecialToken(Enum):
    """Control tokens with fixed ids."""

    PADDING = ("<pad>", 0)
    UNKNOWN = ("<unk>", 1)
    START_OF_SEQUENCE = ("<sos>", 2)
    END_OF_SEQUENCE = ("<eos>", 3)

    @property
    def text(self) -> str:
        return self.value[0]

    @property
    def token_id(self) -> int:
        return self.value[1]


PAD_ID: int = SpecialToken.PADDING.token_id
UNK_ID: int = SpecialToken.UNKNOWN.token_id
SOS_ID: int = SpecialToken.START_OF_SEQUENCE.token_id
EOS_ID: int = SpecialToken.END_OF_SEQUENCE.token_id

FIRST_FREE_ID: int = len(SpecialToken)
