# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Growable token vocabulary.

A Vocabulary is a bidirectional token <-> id map that starts with the four
reserved special tokens and only ever grows. Ids are handed out
sequentially after the reserved block and are never reassigned or removed.

The human-readable vocab.txt export lives here too. It's handy for
eyeballing what a fit actually picked up from a shader corpus.
"""

from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Optional

from wgslformer.tokenizer.special import FIRST_FREE_ID, SpecialToken
from wgslformer.utils.filesystem import atomic_write


class Vocabulary:
    """
    Bidirectional mapping between token strings and integer ids.

    Only ``add`` mutates the mapping, and it only appends.
    """

    def __init__(self) -> None:
        self._token_to_id: dict[str, int] = {}
        self._id_to_token: dict[int, str] = {}
        self._next_id = FIRST_FREE_ID

        for special in SpecialToken:
            self._token_to_id[special.text] = special.token_id
            self._id_to_token[special.token_id] = special.text

    def __len__(self) -> int:
        return len(self._token_to_id)

    def __contains__(self, token: object) -> bool:
        return token in self._token_to_id

    def __iter__(self) -> Iterator[str]:
        return iter(self._token_to_id)

    @property
    def next_id(self) -> int:
        """Id the next newly added token will receive."""
        return self._next_id

    def add(self, token: str) -> int:
        """Add ``token`` if it is new and return its id either way."""
        existing = self._token_to_id.get(token)
        if existing is not None:
            return existing

        token_id = self._next_id
        self._token_to_id[token] = token_id
        self._id_to_token[token_id] = token
        self._next_id += 1
        return token_id

    def add_all(self, tokens: Iterable[str]) -> int:
        """Add every unseen token in order. Returns how many were new."""
        before = len(self)
        for token in tokens:
            self.add(token)
        return len(self) - before

    def get_id(self, token: str) -> Optional[int]:
        return self._token_to_id.get(token)

    def get_token(self, token_id: int) -> Optional[str]:
        return self._id_to_token.get(token_id)

    def to_dict(self) -> dict[str, int]:
        """Token -> id mapping, ordered by id."""
        return dict(sorted(self._token_to_id.items(), key=lambda item: item[1]))

    @classmethod
    def from_dict(cls, mapping: Mapping[str, int]) -> "Vocabulary":
        """
        Rebuild a vocabulary from a token -> id mapping.

        The reserved entries are always present afterwards, and the next id
        continues after the largest id in the mapping.

        Raises:
            ValueError: If an id is negative or not an int, if two tokens
                share an id, or if a reserved token maps to a different id.
        """
        vocab = cls()
        seen_ids: dict[int, str] = dict(vocab._id_to_token)

        for token, token_id in mapping.items():
            if not isinstance(token_id, int) or isinstance(token_id, bool) or token_id < 0:
                raise ValueError(f"Invalid id {token_id!r} for token {token!r}")

            reserved_id = vocab._token_to_id.get(token)
            if reserved_id is not None and reserved_id < FIRST_FREE_ID:
                if reserved_id != token_id:
                    raise ValueError(
                        f"Special token {token!r} must have id {reserved_id}, got {token_id}"
                    )
                continue

            owner = seen_ids.get(token_id)
            if owner is not None and owner != token:
                raise ValueError(f"Id {token_id} is assigned to both {owner!r} and {token!r}")

            seen_ids[token_id] = token
            vocab._token_to_id[token] = token_id
            vocab._id_to_token[token_id] = token

        vocab._next_id = max(max(vocab._id_to_token) + 1, FIRST_FREE_ID)
        return vocab


def write_vocab_file(vocab: Vocabulary, output_path: Path) -> None:
    """
    Write a plain-text vocab file, one ``token<TAB>id`` line per entry,
    sorted by id.
    """
    lines = [f"{token}\t{token_id}" for token, token_id in vocab.to_dict().items()]
    atomic_write(output_path, "\n".join(lines) + "\n")
