# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Greedy pattern-priority lexer for WGSL source text.

The lexer walks the text left to right. At every offset it skips
whitespace, then tries each token class in a fixed priority order and
takes the first class whose pattern matches right at the offset:

  1. type       parameterized types such as vec4<f32> or array<u32, 4>
  2. attribute  @compute, @workgroup_size, @location, ...
  3. keyword    fn, let, return, ...
  4. number     1.0, 0xFF, 8u, 1e-3f
  5. operator   runs of + - * / % & | ^ < > = ! ~
  6. punct      ( ) { } [ ] ; : , .
  7. ident      everything identifier-shaped

The order matters: the identifier pattern would happily eat ``vec4`` out
of ``vec4<f32>`` or ``fn`` out of a keyword, so it goes last. A character
that no class matches is dropped and the scan moves on. Lexing never
raises.
"""

import re
from typing import NamedTuple

_TYPE_PATTERN = (
    r"\b(vec[234]|mat[234]x[234]|array|texture_[123]d|texture_cube|texture_2d_array"
    r"|texture_storage_[123]d|sampler|sampler_comparison|atomic|ptr)<[^>]+>"
)

_ATTRIBUTE_PATTERN = (
    r"@(compute|fragment|vertex|group|binding|location|builtin|workgroup_size"
    r"|stage|size|align|interpolate)"
)

_KEYWORD_PATTERN = (
    r"\b(fn|var|let|const|struct|type|if|else|for|while|loop|break|continue|return"
    r"|switch|case|default|discard|@compute|@fragment|@vertex|@group|@binding"
    r"|@location|@builtin|@workgroup_size|@stage|@size|@align|@interpolate)\b"
)

_NUMBER_PATTERN = r"0x[0-9a-fA-F]+|[0-9]+\.?[0-9]*([eE][+-]?[0-9]+)?[fu]?"

_OPERATOR_PATTERN = r"[+\-*/%&|^<>=!~]+|<<|>>|&&|\|\||==|!=|<=|>=|->"

_PUNCTUATION_PATTERN = r"[(){}\[\];:,.]"

_IDENTIFIER_PATTERN = r"[a-zA-Z_][a-zA-Z0-9_]*"

# Priority order; the lexer stops at the first class that matches.
PATTERN_SOURCES: tuple[tuple[str, str], ...] = (
    ("type", _TYPE_PATTERN),
    ("attribute", _ATTRIBUTE_PATTERN),
    ("keyword", _KEYWORD_PATTERN),
    ("number", _NUMBER_PATTERN),
    ("operator", _OPERATOR_PATTERN),
    ("punct", _PUNCTUATION_PATTERN),
    ("ident", _IDENTIFIER_PATTERN),
)


class LexedToken(NamedTuple):
    """One token with the class that produced it and its offset in the text."""

    kind: str
    text: str
    offset: int


PatternTable = tuple[tuple[str, "re.Pattern[str]"], ...]


def compile_patterns() -> PatternTable:
    """
    Compile the fixed pattern table.

    Compiled patterns are never persisted; a loaded tokenizer calls this
    again and gets an identical table.
    """
    return tuple((kind, re.compile(source)) for kind, source in PATTERN_SOURCES)


def scan(text: str, patterns: PatternTable) -> list[LexedToken]:
    """
    Split ``text`` into classified tokens.

    Each pattern is matched against the remaining slice of the text, so
    word-boundary assertions see the slice start as a boundary.
    """
    tokens: list[LexedToken] = []
    pos = 0
    length = len(text)

    while pos < length:
        if text[pos].isspace():
            pos += 1
            continue

        remaining = text[pos:]
        for kind, pattern in patterns:
            match = pattern.match(remaining)
            if match is not None and match.end() > 0:
                tokens.append(LexedToken(kind, match.group(0), pos))
                pos += match.end()
                break
        else:
            pos += 1

    return tokens


def lex(text: str, patterns: PatternTable) -> list[str]:
    """Return just the token strings of ``scan``."""
    return [token.text for token in scan(text, patterns)]
