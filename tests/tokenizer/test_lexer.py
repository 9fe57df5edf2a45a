# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the pattern-priority lexer.

The interesting cases are the ones where a lower-priority class would
steal a token: identifiers eating keywords or the head of a generic type,
and attributes being split into '@' plus a name.
"""

from wgslformer.tokenizer.lexer.core import PATTERN_SOURCES, compile_patterns, lex, scan

PATTERNS = compile_patterns()


class TestPriorityOrder:
    def test_classes_are_tried_in_fixed_order(self) -> None:
        kinds = [kind for kind, _ in PATTERN_SOURCES]
        assert kinds == ["type", "attribute", "keyword", "number", "operator", "punct", "ident"]

    def test_compiled_table_matches_sources(self) -> None:
        assert [kind for kind, _ in PATTERNS] == [kind for kind, _ in PATTERN_SOURCES]


class TestFunctionSignature:
    SOURCE = "fn main() -> vec4<f32> { return vec4<f32>(1.0, 0.0, 0.0, 1.0); }"

    def test_full_token_stream(self) -> None:
        assert lex(self.SOURCE, PATTERNS) == [
            "fn", "main", "(", ")", "->", "vec4<f32>", "{",
            "return", "vec4<f32>", "(", "1.0", ",", "0.0", ",", "0.0", ",", "1.0",
            ")", ";", "}",
        ]

    def test_generic_type_is_one_token(self) -> None:
        tokens = lex(self.SOURCE, PATTERNS)
        assert "vec4<f32>" in tokens
        assert "vec4" not in tokens
        assert "f32" not in tokens

    def test_token_kinds(self) -> None:
        kinds = {token.text: token.kind for token in scan(self.SOURCE, PATTERNS)}
        assert kinds["fn"] == "keyword"
        assert kinds["main"] == "ident"
        assert kinds["vec4<f32>"] == "type"
        assert kinds["->"] == "operator"
        assert kinds["1.0"] == "number"
        assert kinds[";"] == "punct"


class TestAttributes:
    def test_attributes_are_single_tokens(self) -> None:
        tokens = lex("@compute @workgroup_size(8, 8, 1)", PATTERNS)
        assert tokens == ["@compute", "@workgroup_size", "(", "8", ",", "8", ",", "1", ")"]

    def test_attribute_kind(self) -> None:
        scanned = scan("@fragment", PATTERNS)
        assert scanned[0].kind == "attribute"
        assert "@" not in [token.text for token in scanned]

    def test_location_with_argument(self) -> None:
        assert lex("@location(0)", PATTERNS) == ["@location", "(", "0", ")"]


class TestTypes:
    def test_array_type_with_count(self) -> None:
        assert lex("var<private> a: array<u32, 4>;", PATTERNS)[-2] == "array<u32, 4>"

    def test_matrix_type(self) -> None:
        assert lex("mat4x4<f32>", PATTERNS) == ["mat4x4<f32>"]

    def test_texture_type(self) -> None:
        assert lex("texture_2d<f32>", PATTERNS) == ["texture_2d<f32>"]

    def test_bare_vec_name_is_identifier(self) -> None:
        scanned = scan("vec4", PATTERNS)
        assert [(t.kind, t.text) for t in scanned] == [("ident", "vec4")]


class TestNumbers:
    def test_hex_literal(self) -> None:
        assert lex("0xFF", PATTERNS) == ["0xFF"]

    def test_unsigned_suffix(self) -> None:
        assert lex("8u", PATTERNS) == ["8u"]

    def test_float_with_exponent_and_suffix(self) -> None:
        assert lex("1e-3f", PATTERNS) == ["1e-3f"]

    def test_integer(self) -> None:
        assert lex("42", PATTERNS) == ["42"]


class TestKeywordsAndIdentifiers:
    def test_keyword_prefix_of_identifier_stays_identifier(self) -> None:
        assert lex("fn_name", PATTERNS) == ["fn_name"]
        assert scan("fn_name", PATTERNS)[0].kind == "ident"

    def test_identifier_ending_in_keyword(self) -> None:
        assert lex("xfn", PATTERNS) == ["xfn"]

    def test_keywords(self) -> None:
        for keyword in ("let", "var", "struct", "loop", "discard"):
            assert scan(keyword, PATTERNS)[0].kind == "keyword"


class TestSkipping:
    def test_empty_text(self) -> None:
        assert lex("", PATTERNS) == []

    def test_whitespace_only(self) -> None:
        assert lex(" \t\n  \r\n", PATTERNS) == []

    def test_unmatched_characters_are_dropped(self) -> None:
        assert lex("a # b $ c ? d", PATTERNS) == ["a", "b", "c", "d"]

    def test_offsets_point_into_source(self) -> None:
        source = "let  x = 1;"
        for token in scan(source, PATTERNS):
            assert source[token.offset : token.offset + len(token.text)] == token.text

    def test_tokens_cover_all_non_whitespace_matched_text(self) -> None:
        source = "let x=1;"
        assert "".join(lex(source, PATTERNS)) == "letx=1;"
