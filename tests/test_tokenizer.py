"""Tests for the formula tokenizer and variable extraction."""

from __future__ import annotations

import string

import pytest

from formulacalc.formulas import (
    EXTENDED_CONFIG,
    Token,
    TokenKind,
    build_config,
    extract_variables,
    join_tokens,
    tokenize,
)


def _texts(formula: str, config=None) -> list[str]:
    return [t.text for t in tokenize(formula, config)]


# ────────────────────────────────────────────────────────────────
# Basic scanning
# ────────────────────────────────────────────────────────────────


class TestScanning:
    def test_empty_formula(self) -> None:
        assert tokenize("") == []

    def test_whitespace_only(self) -> None:
        assert tokenize("   \t ") == []

    def test_simple_expression(self) -> None:
        assert _texts("2+3*4") == ["2", "+", "3", "*", "4"]

    def test_whitespace_is_a_separator(self) -> None:
        assert _texts("  12   +  3 ") == ["12", "+", "3"]

    def test_multi_digit_and_decimal_numbers(self) -> None:
        assert _texts("12.5 / 100") == ["12.5", "/", "100"]

    def test_token_kinds(self) -> None:
        tokens = tokenize("(1.5+x)^2")
        assert [t.kind for t in tokens] == [
            TokenKind.lparen,
            TokenKind.number,
            TokenKind.operator,
            TokenKind.identifier,
            TokenKind.rparen,
            TokenKind.operator,
            TokenKind.number,
        ]
        assert tokens[1].number == 1.5

    def test_parentheses_are_single_tokens(self) -> None:
        assert _texts("((a))") == ["(", "(", "a", ")", ")"]

    def test_unknown_symbol_accumulates_into_buffer(self) -> None:
        """'%' is not a standard operator, so it stays inside the buffer."""
        tokens = tokenize("5%2")
        assert len(tokens) == 1
        assert tokens[0] == Token(kind=TokenKind.identifier, text="5%2")

    def test_extended_config_splits_modulus(self) -> None:
        assert _texts("5%2", EXTENDED_CONFIG) == ["5", "%", "2"]

    def test_never_raises_on_garbage(self) -> None:
        for formula in ["))((", "+-*/^", "sin", "@#$", "1..2", "é√π", "sin(((("]:
            assert isinstance(tokenize(formula), list)


# ────────────────────────────────────────────────────────────────
# Implicit multiplication
# ────────────────────────────────────────────────────────────────


class TestImplicitMultiplication:
    def test_digit_then_letter(self) -> None:
        assert _texts("2a") == ["2", "*", "a"]

    def test_letter_then_digit(self) -> None:
        assert _texts("a2") == ["a", "*", "2"]

    def test_adjacent_letters(self) -> None:
        assert _texts("ab") == ["a", "*", "b"]

    def test_long_letter_run(self) -> None:
        assert _texts("xyz") == ["x", "*", "y", "*", "z"]

    def test_multi_digit_number_before_letter_is_split_per_digit(self) -> None:
        """'12a' emits the digits one by one: 1, 2, *, a."""
        assert _texts("12a") == ["1", "2", "*", "a"]

    def test_decimal_before_letter(self) -> None:
        assert _texts("2.5a") == ["2.", "5", "*", "a"]

    def test_inserted_operator_kind(self) -> None:
        tokens = tokenize("2a")
        assert tokens[1] == Token(kind=TokenKind.operator, text="*")

    def test_digit_before_function(self) -> None:
        assert _texts("2sin(x)") == ["2", "*", "sin", "(", "x", ")"]

    @pytest.mark.parametrize(
        "pair",
        [a + b for a in "abcdxyz" for b in "abmnqrz"],
    )
    def test_two_letters_never_form_one_identifier(self, pair: str) -> None:
        tokens = tokenize(pair)
        assert all(len(t.text) == 1 for t in tokens)
        assert _texts(pair) == [pair[0], "*", pair[1]]

    def test_no_adjacent_bare_identifiers(self) -> None:
        letters = string.ascii_letters
        formula = "".join(letters[i % len(letters)] for i in range(0, 200, 7))
        tokens = tokenize(formula)
        for left, right in zip(tokens, tokens[1:]):
            assert not (
                left.kind is TokenKind.identifier
                and right.kind is TokenKind.identifier
                and left.text not in {"sin", "cos", "tan", "log", "log10", "exp",
                                      "sqrt", "abs", "asin", "acos", "atan"}
            )


# ────────────────────────────────────────────────────────────────
# Function names
# ────────────────────────────────────────────────────────────────


class TestFunctionNames:
    def test_function_is_one_identifier(self) -> None:
        tokens = tokenize("sin(x)")
        assert tokens[0] == Token(kind=TokenKind.identifier, text="sin")
        assert _texts("sin(x)") == ["sin", "(", "x", ")"]

    def test_function_inside_expression(self) -> None:
        assert _texts("a + sin(b) * c") == ["a", "+", "sin", "(", "b", ")", "*", "c"]

    def test_asin_is_not_split(self) -> None:
        assert _texts("asin(x)") == ["asin", "(", "x", ")"]

    def test_log10_listed_before_log(self) -> None:
        assert _texts("log10(100)") == ["log10", "(", "100", ")"]
        assert _texts("log(100)") == ["log", "(", "100", ")"]

    def test_first_prefix_in_config_order_wins(self) -> None:
        """With 'log' listed first, 'log10' can never be matched whole."""
        cfg = build_config(["log", "log10"], ["+", "-", "*", "/", "^"])
        assert _texts("log10(100)", cfg) == ["log", "10", "(", "100", ")"]

    def test_hyperbolic_names_in_extended_config(self) -> None:
        assert _texts("sinh(x)+asinh(y)", EXTENDED_CONFIG) == [
            "sinh", "(", "x", ")", "+", "asinh", "(", "y", ")",
        ]

    def test_hyperbolic_not_matched_in_standard_config(self) -> None:
        assert _texts("sinh(x)") == ["sin", "h", "(", "x", ")"]

    def test_function_name_matched_mid_word(self) -> None:
        """Function names are matched at every position, even after letters."""
        assert _texts("bsin(x)") == ["b", "sin", "(", "x", ")"]

    def test_function_name_without_parenthesis(self) -> None:
        assert _texts("cost") == ["cos", "t"]


# ────────────────────────────────────────────────────────────────
# Round trip through join_tokens
# ────────────────────────────────────────────────────────────────


class TestJoinTokens:
    @pytest.mark.parametrize(
        "formula",
        ["2+3*4", "(2+3)*4", "2a", "ab", "12a", "sin(x)+cos(y)", "a + sin(b) * c", "(2+3", "2.5a"],
    )
    def test_retokenizing_joined_text_is_stable(self, formula: str) -> None:
        tokens = tokenize(formula)
        assert tokenize(join_tokens(tokens)) == tokens

    def test_digit_letter_identifier_splits_on_second_pass(self) -> None:
        """'a2b' keeps '2b' whole the first time; rescanning splits it."""
        tokens = tokenize("a2b")
        assert [t.text for t in tokens] == ["a", "*", "2b"]
        assert tokens[2].kind is TokenKind.identifier
        assert _texts(join_tokens(tokens)) == ["a", "*", "2", "*", "b"]

    def test_join_uses_single_spaces(self) -> None:
        assert join_tokens(tokenize("2a+b")) == "2 * a + b"


# ────────────────────────────────────────────────────────────────
# Variable extraction
# ────────────────────────────────────────────────────────────────


class TestExtractVariables:
    def test_simple(self) -> None:
        assert extract_variables("a + b * c") == ["a", "b", "c"]

    def test_functions_are_not_variables(self) -> None:
        assert extract_variables("sin(x) + sqrt(y)") == ["x", "y"]

    def test_unique_in_order_of_appearance(self) -> None:
        assert extract_variables("b + a*b + aa") == ["b", "a"]

    def test_numbers_only(self) -> None:
        assert extract_variables("2 + 3") == []

    def test_non_letter_identifiers_are_skipped(self) -> None:
        assert extract_variables("x_ + y") == ["y"]

    def test_implicit_products(self) -> None:
        assert extract_variables("2xy") == ["x", "y"]
