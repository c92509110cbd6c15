"""Tests for display markup rendering."""

from __future__ import annotations

import pytest

from formulacalc.formulas import EXTENDED_CONFIG, clean_markup, to_display_markup, to_markup


class TestToMarkup:
    def test_operators_are_padded(self) -> None:
        assert to_markup("a+b") == "a + b"

    def test_function_gets_backslash(self) -> None:
        assert to_markup("sin(x)") == "\\sin(x)"

    def test_mixed_expression(self) -> None:
        assert to_markup("a + sin(b) * c") == "a + \\sin(b) * c"

    def test_implicit_multiplication_is_shown(self) -> None:
        assert to_markup("2a") == "2 * a"

    def test_numbers_and_parens_verbatim(self) -> None:
        assert to_markup("(1.5+x)^2") == "(1.5 + x) ^ 2"

    def test_empty_formula(self) -> None:
        assert to_markup("") == ""

    def test_unconfigured_operator_stays_in_buffer(self) -> None:
        assert to_markup("5%2") == "5%2"
        assert to_markup("5%2", EXTENDED_CONFIG) == "5 % 2"

    def test_extended_function_names(self) -> None:
        assert to_markup("sinh(x)+cot(y)", EXTENDED_CONFIG) == "\\sinh(x) + \\cot(y)"

    def test_never_raises(self) -> None:
        assert to_markup(123) == ""  # type: ignore[arg-type]

    @pytest.mark.parametrize("formula", ["))((", "sin", "+-*/", "@#"])
    def test_garbage_input_renders(self, formula: str) -> None:
        assert isinstance(to_markup(formula), str)


class TestDisplayMarkup:
    def test_drops_times_after_digit(self) -> None:
        assert to_display_markup("2a") == "2 a"

    def test_drops_times_between_letters(self) -> None:
        assert to_display_markup("2*a*b") == "2 a b"

    def test_keeps_times_after_paren(self) -> None:
        assert to_display_markup("(a+b)*c") == "(a + b) * c"

    def test_other_operators_untouched(self) -> None:
        assert to_display_markup("x^2 + y/2") == "x ^ 2 + y / 2"


class TestCleanMarkup:
    def test_strips_function_backslash(self) -> None:
        assert clean_markup("a + \\sin(b) * c") == "a + sin(b) * c"

    def test_double_backslash_collapses(self) -> None:
        assert clean_markup("a\\\\b") == "a\\b"

    def test_plain_text_unchanged(self) -> None:
        assert clean_markup("a + b") == "a + b"

    def test_round_trip_from_markup(self) -> None:
        assert clean_markup(to_markup("sqrt(x)+log10(y)")) == "sqrt(x) + log10(y)"
