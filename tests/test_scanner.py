"""Unit tests for zero-depth operator discovery."""

import pytest

from rollexpr.errors import ErrorKind, ParseError
from rollexpr.scanner import ADDITIVE_OPERATORS, MULTIPLICATIVE_OPERATORS, find_first_free_operator


class TestFindFirstFreeOperator:
    def test_no_operator(self) -> None:
        assert find_first_free_operator("4d6c3", 5, ADDITIVE_OPERATORS) is None

    def test_first_additive_operator(self) -> None:
        assert find_first_free_operator("1+2-3", 5, ADDITIVE_OPERATORS) == 1

    def test_other_layer_ignored(self) -> None:
        assert find_first_free_operator("2*3+4", 5, ADDITIVE_OPERATORS) == 3
        assert find_first_free_operator("2+3*4", 5, MULTIPLICATIVE_OPERATORS) == 3

    def test_nested_operator_skipped(self) -> None:
        assert find_first_free_operator("(1+2)-3", 7, ADDITIVE_OPERATORS) == 5

    def test_fully_parenthesized(self) -> None:
        assert find_first_free_operator("((1+2)*3)", 9, MULTIPLICATIVE_OPERATORS) is None

    def test_respects_length(self) -> None:
        assert find_first_free_operator("12+3", 2, ADDITIVE_OPERATORS) is None

    def test_length_hides_closing_paren(self) -> None:
        with pytest.raises(ParseError) as info:
            find_first_free_operator("(1+2)", 4, ADDITIVE_OPERATORS)
        assert info.value.kind is ErrorKind.mismatched_parentheses

    def test_unclosed_paren(self) -> None:
        with pytest.raises(ParseError) as info:
            find_first_free_operator("(1+2", 4, ADDITIVE_OPERATORS)
        assert info.value.kind is ErrorKind.mismatched_parentheses

    def test_close_before_open(self) -> None:
        with pytest.raises(ParseError) as info:
            find_first_free_operator(")1(", 3, MULTIPLICATIVE_OPERATORS)
        assert info.value.kind is ErrorKind.mismatched_parentheses

    def test_operator_found_before_later_mismatch(self) -> None:
        # The scan stops at the first free operator; the suffix is checked by its own scan.
        assert find_first_free_operator("1+2)", 4, ADDITIVE_OPERATORS) == 1

    def test_empty(self) -> None:
        assert find_first_free_operator("", 0, ADDITIVE_OPERATORS) is None
