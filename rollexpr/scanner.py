"""Operator discovery over raw character ranges, without a tokenizer."""

from __future__ import annotations

from rollexpr.errors import ErrorKind, ParseError

ADDITIVE_OPERATORS = "()+-"
MULTIPLICATIVE_OPERATORS = "()*/"


def find_first_free_operator(text: str, length: int, operators: str) -> int | None:
    """Locate the first operator in ``text[:length]`` not nested in parentheses.

    Args:
        text: Input string; only the first ``length`` characters are examined.
        length: Number of characters belonging to the substring.
        operators: Operator characters of the current precedence layer. Both
            layers include ``(`` and ``)`` so nesting depth can be tracked.

    Returns:
        Index of the first zero-depth operator, or None if there is none.

    Raises:
        ParseError: With kind ``mismatched_parentheses`` if a ``)`` closes
            nothing or an ``(`` is left open at the end of the substring.
    """
    depth = 0
    for index in range(min(length, len(text))):
        char = text[index]
        if char not in operators:
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise ParseError(ErrorKind.mismatched_parentheses)
        elif depth == 0:
            return index
    if depth != 0:
        raise ParseError(ErrorKind.mismatched_parentheses)
    return None
