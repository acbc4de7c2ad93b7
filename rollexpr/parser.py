"""Recursive-descent parser for dice expressions.

Grammar
-------
    AdditiveExpr   := MultExpr (('+'|'-') AdditiveExpr)?
    MultExpr       := Object   (('*'|'/') MultExpr)?
    Object         := '(' AdditiveExpr ')' | Integer | Roll
    Roll           := Integer 'd' Integer Modifier?
    Modifier       := ('c'|'w'|'b'|'v') Integer
    Integer        := digit+

Precedence is structural: each layer asks the scanner for its first zero-depth
operator, parses the prefix as the next layer down and recurses on the suffix.
Chains are therefore right-recursive, so ``a-b-c`` means ``a-(b-c)``.

Every function takes the text together with an explicit length and never looks
past it. A node is only built once all of its children have parsed, so a
failure at any depth leaves no partial tree behind.
"""

from __future__ import annotations

import logging

from rollexpr.errors import ErrorKind, ParseError
from rollexpr.nodes import (
    Constant,
    Expression,
    Modifier,
    ModifierKind,
    Object,
    Operator,
    Roll,
    SubExpression,
)
from rollexpr.scanner import (
    ADDITIVE_OPERATORS,
    MULTIPLICATIVE_OPERATORS,
    find_first_free_operator,
)

logger = logging.getLogger(__name__)

_DIGITS = frozenset("0123456789")
_MODIFIER_LETTERS = "".join(kind.value for kind in ModifierKind)


def _is_digits(text: str) -> bool:
    return bool(text) and all(char in _DIGITS for char in text)


def _to_int(digits: str) -> int:
    try:
        return int(digits)
    except ValueError as exc:
        # int() refuses strings past sys.get_int_max_str_digits()
        raise ParseError(ErrorKind.invalid_constant, "Constant too large.") from exc


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse(text: str, length: int | None = None) -> Expression:
    """Parse a dice expression into a tree.

    Args:
        text: Expression text, e.g. ``"4d6c3+2d8-1"``.
        length: Number of leading characters of ``text`` to parse. Defaults to
            the whole string.

    Returns:
        The root (additive) Expression.

    Raises:
        ParseError: If the text is not a valid expression. Exhausting memory or
            the interpreter stack is reported with kind ``out_of_memory``.
    """
    if length is None:
        length = len(text)
    try:
        tree = parse_additive(text, length)
    except (MemoryError, RecursionError) as exc:
        raise ParseError(ErrorKind.out_of_memory) from exc
    logger.debug("Parsed %r as %s", text[:length], tree)
    return tree


def parse_additive(text: str, length: int) -> Expression:
    """Parse ``MultExpr (('+'|'-') AdditiveExpr)?``."""
    if length <= 0:
        raise ParseError(ErrorKind.missing_object)
    index = find_first_free_operator(text, length, ADDITIVE_OPERATORS)
    if index is None:
        return Expression(left=parse_multiplicative(text, length))
    left = parse_multiplicative(text, index)
    operator = parse_operator(text[index])
    rest = parse_additive(text[index + 1 :], length - index - 1)
    return Expression(left=left, operator=operator, rest=rest)


def parse_multiplicative(text: str, length: int) -> Expression:
    """Parse ``Object (('*'|'/') MultExpr)?``."""
    if length <= 0:
        raise ParseError(ErrorKind.missing_object)
    index = find_first_free_operator(text, length, MULTIPLICATIVE_OPERATORS)
    if index is None:
        return Expression(operand=parse_object(text, length))
    operand = parse_object(text, index)
    operator = parse_operator(text[index])
    rest = parse_multiplicative(text[index + 1 :], length - index - 1)
    return Expression(operand=operand, operator=operator, rest=rest)


def parse_object(text: str, length: int) -> Object:
    """Parse a parenthesized sub-expression, an integer constant or a roll."""
    if length <= 0:
        raise ParseError(ErrorKind.missing_object)
    text = text[:length]
    if text[0] == "(":
        if text[-1] != ")":
            raise ParseError(ErrorKind.mismatched_parentheses)
        return SubExpression(parse_additive(text[1:], length - 2))
    if _is_digits(text):
        return Constant(_to_int(text))
    return parse_roll(text, length)


def parse_roll(text: str, length: int) -> Roll:
    """Parse ``Integer 'd' Integer Modifier?``.

    The first ``d`` splits die count from side count. The first modifier
    letter starts the modifier, which runs to the end of the substring.
    """
    if length <= 0:
        raise ParseError(ErrorKind.missing_object)
    text = text[:length]
    d_index = text.find("d")
    if d_index < 0:
        raise ParseError(ErrorKind.garbled_roll)

    modifier = None
    mod_index = next((i for i, char in enumerate(text) if char in _MODIFIER_LETTERS), length)
    if mod_index < length:
        modifier = parse_modifier(text[mod_index:], length - mod_index)

    count = text[:d_index]
    sides = text[d_index + 1 : mod_index] if mod_index > d_index else ""
    if not count or not sides:
        raise ParseError(ErrorKind.missing_constant)
    if not _is_digits(count) or not _is_digits(sides):
        raise ParseError(ErrorKind.invalid_constant)

    roll = Roll(count=_to_int(count), sides=_to_int(sides), modifier=modifier)
    if roll.sides == 0:
        raise ParseError(ErrorKind.invalid_constant, "A die needs at least one side.")
    return roll


def parse_modifier(text: str, length: int) -> Modifier:
    """Parse ``('c'|'w'|'b'|'v') Integer``."""
    if length <= 0:
        raise ParseError(ErrorKind.missing_modifier_constant)
    try:
        kind = ModifierKind(text[0])
    except ValueError as exc:
        raise ParseError(ErrorKind.invalid_modifier_character) from exc
    if length < 2:
        raise ParseError(ErrorKind.missing_modifier_constant)
    digits = text[1:length]
    if not _is_digits(digits):
        raise ParseError(ErrorKind.invalid_constant)
    return Modifier(kind=kind, value=_to_int(digits))


def parse_operator(char: str) -> Operator:
    """Map an operator character to its Operator."""
    try:
        operator = Operator(char)
    except ValueError as exc:
        raise ParseError(ErrorKind.logic_error, f"Unrecognized operator {char!r}.") from exc
    if operator is Operator.none:
        raise ParseError(ErrorKind.logic_error, "Unrecognized operator ''.")
    return operator
