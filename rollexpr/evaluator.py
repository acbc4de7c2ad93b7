"""Tree evaluation: folds a parsed expression into a single integer."""

from __future__ import annotations

import logging

from rollexpr.dice import roll_dice
from rollexpr.errors import ErrorKind, EvalError
from rollexpr.narration import Narrate
from rollexpr.nodes import Constant, Expression, Object, Operator, Roll, SubExpression
from rollexpr.parser import parse
from rollexpr.random_source import RandomSource, default_source

logger = logging.getLogger(__name__)


def _truncating_divide(dividend: int, divisor: int) -> int:
    """Integer division rounding toward zero, e.g. -7/2 == -3."""
    if divisor == 0:
        raise EvalError(ErrorKind.division_by_zero)
    quotient = abs(dividend) // abs(divisor)
    return quotient if (dividend < 0) == (divisor < 0) else -quotient


def _fold(operator: Operator, left: int, right: int) -> int:
    if operator is Operator.plus:
        return left + right
    if operator is Operator.minus:
        return left - right
    if operator is Operator.times:
        return left * right
    if operator is Operator.divide:
        return _truncating_divide(left, right)
    raise EvalError(ErrorKind.logic_error, f"Unrecognized operation {operator!r}.")


def evaluate_object(obj: Object, source: RandomSource, narrate: Narrate | None = None) -> int:
    """Evaluate a constant, a roll or a parenthesized sub-expression."""
    if isinstance(obj, Constant):
        return obj.value
    if isinstance(obj, Roll):
        return roll_dice(obj, source, narrate)
    if isinstance(obj, SubExpression):
        return evaluate_expression(obj.expression, source, narrate)
    raise EvalError(ErrorKind.logic_error, f"Unrecognized object {obj!r}.")


def evaluate_expression(
    expr: Expression, source: RandomSource, narrate: Narrate | None = None
) -> int:
    """Evaluate one chain link and, recursively, the rest of its chain.

    The node's own value is always the left operand and the continuation is
    the right one, so ``8-4-2`` folds as ``8-(4-2)`` and gives 6.
    """
    if expr.left is not None:
        left = evaluate_expression(expr.left, source, narrate)
    elif expr.operand is not None:
        left = evaluate_object(expr.operand, source, narrate)
    else:
        raise EvalError(ErrorKind.logic_error, "Expression has no operand.")
    if expr.is_singlet:
        return left
    if expr.rest is None:
        raise EvalError(ErrorKind.logic_error, "Operator without a right-hand side.")
    right = evaluate_expression(expr.rest, source, narrate)
    return _fold(expr.operator, left, right)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def evaluate(
    tree: Expression,
    source: RandomSource | None = None,
    verbose: bool = False,
    narrate: Narrate | None = None,
) -> int:
    """Evaluate a parsed expression tree.

    Args:
        tree: Root returned by ``parse``.
        source: Random source for die draws. Defaults to ``default_source()``.
        verbose: Whether narration events should be produced at all.
        narrate: Sink for narration events, only consulted when ``verbose``.

    Returns:
        The integer value of the expression.

    Raises:
        EvalError: On division by zero, an exceeded draw cap, or a malformed tree.
    """
    if source is None:
        source = default_source()
    try:
        total = evaluate_expression(tree, source, narrate if verbose else None)
    except RecursionError as exc:
        raise EvalError(ErrorKind.out_of_memory) from exc
    logger.debug("Evaluated %s = %d", tree, total)
    return total


def roll_expression(
    text: str,
    source: RandomSource | None = None,
    verbose: bool = False,
    narrate: Narrate | None = None,
) -> int:
    """Parse and evaluate ``text`` in one call.

    Raises:
        ParseError: If the text is not a valid expression.
        EvalError: If evaluation fails.
    """
    return evaluate(parse(text), source, verbose, narrate)
