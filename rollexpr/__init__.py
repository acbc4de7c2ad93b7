"""Dice-expression parsing and evaluation."""

from __future__ import annotations

from rollexpr.errors import DiceError, ErrorKind, EvalError, ParseError
from rollexpr.evaluator import evaluate, roll_expression
from rollexpr.parser import parse

__all__ = [
    "DiceError",
    "ErrorKind",
    "EvalError",
    "ParseError",
    "evaluate",
    "parse",
    "roll_expression",
]
