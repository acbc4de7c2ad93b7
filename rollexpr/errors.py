"""Error kinds and exception types raised by the parser and evaluator."""

from __future__ import annotations

import enum


class ErrorKind(str, enum.Enum):
    """Distinguishable failure conditions of a parse or an evaluation."""

    mismatched_parentheses = "mismatched_parentheses"
    missing_object = "missing_object"
    missing_constant = "missing_constant"
    invalid_constant = "invalid_constant"
    missing_modifier_constant = "missing_modifier_constant"
    invalid_modifier_character = "invalid_modifier_character"
    garbled_roll = "garbled_roll"
    out_of_memory = "out_of_memory"
    division_by_zero = "division_by_zero"
    draw_limit_exceeded = "draw_limit_exceeded"
    logic_error = "logic_error"


MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.mismatched_parentheses: "Mismatched parentheses.",
    ErrorKind.missing_object: "Missing Object.",
    ErrorKind.missing_constant: "Missing constant.",
    ErrorKind.invalid_constant: "Invalid constant.",
    ErrorKind.missing_modifier_constant: "Missing Modifier Constant.",
    ErrorKind.invalid_modifier_character: "Invalid Modifier Character.",
    ErrorKind.garbled_roll: "Garbled roll (no 'd' delimiter).",
    ErrorKind.out_of_memory: "Out of memory.",
    ErrorKind.division_by_zero: "Division by zero.",
    ErrorKind.draw_limit_exceeded: "Too many dice drawn.",
    ErrorKind.logic_error: "Unrecognized operation.",
}


class DiceError(ValueError):
    """Base class for every failure raised while parsing or evaluating an expression.

    Args:
        kind: Which condition occurred.
        message: Optional override for the default human-readable message.
    """

    def __init__(self, kind: ErrorKind, message: str | None = None) -> None:
        self.kind = kind
        self.message = message or MESSAGES[kind]
        super().__init__(self.message)


class ParseError(DiceError):
    """Raised when text does not describe a valid expression tree."""


class EvalError(DiceError):
    """Raised when a well-formed tree cannot be evaluated."""
