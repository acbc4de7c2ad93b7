"""Expression tree node types.

Every node is a frozen dataclass owned by exactly one parent. A tree is built in
a single parse pass, read once by the evaluator, and never mutated.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Operator(str, enum.Enum):
    """Arithmetic operator joining an Expression to its continuation."""

    none = ""
    plus = "+"
    minus = "-"
    times = "*"
    divide = "/"


class ModifierKind(str, enum.Enum):
    """Roll modifier policy, keyed by its expression letter."""

    choose_high = "c"
    choose_low = "w"
    reroll_below = "b"
    explode = "v"


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Modifier:
    kind: ModifierKind
    value: int

    def __str__(self) -> str:
        return f"{self.kind.value}{self.value}"


@dataclass(frozen=True)
class Roll:
    count: int
    sides: int
    modifier: Modifier | None = None

    def __str__(self) -> str:
        return f"{self.count}d{self.sides}{self.modifier or ''}"


@dataclass(frozen=True)
class Constant:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SubExpression:
    expression: Expression

    def __str__(self) -> str:
        return canonical(self)


Object = Union[Constant, SubExpression, Roll]


@dataclass(frozen=True)
class Expression:
    """One link of an operator chain.

    Additive links hold their multiplicative sub-chain in ``left``;
    multiplicative links hold an ``operand`` object. ``rest`` continues the
    chain at the same precedence and is present exactly when ``operator`` is
    not ``Operator.none``.
    """

    operand: Object | None = None
    left: Expression | None = None
    operator: Operator = Operator.none
    rest: Expression | None = None

    def __post_init__(self) -> None:
        if (self.operator is Operator.none) != (self.rest is None):
            raise ValueError("an operator requires a continuation and vice versa")
        if (self.operand is None) == (self.left is None):
            raise ValueError("exactly one of operand or left must be set")

    @property
    def is_singlet(self) -> bool:
        """True when the node has no operator and no continuation."""
        return self.rest is None and self.operator is Operator.none

    def __str__(self) -> str:
        return canonical(self)


def canonical(node: Expression | Object) -> str:
    """Render a tree back to expression text.

    Walks the tree with an explicit stack, so arbitrarily deep nesting never
    hits the interpreter recursion limit.
    """
    parts: list[str] = []
    stack: list[Expression | Object | str] = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, Expression):
            head = item.left if item.left is not None else item.operand
            assert head is not None
            if item.rest is not None:
                stack.extend((item.rest, item.operator.value))
            stack.append(head)
        elif isinstance(item, SubExpression):
            stack.extend((")", item.expression, "("))
        else:
            parts.append(str(item))
    return "".join(parts)
