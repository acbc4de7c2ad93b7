"""Narration events emitted while rolling in verbose mode, and their text form.

Events are delivered to a ``Narrate`` callable as they happen. ``render`` turns
each one into the console line the command-line tool prints:

    4d6b2:
      1 * Rerolled
      5
      3
    ...
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Union

from rollexpr.nodes import ModifierKind, Roll


class DrawKind(str, enum.Enum):
    """Why a die was drawn."""

    first = "first"
    reroll = "reroll"
    explosion = "explosion"


class DrawMark(str, enum.Enum):
    """What happened to a draw once it was seen."""

    none = "none"
    rerolled = "rerolled"
    exploded = "exploded"


@dataclass(frozen=True)
class RollStarted:
    roll: Roll


@dataclass(frozen=True)
class Draw:
    value: int
    kind: DrawKind = DrawKind.first
    mark: DrawMark = DrawMark.none


@dataclass(frozen=True)
class Kept:
    kind: ModifierKind
    values: tuple[int, ...]


NarrationEvent = Union[RollStarted, Draw, Kept]
Narrate = Callable[[NarrationEvent], None]


def render(event: NarrationEvent) -> str:
    """Return the console line for a narration event."""
    if isinstance(event, RollStarted):
        return f"{event.roll}:"
    if isinstance(event, Draw):
        indent = "    " if event.kind is DrawKind.explosion else "  "
        line = f"{indent}{event.value}"
        if event.mark is DrawMark.rerolled:
            line += " * Rerolled"
        elif event.mark is DrawMark.exploded:
            line += " * Exploded:"
        return line
    return "Chosen:" + "".join(f" {value}" for value in event.values)


@dataclass
class NarrationLog:
    """Narrate sink that records every event it receives."""

    events: list[NarrationEvent] = field(default_factory=list)

    def __call__(self, event: NarrationEvent) -> None:
        self.events.append(event)

    def lines(self) -> list[str]:
        return [render(event) for event in self.events]
