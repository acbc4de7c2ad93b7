"""Die rolling policies.

Supports the plain roll and the four modifiers of the expression grammar:

    XdY      roll X dice with Y sides and sum them
    XdYcZ    keep the Z highest dice
    XdYwZ    keep the Z lowest dice
    XdYbZ    reroll each die until it shows more than Z
    XdYvZ    exploding dice: every draw of Z or more adds another draw

Thresholds that can never be satisfied (``b`` of at least Y, ``v`` of at most 1)
loop forever. That is the caller's responsibility; wrap the source in a
``CappedRandomSource`` to bound it.
"""

from __future__ import annotations

import heapq
import logging

from rollexpr.narration import Draw, DrawKind, DrawMark, Kept, Narrate, NarrationEvent, RollStarted
from rollexpr.nodes import ModifierKind, Roll
from rollexpr.random_source import RandomSource

logger = logging.getLogger(__name__)


def _silent(event: NarrationEvent) -> None:
    pass


# ---------------------------------------------------------------------------
# Policies
# ---------------------------------------------------------------------------


def roll_plain(count: int, sides: int, source: RandomSource, narrate: Narrate = _silent) -> int:
    """Roll ``count`` dice of ``sides`` faces and return their sum."""
    total = 0
    for _ in range(count):
        value = source.next(sides)
        narrate(Draw(value))
        total += value
    return total


def roll_choose(
    count: int,
    sides: int,
    keep: int,
    highest: bool,
    source: RandomSource,
    narrate: Narrate = _silent,
) -> int:
    """Roll ``count`` dice and sum only the ``keep`` most extreme of them.

    Dice are drawn one at a time into a heap that never holds more than
    ``keep`` values, so the full set of draws is never sorted.

    Args:
        count: Number of dice to roll.
        sides: Faces per die.
        keep: Number of dice counted toward the total. Zero always totals 0.
            When ``keep`` is at least ``count`` every die is kept.
        highest: Keep the highest dice if True, the lowest otherwise.
        source: Where the draws come from.
        narrate: Receives one Draw per die and a final Kept event.

    Returns:
        Sum of the kept dice.
    """
    # Min-heap of kept values; lowest-keeping stores negated values instead.
    sign = 1 if highest else -1
    kept: list[int] = []
    for _ in range(count):
        value = source.next(sides)
        narrate(Draw(value))
        if keep == 0:
            continue
        if len(kept) < keep:
            heapq.heappush(kept, sign * value)
        else:
            heapq.heappushpop(kept, sign * value)
    values = sorted((sign * v for v in kept), reverse=highest)
    if keep > count:
        logger.debug("Asked to keep %d of %d dice; keeping all of them", keep, count)
    narrate(Kept(ModifierKind.choose_high if highest else ModifierKind.choose_low, tuple(values)))
    return sum(values)


def roll_reroll_below(
    count: int,
    sides: int,
    threshold: int,
    source: RandomSource,
    narrate: Narrate = _silent,
) -> int:
    """Roll ``count`` dice, redrawing each one until it shows more than ``threshold``."""
    total = 0
    for _ in range(count):
        value = source.next(sides)
        kind = DrawKind.first
        while value <= threshold:
            narrate(Draw(value, kind, DrawMark.rerolled))
            value = source.next(sides)
            kind = DrawKind.reroll
        narrate(Draw(value, kind))
        total += value
    return total


def roll_exploding(
    count: int,
    sides: int,
    threshold: int,
    source: RandomSource,
    narrate: Narrate = _silent,
) -> int:
    """Roll ``count`` exploding dice.

    Each draw at or above ``threshold`` adds another draw to the same die, and
    those extra draws can explode in turn.
    """
    total = 0
    for _ in range(count):
        value = source.next(sides)
        kind = DrawKind.first
        die_total = value
        while value >= threshold:
            narrate(Draw(value, kind, DrawMark.exploded))
            value = source.next(sides)
            kind = DrawKind.explosion
            die_total += value
        narrate(Draw(value, kind))
        total += die_total
    return total


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def roll_dice(roll: Roll, source: RandomSource, narrate: Narrate | None = None) -> int:
    """Execute a Roll node with the policy its modifier selects.

    Args:
        roll: Parsed die specification.
        source: Supplies one face per draw.
        narrate: Optional sink for narration events. Nothing is emitted if None.

    Returns:
        Integer total of the roll.
    """
    emit = narrate or _silent
    emit(RollStarted(roll))
    modifier = roll.modifier
    if modifier is None:
        total = roll_plain(roll.count, roll.sides, source, emit)
    elif modifier.kind is ModifierKind.choose_high:
        total = roll_choose(roll.count, roll.sides, modifier.value, True, source, emit)
    elif modifier.kind is ModifierKind.choose_low:
        total = roll_choose(roll.count, roll.sides, modifier.value, False, source, emit)
    elif modifier.kind is ModifierKind.reroll_below:
        total = roll_reroll_below(roll.count, roll.sides, modifier.value, source, emit)
    else:
        total = roll_exploding(roll.count, roll.sides, modifier.value, source, emit)
    logger.debug("Rolled %s = %d", roll, total)
    return total
