"""Random sources that produce die faces.

The evaluator only needs ``next(sides) -> int in [1, sides]``. A source keeps
internal state and must not be shared between concurrent evaluations; callers
that roll in parallel should hand each evaluation its own source.
"""

from __future__ import annotations

import logging
import random
from typing import Protocol

from rollexpr.config import settings
from rollexpr.errors import ErrorKind, EvalError

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Interface for die draws."""

    def next(self, sides: int) -> int:
        """Return a uniformly distributed integer in ``[1, sides]``.

        Args:
            sides: Number of faces on the die, at least 1.
        """
        ...


class SystemRandomSource:
    """Draws from the operating system's entropy pool."""

    def __init__(self) -> None:
        self._rng = random.SystemRandom()

    def next(self, sides: int) -> int:
        return self._rng.randint(1, sides)


class SeededRandomSource:
    """Deterministic source: the same seed always yields the same draws.

    Args:
        seed: Seed passed to a private ``random.Random`` instance.
    """

    def __init__(self, seed: int) -> None:
        self._rng = random.Random(seed)

    def next(self, sides: int) -> int:
        return self._rng.randint(1, sides)


class CappedRandomSource:
    """Wraps another source and stops the evaluation after ``max_draws`` draws.

    Reroll and explode modifiers loop forever on some thresholds (``2d6b6``,
    ``2d6v1``). The core does not guard against that, so front ends wrap their
    source in this one to bound the work done for a single expression.

    Args:
        inner: Source that supplies the actual draws.
        max_draws: Number of draws allowed before EvalError is raised.
    """

    def __init__(self, inner: RandomSource, max_draws: int) -> None:
        self._inner = inner
        self._max_draws = max_draws
        self.draws = 0

    def next(self, sides: int) -> int:
        if self.draws >= self._max_draws:
            logger.warning("Draw limit of %d reached, aborting roll", self._max_draws)
            raise EvalError(
                ErrorKind.draw_limit_exceeded,
                f"Too many dice drawn (limit {self._max_draws}).",
            )
        self.draws += 1
        return self._inner.next(sides)


def default_source() -> RandomSource:
    """Build the source described by the current settings.

    A configured ``seed`` gives a deterministic source; otherwise draws come
    from system entropy.
    """
    if settings.seed is not None:
        return SeededRandomSource(settings.seed)
    return SystemRandomSource()


def bounded(source: RandomSource) -> RandomSource:
    """Wrap ``source`` in a fresh cap of ``settings.max_draws`` draws, if one is set.

    Call once per expression so that each expression gets the full budget.
    """
    if settings.max_draws > 0:
        return CappedRandomSource(source, settings.max_draws)
    return source
