"""FastAPI dependencies for rollexpr."""

from __future__ import annotations

from rollexpr.random_source import RandomSource, bounded, default_source


def get_random_source() -> RandomSource:
    """Return a fresh, draw-capped source for a single request.

    Sources are stateful and never shared between requests. Tests override this
    dependency to script the dice.
    """
    return bounded(default_source())
