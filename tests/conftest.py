"""Shared test fixtures for the rollexpr test suite.

scripted
    Factory building a random source that replays a fixed list of faces and
    fails loudly if a test draws more dice than it scripted.

always
    Factory building a source that returns the same face forever.

async_client
    AsyncClient wired to the FastAPI app. Tests install their own random source
    through ``app.dependency_overrides``; the override is cleared afterwards.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from rollexpr.main import app


class ScriptedSource:
    """Random source replaying predetermined faces."""

    def __init__(self, faces: Iterable[int]) -> None:
        self.faces = list(faces)
        self.calls: list[int] = []

    def next(self, sides: int) -> int:
        if len(self.calls) >= len(self.faces):
            raise AssertionError(f"unscripted draw #{len(self.calls) + 1} of a d{sides}")
        face = self.faces[len(self.calls)]
        self.calls.append(sides)
        return face

    @property
    def exhausted(self) -> bool:
        return len(self.calls) == len(self.faces)


class ConstantSource:
    """Random source that always returns the same face."""

    def __init__(self, face: int) -> None:
        self.face = face
        self.draws = 0

    def next(self, sides: int) -> int:
        self.draws += 1
        return self.face


@pytest.fixture
def scripted() -> Callable[..., ScriptedSource]:
    def _make(*faces: int) -> ScriptedSource:
        return ScriptedSource(faces)

    return _make


@pytest.fixture
def always() -> Callable[[int], ConstantSource]:
    return ConstantSource


@pytest_asyncio.fixture
async def async_client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
