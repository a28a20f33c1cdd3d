"""Shared pytest fixtures for all test suites."""

import pytest

from scholargen.db.kv import InMemoryKeyValueStore
from scholargen.db.store import PaperStore
from scholargen.diagrams.renderer import DiagramRenderer
from scholargen.errors import DiagramRenderError


class TickingClock:
    """Deterministic clock: each call advances by one second (in ms)."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1000) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> int:
        self.now += self.step
        return self.now


class FakeEngine:
    """Diagram engine that fails on any source containing 'INVALID'."""

    name = "fake"

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    async def render(self, target_id: str, source: str) -> str:
        self.calls.append((target_id, source))
        if "INVALID" in source:
            raise DiagramRenderError("Parse error on line 2")
        return f"<svg>{source}</svg>"


@pytest.fixture
def clock() -> TickingClock:
    """Create a ticking clock."""
    return TickingClock()


@pytest.fixture
def kv() -> InMemoryKeyValueStore:
    """Create an empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def store(kv: InMemoryKeyValueStore, clock: TickingClock) -> PaperStore:
    """Create a paper store over the in-memory backend."""
    return PaperStore(kv, clock=clock)


@pytest.fixture
def fake_engine() -> FakeEngine:
    """Create a fake diagram engine."""
    return FakeEngine()


@pytest.fixture
def renderer(fake_engine: FakeEngine) -> DiagramRenderer:
    """Create a diagram renderer over the fake engine."""
    return DiagramRenderer(fake_engine)
