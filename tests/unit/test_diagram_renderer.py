"""Unit tests for the diagram renderer, slots and board."""

import asyncio
from typing import Any

import pytest

from scholargen.diagrams.renderer import (
    ENGINE_UNAVAILABLE_MESSAGE,
    DiagramBoard,
    DiagramRenderer,
    DiagramSlot,
    new_target_id,
)
from scholargen.errors import EngineNotAvailableError
from scholargen.models.blocks import FailedDiagram, RenderedDiagram


class GatedEngine:
    """Engine whose renders complete only when their source's gate is set."""

    name = "gated"

    def __init__(self) -> None:
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[str] = []

    def gate(self, source: str) -> asyncio.Event:
        return self.gates.setdefault(source, asyncio.Event())

    async def render(self, target_id: str, source: str) -> str:
        self.calls.append(source)
        await self.gate(source).wait()
        return f"<svg>{source}</svg>"


class UnavailableEngine:
    name = "down"

    async def render(self, target_id: str, source: str) -> str:
        raise EngineNotAvailableError("mmdc not found")


class EmptyEngine:
    name = "empty"

    async def render(self, target_id: str, source: str) -> str:
        return "   "


@pytest.mark.asyncio
async def test_render_success_returns_svg(renderer: DiagramRenderer) -> None:
    """Test that a good source produces a rendered payload."""
    result = await renderer.render("graph TD\nA-->B")

    assert isinstance(result, RenderedDiagram)
    assert result.svg == "<svg>graph TD\nA-->B</svg>"
    assert result.target_id.startswith("mermaid-")


@pytest.mark.asyncio
async def test_render_failure_carries_original_source(renderer: DiagramRenderer) -> None:
    """Test that a failure keeps the unmodified source and a message."""
    source = 'graph TD\n  INVALID["x"] -->  \n'

    result = await renderer.render(source)

    assert isinstance(result, FailedDiagram)
    assert result.source == source
    assert "Diagram syntax error" in result.message
    assert result.detail == "Parse error on line 2"


@pytest.mark.asyncio
async def test_engine_unavailable_is_a_failure_result() -> None:
    """Test that a missing engine does not raise out of render()."""
    renderer = DiagramRenderer(UnavailableEngine())

    result = await renderer.render("graph TD\nA-->B")

    assert isinstance(result, FailedDiagram)
    assert result.message == ENGINE_UNAVAILABLE_MESSAGE


@pytest.mark.asyncio
async def test_empty_engine_output_is_a_failure() -> None:
    """Test that blank SVG output is not treated as a render."""
    result = await DiagramRenderer(EmptyEngine()).render("graph TD\nA-->B")

    assert isinstance(result, FailedDiagram)


@pytest.mark.asyncio
async def test_concurrent_renders_get_unique_target_ids(
    renderer: DiagramRenderer, fake_engine: Any
) -> None:
    """Test that each invocation gets its own render-target identity."""
    await asyncio.gather(*(renderer.render(f"A{i}-->B") for i in range(50)))

    target_ids = [target_id for target_id, _ in fake_engine.calls]
    assert len(set(target_ids)) == 50


def test_new_target_id_is_unique() -> None:
    """Test that generated IDs do not repeat."""
    assert len({new_target_id() for _ in range(1000)}) == 1000


@pytest.mark.asyncio
async def test_slot_replaces_failure_with_success(renderer: DiagramRenderer) -> None:
    """Test that a fresh successful render clears a prior failure."""
    slot = DiagramSlot(renderer)

    await slot.update("INVALID")
    assert slot.failure is not None
    assert slot.svg is None

    await slot.update("A-->B")
    assert slot.failure is None
    assert slot.svg == "<svg>A-->B</svg>"
    assert slot.applied_generation == 2


@pytest.mark.asyncio
async def test_slot_discards_stale_result() -> None:
    """Test that a slow earlier render cannot overwrite a later one."""
    engine = GatedEngine()
    slot = DiagramSlot(DiagramRenderer(engine))

    first = asyncio.create_task(slot.update("old"))
    second = asyncio.create_task(slot.update("new"))
    await asyncio.sleep(0)
    assert slot.issued_generation == 2

    # Newer render finishes first
    engine.gate("new").set()
    assert await second is True
    assert slot.svg == "<svg>new</svg>"

    # Older render finishes late and is dropped
    engine.gate("old").set()
    assert await first is False
    assert slot.source == "new"
    assert slot.svg == "<svg>new</svg>"
    assert slot.applied_generation == 2


@pytest.mark.asyncio
async def test_slot_applies_in_order_completions() -> None:
    """Test that the last issued render wins when completions are in order."""
    engine = GatedEngine()
    slot = DiagramSlot(DiagramRenderer(engine))

    first = asyncio.create_task(slot.update("v1"))
    second = asyncio.create_task(slot.update("v2"))
    await asyncio.sleep(0)

    engine.gate("v1").set()
    assert await first is False
    engine.gate("v2").set()
    assert await second is True

    assert slot.source == "v2"


@pytest.mark.asyncio
async def test_board_rerenders_only_changed_diagrams(
    renderer: DiagramRenderer, fake_engine: Any
) -> None:
    """Test that unchanged diagram sources are not rendered again."""
    board = DiagramBoard(renderer)
    raw = "```mermaid\nA-->B\n```\ntext\n```mermaid\nC-->D\n```"

    document = await board.refresh(raw)
    assert len(fake_engine.calls) == 2
    assert all(isinstance(s.result, RenderedDiagram) for s in document.diagrams)

    await board.refresh(raw + "\nmore text")
    assert len(fake_engine.calls) == 2

    edited = raw.replace("C-->D", "C-->E")
    document = await board.refresh(edited)
    assert [source for _, source in fake_engine.calls] == ["A-->B", "C-->D", "C-->E"]
    assert document.diagrams[1].result.svg == "<svg>C-->E</svg>"


@pytest.mark.asyncio
async def test_board_drops_slots_for_removed_diagrams(
    renderer: DiagramRenderer, fake_engine: Any
) -> None:
    """Test that removing a diagram forgets its slot."""
    board = DiagramBoard(renderer)

    await board.refresh("```mermaid\nA-->B\n```\n```mermaid\nC-->D\n```")
    document = await board.refresh("```mermaid\nA-->B\n```")

    assert len(document.diagrams) == 1
    assert document.diagrams[0].result is not None

    # Re-adding the second diagram renders it again
    await board.refresh("```mermaid\nA-->B\n```\n```mermaid\nC-->D\n```")
    assert [source for _, source in fake_engine.calls].count("C-->D") == 2


@pytest.mark.asyncio
async def test_board_refresh_waits_for_in_flight_render() -> None:
    """Test that a refresh during an unchanged diagram's render gets its result."""
    engine = GatedEngine()
    board = DiagramBoard(DiagramRenderer(engine))
    raw = "```mermaid\nA-->B\n```"

    first = asyncio.create_task(board.refresh(raw))
    await asyncio.sleep(0)
    second = asyncio.create_task(board.refresh(raw + "\nmore text"))
    await asyncio.sleep(0)
    assert not second.done()

    engine.gate("A-->B").set()
    first_document, second_document = await asyncio.gather(first, second)

    assert engine.calls == ["A-->B"]
    assert first_document.diagrams[0].result.svg == "<svg>A-->B</svg>"  # type: ignore[union-attr]
    assert second_document.diagrams[0].result.svg == "<svg>A-->B</svg>"  # type: ignore[union-attr]
