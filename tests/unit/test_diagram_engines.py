"""Tests for diagram engine adapters."""

from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from scholargen.config import Settings
from scholargen.diagrams.engines import (
    KrokiEngine,
    MermaidCliEngine,
    create_engine_from_settings,
)
from scholargen.errors import DiagramRenderError, EngineNotAvailableError


def kroki_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_kroki_posts_source_and_returns_svg() -> None:
    """Test that Kroki engine POSTs plain-text source to /mermaid/svg."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="<svg>ok</svg>")

    engine = KrokiEngine(base_url="https://kroki.test/", client=kroki_client(handler))

    svg = await engine.render("mermaid-abc", "graph TD\nA-->B")

    assert svg == "<svg>ok</svg>"
    assert seen[0].method == "POST"
    assert str(seen[0].url) == "https://kroki.test/mermaid/svg"
    assert seen[0].content == b"graph TD\nA-->B"
    assert seen[0].headers["X-Render-Target"] == "mermaid-abc"


@pytest.mark.asyncio
async def test_kroki_syntax_error_raises_render_error() -> None:
    """Test that a 400 from Kroki becomes DiagramRenderError with its message."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, text="Error 400: Syntax error in graph\n")

    engine = KrokiEngine(client=kroki_client(handler))

    with pytest.raises(DiagramRenderError, match="Syntax error in graph"):
        await engine.render("mermaid-abc", "graph TD\nA-->")


@pytest.mark.asyncio
async def test_kroki_server_error_is_engine_unavailable() -> None:
    """Test that 5xx responses are reported as an unavailable engine."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="busy")

    engine = KrokiEngine(client=kroki_client(handler))

    with pytest.raises(EngineNotAvailableError):
        await engine.render("mermaid-abc", "graph TD\nA-->B")


@pytest.mark.asyncio
async def test_kroki_connection_error_is_engine_unavailable() -> None:
    """Test that transport errors are reported as an unavailable engine."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    engine = KrokiEngine(client=kroki_client(handler))

    with pytest.raises(EngineNotAvailableError):
        await engine.render("mermaid-abc", "graph TD\nA-->B")


@pytest.mark.asyncio
async def test_mmdc_missing_binary_is_engine_unavailable(tmp_path: Path) -> None:
    """Test that a missing mmdc binary raises and cleans up scratch files."""
    engine = MermaidCliEngine(mmdc_path=str(tmp_path / "no-such-mmdc"), work_dir=tmp_path / "work")

    with pytest.raises(EngineNotAvailableError):
        await engine.render("mermaid-abc", "graph TD\nA-->B")

    assert list((tmp_path / "work").iterdir()) == []


def test_engine_factory_follows_settings() -> None:
    """Test that the configured engine is built."""
    assert isinstance(create_engine_from_settings(Settings(diagram_engine="kroki")), KrokiEngine)
    assert isinstance(create_engine_from_settings(Settings(diagram_engine="mmdc")), MermaidCliEngine)
