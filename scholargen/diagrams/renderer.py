"""Diagram renderer adapter and per-slot stale-result suppression.

``DiagramRenderer.render`` is all-or-nothing per call: it returns either the
engine's SVG or a failure carrying the untouched source, and it never
raises for engine failures. ``DiagramSlot`` tags each render with a
generation number and keeps only the result of the latest one issued, so an
earlier slow render cannot overwrite a later fast one.
"""

import asyncio
import time
import uuid
from collections.abc import Callable

from scholargen.composer.pipeline import compose_document
from scholargen.diagrams.engines import DiagramEngine
from scholargen.errors import DiagramRenderError, EngineNotAvailableError
from scholargen.models.blocks import (
    ComposedDocument,
    DiagramRenderResult,
    FailedDiagram,
    RenderedDiagram,
)
from scholargen.utils.logging import StructuredRenderLogger
from scholargen.utils.metrics import PrometheusRenderMetrics

SYNTAX_ERROR_MESSAGE = (
    "Diagram syntax error. The figure could not be rendered; edit the paper to "
    "correct the diagram source (ensure all labels are in double quotes)."
)
ENGINE_UNAVAILABLE_MESSAGE = "Diagram renderer not available."


def new_target_id() -> str:
    """Generate a render-target identity unique across concurrent renders."""
    return f"mermaid-{uuid.uuid4().hex}"


class DiagramRenderer:
    """Adapter over an external diagram engine."""

    def __init__(
        self,
        engine: DiagramEngine,
        *,
        id_factory: Callable[[], str] = new_target_id,
        render_logger: StructuredRenderLogger | None = None,
        metrics: PrometheusRenderMetrics | None = None,
    ) -> None:
        self._engine = engine
        self._id_factory = id_factory
        self._logger = render_logger or StructuredRenderLogger()
        self._metrics = metrics or PrometheusRenderMetrics()

    @property
    def engine_name(self) -> str:
        return self._engine.name

    async def render(self, source: str) -> DiagramRenderResult:
        """Render diagram source once, no retry.

        Args:
            source: Mermaid source as extracted from the document

        Returns:
            RenderedDiagram on success, FailedDiagram (with ``source``
            verbatim) on any engine failure
        """
        target_id = self._id_factory()
        start = time.perf_counter()

        try:
            svg = await self._engine.render(target_id, source)
            if not svg.strip():
                raise DiagramRenderError("engine returned empty output")
        except EngineNotAvailableError as e:
            return self._failed(target_id, source, start, ENGINE_UNAVAILABLE_MESSAGE, e)
        except Exception as e:
            # Engines are external code; any failure is contained to this diagram
            return self._failed(target_id, source, start, SYNTAX_ERROR_MESSAGE, e)

        latency_ms = (time.perf_counter() - start) * 1000
        self._metrics.record_render(self._engine.name, "success", latency_ms)
        self._logger.log_attempt(
            target_id=target_id,
            engine=self._engine.name,
            outcome="success",
            latency_ms=latency_ms,
            source_chars=len(source),
        )
        return RenderedDiagram(target_id=target_id, svg=svg)

    def discard_stale(
        self, result: DiagramRenderResult, generation: int, latest_generation: int
    ) -> None:
        """Record a render superseded by a newer one for the same slot."""
        self._metrics.inc_stale()
        self._logger.log_stale(
            target_id=result.target_id,
            generation=generation,
            latest_generation=latest_generation,
        )

    def _failed(
        self,
        target_id: str,
        source: str,
        start: float,
        message: str,
        error: Exception,
    ) -> FailedDiagram:
        latency_ms = (time.perf_counter() - start) * 1000
        outcome = "unavailable" if isinstance(error, EngineNotAvailableError) else "error"
        self._metrics.record_render(self._engine.name, outcome, latency_ms)
        self._logger.log_attempt(
            target_id=target_id,
            engine=self._engine.name,
            outcome=outcome,
            latency_ms=latency_ms,
            source_chars=len(source),
            error_reason=f"{type(error).__name__}: {error}",
        )
        return FailedDiagram(
            target_id=target_id,
            source=source,
            message=message,
            detail=str(error) or None,
        )


class DiagramSlot:
    """One diagram position in a live view; keeps the latest-issued render."""

    def __init__(self, renderer: DiagramRenderer) -> None:
        self._renderer = renderer
        self._issued = 0
        self._applied = 0
        # Set whenever no render newer than the applied one is in flight
        self._settled = asyncio.Event()
        self._settled.set()
        self.requested_source: str | None = None
        self.source: str | None = None
        self.result: DiagramRenderResult | None = None

    @property
    def issued_generation(self) -> int:
        return self._issued

    @property
    def applied_generation(self) -> int:
        return self._applied

    @property
    def svg(self) -> str | None:
        return self.result.svg if isinstance(self.result, RenderedDiagram) else None

    @property
    def failure(self) -> FailedDiagram | None:
        return self.result if isinstance(self.result, FailedDiagram) else None

    async def update(self, source: str) -> bool:
        """Render ``source`` and apply the result if still the latest.

        Returns:
            True if the result was applied, False if a newer render was
            issued while this one was in flight
        """
        self._issued += 1
        generation = self._issued
        self.requested_source = source
        self._settled.clear()

        try:
            result = await self._renderer.render(source)

            if generation != self._issued:
                self._renderer.discard_stale(result, generation, self._issued)
                return False

            self._applied = generation
            self.source = source
            self.result = result
            return True
        finally:
            if generation == self._issued:
                self._settled.set()

    async def settle(self) -> None:
        """Wait for the latest issued render, if any, to finish."""
        await self._settled.wait()


class DiagramBoard:
    """Diagram slots for one document being edited, keyed by diagram position."""

    def __init__(self, renderer: DiagramRenderer) -> None:
        self._renderer = renderer
        self._slots: dict[int, DiagramSlot] = {}

    def slot(self, position: int) -> DiagramSlot:
        """Get (or create) the slot for the n-th diagram of the document."""
        if position not in self._slots:
            self._slots[position] = DiagramSlot(self._renderer)
        return self._slots[position]

    async def refresh(self, raw: str) -> ComposedDocument:
        """Re-compose ``raw`` and re-render only diagrams whose source changed.

        Slots beyond the document's diagram count are dropped. An unchanged
        diagram whose render is still in flight from an earlier refresh is
        awaited rather than issued again. Sections are filled from each
        slot's latest applied result when it matches the section's source;
        a diagram edited again meanwhile by a newer refresh is left empty.
        """
        document = compose_document(raw)
        diagrams = document.diagrams

        for position in [p for p in self._slots if p >= len(diagrams)]:
            del self._slots[position]

        slots = [self.slot(position) for position in range(len(diagrams))]

        pending = []
        for slot, section in zip(slots, diagrams):
            if slot.requested_source != section.source:
                pending.append(slot.update(section.source))
            else:
                pending.append(slot.settle())

        await asyncio.gather(*pending)

        for slot, section in zip(slots, diagrams):
            if slot.source == section.source:
                section.result = slot.result

        return document
