"""Composition pipeline: raw text -> segments -> blocks / diagram renders."""

import asyncio
from typing import Protocol

from scholargen.composer.blocks import to_blocks
from scholargen.composer.segments import segment_document
from scholargen.models.blocks import (
    ComposedDocument,
    ComposedSection,
    DiagramRenderResult,
    DiagramSection,
    TextSection,
)


class DiagramRenderer(Protocol):
    """Anything that turns diagram source into a render result without raising."""

    async def render(self, source: str) -> DiagramRenderResult:
        ...


def compose_document(raw: str) -> ComposedDocument:
    """Build the renderable view of a document, diagrams left unrendered.

    Synchronous and total: every line of every text segment lands in some
    block.
    """
    sections: list[ComposedSection] = []

    for segment in segment_document(raw):
        if segment.kind == "diagram":
            sections.append(DiagramSection(index=segment.index, source=segment.content))
        else:
            sections.append(TextSection(index=segment.index, blocks=to_blocks(segment.content)))

    return ComposedDocument(sections=sections)


async def render_document(raw: str, renderer: DiagramRenderer) -> ComposedDocument:
    """Compose a document and render all of its diagrams.

    Diagrams render concurrently. A failed diagram yields a failure result
    in its own section and leaves every other section untouched.

    Args:
        raw: Full document text
        renderer: Diagram renderer (results, not exceptions, on failure)

    Returns:
        ComposedDocument with every diagram section's result filled in
    """
    document = compose_document(raw)
    diagrams = document.diagrams

    results = await asyncio.gather(*(renderer.render(section.source) for section in diagrams))

    for section, result in zip(diagrams, results):
        section.result = result

    return document
