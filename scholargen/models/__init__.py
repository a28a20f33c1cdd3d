"""Models package - re-exports for convenience."""

from scholargen.models.blocks import (
    TABLE_CAPTION,
    Block,
    BulletItemBlock,
    ComposedDocument,
    ComposedSection,
    DiagramRenderResult,
    DiagramSection,
    FailedDiagram,
    HeadingBlock,
    OrderedItemBlock,
    ParagraphBlock,
    RenderedDiagram,
    Segment,
    StyledRun,
    TableBlock,
    TextSection,
)
from scholargen.models.paper import Paper, PaperRequest, PaperVersion

__all__ = [
    "TABLE_CAPTION",
    "Block",
    "BulletItemBlock",
    "ComposedDocument",
    "ComposedSection",
    "DiagramRenderResult",
    "DiagramSection",
    "FailedDiagram",
    "HeadingBlock",
    "OrderedItemBlock",
    "Paper",
    "PaperRequest",
    "PaperVersion",
    "ParagraphBlock",
    "RenderedDiagram",
    "Segment",
    "StyledRun",
    "TableBlock",
    "TextSection",
]
