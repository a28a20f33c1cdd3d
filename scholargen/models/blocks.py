"""Derived document views: segments, blocks, styled runs, diagram results.

These are recomputed from a version's content on every render and never
persisted. Every variant carries a ``kind`` literal so lists of them
serialize as flat tagged unions.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

TABLE_CAPTION = "Table: Statistical Summary"


class StyledRun(BaseModel):
    """Contiguous piece of text tagged with an emphasis tier."""

    kind: Literal["plain", "bold", "italic"] = "plain"
    text: str


class Segment(BaseModel):
    """Top-level span of the raw document."""

    kind: Literal["text", "diagram"]
    content: str
    index: int  # 0-based, original order


class HeadingBlock(BaseModel):
    kind: Literal["heading"] = "heading"
    level: Literal[1, 2, 3]
    runs: list[StyledRun]


class BulletItemBlock(BaseModel):
    kind: Literal["bullet_item"] = "bullet_item"
    runs: list[StyledRun]


class OrderedItemBlock(BaseModel):
    kind: Literal["ordered_item"] = "ordered_item"
    runs: list[StyledRun]


class ParagraphBlock(BaseModel):
    kind: Literal["paragraph"] = "paragraph"
    runs: list[StyledRun]


class TableBlock(BaseModel):
    """Header/body grid. Rows keep whatever cell count they were written with."""

    kind: Literal["table"] = "table"
    headers: list[str]
    rows: list[list[str]]
    styled_rows: list[list[list[StyledRun]]] = Field(default_factory=list)
    caption: str = TABLE_CAPTION


Block = Annotated[
    HeadingBlock | BulletItemBlock | OrderedItemBlock | ParagraphBlock | TableBlock,
    Field(discriminator="kind"),
]


class RenderedDiagram(BaseModel):
    """Successful render: the engine's visual payload (SVG markup)."""

    kind: Literal["rendered"] = "rendered"
    target_id: str
    svg: str


class FailedDiagram(BaseModel):
    """Failed render: carries the original source for verbatim display."""

    kind: Literal["failed"] = "failed"
    target_id: str
    source: str
    message: str
    detail: str | None = None


DiagramRenderResult = Annotated[RenderedDiagram | FailedDiagram, Field(discriminator="kind")]


class TextSection(BaseModel):
    kind: Literal["text"] = "text"
    index: int
    blocks: list[Block]


class DiagramSection(BaseModel):
    kind: Literal["diagram"] = "diagram"
    index: int
    source: str
    result: DiagramRenderResult | None = None


ComposedSection = Annotated[TextSection | DiagramSection, Field(discriminator="kind")]


class ComposedDocument(BaseModel):
    """Ordered renderable view of one document version."""

    sections: list[ComposedSection]

    @property
    def diagrams(self) -> list[DiagramSection]:
        """Diagram sections in document order."""
        return [s for s in self.sections if isinstance(s, DiagramSection)]
