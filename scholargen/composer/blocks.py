"""Block segmenter - single pass line classifier for a text segment."""

import re
from enum import Enum
from typing import NamedTuple

from scholargen.composer.inline import format_inline
from scholargen.composer.tables import parse_table
from scholargen.models.blocks import (
    Block,
    BulletItemBlock,
    HeadingBlock,
    OrderedItemBlock,
    ParagraphBlock,
    TableBlock,
)

_ORDERED_RE = re.compile(r"^\d+\.")
_ORDERED_PREFIX_RE = re.compile(r"^\d+\.\s*")

# Longest marker first: "### " also starts with "# "
_HEADING_PREFIXES = (("### ", 3), ("## ", 2), ("# ", 1))
_BULLET_PREFIXES = ("- ", "* ")


class LineKind(str, Enum):
    """Classification of a single source line."""

    table_row = "table_row"
    blank = "blank"
    heading = "heading"
    bullet_item = "bullet_item"
    ordered_item = "ordered_item"
    paragraph = "paragraph"


class ClassifiedLine(NamedTuple):
    kind: LineKind
    text: str  # content with the block marker removed
    level: int = 0  # heading level, 0 otherwise


def classify_line(line: str) -> ClassifiedLine:
    """Classify one line. Total: every input maps to some kind."""
    trimmed = line.strip()

    if trimmed.startswith("|"):
        return ClassifiedLine(LineKind.table_row, line)
    if not trimmed:
        return ClassifiedLine(LineKind.blank, "")

    for prefix, level in _HEADING_PREFIXES:
        if trimmed.startswith(prefix):
            return ClassifiedLine(LineKind.heading, trimmed[len(prefix) :], level)

    if trimmed.startswith(_BULLET_PREFIXES):
        return ClassifiedLine(LineKind.bullet_item, trimmed[2:])

    if _ORDERED_RE.match(trimmed):
        return ClassifiedLine(LineKind.ordered_item, _ORDERED_PREFIX_RE.sub("", trimmed, count=1))

    return ClassifiedLine(LineKind.paragraph, trimmed)


def table_block(lines: list[str]) -> TableBlock:
    """Build a table block from buffered rows; body cells get inline runs."""
    grid = parse_table(lines)
    return TableBlock(
        headers=grid.headers,
        rows=grid.rows,
        styled_rows=[[format_inline(cell) for cell in row] for row in grid.rows],
    )


def to_blocks(text: str) -> list[Block]:
    """Convert a text segment into an ordered list of blocks.

    Contiguous table rows are buffered and flushed as one table block when
    the first non-table line arrives (that line is then classified as
    usual) or when the segment ends mid-table. Blank lines produce nothing.

    Args:
        text: Raw text segment (no diagram fences)

    Returns:
        Blocks in source order
    """
    blocks: list[Block] = []
    table_buffer: list[str] = []

    for line in text.split("\n"):
        classified = classify_line(line)

        if classified.kind is LineKind.table_row:
            table_buffer.append(line)
            continue

        if table_buffer:
            blocks.append(table_block(table_buffer))
            table_buffer = []

        block = _block_for(classified)
        if block is not None:
            blocks.append(block)

    if table_buffer:
        blocks.append(table_block(table_buffer))

    return blocks


def _block_for(classified: ClassifiedLine) -> Block | None:
    if classified.kind is LineKind.blank:
        return None

    runs = format_inline(classified.text)

    if classified.kind is LineKind.heading:
        return HeadingBlock(level=classified.level, runs=runs)
    if classified.kind is LineKind.bullet_item:
        return BulletItemBlock(runs=runs)
    if classified.kind is LineKind.ordered_item:
        return OrderedItemBlock(runs=runs)
    return ParagraphBlock(runs=runs)
