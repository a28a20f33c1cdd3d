"""Pipe-table parser."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TableGrid:
    """Parsed table: one header row plus body rows of raw cell strings."""

    headers: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)


def split_cells(row: str) -> list[str]:
    """Split a pipe-delimited row into trimmed, non-empty cells."""
    return [cell.strip() for cell in row.split("|") if cell.strip()]


def parse_table(lines: list[str]) -> TableGrid:
    """Parse buffered table lines into a header/body grid.

    Line 0 is the header. Line 1 is taken to be the divider and is dropped
    without being looked at, so a table written without a divider loses its
    first data row. Body rows are passed through with whatever number of
    cells they have; no padding or truncation against the header.

    Args:
        lines: Consecutive raw lines whose trimmed form starts with "|"

    Returns:
        TableGrid (empty for an empty buffer)
    """
    if not lines:
        return TableGrid()

    headers = split_cells(lines[0])
    rows = [split_cells(line) for line in lines[2:]]

    return TableGrid(headers=headers, rows=rows)
