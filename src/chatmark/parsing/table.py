"""Pipe table rendering.

Handles GFM-style tables buffered by the block renderer:

| Header 1 | Header 2 |   <- header row
|:--------:|---------:|   <- alignment row (optional, recognized by a dash)
| Cell 1   | Cell 2   |   <- body rows

Cell text goes through the InlineTransformer. A buffer with fewer than
two lines is not a table and renders as nothing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chatmark.parsing.charsets import TABLE_DELIMITER
from chatmark.stringbuilder import StringBuilder
from chatmark.utils.logger import get_logger

if TYPE_CHECKING:
    from chatmark.parsing.inline import InlineTransformer

logger = get_logger(__name__)


def split_table_row(line: str) -> list[str]:
    """Split a row into trimmed cells.

    A leading or trailing empty cell (from a leading or trailing pipe) is
    dropped.

    Example:
        >>> split_table_row("| a | b |")
        ['a', 'b']
    """
    cells = line.split(TABLE_DELIMITER)
    if cells and not cells[0].strip():
        cells = cells[1:]
    if cells and not cells[-1].strip():
        cells = cells[:-1]
    return [cell.strip() for cell in cells]


def parse_alignments(line: str, columns: int) -> tuple[str | None, ...]:
    """Read per-column alignment from an alignment row.

    ``:-:`` is center, ``:-`` left, ``-:`` right, anything else None.
    Columns missing from the row have no alignment; extra cells are ignored.
    """
    alignments: list[str | None] = [None] * columns
    for i, cell in enumerate(split_table_row(line)[:columns]):
        has_left_colon = cell.startswith(":")
        has_right_colon = cell.endswith(":")
        if has_left_colon and has_right_colon:
            alignments[i] = "center"
        elif has_left_colon:
            alignments[i] = "left"
        elif has_right_colon:
            alignments[i] = "right"
    return tuple(alignments)


def render_table(lines: list[str], inline: InlineTransformer) -> str:
    """Render buffered table lines to a <table> element.

    Args:
        lines: Raw table lines, header first
        inline: Transformer for cell content

    Returns:
        Table HTML ending in a newline, or "" for fewer than two lines.
    """
    if len(lines) < 2:
        logger.debug("Dropping table run of %d line(s); a table needs two", len(lines))
        return ""

    header = split_table_row(lines[0])
    has_alignment = "-" in lines[1]
    if has_alignment:
        alignments = parse_alignments(lines[1], len(header))
    else:
        alignments = (None,) * len(header)

    sb = StringBuilder()
    sb.append_line("<table>")
    sb.append_line("<thead>")
    sb.append_line("<tr>")
    for cell in header:
        sb.append_line(f"<th>{inline.transform(cell)}</th>")
    sb.append_line("</tr>")
    sb.append_line("</thead>")

    sb.append_line("<tbody>")
    for line in lines[2 if has_alignment else 1 :]:
        sb.append_line("<tr>")
        for i, cell in enumerate(split_table_row(line)):
            align = alignments[i] if i < len(alignments) else None
            style = f' style="text-align: {align};"' if align else ""
            sb.append_line(f"<td{style}>{inline.transform(cell)}</td>")
        sb.append_line("</tr>")
    sb.append_line("</tbody>")
    sb.append_line("</table>")
    return sb.build()
