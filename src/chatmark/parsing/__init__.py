"""Inline and table rendering for chatmark.

Modules:
- charsets: frozen character sets used by the classifier
- inline: InlineTransformer (escapes, links, images, code, emphasis)
- table: pipe-table rendering
"""

from chatmark.parsing.inline import InlineTransformer
from chatmark.parsing.table import parse_alignments, render_table, split_table_row

__all__ = [
    "InlineTransformer",
    "parse_alignments",
    "render_table",
    "split_table_row",
]
