"""Line classification for the chatmark block renderer.

lexer/
├── __init__.py          # Re-exports
├── classifier.py        # classify_line, is_special_line, is_list_item
└── modes.py             # BlockState enum

Usage:
    >>> from chatmark.lexer import classify_line
    >>> classify_line("## Hello").level
    2
"""

from chatmark.lexer.classifier import classify_line, is_list_item, is_special_line
from chatmark.lexer.modes import BlockState

__all__ = ["BlockState", "classify_line", "is_list_item", "is_special_line"]
