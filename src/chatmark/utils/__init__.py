"""Utility modules for chatmark.

Provides:
- text: escape_text, escape_html, escape_attribute, normalize_source
- logger: get_logger for logging
"""

from chatmark.utils.logger import get_logger
from chatmark.utils.text import escape_attribute, escape_html, escape_text, normalize_source

__all__ = [
    "escape_attribute",
    "escape_html",
    "escape_text",
    "get_logger",
    "normalize_source",
]
