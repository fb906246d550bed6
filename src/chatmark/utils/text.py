"""Text processing utilities for chatmark.

Canonical escaping helpers shared by the block and inline renderers.
Three escaping flavors exist because text reaches the output through
three different doors:

- ``escape_text``: prose. Neutralizes ``&``, ``<`` and ``>`` but leaves
  existing character references (``&amp;``, ``&#60;``) alone, so running
  it twice is the same as running it once.
- ``escape_html``: code block lines. Everything is literal, including
  ampersands that look like entities.
- ``escape_attribute``: values that already went through ``escape_text``
  and are about to land inside a double-quoted attribute.

Example:
    >>> from chatmark.utils.text import escape_text
    >>> escape_text("5 < 6 &amp; 7")
    '5 &lt; 6 &amp; 7'
"""

from __future__ import annotations

import html as html_module

from chatmark.patterns import BARE_AMPERSAND


def normalize_source(text: str) -> str:
    """Collapse CRLF/CR line endings to LF and replace NUL characters.

    NUL is replaced with U+FFFD (CommonMark's insecure character rule).
    The renderer relies on NUL never appearing in normalized text because
    placeholder tokens are delimited by it.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    if "\x00" in text:
        text = text.replace("\x00", "\ufffd")
    return text


def escape_text(text: str) -> str:
    """Neutralize raw HTML metacharacters in prose.

    Examples:
        >>> escape_text("<script>alert(1)</script>")
        '&lt;script&gt;alert(1)&lt;/script&gt;'
        >>> escape_text("Tom &amp; Jerry & co")
        'Tom &amp; Jerry &amp; co'
    """
    if not text:
        return ""
    text = BARE_AMPERSAND.sub("&amp;", text)
    return text.replace("<", "&lt;").replace(">", "&gt;")


def escape_html(text: str) -> str:
    """Escape HTML special characters for literal display.

    Escapes <, >, &, " but NOT single quotes.
    """
    if not text:
        return ""
    return html_module.escape(text, quote=False).replace('"', "&quot;")


def escape_attribute(text: str) -> str:
    """Make already-neutralized text safe inside a double-quoted attribute."""
    return text.replace('"', "&quot;")
