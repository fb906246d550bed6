"""Placeholder map shielding finished HTML from later inline passes.

Once an inline construct has been turned into HTML (an image, a link, a
code span, a hard line break), later regex passes must not look inside it
again. The fragment is parked in a PlaceholderMap and an opaque token is
left in its place. Tokens are ``\\x00<index>\\x00``; normalized input never
contains NUL, so a token cannot be forged by the source text.

Thread Safety:
A PlaceholderMap is created per render() call and never shared.
"""

from __future__ import annotations

import re

from chatmark.patterns import PLACEHOLDER


class PlaceholderMap:
    """Side table of finalized fragments keyed by single-use tokens.

    Usage:
        >>> placeholders = PlaceholderMap()
        >>> token = placeholders.protect("<br />\\n")
        >>> placeholders.resolve(f"a{token}b")
        'a<br />\\nb'

    Fragments may themselves contain tokens (link text with a code span,
    strong text with a link); resolve() restores them depth-first.
    """

    __slots__ = ("_fragments",)

    def __init__(self) -> None:
        self._fragments: list[str] = []

    def protect(self, fragment: str) -> str:
        """Store a fragment and return the token that stands for it."""
        self._fragments.append(fragment)
        return f"\x00{len(self._fragments) - 1}\x00"

    def resolve(self, text: str) -> str:
        """Replace every token in text with its fragment."""
        if "\x00" not in text:
            return text
        return PLACEHOLDER.sub(self._restore, text)

    def _restore(self, match: re.Match[str]) -> str:
        return self.resolve(self._fragments[int(match.group(1))])

    def __len__(self) -> int:
        """Return number of fragments stored."""
        return len(self._fragments)
